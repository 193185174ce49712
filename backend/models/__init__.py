"""
数据模型模块

导出所有 Pydantic 数据模型，用于 API 请求/响应验证
"""

# 通用响应
from .response import ApiResponse, ErrorResponse, PaginationMeta

# 故事模块
from .story import StoryCreate, StoryUpdate, StoryDetail, StoryListItem, StorySort

# 编辑器模块
from .editor import (
    EditorRequest, SceneCreateRequest, SceneTextRequest, SceneSelectRequest,
    ChoiceAddRequest, ChoiceUpdateRequest, ChoiceDeleteRequest
)

# 阅读模块
from .reading import ReadingState, ChoiceSelect

__all__ = [
    # Response
    "ApiResponse",
    "ErrorResponse",
    "PaginationMeta",

    # Story
    "StoryCreate",
    "StoryUpdate",
    "StoryDetail",
    "StoryListItem",
    "StorySort",

    # Editor
    "EditorRequest",
    "SceneCreateRequest",
    "SceneTextRequest",
    "SceneSelectRequest",
    "ChoiceAddRequest",
    "ChoiceUpdateRequest",
    "ChoiceDeleteRequest",

    # Reading
    "ReadingState",
    "ChoiceSelect",
]
