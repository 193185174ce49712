"""
故事图异常

编辑器与阅读引擎共用的异常体系。每个异常带有稳定的 code，
服务层据此构造统一的错误响应。
"""

from typing import Optional


class StoryGraphError(Exception):
    """故事图异常基类"""
    code = "STORY_GRAPH_ERROR"

    def __init__(self, message: str, scene_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.scene_id = scene_id

    def to_dict(self) -> dict:
        """转换为错误详情字典"""
        detail = {"code": self.code, "message": self.message}
        if self.scene_id is not None:
            detail["scene_id"] = self.scene_id
        return detail


class DuplicateIdError(StoryGraphError):
    """场景ID重复"""
    code = "DUPLICATE_SCENE_ID"


class NotFoundError(StoryGraphError):
    """场景不存在"""
    code = "SCENE_NOT_FOUND"


class ValidationError(StoryGraphError):
    """选项文本为空、目标场景不存在等校验失败"""
    code = "INVALID_GRAPH"


class ChoiceIndexError(StoryGraphError, IndexError):
    """选项下标越界"""
    code = "CHOICE_INDEX_OUT_OF_RANGE"

    def __init__(self, message: str, scene_id: Optional[str] = None, index: Optional[int] = None):
        super().__init__(message, scene_id)
        self.index = index

    def to_dict(self) -> dict:
        detail = super().to_dict()
        if self.index is not None:
            detail["index"] = self.index
        return detail


class MissingEntryPointError(StoryGraphError):
    """故事缺少 start 场景（数据损坏，无法阅读）"""
    code = "MISSING_ENTRY_POINT"


class BrokenLinkError(StoryGraphError):
    """选项指向不存在的场景（数据损坏，无法继续阅读）"""
    code = "BROKEN_LINK"


# 阅读会话中不可恢复的错误
UNRECOVERABLE_ERRORS = (MissingEntryPointError, BrokenLinkError)
