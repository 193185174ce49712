"""
业务服务层
"""

from .story_service import story_service, StoryService
from .editor_service import editor_service, EditorService
from .reader_service import reader_service, ReaderService
from .upload_service import upload_service, UploadService

__all__ = [
    # 基础服务类
    "StoryService",
    "EditorService",
    "ReaderService",
    "UploadService",
    # 全局服务实例
    "story_service",
    "editor_service",
    "reader_service",
    "upload_service",
]
