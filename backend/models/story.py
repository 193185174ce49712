"""
故事相关数据模型
"""

from typing import Optional, List
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from enum import Enum

from engine import Scene, new_story_graph


class StorySort(str, Enum):
    """浏览排序方式"""
    LATEST = "latest"
    TITLE = "title"


def _default_scenes() -> List[Scene]:
    return new_story_graph().scenes


class StoryCreate(BaseModel):
    """发布故事请求"""
    title: str = Field(..., min_length=1, max_length=256, description="故事标题")
    description: Optional[str] = Field(None, description="故事简介")
    cover_image: Optional[str] = Field(None, max_length=512, description="封面URL")
    scenes: List[Scene] = Field(default_factory=_default_scenes, description="整个故事图")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        """标题不能为空白"""
        if not v.strip():
            raise ValueError("title must not be blank")
        return v.strip()


class StoryUpdate(StoryCreate):
    """保存故事请求（整体替换）"""
    pass


class StoryDetail(BaseModel):
    """故事详情（包含故事图）"""
    id: str = Field(..., description="故事ID")
    title: str = Field(..., description="故事标题")
    description: Optional[str] = Field(None, description="故事简介")
    cover_image: Optional[str] = Field(None, description="封面URL")
    author_id: str = Field(..., description="作者ID")
    scenes: List[Scene] = Field(default_factory=list, description="全部场景")
    view_count: int = Field(0, description="浏览次数")
    created_at: datetime = Field(..., description="创建时间")
    updated_at: Optional[datetime] = Field(None, description="更新时间")

    class Config:
        from_attributes = True


class StoryListItem(BaseModel):
    """故事列表项"""
    id: str
    title: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    author_id: str
    scene_count: int
    created_at: datetime
