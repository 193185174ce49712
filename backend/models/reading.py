"""
阅读相关数据模型

阅读状态只存在于客户端，每次请求随附当前位置与历史
"""

from typing import Optional, List
from pydantic import BaseModel, Field


class ReadingState(BaseModel):
    """客户端持有的阅读状态"""
    current_scene_id: Optional[str] = Field(None, description="当前场景ID（为空时从 start 开始）")
    history: List[str] = Field(default_factory=list, description="已离开的场景ID（栈底在前）")


class ChoiceSelect(ReadingState):
    """选择选项"""
    choice_index: int = Field(..., description="选项下标")
