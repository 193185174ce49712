"""
编辑器相关数据模型

编辑接口是无状态的：客户端提交当前故事图和操作参数，服务端返回新的故事图
"""

from typing import List
from pydantic import BaseModel, Field

from engine import Choice, Scene


class EditorRequest(BaseModel):
    """编辑请求基础模型"""
    scenes: List[Scene] = Field(..., description="当前故事图")


class SceneCreateRequest(EditorRequest):
    """新建场景"""
    scene_id: str = Field(..., description="新场景ID")
    text: str = Field(..., description="场景正文")


class SceneTextRequest(EditorRequest):
    """修改场景正文"""
    scene_id: str = Field(..., description="场景ID")
    text: str = Field(..., description="新的场景正文")


class SceneSelectRequest(EditorRequest):
    """选中场景"""
    scene_id: str = Field(..., description="场景ID")


class ChoiceAddRequest(EditorRequest):
    """追加选项"""
    scene_id: str = Field(..., description="所属场景ID")
    choice: Choice = Field(..., description="新选项")


class ChoiceUpdateRequest(ChoiceAddRequest):
    """替换选项"""
    index: int = Field(..., description="选项下标")


class ChoiceDeleteRequest(EditorRequest):
    """删除选项"""
    scene_id: str = Field(..., description="所属场景ID")
    index: int = Field(..., description="选项下标")
