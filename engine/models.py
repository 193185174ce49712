"""
故事图数据模型

使用 Pydantic 定义场景（Scene）、选项（Choice）与故事图（StoryGraph），
并提供编辑器与阅读引擎共用的纯结构查询。
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from .errors import (
    DuplicateIdError,
    MissingEntryPointError,
    ValidationError,
)


# 入口场景的保留ID
ENTRY_SCENE_ID = "start"

# 新故事的默认入口场景文本
DEFAULT_START_TEXT = "Your story begins here..."

# 场景预览截断长度
PREVIEW_LENGTH = 30


class BaseModelWithHelpers(BaseModel):
    """基础模型类，提供通用的序列化/反序列化方法"""

    class Config:
        # 允许从 ORM 对象创建，允许使用字段名或存储字段名赋值
        from_attributes = True
        populate_by_name = True

    def to_dict(self) -> dict:
        """转换为字典（用于 JSON 序列化，使用存储字段名）"""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_dict(cls, data: dict):
        """从字典创建实例"""
        return cls.model_validate(data)


# ==================== 故事图模型 ====================

class Choice(BaseModelWithHelpers):
    """选项：从所属场景指向目标场景的有向边"""
    text: str = Field(..., description="选项文本")
    target_scene_id: str = Field(..., alias="targetSceneId", description="目标场景ID")


class Scene(BaseModelWithHelpers):
    """场景：故事图中的节点"""
    id: str = Field(..., description="场景ID（故事内唯一）")
    text: str = Field("", description="场景正文")
    choices: List[Choice] = Field(default_factory=list, description="选项列表（顺序即展示顺序）")


class StoryGraph(BaseModelWithHelpers):
    """故事图：场景集合，作为整体读写"""
    scenes: List[Scene] = Field(default_factory=list, description="全部场景")

    def scene_ids(self) -> List[str]:
        """按集合顺序返回场景ID"""
        return [scene.id for scene in self.scenes]

    def copy_graph(self) -> "StoryGraph":
        """深拷贝（编辑器总是在副本上修改）"""
        return self.model_copy(deep=True)

    def to_record(self) -> List[dict]:
        """转换为存储在 scenes 字段中的结构"""
        return [scene.to_dict() for scene in self.scenes]

    @classmethod
    def from_record(cls, scenes: Optional[List[dict]]) -> "StoryGraph":
        """从存储的 scenes 字段重建故事图"""
        return cls(scenes=[Scene.model_validate(item) for item in (scenes or [])])


def new_story_graph() -> StoryGraph:
    """新建故事时的默认故事图：只有一个没有选项的 start 场景"""
    return StoryGraph(scenes=[Scene(id=ENTRY_SCENE_ID, text=DEFAULT_START_TEXT, choices=[])])


# ==================== 结构查询 ====================

def find_scene(graph: StoryGraph, scene_id: str) -> Optional[Scene]:
    """按ID精确查找场景，找不到返回 None（由调用方显式处理）"""
    for scene in graph.scenes:
        if scene.id == scene_id:
            return scene
    return None


def is_terminal(scene: Scene) -> bool:
    """没有选项的场景是结局场景"""
    return len(scene.choices) == 0


def is_entry(scene: Scene) -> bool:
    """是否为入口场景"""
    return scene.id == ENTRY_SCENE_ID


def scene_display_name(scene_id: str) -> str:
    """编辑器场景列表中的显示名称"""
    return "Start Scene" if scene_id == ENTRY_SCENE_ID else scene_id


def scene_preview(graph: StoryGraph, target_scene_id: str) -> str:
    """
    选项目标场景的预览文本

    Args:
        graph: 故事图
        target_scene_id: 目标场景ID

    Returns:
        场景正文前 30 个字符（超出时追加 "..."），场景不存在时返回 "Unknown scene"
    """
    scene = find_scene(graph, target_scene_id)
    if scene is None:
        return "Unknown scene"
    if len(scene.text) > PREVIEW_LENGTH:
        return scene.text[:PREVIEW_LENGTH] + "..."
    return scene.text


def ensure_well_formed(graph: StoryGraph) -> StoryGraph:
    """
    检查故事图在结构上可以被发布/保存

    只检查 start 场景存在、场景ID唯一且非空、选项文本非空、选项目标存在；
    不检查可达性，孤立场景与死胡同都是合法的。

    Args:
        graph: 待检查的故事图

    Returns:
        原故事图（便于链式调用）

    Raises:
        MissingEntryPointError: 没有 start 场景
        DuplicateIdError: 场景ID重复
        ValidationError: ID/选项文本为空，或选项目标不存在
    """
    seen = set()
    for scene in graph.scenes:
        if not scene.id or not scene.id.strip():
            raise ValidationError("Scene id must not be empty")
        if scene.id in seen:
            raise DuplicateIdError(f"Duplicate scene id: {scene.id}", scene_id=scene.id)
        seen.add(scene.id)

    if ENTRY_SCENE_ID not in seen:
        raise MissingEntryPointError("Story has no start scene")

    for scene in graph.scenes:
        for position, choice in enumerate(scene.choices):
            if not choice.text.strip():
                raise ValidationError(
                    f"Choice {position} of scene {scene.id} has empty text",
                    scene_id=scene.id,
                )
            if choice.target_scene_id not in seen:
                raise ValidationError(
                    f"Choice {position} of scene {scene.id} targets unknown scene "
                    f"{choice.target_scene_id}",
                    scene_id=scene.id,
                )

    return graph
