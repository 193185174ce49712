"""
故事图编辑器

作者构建和修改故事图的全部操作。每个操作都在故事图的副本上进行并返回新的故事图，
失败时抛出异常，传入的故事图保持不变。

- 场景：create_scene / update_scene_text / select_scene
- 选项：add_choice / update_choice / delete_choice
- StoryEditor：编辑界面的会话状态（当前故事图 + 选中的场景）
"""

from typing import Optional
from loguru import logger

from .errors import (
    ChoiceIndexError,
    DuplicateIdError,
    NotFoundError,
    ValidationError,
)
from .models import (
    ENTRY_SCENE_ID,
    Choice,
    Scene,
    StoryGraph,
    find_scene,
)


# ==================== 内部工具 ====================

def _require_scene(graph: StoryGraph, scene_id: str) -> Scene:
    """查找场景，不存在时抛出 NotFoundError"""
    scene = find_scene(graph, scene_id)
    if scene is None:
        raise NotFoundError(f"Scene not found: {scene_id}", scene_id=scene_id)
    return scene


def _validate_choice(graph: StoryGraph, scene_id: str, choice: Choice) -> None:
    """选项文本不能为空，目标场景必须存在于当前故事图中"""
    if not choice.text or not choice.text.strip():
        raise ValidationError("Choice text must not be empty", scene_id=scene_id)
    if find_scene(graph, choice.target_scene_id) is None:
        raise ValidationError(
            f"Choice target does not exist: {choice.target_scene_id}",
            scene_id=scene_id,
        )


def _check_index(scene: Scene, index: int) -> None:
    # 负数下标同样视为越界
    if index < 0 or index >= len(scene.choices):
        raise ChoiceIndexError(
            f"Choice index {index} out of range for scene {scene.id} "
            f"({len(scene.choices)} choices)",
            scene_id=scene.id,
            index=index,
        )


# ==================== 场景操作 ====================

def create_scene(graph: StoryGraph, scene_id: str, text: str) -> StoryGraph:
    """
    新建场景

    新场景没有选项，也不会被自动链接，作者需要自己添加指向它的选项。

    Args:
        graph: 当前故事图
        scene_id: 新场景ID（故事内唯一）
        text: 场景正文

    Returns:
        新的故事图

    Raises:
        ValidationError: ID 或正文为空
        DuplicateIdError: ID 已存在
    """
    if not scene_id or not scene_id.strip():
        raise ValidationError("Scene id must not be empty")
    if not text or not text.strip():
        raise ValidationError("Scene text must not be empty", scene_id=scene_id)
    if find_scene(graph, scene_id) is not None:
        raise DuplicateIdError(
            f"A scene with id {scene_id} already exists",
            scene_id=scene_id,
        )

    updated = graph.copy_graph()
    updated.scenes.append(Scene(id=scene_id, text=text, choices=[]))
    logger.debug(f"Scene created: {scene_id}")
    return updated


def update_scene_text(graph: StoryGraph, scene_id: str, text: str) -> StoryGraph:
    """替换场景正文，不影响选项"""
    _require_scene(graph, scene_id)

    updated = graph.copy_graph()
    find_scene(updated, scene_id).text = text
    return updated


def select_scene(graph: StoryGraph, scene_id: str) -> Scene:
    """返回要展示的场景（不修改故事图）"""
    return _require_scene(graph, scene_id)


# ==================== 选项操作 ====================

def add_choice(graph: StoryGraph, scene_id: str, choice: Choice) -> StoryGraph:
    """
    为场景追加选项

    允许自环，也允许多个选项指向同一场景。

    Args:
        graph: 当前故事图
        scene_id: 所属场景ID
        choice: 新选项（追加到末尾）

    Returns:
        新的故事图

    Raises:
        NotFoundError: 所属场景不存在
        ValidationError: 选项文本为空或目标场景不存在
    """
    _require_scene(graph, scene_id)
    _validate_choice(graph, scene_id, choice)

    updated = graph.copy_graph()
    find_scene(updated, scene_id).choices.append(choice.model_copy())
    logger.debug(f"Choice added: {scene_id} -> {choice.target_scene_id}")
    return updated


def update_choice(graph: StoryGraph, scene_id: str, index: int, choice: Choice) -> StoryGraph:
    """
    原位替换指定下标的选项（顺序不变）

    Raises:
        NotFoundError: 所属场景不存在
        ChoiceIndexError: 下标越界
        ValidationError: 选项文本为空或目标场景不存在
    """
    scene = _require_scene(graph, scene_id)
    _check_index(scene, index)
    _validate_choice(graph, scene_id, choice)

    updated = graph.copy_graph()
    find_scene(updated, scene_id).choices[index] = choice.model_copy()
    return updated


def delete_choice(graph: StoryGraph, scene_id: str, index: int) -> StoryGraph:
    """
    删除指定下标的选项

    目标场景即使因此变得不可达也保留在故事图中，编辑器从不清理孤立场景。

    Raises:
        NotFoundError: 所属场景不存在
        ChoiceIndexError: 下标越界
    """
    scene = _require_scene(graph, scene_id)
    _check_index(scene, index)

    updated = graph.copy_graph()
    removed = find_scene(updated, scene_id).choices.pop(index)
    logger.debug(f"Choice deleted: {scene_id} -> {removed.target_scene_id}")
    return updated


# ==================== 编辑会话 ====================

class StoryEditor:
    """
    编辑会话

    持有当前故事图与选中的场景ID。每个操作成功后才替换故事图，
    失败时异常向上抛出，会话状态保持不变。

    Example:
        editor = StoryEditor(new_story_graph())
        editor.create_scene("forest", "You enter a dark forest.")
        editor.select("start")
        editor.add_choice(Choice(text="Go to the forest", target_scene_id="forest"))
        payload = editor.graph.to_record()
    """

    def __init__(self, graph: StoryGraph, selected_scene_id: str = ENTRY_SCENE_ID):
        self.graph = graph
        self.selected_scene_id = selected_scene_id

    @property
    def selected_scene(self) -> Optional[Scene]:
        return find_scene(self.graph, self.selected_scene_id)

    def select(self, scene_id: str) -> Scene:
        scene = select_scene(self.graph, scene_id)
        self.selected_scene_id = scene_id
        return scene

    def create_scene(self, scene_id: str, text: str) -> Scene:
        """新建场景并选中它"""
        self.graph = create_scene(self.graph, scene_id, text)
        return self.select(scene_id)

    def update_text(self, text: str) -> None:
        self.graph = update_scene_text(self.graph, self.selected_scene_id, text)

    def add_choice(self, choice: Choice) -> None:
        self.graph = add_choice(self.graph, self.selected_scene_id, choice)

    def update_choice(self, index: int, choice: Choice) -> None:
        self.graph = update_choice(self.graph, self.selected_scene_id, index, choice)

    def delete_choice(self, index: int) -> None:
        self.graph = delete_choice(self.graph, self.selected_scene_id, index)

    def discard(self, graph: StoryGraph) -> None:
        """放弃未保存的修改，回到给定的故事图"""
        self.graph = graph
        if find_scene(graph, self.selected_scene_id) is None:
            self.selected_scene_id = ENTRY_SCENE_ID
