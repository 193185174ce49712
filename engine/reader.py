"""
阅读引擎

读者在已发布故事图上的导航状态机。只有一个状态 Reading(current_scene)，
结局只是 current_scene 的派生属性。

输入只有三种：
- select_choice(index)：前进，当前场景入栈
- go_back()：出栈回到上一个场景，历史为空时不做任何事
- restart()：回到 start 场景并清空历史

阅读过程从不修改故事图。
"""

from typing import List, Optional
from loguru import logger

from .errors import (
    BrokenLinkError,
    ChoiceIndexError,
    MissingEntryPointError,
    ValidationError,
)
from .models import (
    ENTRY_SCENE_ID,
    Scene,
    StoryGraph,
    find_scene,
    is_terminal,
)


class ReaderSession:
    """
    阅读会话

    history 是已离开场景的栈，永远不包含当前场景；
    环路重访会重复入栈，不做去重。

    Example:
        session = ReaderSession(graph)
        session.select_choice(0)
        if session.can_go_back:
            session.go_back()
        session.restart()
    """

    def __init__(self, graph: StoryGraph):
        self.graph = graph
        self.current_scene: Scene = self._entry_scene()
        self.history: List[Scene] = []

    def _entry_scene(self) -> Scene:
        scene = find_scene(self.graph, ENTRY_SCENE_ID)
        if scene is None:
            raise MissingEntryPointError("Story has no start scene and cannot be read")
        return scene

    # ==================== 派生属性 ====================

    @property
    def is_terminal(self) -> bool:
        """当前场景是否为结局"""
        return is_terminal(self.current_scene)

    @property
    def can_go_back(self) -> bool:
        return len(self.history) > 0

    @property
    def history_ids(self) -> List[str]:
        return [scene.id for scene in self.history]

    # ==================== 状态转移 ====================

    def select_choice(self, index: int) -> Scene:
        """
        选择当前场景的第 index 个选项

        Args:
            index: 选项下标

        Returns:
            新的当前场景

        Raises:
            ChoiceIndexError: 下标越界（结局场景没有任何可选下标）
            BrokenLinkError: 选项目标不存在
        """
        choices = self.current_scene.choices
        if index < 0 or index >= len(choices):
            raise ChoiceIndexError(
                f"Choice index {index} out of range for scene {self.current_scene.id}",
                scene_id=self.current_scene.id,
                index=index,
            )

        choice = choices[index]
        target = find_scene(self.graph, choice.target_scene_id)
        if target is None:
            raise BrokenLinkError(
                f"Choice {index} of scene {self.current_scene.id} leads to missing scene "
                f"{choice.target_scene_id}",
                scene_id=self.current_scene.id,
            )

        self.history.append(self.current_scene)
        self.current_scene = target
        logger.debug(f"Reader moved to {target.id} (history depth {len(self.history)})")
        return target

    def go_back(self) -> Scene:
        """回到上一个场景；历史为空时保持不变"""
        if self.history:
            self.current_scene = self.history.pop()
        return self.current_scene

    def restart(self) -> Scene:
        """回到 start 场景并清空历史"""
        self.current_scene = self._entry_scene()
        self.history = []
        return self.current_scene

    # ==================== 状态恢复 ====================

    @classmethod
    def from_state(
        cls,
        graph: StoryGraph,
        current_scene_id: Optional[str] = None,
        history: Optional[List[str]] = None
    ) -> "ReaderSession":
        """
        从客户端保存的状态恢复会话

        Args:
            graph: 故事图
            current_scene_id: 当前场景ID，为空时从 start 开始
            history: 已访问场景ID列表（栈底在前）

        Returns:
            ReaderSession: 恢复后的会话

        Raises:
            MissingEntryPointError: 故事没有 start 场景
            BrokenLinkError: 状态中的场景ID在故事图中不存在
            ValidationError: 给出了历史但没有当前场景
        """
        session = cls(graph)
        if current_scene_id is None:
            if history:
                raise ValidationError("Reading history was given without a current scene")
            return session

        current = find_scene(graph, current_scene_id)
        if current is None:
            raise BrokenLinkError(
                f"Reading position refers to missing scene {current_scene_id}",
                scene_id=current_scene_id,
            )

        visited = []
        for scene_id in history or []:
            scene = find_scene(graph, scene_id)
            if scene is None:
                raise BrokenLinkError(
                    f"Reading history refers to missing scene {scene_id}",
                    scene_id=scene_id,
                )
            visited.append(scene)

        session.current_scene = current
        session.history = visited
        return session

    def snapshot(self) -> dict:
        """导出会话状态（用于响应给客户端）"""
        return {
            "current_scene": self.current_scene.to_dict(),
            "history": self.history_ids,
            "is_terminal": self.is_terminal,
            "can_go_back": self.can_go_back,
        }
