"""
编辑器服务

无状态的故事图编辑：每次请求携带完整故事图，成功时返回新的故事图，
失败时返回错误且不产生任何修改
"""

from typing import Callable

from loguru import logger

from backend.models import (
    ApiResponse,
    SceneCreateRequest,
    SceneTextRequest,
    SceneSelectRequest,
    ChoiceAddRequest,
    ChoiceUpdateRequest,
    ChoiceDeleteRequest,
)
from backend.services.errors import graph_error_response
from engine import (
    StoryGraph,
    StoryGraphError,
    editor,
    is_entry,
    is_terminal,
    scene_display_name,
    scene_preview,
)


def _graph_response(graph: StoryGraph, selected_scene_id: str, message: str) -> ApiResponse:
    return ApiResponse(
        success=True,
        message=message,
        data={
            "scenes": graph.to_record(),
            "selected_scene_id": selected_scene_id,
        }
    )


class EditorService:
    """编辑器服务"""

    @staticmethod
    def _apply(operation: Callable[[StoryGraph], StoryGraph], graph: StoryGraph,
               selected_scene_id: str, message: str) -> ApiResponse:
        """执行编辑操作，把故事图异常转换为失败响应"""
        try:
            updated = operation(graph)
        except StoryGraphError as e:
            logger.warning(f"Editor operation rejected: {e.code} {e.message}")
            return graph_error_response(e)
        return _graph_response(updated, selected_scene_id, message)

    @staticmethod
    def create_scene(data: SceneCreateRequest) -> ApiResponse:
        """新建场景（创建后选中新场景）"""
        return EditorService._apply(
            lambda graph: editor.create_scene(graph, data.scene_id, data.text),
            StoryGraph(scenes=data.scenes),
            data.scene_id,
            "Scene created",
        )

    @staticmethod
    def update_scene_text(data: SceneTextRequest) -> ApiResponse:
        """修改场景正文"""
        return EditorService._apply(
            lambda graph: editor.update_scene_text(graph, data.scene_id, data.text),
            StoryGraph(scenes=data.scenes),
            data.scene_id,
            "Scene updated",
        )

    @staticmethod
    def add_choice(data: ChoiceAddRequest) -> ApiResponse:
        """追加选项"""
        return EditorService._apply(
            lambda graph: editor.add_choice(graph, data.scene_id, data.choice),
            StoryGraph(scenes=data.scenes),
            data.scene_id,
            "Choice added",
        )

    @staticmethod
    def update_choice(data: ChoiceUpdateRequest) -> ApiResponse:
        """替换选项"""
        return EditorService._apply(
            lambda graph: editor.update_choice(graph, data.scene_id, data.index, data.choice),
            StoryGraph(scenes=data.scenes),
            data.scene_id,
            "Choice updated",
        )

    @staticmethod
    def delete_choice(data: ChoiceDeleteRequest) -> ApiResponse:
        """删除选项"""
        return EditorService._apply(
            lambda graph: editor.delete_choice(graph, data.scene_id, data.index),
            StoryGraph(scenes=data.scenes),
            data.scene_id,
            "Choice deleted",
        )

    @staticmethod
    def select_scene(data: SceneSelectRequest) -> ApiResponse:
        """
        选中场景，返回编辑面板需要的展示信息

        Returns:
            API响应，包含场景、显示名称、是否为结局以及每个选项的目标预览
        """
        graph = StoryGraph(scenes=data.scenes)
        try:
            scene = editor.select_scene(graph, data.scene_id)
        except StoryGraphError as e:
            return graph_error_response(e)

        return ApiResponse(
            success=True,
            data={
                "scene": scene.to_dict(),
                "display_name": scene_display_name(scene.id),
                "is_entry": is_entry(scene),
                "is_terminal": is_terminal(scene),
                "choices": [
                    {
                        "index": index,
                        "text": choice.text,
                        "target_scene_id": choice.target_scene_id,
                        "leads_to": scene_preview(graph, choice.target_scene_id),
                    }
                    for index, choice in enumerate(scene.choices)
                ],
                "scene_list": [
                    {"id": scene_id, "display_name": scene_display_name(scene_id)}
                    for scene_id in graph.scene_ids()
                ],
            }
        )


# 全局编辑器服务实例
editor_service = EditorService()
