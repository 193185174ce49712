"""
编辑器模块路由

无状态接口：请求携带当前故事图，响应返回修改后的故事图
"""

from fastapi import APIRouter, Depends, HTTPException

from backend.models import (
    ApiResponse,
    SceneCreateRequest,
    SceneTextRequest,
    SceneSelectRequest,
    ChoiceAddRequest,
    ChoiceUpdateRequest,
    ChoiceDeleteRequest,
)
from backend.api.deps import get_current_user
from backend.services.errors import error_status
from backend.services.editor_service import editor_service

router = APIRouter(dependencies=[Depends(get_current_user)])


def _raise_on_failure(result: ApiResponse) -> ApiResponse:
    if not result.success:
        raise HTTPException(status_code=error_status(result), detail=result.error)
    return result


@router.post("/scenes", response_model=ApiResponse)
async def create_scene(data: SceneCreateRequest):
    """
    新建场景

    - 场景ID在故事内唯一
    - 新场景没有选项，也不会被自动链接
    """
    return _raise_on_failure(editor_service.create_scene(data))


@router.post("/scenes/text", response_model=ApiResponse)
async def update_scene_text(data: SceneTextRequest):
    """修改场景正文（不影响选项）"""
    return _raise_on_failure(editor_service.update_scene_text(data))


@router.post("/select", response_model=ApiResponse)
async def select_scene(data: SceneSelectRequest):
    """选中场景，返回编辑面板展示信息"""
    return _raise_on_failure(editor_service.select_scene(data))


@router.post("/choices", response_model=ApiResponse)
async def add_choice(data: ChoiceAddRequest):
    """
    追加选项

    - 选项文本不能为空
    - 目标场景必须已存在
    """
    return _raise_on_failure(editor_service.add_choice(data))


@router.post("/choices/update", response_model=ApiResponse)
async def update_choice(data: ChoiceUpdateRequest):
    """原位替换选项"""
    return _raise_on_failure(editor_service.update_choice(data))


@router.post("/choices/delete", response_model=ApiResponse)
async def delete_choice(data: ChoiceDeleteRequest):
    """删除选项（目标场景保留）"""
    return _raise_on_failure(editor_service.delete_choice(data))
