"""
阅读模块路由

阅读状态由客户端保存，每次请求提交当前场景与历史栈
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from backend.models import ApiResponse, ReadingState, ChoiceSelect
from backend.api.deps import get_db_session
from backend.services.errors import error_status
from backend.services.reader_service import reader_service

router = APIRouter()


def _raise_on_failure(result: ApiResponse) -> ApiResponse:
    if not result.success:
        raise HTTPException(status_code=error_status(result), detail=result.error)
    return result


@router.get("/{story_id}/read", response_model=ApiResponse)
async def start_reading(
    story_id: str,
    session: AsyncSession = Depends(get_db_session)
):
    """
    开始阅读

    - 从 start 场景开始，历史为空
    - 故事缺少 start 场景时返回 422（不可恢复）
    """
    return _raise_on_failure(await reader_service.start_reading(session, story_id))


@router.post("/{story_id}/read/choice", response_model=ApiResponse)
async def select_choice(
    story_id: str,
    data: ChoiceSelect,
    session: AsyncSession = Depends(get_db_session)
):
    """选择选项，当前场景入栈"""
    return _raise_on_failure(await reader_service.select_choice(session, story_id, data))


@router.post("/{story_id}/read/back", response_model=ApiResponse)
async def go_back(
    story_id: str,
    data: ReadingState,
    session: AsyncSession = Depends(get_db_session)
):
    """返回上一个场景"""
    return _raise_on_failure(await reader_service.go_back(session, story_id, data))


@router.post("/{story_id}/read/restart", response_model=ApiResponse)
async def restart(
    story_id: str,
    data: ReadingState,
    session: AsyncSession = Depends(get_db_session)
):
    """重新开始"""
    return _raise_on_failure(await reader_service.restart(session, story_id, data))
