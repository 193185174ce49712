"""
故事模块路由 - 发布、浏览、保存、删除
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from backend.models import ApiResponse, StoryCreate, StoryUpdate, StorySort
from backend.api.deps import get_current_user, get_db_session
from backend.config.settings import settings
from backend.services.errors import error_status
from backend.services.story_service import story_service

router = APIRouter()


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def publish_story(
    data: StoryCreate,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    发布故事

    - 整个故事图作为一个整体插入
    - 故事图必须包含 start 场景，选项目标必须存在
    """
    result = await story_service.publish_story(session, current_user["user_id"], data)

    if not result.success:
        raise HTTPException(status_code=error_status(result), detail=result.error)

    return result


@router.get("", response_model=ApiResponse)
async def list_stories(
    q: Optional[str] = Query(None, description="标题关键词"),
    sort: StorySort = Query(StorySort.LATEST, description="排序方式（latest/title）"),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    session: AsyncSession = Depends(get_db_session)
):
    """
    浏览故事

    - 无需登录即可访问
    - 支持标题搜索和排序
    """
    limit = min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    return await story_service.list_stories(session, keyword=q, sort=sort, page=page, limit=limit)


@router.get("/mine", response_model=ApiResponse)
async def list_my_stories(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """当前用户发布的故事"""
    limit = min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    return await story_service.list_user_stories(session, current_user["user_id"], page=page, limit=limit)


@router.get("/{story_id}", response_model=ApiResponse)
async def get_story(
    story_id: str,
    session: AsyncSession = Depends(get_db_session)
):
    """
    获取故事详情

    - 返回故事信息与完整故事图
    """
    result = await story_service.get_story(session, story_id)

    if not result.success:
        raise HTTPException(status_code=error_status(result, 404), detail=result.error)

    return result


@router.put("/{story_id}", response_model=ApiResponse)
async def save_story(
    story_id: str,
    data: StoryUpdate,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    保存故事

    - 仅作者可以保存
    - 整体替换标题、简介、封面与故事图
    """
    result = await story_service.save_story(session, story_id, current_user["user_id"], data)

    if not result.success:
        raise HTTPException(status_code=error_status(result), detail=result.error)

    return result


@router.delete("/{story_id}", response_model=ApiResponse)
async def delete_story(
    story_id: str,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """删除故事（仅作者）"""
    result = await story_service.delete_story(session, story_id, current_user["user_id"])

    if not result.success:
        raise HTTPException(status_code=error_status(result), detail=result.error)

    return result
