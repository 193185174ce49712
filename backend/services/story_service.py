"""
故事服务

处理故事发布、查询、保存、删除等业务逻辑。
故事图在写入前检查结构完整性，并作为整体写入。
"""

from typing import Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from backend.models import (
    ApiResponse,
    PaginationMeta,
    StoryCreate,
    StoryDetail,
    StoryListItem,
    StorySort,
    StoryUpdate,
)
from backend.db.dao import StoryDAO
from backend.services.errors import graph_error_response, story_not_found, permission_denied
from engine import StoryGraph, StoryGraphError, ensure_well_formed


def _story_data(story) -> dict:
    """故事行 -> 响应数据（包含整个故事图）"""
    return StoryDetail.model_validate(story).model_dump(mode="json", by_alias=True)


def _story_list_item(story) -> dict:
    """故事行 -> 列表项（不含故事图）"""
    return StoryListItem(
        id=story.id,
        title=story.title,
        description=story.description,
        cover_image=story.cover_image,
        author_id=story.author_id,
        scene_count=len(story.scenes or []),
        created_at=story.created_at,
    ).model_dump(mode="json")


class StoryService:
    """故事服务"""

    @staticmethod
    async def publish_story(
        session: AsyncSession,
        author_id: str,
        story_data: StoryCreate
    ) -> ApiResponse:
        """
        发布故事（整体插入）

        Args:
            session: 数据库会话
            author_id: 当前用户ID
            story_data: 故事数据（包含整个故事图）

        Returns:
            API响应，包含新故事
        """
        graph = StoryGraph(scenes=story_data.scenes)
        try:
            ensure_well_formed(graph)
        except StoryGraphError as e:
            logger.warning(f"Rejected story publish by {author_id}: {e.message}")
            return graph_error_response(e)

        story = await StoryDAO.create(
            session=session,
            author_id=author_id,
            title=story_data.title,
            description=story_data.description,
            cover_image=story_data.cover_image,
            scenes=graph.to_record(),
        )
        logger.info(f"Story published: {story.id} by {author_id} ({len(graph.scenes)} scenes)")

        return ApiResponse(
            success=True,
            message="Story published",
            data=_story_data(story)
        )

    @staticmethod
    async def get_story(session: AsyncSession, story_id: str) -> ApiResponse:
        """获取故事详情（包含故事图）"""
        story = await StoryDAO.get_by_id(session, story_id)
        if not story:
            return story_not_found()

        return ApiResponse(success=True, data=_story_data(story))

    @staticmethod
    async def save_story(
        session: AsyncSession,
        story_id: str,
        user_id: str,
        story_data: StoryUpdate
    ) -> ApiResponse:
        """
        保存故事（整体替换）

        只有作者可以保存；故事图不合法时不做任何写入

        Args:
            session: 数据库会话
            story_id: 故事ID
            user_id: 当前用户ID
            story_data: 新的故事内容

        Returns:
            API响应
        """
        story = await StoryDAO.get_by_id(session, story_id)
        if not story:
            return story_not_found()

        # 检查权限
        if story.author_id != user_id:
            return permission_denied()

        graph = StoryGraph(scenes=story_data.scenes)
        try:
            ensure_well_formed(graph)
        except StoryGraphError as e:
            logger.warning(f"Rejected save of story {story_id}: {e.message}")
            return graph_error_response(e)

        story = await StoryDAO.replace(
            session=session,
            story_id=story_id,
            title=story_data.title,
            description=story_data.description,
            cover_image=story_data.cover_image,
            scenes=graph.to_record(),
        )
        logger.info(f"Story saved: {story_id} ({len(graph.scenes)} scenes)")

        return ApiResponse(
            success=True,
            message="Story saved",
            data=_story_data(story)
        )

    @staticmethod
    async def delete_story(session: AsyncSession, story_id: str, user_id: str) -> ApiResponse:
        """删除故事（仅作者）"""
        story = await StoryDAO.get_by_id(session, story_id)
        if not story:
            return story_not_found()

        if story.author_id != user_id:
            return permission_denied()

        await StoryDAO.delete(session, story_id)
        logger.info(f"Story deleted: {story_id}")

        return ApiResponse(success=True, message="Story deleted")

    @staticmethod
    async def list_stories(
        session: AsyncSession,
        keyword: Optional[str] = None,
        sort: StorySort = StorySort.LATEST,
        page: int = 1,
        limit: int = 20
    ) -> ApiResponse:
        """
        浏览已发布的故事

        Args:
            session: 数据库会话
            keyword: 标题关键词
            sort: 排序方式
            page: 页码（从 1 开始）
            limit: 每页数量

        Returns:
            API响应，包含故事列表与分页信息
        """
        offset = (page - 1) * limit
        stories, total = await StoryDAO.list_published(
            session, keyword=keyword, sort=sort.value, limit=limit, offset=offset
        )

        return ApiResponse(
            success=True,
            data={
                "stories": [_story_list_item(story) for story in stories],
                "pagination": PaginationMeta(page=page, limit=limit, total=total).model_dump(),
            }
        )

    @staticmethod
    async def list_user_stories(
        session: AsyncSession,
        user_id: str,
        page: int = 1,
        limit: int = 20
    ) -> ApiResponse:
        """当前用户发布的故事"""
        offset = (page - 1) * limit
        stories = await StoryDAO.list_by_author(session, user_id, limit=limit, offset=offset)

        return ApiResponse(
            success=True,
            data={"stories": [_story_list_item(story) for story in stories]}
        )


# 全局故事服务实例
story_service = StoryService()
