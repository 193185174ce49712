"""
阅读服务

阅读状态由客户端持有（当前场景 + 历史栈），每次请求在服务端恢复为
ReaderSession 后执行一次状态转移，结果返回给客户端。阅读不会修改故事。
"""

from typing import Callable, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from backend.models import ApiResponse, ReadingState, ChoiceSelect
from backend.db.dao import StoryDAO
from backend.services.errors import graph_error_response, story_not_found
from engine import ReaderSession, StoryGraph, StoryGraphError


class ReaderService:
    """阅读服务"""

    @staticmethod
    async def _run(
        session: AsyncSession,
        story_id: str,
        state: Optional[ReadingState],
        action: Callable[[ReaderSession], object]
    ) -> ApiResponse:
        """
        加载故事、恢复会话并执行一次状态转移

        Args:
            session: 数据库会话
            story_id: 故事ID
            state: 客户端阅读状态（为空时从头开始）
            action: 对会话执行的操作

        Returns:
            API响应，包含新的阅读状态
        """
        story = await StoryDAO.get_by_id(session, story_id)
        if not story:
            return story_not_found()

        graph = StoryGraph.from_record(story.scenes)
        try:
            reader = ReaderSession.from_state(
                graph,
                current_scene_id=state.current_scene_id if state else None,
                history=state.history if state else None,
            )
            action(reader)
        except StoryGraphError as e:
            logger.warning(f"Reading {story_id} failed: {e.code} {e.message}")
            return graph_error_response(e)

        data = reader.snapshot()
        data["story_id"] = story_id
        return ApiResponse(success=True, data=data)

    @staticmethod
    async def start_reading(session: AsyncSession, story_id: str) -> ApiResponse:
        """开始阅读：定位到 start 场景，历史为空"""
        return await ReaderService._run(session, story_id, None, lambda reader: None)

    @staticmethod
    async def select_choice(session: AsyncSession, story_id: str, data: ChoiceSelect) -> ApiResponse:
        """选择选项前进"""
        return await ReaderService._run(
            session, story_id, data, lambda reader: reader.select_choice(data.choice_index)
        )

    @staticmethod
    async def go_back(session: AsyncSession, story_id: str, state: ReadingState) -> ApiResponse:
        """后退一步（历史为空时保持不变）"""
        return await ReaderService._run(session, story_id, state, lambda reader: reader.go_back())

    @staticmethod
    async def restart(session: AsyncSession, story_id: str, state: ReadingState) -> ApiResponse:
        """从头开始"""
        return await ReaderService._run(session, story_id, state, lambda reader: reader.restart())


# 全局阅读服务实例
reader_service = ReaderService()
