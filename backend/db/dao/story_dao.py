"""
故事数据访问对象

故事图作为一个整体写入：发布时插入，保存时整体替换，没有按场景的增量更新
"""

from typing import Optional, List, Tuple
from datetime import datetime
from sqlalchemy import select, func, desc
from sqlalchemy.ext.asyncio import AsyncSession

from backend.db.models.story import Story
from backend.utils.id_generator import generate_story_id


class StoryDAO:
    """故事 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        author_id: str,
        title: str,
        scenes: List[dict],
        description: Optional[str] = None,
        cover_image: Optional[str] = None
    ) -> Story:
        """
        创建故事

        Args:
            session: 数据库会话
            author_id: 作者ID
            title: 标题
            scenes: 整个故事图（存储结构）
            description: 简介
            cover_image: 封面URL

        Returns:
            Story: 新创建的故事对象
        """
        story = Story(
            id=generate_story_id(),
            author_id=author_id,
            title=title,
            description=description,
            cover_image=cover_image,
            scenes=scenes,
            view_count=0,
        )

        session.add(story)
        await session.flush()

        return story

    @staticmethod
    async def get_by_id(session: AsyncSession, story_id: str) -> Optional[Story]:
        """根据ID获取故事"""
        result = await session.execute(
            select(Story).where(Story.id == story_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def replace(
        session: AsyncSession,
        story_id: str,
        title: str,
        scenes: List[dict],
        description: Optional[str] = None,
        cover_image: Optional[str] = None
    ) -> Optional[Story]:
        """整体替换故事内容（包括整个故事图）"""
        story = await StoryDAO.get_by_id(session, story_id)
        if not story:
            return None

        story.title = title
        story.description = description
        story.cover_image = cover_image
        story.scenes = scenes
        story.updated_at = datetime.utcnow()

        await session.flush()
        return story

    @staticmethod
    async def delete(session: AsyncSession, story_id: str) -> bool:
        """删除故事"""
        story = await StoryDAO.get_by_id(session, story_id)
        if not story:
            return False

        await session.delete(story)
        await session.flush()
        return True

    @staticmethod
    async def list_by_author(
        session: AsyncSession,
        author_id: str,
        limit: int = 20,
        offset: int = 0
    ) -> List[Story]:
        """获取作者的故事列表"""
        result = await session.execute(
            select(Story)
            .where(Story.author_id == author_id)
            .order_by(Story.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_published(
        session: AsyncSession,
        keyword: Optional[str] = None,
        sort: str = "latest",
        limit: int = 20,
        offset: int = 0
    ) -> Tuple[List[Story], int]:
        """
        获取已发布的故事列表（浏览页）

        Args:
            session: 数据库会话
            keyword: 标题关键词（不区分大小写）
            sort: 排序方式（latest/title）
            limit: 每页数量
            offset: 偏移量

        Returns:
            (故事列表, 总数)
        """
        query = select(Story)
        count_query = select(func.count()).select_from(Story)

        # 标题筛选
        if keyword:
            condition = Story.title.ilike(f"%{keyword}%")
            query = query.where(condition)
            count_query = count_query.where(condition)

        # 排序
        if sort == "title":
            query = query.order_by(Story.title)
        else:  # latest
            query = query.order_by(desc(Story.created_at))

        total_result = await session.execute(count_query)
        total = total_result.scalar() or 0

        # 分页查询
        result = await session.execute(query.limit(limit).offset(offset))
        stories = list(result.scalars().all())

        return stories, total
