"""
故事表 ORM 模型

整个故事图以 JSONB 形式存放在 scenes 字段中，保存时整体替换
"""

from sqlalchemy import Column, String, Text, Integer, TIMESTAMP, Index
from sqlalchemy.dialects.postgresql import JSONB
from datetime import datetime

from backend.db.base import Base


class Story(Base):
    """故事表"""
    __tablename__ = "stories"

    # 主键
    id = Column(String(64), primary_key=True, comment="故事ID")

    # 作者（外部身份服务的用户ID）
    author_id = Column(String(64), nullable=False, comment="作者ID")

    # 基本信息
    title = Column(String(256), nullable=False, comment="故事标题")
    description = Column(Text, nullable=True, comment="故事简介")
    cover_image = Column(String(512), nullable=True, comment="封面图片URL")

    # 故事图
    scenes = Column(JSONB, nullable=False, default=list, comment="全部场景（整体读写）")

    # 统计
    view_count = Column(Integer, nullable=False, default=0, comment="浏览次数")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow, comment="更新时间")

    # 索引
    __table_args__ = (
        Index('idx_stories_author_id', 'author_id'),
        Index('idx_stories_created_at', 'created_at', postgresql_ops={'created_at': 'DESC'}),
        Index('idx_stories_author_created', 'author_id', 'created_at', postgresql_ops={'created_at': 'DESC'}),
    )
