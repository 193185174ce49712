"""
数据库 ORM 模型

导出所有 SQLAlchemy 模型类
"""

from backend.db.base import Base

# 导入所有模型（确保 Base 知道所有表）
from .story import Story

__all__ = [
    # Base
    "Base",

    # Models
    "Story",
]
