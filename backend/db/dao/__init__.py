"""
数据访问对象（DAO）层

封装数据库操作，提供给服务层使用
"""

from .story_dao import StoryDAO

__all__ = [
    "StoryDAO",
]
