"""
工具模块
"""

from .auth import decode_access_token
from .id_generator import generate_ulid, generate_story_id
from .logger_config import setup_logging

__all__ = [
    # 认证工具
    "decode_access_token",

    # ID 生成器
    "generate_ulid",
    "generate_story_id",

    # 日志
    "setup_logging",
]
