"""
日志配置模块

为应用添加按大小轮转的日志文件
"""
import os
from loguru import logger

from backend.config.settings import settings

_configured = False


def setup_logging() -> None:
    """添加应用日志文件（重复调用只生效一次）"""
    global _configured

    if _configured:
        return

    os.makedirs(settings.LOG_DIR, exist_ok=True)
    logger.add(
        os.path.join(settings.LOG_DIR, "app.log"),
        rotation="10 MB",  # 日志文件达到 10MB 时轮转
        retention="7 days",  # 保留 7 天
        compression="zip",  # 压缩旧日志
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}",
        level=settings.LOG_LEVEL,
    )
    _configured = True
