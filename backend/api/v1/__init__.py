"""
API v1 路由汇总
"""

from fastapi import APIRouter

from .story import router as story_router
from .reader import router as reader_router
from .editor import router as editor_router
from .upload import router as upload_router

# 创建 v1 API 路由
api_router = APIRouter()

# 注册子路由（按前缀分组）
api_router.include_router(story_router, prefix="/story", tags=["Story"])
api_router.include_router(reader_router, prefix="/story", tags=["Reader"])
api_router.include_router(editor_router, prefix="/editor", tags=["Editor"])
api_router.include_router(upload_router, prefix="/upload", tags=["Upload"])
