"""
上传模块路由 - 封面图片中转
"""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from typing import Optional

from backend.models import ApiResponse
from backend.api.deps import get_current_user
from backend.services.errors import error_status
from backend.services.upload_service import upload_service

router = APIRouter()


@router.post("", response_model=ApiResponse)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    current_user: dict = Depends(get_current_user)
):
    """
    上传图片

    - 转发到外部图床，返回公开可访问的URL
    - 图片大小不能超过配置的上限
    """
    content = await image.read() if image else None
    result = await upload_service.upload_image(
        content,
        filename=image.filename if image else None,
        content_type=image.content_type if image else None,
    )

    if not result.success:
        raise HTTPException(status_code=error_status(result), detail=result.error)

    return result
