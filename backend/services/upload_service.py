"""
上传服务

把封面图片转发到外部图床，返回图片URL。失败不会自动重试。
"""

from typing import Optional

from loguru import logger

from backend.config.settings import settings
from backend.models import ApiResponse
from endpoints import ImgurClient, ImageUploadError


class UploadService:
    """上传服务"""

    def __init__(self, client: Optional[ImgurClient] = None):
        self.client = client or ImgurClient()

    async def upload_image(
        self,
        content: Optional[bytes],
        filename: Optional[str] = None,
        content_type: Optional[str] = None
    ) -> ApiResponse:
        """
        上传图片

        Args:
            content: 图片二进制内容
            filename: 文件名
            content_type: MIME 类型

        Returns:
            API响应，包含图片URL
        """
        if not content:
            return ApiResponse(
                success=False,
                message="No image provided",
                error={"code": "NO_IMAGE", "message": "没有上传图片"}
            )

        if len(content) > settings.UPLOAD_MAX_BYTES:
            return ApiResponse(
                success=False,
                message="Image is too large",
                error={
                    "code": "IMAGE_TOO_LARGE",
                    "message": "图片大小超出限制",
                    "max_bytes": settings.UPLOAD_MAX_BYTES,
                }
            )

        try:
            url = await self.client.upload_image(content, filename or "image", content_type)
        except ImageUploadError as e:
            logger.error(f"Image upload failed: {e}")
            return ApiResponse(
                success=False,
                message="Failed to upload image",
                error={"code": "UPLOAD_FAILED", "message": str(e), "status": e.status}
            )

        logger.info(f"Image uploaded: {url}")
        return ApiResponse(success=True, message="Image uploaded", data={"url": url})


# 全局上传服务实例
upload_service = UploadService()
