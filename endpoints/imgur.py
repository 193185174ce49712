import asyncio
import aiohttp
import dotenv
from typing import Optional
from loguru import logger

from backend.config.settings import settings

dotenv.load_dotenv()


class ImageUploadError(Exception):
    """图床上传失败"""

    def __init__(self, message: str, status: Optional[int] = None, details: Optional[dict] = None):
        super().__init__(message)
        self.status = status
        self.details = details


class ImgurClient:

    def __init__(self, api_url: str = None, client_id: str = None, timeout: int = None):
        self.api_url = api_url or settings.IMGUR_API_URL
        self.client_id = client_id or settings.IMGUR_CLIENT_ID
        self.timeout = timeout or settings.UPLOAD_TIMEOUT

    @property
    def headers(self):
        headers = {}
        if self.client_id:
            headers["Authorization"] = f"Client-ID {self.client_id}"
        return headers

    async def upload_image(self, content: bytes, filename: str = "image",
                           content_type: Optional[str] = None) -> str:
        """上传图片，返回公开可访问的图片URL

        Args:
            content: 图片二进制内容
            filename: 文件名
            content_type: MIME 类型

        Returns:
            str: 图片URL

        Raises:
            ImageUploadError: 网络错误、超时、图床返回错误或响应中没有链接
        """
        form = aiohttp.FormData()
        form.add_field("image", content, filename=filename, content_type=content_type)

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self.api_url,
                    data=form,
                    headers=self.headers,
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    try:
                        payload = await response.json(content_type=None)
                    except ValueError:
                        text = await response.text()
                        raise ImageUploadError(f"HTTP {response.status}: {text}", status=response.status)

                    if response.status not in [200, 201]:
                        logger.error(f"Imgur API error {response.status}: {payload}")
                        raise ImageUploadError(
                            "Failed to upload image to Imgur",
                            status=response.status,
                            details=payload,
                        )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Imgur request failed: {type(e).__name__}: {e}")
            raise ImageUploadError(f"Imgur request failed: {type(e).__name__}") from e

        if not isinstance(payload, dict) or not payload.get("success", False):
            raise ImageUploadError("Imgur rejected the upload", details=payload)

        link = (payload.get("data") or {}).get("link")
        if not link:
            raise ImageUploadError("Imgur response did not contain an image link", details=payload)

        return link
