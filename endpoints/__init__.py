"""
外部服务客户端
"""

from .imgur import ImgurClient, ImageUploadError

__all__ = ["ImgurClient", "ImageUploadError"]
