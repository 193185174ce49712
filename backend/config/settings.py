"""
应用全局配置

从 config.yaml 加载配置，支持环境变量覆盖
"""

import yaml
from pathlib import Path
from typing import Optional, List
import os


class Settings:
    """应用全局配置（从 config.yaml 加载）"""

    def __init__(self, config_path: Optional[str] = None):
        # 加载 config.yaml
        config_path = config_path or os.getenv(
            "APP_CONFIG", str(Path(__file__).parent.parent.parent / "config.yaml")
        )
        with open(config_path, 'r', encoding='utf-8') as f:
            self._config = yaml.safe_load(f)

    # ==================== 应用基础配置 ====================
    @property
    def APP_NAME(self) -> str:
        return os.getenv("APP_NAME", self._config["app"]["name"])

    @property
    def APP_VERSION(self) -> str:
        return os.getenv("APP_VERSION", self._config["app"]["version"])

    @property
    def API_V1_PREFIX(self) -> str:
        return os.getenv("API_V1_PREFIX", self._config["app"]["api_prefix"])

    @property
    def DEBUG(self) -> bool:
        debug_str = os.getenv("DEBUG", str(self._config["app"]["debug"]))
        return debug_str.lower() in ("true", "1", "yes")

    # ==================== 数据库配置 ====================
    @property
    def DATABASE_ENABLED(self) -> bool:
        enabled_str = os.getenv("DATABASE_ENABLED", str(self._config["database"]["enabled"]))
        return enabled_str.lower() in ("true", "1", "yes")

    @property
    def DATABASE_URL(self) -> Optional[str]:
        if not self.DATABASE_ENABLED:
            return None
        return os.getenv("DATABASE_URL", self._config["database"]["url"])

    @property
    def DATABASE_POOL_SIZE(self) -> int:
        return int(os.getenv("DATABASE_POOL_SIZE", self._config["database"]["pool_size"]))

    @property
    def DATABASE_MAX_OVERFLOW(self) -> int:
        return int(os.getenv("DATABASE_MAX_OVERFLOW", self._config["database"]["max_overflow"]))

    # ==================== JWT 认证配置 ====================
    @property
    def JWT_SECRET_KEY(self) -> str:
        return os.getenv("JWT_SECRET_KEY", self._config["jwt"]["secret_key"])

    @property
    def JWT_ALGORITHM(self) -> str:
        return os.getenv("JWT_ALGORITHM", self._config["jwt"]["algorithm"])

    @property
    def JWT_AUDIENCE(self) -> Optional[str]:
        return os.getenv("JWT_AUDIENCE", self._config["jwt"].get("audience")) or None

    # ==================== CORS 配置 ====================
    @property
    def CORS_ORIGINS(self) -> List[str]:
        env_origins = os.getenv("CORS_ORIGINS")
        if env_origins:
            return [origin.strip() for origin in env_origins.split(",")]
        return self._config["cors"]["origins"]

    # ==================== 图片上传配置 ====================
    @property
    def IMGUR_API_URL(self) -> str:
        return os.getenv("IMGUR_API_URL", self._config["upload"]["imgur_api_url"])

    @property
    def IMGUR_CLIENT_ID(self) -> Optional[str]:
        return os.getenv("IMGUR_CLIENT_ID", self._config["upload"]["imgur_client_id"]) or None

    @property
    def UPLOAD_MAX_BYTES(self) -> int:
        return int(os.getenv("UPLOAD_MAX_BYTES", self._config["upload"]["max_bytes"]))

    @property
    def UPLOAD_TIMEOUT(self) -> int:
        return int(os.getenv("UPLOAD_TIMEOUT", self._config["upload"]["timeout"]))

    # ==================== 业务规则配置 ====================
    @property
    def DEFAULT_PAGE_SIZE(self) -> int:
        return int(os.getenv("DEFAULT_PAGE_SIZE", self._config["business"]["default_page_size"]))

    @property
    def MAX_PAGE_SIZE(self) -> int:
        return int(os.getenv("MAX_PAGE_SIZE", self._config["business"]["max_page_size"]))

    # ==================== 日志配置 ====================
    @property
    def LOG_DIR(self) -> str:
        return os.getenv("LOG_DIR", self._config["logging"]["dir"])

    @property
    def LOG_LEVEL(self) -> str:
        return os.getenv("LOG_LEVEL", self._config["logging"]["level"]).upper()


# 全局配置实例
settings = Settings()
