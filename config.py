"""
Global configuration management
"""
import os
import json
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class Config:
    """应用配置类"""

    # Figma API配置
    FIGMA_API_BASE: str = "https://api.figma.com/v1"
    FIGMA_ACCESS_TOKEN: Optional[str] = None
    FIGMA_FILE_KEY: Optional[str] = None
    REQUEST_TIMEOUT: int = 60

    # 图片导出配置
    IMAGE_FORMAT: str = "png"
    IMAGE_SCALE: int = 3

    OUTPUT_DIR: str = "output"
    CONFIG_FILE: str = "config.json"

    # HTTP 服务配置
    HTTP_HOST: str = "0.0.0.0"
    HTTP_PORT: int = 3001

    # stdio 模式下并发处理请求的线程数
    MAX_WORKERS: int = 4

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    SERVER_NAME: str = "figma-mcp-server"
    SERVER_VERSION: str = "1.0.0"
    PROTOCOL_VERSION: str = "2024-11-05"

    @classmethod
    def get_env(cls, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get environment variable"""
        return os.getenv(key, default)

    @classmethod
    def load_file(cls, path: Optional[str] = None) -> bool:
        """
        从 JSON 配置文件加载 Figma 凭证和输出目录

        The file layout is ``{"figma": {"accessToken", "fileKey"}, "output": {"directory"}}``.

        Args:
            path: Config file path, defaults to CONFIG_FILE

        Returns:
            Whether a file was loaded
        """
        path = path or cls.CONFIG_FILE
        if not path or not os.path.exists(path):
            return False

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"[Config] Error reading {path}: {e}. Using defaults.")
            return False

        if not isinstance(data, dict):
            logger.warning(f"[Config] Ignoring {path}: top level is not an object")
            return False

        figma = data.get("figma") or {}
        if figma.get("accessToken"):
            cls.FIGMA_ACCESS_TOKEN = figma["accessToken"]
        if figma.get("fileKey"):
            cls.FIGMA_FILE_KEY = figma["fileKey"]

        output = data.get("output") or {}
        if output.get("directory"):
            cls.OUTPUT_DIR = output["directory"]

        logger.info(f"[Config] Loaded configuration from {path}")
        return True

    @classmethod
    def reload_from_env(cls):
        """从环境变量重新加载配置"""
        cls.CONFIG_FILE = cls.get_env("FIGMA_MCP_CONFIG", cls.CONFIG_FILE)
        cls.FIGMA_API_BASE = cls.get_env("FIGMA_API_BASE", cls.FIGMA_API_BASE)
        cls.FIGMA_ACCESS_TOKEN = cls.get_env("FIGMA_ACCESS_TOKEN", cls.FIGMA_ACCESS_TOKEN)
        cls.FIGMA_FILE_KEY = cls.get_env("FIGMA_FILE_KEY", cls.FIGMA_FILE_KEY)
        cls.OUTPUT_DIR = cls.get_env("FIGMA_OUTPUT_DIR", cls.OUTPUT_DIR)
        cls.HTTP_HOST = cls.get_env("HOST", cls.HTTP_HOST)
        cls.LOG_FILE = cls.get_env("FIGMA_MCP_LOG_FILE", cls.LOG_FILE)
        cls.LOG_LEVEL = cls._load_log_level()
        cls.IMAGE_FORMAT = cls._load_image_format()
        cls.REQUEST_TIMEOUT = cls._load_int("FIGMA_REQUEST_TIMEOUT", cls.REQUEST_TIMEOUT)
        cls.IMAGE_SCALE = cls._load_int("FIGMA_IMAGE_SCALE", cls.IMAGE_SCALE)
        cls.HTTP_PORT = cls._load_int("PORT", cls.HTTP_PORT)
        cls.MAX_WORKERS = cls._load_int("FIGMA_MCP_MAX_WORKERS", cls.MAX_WORKERS)

    @classmethod
    def load(cls, path: Optional[str] = None):
        """
        按优先级加载配置: 默认值 < 配置文件 < 环境变量

        Args:
            path: Optional config file path
        """
        if path:
            cls.CONFIG_FILE = path
        else:
            cls.CONFIG_FILE = cls.get_env("FIGMA_MCP_CONFIG", cls.CONFIG_FILE)
        cls.load_file(cls.CONFIG_FILE)
        cls.reload_from_env()

    @classmethod
    def _load_int(cls, key: str, default: int) -> int:
        """从环境变量读取正整数"""
        raw = cls.get_env(key)
        if raw is None:
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"[Config] Invalid {key} '{raw}', using default {default}")
            return default
        if value <= 0:
            logger.warning(f"[Config] {key} must be positive, using default {default}")
            return default
        return value

    @classmethod
    def _load_image_format(cls) -> str:
        """从环境变量获取图片导出格式"""
        fmt = cls.get_env("FIGMA_IMAGE_FORMAT", cls.IMAGE_FORMAT).lower()
        if fmt in ["png", "jpg", "svg", "pdf"]:
            return fmt
        logger.warning(f"[Config] Invalid FIGMA_IMAGE_FORMAT '{fmt}', using default 'png'")
        return "png"

    @classmethod
    def _load_log_level(cls) -> str:
        """从环境变量获取日志级别"""
        level = cls.get_env("LOG_LEVEL", cls.LOG_LEVEL).upper()
        if level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            return level
        logger.warning(f"[Config] Invalid LOG_LEVEL '{level}', using default 'INFO'")
        return "INFO"


# 在类定义后从环境变量加载配置
Config.reload_from_env()
