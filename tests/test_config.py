"""
测试配置加载：默认值 < 配置文件 < 环境变量
"""
import json
import shutil
import tempfile
import unittest
from unittest.mock import patch
import os
import sys

# 添加项目根目录到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from config import Config

SAVED_KEYS = [
    "CONFIG_FILE", "FIGMA_API_BASE", "FIGMA_ACCESS_TOKEN", "FIGMA_FILE_KEY", "OUTPUT_DIR",
    "HTTP_HOST", "HTTP_PORT", "LOG_FILE", "LOG_LEVEL", "IMAGE_FORMAT", "IMAGE_SCALE",
    "REQUEST_TIMEOUT", "MAX_WORKERS"
]


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.saved = {key: getattr(Config, key) for key in SAVED_KEYS}
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        for key, value in self.saved.items():
            setattr(Config, key, value)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def write_config(self, data) -> str:
        path = os.path.join(self.temp_dir, "config.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write(data if isinstance(data, str) else json.dumps(data))
        return path

    def test_load_file(self):
        """测试从 config.json 加载凭证与输出目录"""
        path = self.write_config({
            "figma": {"accessToken": "file-token", "fileKey": "FILEKEY"},
            "output": {"directory": "exports"}
        })

        self.assertTrue(Config.load_file(path))
        self.assertEqual(Config.FIGMA_ACCESS_TOKEN, "file-token")
        self.assertEqual(Config.FIGMA_FILE_KEY, "FILEKEY")
        self.assertEqual(Config.OUTPUT_DIR, "exports")

    def test_missing_file(self):
        self.assertFalse(Config.load_file(os.path.join(self.temp_dir, "nope.json")))

    def test_invalid_json_keeps_defaults(self):
        Config.FIGMA_ACCESS_TOKEN = None
        path = self.write_config("{broken")

        self.assertFalse(Config.load_file(path))
        self.assertIsNone(Config.FIGMA_ACCESS_TOKEN)

    def test_env_overrides_file(self):
        """测试环境变量优先于配置文件"""
        path = self.write_config({"figma": {"accessToken": "file-token", "fileKey": "FILEKEY"}})

        with patch.dict(os.environ, {"FIGMA_ACCESS_TOKEN": "env-token"}):
            os.environ.pop("FIGMA_FILE_KEY", None)
            Config.load(path)

        self.assertEqual(Config.FIGMA_ACCESS_TOKEN, "env-token")
        self.assertEqual(Config.FIGMA_FILE_KEY, "FILEKEY")
        self.assertEqual(Config.CONFIG_FILE, path)

    def test_numeric_env_values(self):
        env = {"PORT": "8080", "FIGMA_IMAGE_SCALE": "2", "FIGMA_MCP_MAX_WORKERS": "abc", "FIGMA_REQUEST_TIMEOUT": "-5"}
        Config.MAX_WORKERS = 4
        Config.REQUEST_TIMEOUT = 60

        with patch.dict(os.environ, env):
            Config.reload_from_env()

        self.assertEqual(Config.HTTP_PORT, 8080)
        self.assertEqual(Config.IMAGE_SCALE, 2)
        self.assertEqual(Config.MAX_WORKERS, 4)
        self.assertEqual(Config.REQUEST_TIMEOUT, 60)

    def test_image_format_and_log_level(self):
        with patch.dict(os.environ, {"FIGMA_IMAGE_FORMAT": "SVG", "LOG_LEVEL": "debug"}):
            Config.reload_from_env()
        self.assertEqual(Config.IMAGE_FORMAT, "svg")
        self.assertEqual(Config.LOG_LEVEL, "DEBUG")

        with patch.dict(os.environ, {"FIGMA_IMAGE_FORMAT": "bmp", "LOG_LEVEL": "loud"}):
            Config.reload_from_env()
        self.assertEqual(Config.IMAGE_FORMAT, "png")
        self.assertEqual(Config.LOG_LEVEL, "INFO")


if __name__ == '__main__':
    unittest.main()
