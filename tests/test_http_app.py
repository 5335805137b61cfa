"""
HTTP 传输集成测试
"""
import unittest
from unittest.mock import MagicMock
import os
import sys

# 添加项目根目录到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from fastapi.testclient import TestClient
from figma_mcp import endpoints
from figma_mcp.app import create_app
from figma_mcp.dispatcher import RequestDispatcher
from figma_mcp.errors import PARSE_ERROR, INVALID_REQUEST, METHOD_NOT_FOUND
from figma_mcp.tools import TOOL_DEFINITIONS


class TestHttpApp(unittest.TestCase):

    def setUp(self):
        self.toolbox = MagicMock()
        self.toolbox.list_tools.return_value = TOOL_DEFINITIONS
        self.toolbox.call.return_value = {"content": [{"type": "text", "text": "{}"}]}
        self.client = TestClient(create_app(RequestDispatcher(self.toolbox)))

    def tearDown(self):
        endpoints.dispatcher = None

    def test_root_info(self):
        response = self.client.get("/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["protocolVersion"], "2024-11-05")

    def test_health(self):
        response = self.client.get("/health")

        self.assertEqual(response.json(), {"status": "ok"})

    def test_initialize_on_both_paths(self):
        """测试 / 与 /mcp 都接受 JSON-RPC 请求"""
        for path in ("/", "/mcp"):
            with self.subTest(path=path):
                response = self.client.post(path, json={"jsonrpc": "2.0", "id": 1, "method": "initialize"})

                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.json()["result"]["serverInfo"]["name"], "figma-mcp-server")

    def test_header_credentials_are_injected(self):
        """测试 X-Figma-* 请求头写入 mcp_config"""
        response = self.client.post(
            "/mcp",
            json={"jsonrpc": "2.0", "id": 2, "method": "tools/call", "params": {"name": "figma_list_frames"}},
            headers={"X-Figma-Access-Token": "hdr-token", "X-Figma-File-Key": "HDRKEY"}
        )

        self.assertEqual(response.status_code, 200)
        _, _, mcp_config = self.toolbox.call.call_args[0]
        self.assertEqual(mcp_config.access_token, "hdr-token")
        self.assertEqual(mcp_config.file_key, "HDRKEY")

    def test_headers_override_body_credentials(self):
        self.client.post(
            "/mcp",
            json={
                "jsonrpc": "2.0", "id": 3, "method": "tools/call",
                "params": {"name": "figma_list_frames", "mcp_config": {"accessToken": "body", "fileKey": "BODY"}}
            },
            headers={"X-Figma-Access-Token": "hdr-token"}
        )

        _, _, mcp_config = self.toolbox.call.call_args[0]
        self.assertEqual(mcp_config.access_token, "hdr-token")
        self.assertEqual(mcp_config.file_key, "BODY")

    def test_parse_error(self):
        response = self.client.post("/mcp", content=b"{not json", headers={"Content-Type": "application/json"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], PARSE_ERROR)
        self.assertIsNone(response.json()["id"])

    def test_notification_returns_202(self):
        response = self.client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})

        self.assertEqual(response.status_code, 202)

    def test_unknown_method(self):
        response = self.client.post("/mcp", json={"jsonrpc": "2.0", "id": 4, "method": "nope"})

        self.assertEqual(response.json()["error"]["code"], METHOD_NOT_FOUND)

    def test_get_mcp_not_allowed(self):
        response = self.client.get("/mcp")

        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.json()["error"]["code"], INVALID_REQUEST)


if __name__ == '__main__':
    unittest.main()
