"""
Figma REST API client module
"""
import logging
from typing import Optional, List, Dict, Any, Union
import requests
from config import Config
from ..errors import FigmaAPIError, FigmaRateLimitError, FigmaTransportError

logger = logging.getLogger(__name__)

RATE_LIMIT_HEADERS = {
    "retryAfter": "Retry-After",
    "xRateLimitLimit": "X-RateLimit-Limit",
    "xRateLimitRemaining": "X-RateLimit-Remaining",
    "xRateLimitReset": "X-RateLimit-Reset",
}


class FigmaAPIClient:
    """Figma API client class"""

    def __init__(
        self,
        access_token: Optional[str] = None,
        file_key: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize API client

        Args:
            access_token: Personal access token sent as X-Figma-Token
            file_key: File key of the design file
            api_base: API base URL
            timeout: Request timeout in seconds
            session: requests session to reuse
        """
        self.access_token = access_token or Config.FIGMA_ACCESS_TOKEN
        self.file_key = file_key or Config.FIGMA_FILE_KEY
        self.api_base = (api_base or Config.FIGMA_API_BASE).rstrip("/")
        self.timeout = timeout or Config.REQUEST_TIMEOUT
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers.update({"X-Figma-Token": self.access_token or ""})

    def close(self):
        """关闭自己创建的 session，外部传入的 session 由调用方负责"""
        if self._owns_session:
            self.session.close()

    def get_file(self) -> Dict[str, Any]:
        """
        Fetch the whole file document

        Returns:
            File JSON with a ``document`` key
        """
        return self._get(f"/files/{self.file_key}", None, "getFile")

    def get_pages(self) -> List[Dict[str, str]]:
        """List pages as ``{id, name}``"""
        data = self.get_file()
        return [
            {"id": page.get("id"), "name": page.get("name")}
            for page in data.get("document", {}).get("children", [])
        ]

    def get_node_data(self, node_ids: Union[str, List[str]]) -> Dict[str, Any]:
        """
        Fetch node subtrees

        Args:
            node_ids: Single id or list of ids

        Returns:
            Mapping of node id to ``{"document": ...}``, or None for unknown ids
        """
        ids = node_ids if isinstance(node_ids, str) else ",".join(node_ids)
        data = self._get(f"/files/{self.file_key}/nodes", {"ids": ids}, "getNodeData")
        return data.get("nodes") or {}

    def get_image_urls(
        self,
        node_ids: List[str],
        image_format: Optional[str] = None,
        scale: Optional[int] = None
    ) -> Dict[str, Optional[str]]:
        """
        Ask Figma to render nodes and return the CDN URLs

        Args:
            node_ids: Node ids to render
            image_format: png, jpg, svg or pdf
            scale: Render scale

        Returns:
            Mapping of node id to image URL (None when the node could not be rendered)
        """
        params = {
            "ids": ",".join(node_ids),
            "format": image_format or Config.IMAGE_FORMAT,
            "scale": scale or Config.IMAGE_SCALE
        }
        data = self._get(f"/images/{self.file_key}", params, "getImageUrls")
        if data.get("err"):
            logger.warning(f"[FigmaAPIClient] getImageUrls reported: {data['err']}")
        return data.get("images") or {}

    def _get(self, path: str, params: Optional[Dict[str, Any]], method: str) -> Dict[str, Any]:
        url = f"{self.api_base}{path}"
        logger.debug(f"[FigmaAPIClient] {method}: GET {url} {params or ''}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise FigmaTransportError(method, f"Request to Figma API timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            raise FigmaTransportError(method, f"No response received from Figma API: {e}") from e

        if response.status_code != 200:
            raise self._build_error(method, response)

        try:
            return response.json()
        except ValueError as e:
            raise FigmaAPIError(
                method,
                "Figma API returned a non-JSON body",
                status=response.status_code,
                status_text=response.reason,
                response_data=response.text
            ) from e

    @staticmethod
    def _build_error(method: str, response: requests.Response) -> FigmaAPIError:
        """Build a structured error from a non-200 response"""
        try:
            body = response.json()
        except ValueError:
            body = response.text

        status = response.status_code
        if status == 429:
            rate_limit_info = {
                key: response.headers.get(header)
                for key, header in RATE_LIMIT_HEADERS.items()
            }
            retry_after = rate_limit_info["retryAfter"]
            if retry_after:
                message = f"Figma API Rate Limit Exceeded (429). Retry after {retry_after} seconds."
            else:
                message = "Figma API Rate Limit Exceeded (429). Please wait before retrying."
            logger.warning(f"[FigmaAPIClient] {method}: {message}")
            return FigmaRateLimitError(
                method,
                message,
                status=status,
                status_text=response.reason,
                response_data=body,
                rate_limit_info=rate_limit_info
            )

        message = f"Figma API error {status} {response.reason or ''}".strip()
        if isinstance(body, dict) and (body.get("err") or body.get("message")):
            message = f"{message}: {body.get('err') or body.get('message')}"
        logger.error(f"[FigmaAPIClient] {method}: {message}")
        return FigmaAPIError(
            method,
            message,
            status=status,
            status_text=response.reason,
            response_data=body
        )
