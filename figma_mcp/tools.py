"""
MCP tool definitions and handlers
"""
import json
import logging
from typing import Optional, List, Dict, Any, Callable
from config import Config
from figma_core import FigmaAPIClient, NodeFetcher, StrategyTrace, simplify_document, parse_figma_url
from figma_core.errors import FigmaError, FigmaAPIError, NodeNotFoundError, ConfigurationError
from figma_core.files import save_simplified, list_output_files, suggested_image_filename
from figma_core.simplify import IMAGE_NODE_RULES
from .errors import RpcError, INVALID_PARAMS
from .models import McpConfig

logger = logging.getLogger(__name__)

LIST_FRAMES = "figma_list_frames"
DOWNLOAD_AND_SIMPLIFY = "figma_download_and_simplify"
DOWNLOAD_IMAGES = "figma_download_images"
LIST_JSON_FILES = "figma_list_json_files"

TOOLS_REQUIRING_FILE_KEY = [LIST_FRAMES, DOWNLOAD_AND_SIMPLIFY, DOWNLOAD_IMAGES]

TOOL_DEFINITIONS = [
    {
        "name": LIST_FRAMES,
        "description": "List every page of the Figma file and the top-level frames on each page.",
        "inputSchema": {"type": "object", "properties": {}, "required": []}
    },
    {
        "name": DOWNLOAD_AND_SIMPLIFY,
        "description": (
            "Fetch a node (page or frame) from Figma and return simplified JSON. No images are downloaded.\n\n"
            "Nodes that can be exported as images are marked with isImageNode: true:\n"
            "1. name starts with 'exp_' (the whole node is one image)\n"
            "2. the node has an IMAGE fill\n"
            "3. name starts with 'ic/' or 'icon/'\n\n"
            "Pass those node ids to figma_download_images to get download URLs.\n\n"
            "nodeId may be a Figma URL (https://www.figma.com/design/{fileKey}/{fileName}?node-id=4-419) "
            "or a node id such as \"4:419\". A URL also selects the file."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "nodeId": {
                    "type": "string",
                    "description": "Figma URL or node id (page or frame)"
                },
                "save": {
                    "type": "boolean",
                    "description": "Also write the simplified JSON to the output directory"
                }
            },
            "required": ["nodeId"]
        }
    },
    {
        "name": DOWNLOAD_IMAGES,
        "description": (
            "Return download URLs for image nodes (proxy mode, nothing is stored on the server). "
            "Each entry has imageUrl, nodeId, nodeName and a suggested fileName. "
            "Use the ids of nodes marked isImageNode: true by figma_download_and_simplify."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "nodeIds": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Ids of the image nodes to export"
                }
            },
            "required": ["nodeIds"]
        }
    },
    {
        "name": LIST_JSON_FILES,
        "description": "List saved simplified JSON files and image files in the output directory.",
        "inputSchema": {"type": "object", "properties": {}, "required": []}
    }
]


def text_result(payload: Any, is_error: bool = False) -> Dict[str, Any]:
    """Wrap a payload as an MCP tool result with one text item"""
    result = {
        "content": [
            {"type": "text", "text": json.dumps(payload, ensure_ascii=False, indent=2)}
        ]
    }
    if is_error:
        result["isError"] = True
    return result


def error_result(error: FigmaError, **extra) -> Dict[str, Any]:
    """Tool result for an upstream failure, keeping the error detail as-is"""
    payload = {"success": False, "error": str(error), "details": error.to_dict()}
    if isinstance(error, FigmaAPIError):
        payload["retryable"] = error.retryable
        if error.status is not None:
            payload["status"] = error.status
            payload["statusText"] = error.status_text
        if error.response_data is not None:
            payload["responseData"] = error.response_data
    payload.update(extra)
    return text_result(payload, is_error=True)


def collect_node_names(node: Dict[str, Any], wanted: List[str], names: Dict[str, str]):
    """递归查找节点并建立 ID 到名称的映射"""
    node_id = node.get("id")
    if node_id and node_id in wanted:
        names[node_id] = node.get("name") or node_id
    for child in node.get("children", []):
        collect_node_names(child, wanted, names)


class FigmaToolbox:
    """Resolves credentials and runs the Figma tools"""

    def __init__(
        self,
        output_dir: Optional[str] = None,
        client_factory: Callable[..., FigmaAPIClient] = FigmaAPIClient
    ):
        """
        Args:
            output_dir: Directory for saved JSON, defaults to Config.OUTPUT_DIR
            client_factory: Called as client_factory(access_token, file_key)
        """
        self.output_dir = output_dir
        self.client_factory = client_factory
        self._handlers = {
            LIST_FRAMES: self.list_frames,
            DOWNLOAD_AND_SIMPLIFY: self.download_and_simplify,
            DOWNLOAD_IMAGES: self.download_images,
            LIST_JSON_FILES: self.list_json_files,
        }

    @property
    def effective_output_dir(self) -> str:
        return self.output_dir or Config.OUTPUT_DIR

    def list_tools(self) -> List[Dict[str, Any]]:
        return TOOL_DEFINITIONS

    def call(self, name: str, arguments: Optional[Dict[str, Any]] = None, mcp_config: Optional[McpConfig] = None) -> Dict[str, Any]:
        """
        Run a tool

        Credentials come from mcp_config first, then Config. A Figma URL passed
        as nodeId overrides the file key.

        Raises:
            RpcError: Unknown tool or bad arguments
            ConfigurationError: Missing access token or file key
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise RpcError(INVALID_PARAMS, f"Unknown tool: {name}")

        arguments = dict(arguments or {})
        access_token = (mcp_config.access_token if mcp_config else None) or Config.FIGMA_ACCESS_TOKEN
        file_key = (mcp_config.file_key if mcp_config else None) or Config.FIGMA_FILE_KEY

        node_ref = arguments.get("nodeId")
        if node_ref:
            location = parse_figma_url(node_ref)
            if location.is_url and location.file_key:
                file_key = location.file_key
                if not location.node_id:
                    raise RpcError(INVALID_PARAMS, f"Figma URL has no node-id query parameter: {node_ref}")
                arguments["nodeId"] = location.node_id

        if not access_token:
            raise ConfigurationError(
                "Figma accessToken is required. Configure it in config.json, "
                "FIGMA_ACCESS_TOKEN, or provide it via mcp_config."
            )
        if name in TOOLS_REQUIRING_FILE_KEY and not file_key:
            raise ConfigurationError(
                f"Figma fileKey is required for {name}. Configure it in config.json, "
                "provide it via mcp_config, or include it in the Figma URL."
            )

        logger.info(f"[FigmaToolbox] Calling {name} on file {file_key}")
        api = self.client_factory(access_token, file_key)
        try:
            return handler(api, arguments)
        finally:
            api.close()

    def list_frames(self, api: FigmaAPIClient, arguments: Dict[str, Any]) -> Dict[str, Any]:
        try:
            file_data = api.get_file()
        except FigmaAPIError as e:
            return error_result(e)

        pages = []
        for page in file_data.get("document", {}).get("children", []):
            frames = [child for child in page.get("children", []) if child.get("type") == "FRAME"]
            pages.append({
                "pageId": page.get("id"),
                "pageName": page.get("name"),
                "frames": [{"id": frame.get("id"), "name": frame.get("name")} for frame in frames]
            })
        return text_result(pages)

    def download_and_simplify(self, api: FigmaAPIClient, arguments: Dict[str, Any]) -> Dict[str, Any]:
        node_id = arguments.get("nodeId")
        if not node_id or not isinstance(node_id, str):
            raise RpcError(INVALID_PARAMS, "nodeId must be a non-empty string")

        trace = StrategyTrace(node_id)
        try:
            raw = NodeFetcher(api).fetch(node_id, trace)
        except (FigmaAPIError, NodeNotFoundError) as e:
            logger.error(f"[FigmaToolbox] Could not fetch {node_id}: {e}")
            return error_result(e, strategyInfo=trace.to_dict())

        # Contract violations propagate and fail the whole request
        simplified = simplify_document(raw)

        result = {
            "data": simplified,
            "metadata": {
                "apiOptimization": {
                    "strategy": (
                        "Located the node through getFile() and fetched its page"
                        if trace.used_get_file
                        else "Queried the node directly with getNodeData()"
                    ),
                    "apiCalls": trace.api_calls,
                    "apiCallCount": len(trace.api_calls),
                    "strategiesAttempted": trace.strategies
                },
                "imageNodeRules": {
                    "description": "Nodes marked isImageNode: true can be exported as images",
                    "rules": IMAGE_NODE_RULES,
                    "usage": "Pass their ids to figma_download_images to get download URLs"
                }
            }
        }

        if arguments.get("save") and simplified is not None:
            result["savedTo"] = save_simplified(
                simplified,
                node_id,
                raw.get("name") or node_id,
                self.effective_output_dir
            )

        return text_result(result)

    def download_images(self, api: FigmaAPIClient, arguments: Dict[str, Any]) -> Dict[str, Any]:
        node_ids = arguments.get("nodeIds")
        if (not isinstance(node_ids, list) or not node_ids
                or not all(isinstance(node_id, str) and node_id for node_id in node_ids)):
            raise RpcError(INVALID_PARAMS, "nodeIds must be a non-empty array of strings")

        try:
            file_data = api.get_file()
            names: Dict[str, str] = {}
            collect_node_names(file_data.get("document", {}), node_ids, names)
            image_urls = api.get_image_urls(node_ids)
        except FigmaAPIError as e:
            return error_result(e)

        if not image_urls:
            return text_result({
                "success": False,
                "error": "Could not get image URLs. Check that the node ids are correct and the nodes contain images."
            }, is_error=True)

        images = []
        for node_id, image_url in image_urls.items():
            if image_url:
                node_name = names.get(node_id, node_id)
                images.append({
                    "nodeId": node_id,
                    "nodeName": node_name,
                    "fileName": suggested_image_filename(node_id, node_name, Config.IMAGE_FORMAT),
                    "imageUrl": image_url,
                    "success": True
                })

        for node_id in node_ids:
            if not image_urls.get(node_id):
                images.append({
                    "nodeId": node_id,
                    "nodeName": names.get(node_id, node_id),
                    "success": False,
                    "error": "No image URL returned, the node may not contain an image"
                })

        succeeded = sum(1 for image in images if image["success"])
        failed = len(images) - succeeded
        return text_result({
            "success": True,
            "message": f"Got {succeeded} image URLs, {failed} failed",
            "note": "URLs point at the Figma CDN; clients download the images directly",
            "images": images
        })

    def list_json_files(self, api: FigmaAPIClient, arguments: Dict[str, Any]) -> Dict[str, Any]:
        return text_result(list_output_files(self.effective_output_dir))
