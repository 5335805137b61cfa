"""
JSON-RPC request routing
"""
import json
import logging
from typing import Optional, Dict, Any
from pydantic import ValidationError
from config import Config
from figma_core.errors import FigmaError, ConfigurationError, NodeContractError, AnnotationMismatchError
from .errors import (
    RpcError,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
    INTERNAL_ERROR,
    CONFIGURATION_ERROR,
    CONTRACT_VIOLATION
)
from .models import JsonRpcRequest, ToolCallParams, success_response, error_response
from .tools import FigmaToolbox

logger = logging.getLogger(__name__)

NOTIFICATION_PREFIX = "notifications/"


class RequestDispatcher:
    """Routes decoded JSON-RPC messages and builds the response envelope"""

    def __init__(self, toolbox: Optional[FigmaToolbox] = None):
        self.toolbox = toolbox or FigmaToolbox()
        self._routes = {
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    def dispatch(self, message: Any) -> Optional[Dict[str, Any]]:
        """
        Handle one decoded message

        Args:
            message: Decoded JSON value

        Returns:
            Response dict, or None for notifications (messages without an id)
        """
        if not isinstance(message, dict):
            return error_response(None, INVALID_REQUEST, "Invalid Request: message must be a JSON object")

        is_notification = "id" not in message
        request_id = message.get("id")

        try:
            request = JsonRpcRequest.model_validate(message)
        except ValidationError as e:
            logger.warning(f"[RequestDispatcher] Invalid request: {e}")
            if is_notification:
                return None
            return error_response(request_id, INVALID_REQUEST, "Invalid Request: missing or malformed method")

        if is_notification:
            self._notify(request)
            return None

        try:
            result = self._route(request)
            return success_response(request_id, result)
        except RpcError as e:
            logger.warning(f"[RequestDispatcher] {request.method} failed: {e.message}")
            return error_response(request_id, e.code, e.message, e.data)
        except ConfigurationError as e:
            logger.warning(f"[RequestDispatcher] {request.method}: {e}")
            return error_response(request_id, CONFIGURATION_ERROR, str(e))
        except (NodeContractError, AnnotationMismatchError) as e:
            logger.error(f"[RequestDispatcher] {request.method}: {e}")
            return error_response(request_id, CONTRACT_VIOLATION, str(e), e.to_dict())
        except FigmaError as e:
            logger.error(f"[RequestDispatcher] {request.method}: {e}")
            return error_response(request_id, INTERNAL_ERROR, str(e), e.to_dict())
        except Exception as e:
            logger.exception(f"[RequestDispatcher] Unhandled error in {request.method}")
            return error_response(request_id, INTERNAL_ERROR, str(e) or type(e).__name__)

    def _route(self, request: JsonRpcRequest) -> Any:
        handler = self._routes.get(request.method)
        if handler is None:
            raise RpcError(METHOD_NOT_FOUND, f"Unknown method: {request.method}")
        return handler(request.params or {})

    def _notify(self, request: JsonRpcRequest):
        if request.method.startswith(NOTIFICATION_PREFIX):
            logger.debug(f"[RequestDispatcher] Notification {request.method}")
            return
        # Not a notification method but sent without id; nobody is waiting for a reply
        try:
            self._route(request)
        except Exception as e:
            logger.error(f"[RequestDispatcher] {request.method} (no id) failed: {e}")

    def _initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        client = params.get("clientInfo")
        client_name = client.get("name") if isinstance(client, dict) else None
        logger.info(f"[RequestDispatcher] Initialize from {client_name or 'unknown client'}")
        return {
            "protocolVersion": Config.PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": Config.SERVER_NAME, "version": Config.SERVER_VERSION}
        }

    def _ping(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {}

    def _list_tools(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {"tools": self.toolbox.list_tools()}

    def _call_tool(self, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            call = ToolCallParams.model_validate(params)
        except ValidationError as e:
            raise RpcError(INVALID_PARAMS, "Invalid params: tools/call needs a tool name and an arguments object",
                           json.loads(e.json(include_url=False))) from e
        return self.toolbox.call(call.name, call.arguments, call.mcp_config)
