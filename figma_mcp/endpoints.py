"""
HTTP endpoints implementation
"""
import json
import logging
from typing import Optional
from fastapi import APIRouter, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from config import Config
from .dispatcher import RequestDispatcher
from .errors import PARSE_ERROR, INVALID_REQUEST
from .models import error_response

logger = logging.getLogger(__name__)

ACCESS_TOKEN_HEADER = "x-figma-access-token"
FILE_KEY_HEADER = "x-figma-file-key"

router = APIRouter()
dispatcher: Optional[RequestDispatcher] = None


def get_dispatcher() -> RequestDispatcher:
    """Get or create the shared RequestDispatcher"""
    global dispatcher
    if dispatcher is None:
        dispatcher = RequestDispatcher()
    return dispatcher


def inject_header_credentials(message: dict, request: Request):
    """Copy X-Figma-* header credentials into params.mcp_config"""
    token = request.headers.get(ACCESS_TOKEN_HEADER)
    file_key = request.headers.get(FILE_KEY_HEADER)
    if not token and not file_key:
        return

    params = message.get("params")
    if not isinstance(params, dict):
        params = {}
        message["params"] = params
    mcp_config = params.get("mcp_config")
    if not isinstance(mcp_config, dict):
        mcp_config = {}
        params["mcp_config"] = mcp_config
    if token:
        mcp_config["accessToken"] = token
    if file_key:
        mcp_config["fileKey"] = file_key


@router.post("/")
@router.post("/mcp")
async def handle_rpc(request: Request):
    """Handle one JSON-RPC message per request body"""
    body = await request.body()
    try:
        message = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        logger.warning(f"[HTTP] Parse error: {e}")
        return JSONResponse(status_code=400, content=error_response(None, PARSE_ERROR, f"Parse error: {e}"))

    if isinstance(message, dict):
        inject_header_credentials(message, request)

    response = await run_in_threadpool(get_dispatcher().dispatch, message)
    if response is None:
        return Response(status_code=202)
    return JSONResponse(content=response)


@router.api_route("/mcp", methods=["GET", "PUT", "PATCH", "DELETE"])
async def method_not_allowed():
    """Only POST carries JSON-RPC messages"""
    return JSONResponse(
        status_code=405,
        content=error_response(None, INVALID_REQUEST, "Method not allowed. Only POST requests are supported.")
    )


@router.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Figma MCP HTTP Server",
        "name": Config.SERVER_NAME,
        "version": Config.SERVER_VERSION,
        "protocolVersion": Config.PROTOCOL_VERSION,
        "endpoints": ["POST /", "POST /mcp", "GET /health"]
    }


@router.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "ok"}
