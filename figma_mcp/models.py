"""
Pydantic模型定义
"""
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


# Request models
class JsonRpcRequest(BaseModel):
    jsonrpc: str = "2.0"
    method: str
    params: Optional[Dict[str, Any]] = None
    id: Optional[Any] = None


class McpConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: Optional[str] = Field(default=None, alias="accessToken")
    file_key: Optional[str] = Field(default=None, alias="fileKey")


class ToolCallParams(BaseModel):
    name: str
    arguments: Dict[str, Any] = {}
    mcp_config: Optional[McpConfig] = None


# Response models
class JsonRpcError(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None


class JsonRpcResponse(BaseModel):
    jsonrpc: str = "2.0"
    id: Optional[Any] = None
    result: Optional[Any] = None
    error: Optional[JsonRpcError] = None

    def to_dict(self) -> Dict[str, Any]:
        """id is always written (null when unknown), then exactly one of result / error"""
        body: Dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            body["error"] = self.error.model_dump(exclude_none=True)
        else:
            body["result"] = self.result if self.result is not None else {}
        return body


def success_response(request_id: Any, result: Any) -> Dict[str, Any]:
    return JsonRpcResponse(id=request_id, result=result).to_dict()


def error_response(request_id: Any, code: int, message: str, data: Optional[Any] = None) -> Dict[str, Any]:
    return JsonRpcResponse(
        id=request_id,
        error=JsonRpcError(code=code, message=message, data=data)
    ).to_dict()
