"""
JSON-RPC error codes
"""
from typing import Optional, Any

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Server-defined range (-32000 to -32099)
CONFIGURATION_ERROR = -32001
CONTRACT_VIOLATION = -32002


class RpcError(Exception):
    """Error that maps directly onto a JSON-RPC error object"""

    def __init__(self, code: int, message: str, data: Optional[Any] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data
