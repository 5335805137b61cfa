"""
Error taxonomy for Figma access and tree simplification
"""
from typing import Optional, Dict, Any


class FigmaError(Exception):
    """Base class for every error raised by figma_core"""

    def to_dict(self) -> Dict[str, Any]:
        return {"type": type(self).__name__, "message": str(self)}


class ConfigurationError(FigmaError):
    """Missing access token or file key"""


class FigmaAPIError(FigmaError):
    """Figma REST API call failed"""

    def __init__(
        self,
        method: str,
        message: str,
        status: Optional[int] = None,
        status_text: Optional[str] = None,
        response_data: Any = None,
        rate_limit_info: Optional[Dict[str, Any]] = None
    ):
        """
        Args:
            method: Client method that made the call (getFile, getNodeData, ...)
            message: Human readable message
            status: HTTP status code, None when no response was received
            status_text: HTTP reason phrase
            response_data: Response body (decoded JSON when possible)
            rate_limit_info: Rate limit headers, only for 429 responses
        """
        super().__init__(message)
        self.method = method
        self.status = status
        self.status_text = status_text
        self.response_data = response_data
        self.rate_limit_info = rate_limit_info

    @property
    def retryable(self) -> bool:
        return self.status is not None and self.status >= 500

    def to_dict(self) -> Dict[str, Any]:
        details = {
            "type": type(self).__name__,
            "method": self.method,
            "message": str(self),
            "status": self.status,
            "statusText": self.status_text,
            "responseData": self.response_data,
            "rateLimitInfo": self.rate_limit_info,
            "retryable": self.retryable,
        }
        return {k: v for k, v in details.items() if v is not None}


class FigmaRateLimitError(FigmaAPIError):
    """HTTP 429 from Figma"""

    @property
    def retry_after(self) -> Optional[str]:
        if not self.rate_limit_info:
            return None
        return self.rate_limit_info.get("retryAfter")

    @property
    def retryable(self) -> bool:
        return True


class FigmaTransportError(FigmaAPIError):
    """No response received (connection refused, timeout, DNS)"""

    @property
    def retryable(self) -> bool:
        return True


class NodeNotFoundError(FigmaError):
    """Requested node does not exist in the file"""

    def __init__(self, node_id: str, message: Optional[str] = None):
        super().__init__(message or f"Node not found: {node_id}")
        self.node_id = node_id

    def to_dict(self) -> Dict[str, Any]:
        return {"type": type(self).__name__, "message": str(self), "nodeId": self.node_id}


class NodeContractError(FigmaError):
    """Raw node is missing data its shape promises (e.g. a text node without style)"""

    def __init__(self, node_id: Optional[str], message: str):
        super().__init__(f"Node {node_id}: {message}")
        self.node_id = node_id

    def to_dict(self) -> Dict[str, Any]:
        return {"type": type(self).__name__, "message": str(self), "nodeId": self.node_id}


class AnnotationMismatchError(FigmaError):
    """Simplified tree and original tree diverged during the lock-step walk"""

    def __init__(self, simplified_id: Optional[str], original_id: Optional[str], message: Optional[str] = None):
        super().__init__(
            message or f"Simplified node {simplified_id} does not correspond to original node {original_id}"
        )
        self.simplified_id = simplified_id
        self.original_id = original_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "message": str(self),
            "simplifiedId": self.simplified_id,
            "originalId": self.original_id,
        }
