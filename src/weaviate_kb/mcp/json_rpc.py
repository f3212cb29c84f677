"""JSON-RPC 2.0 message helpers for the stdio bridge."""

from typing import Any, Dict, Optional

JSONRPC_VERSION = "2.0"

RequestId = Optional[Any]


class ErrorCodes:
    """Standard JSON-RPC error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


def success_response(request_id: RequestId, result: Any) -> Dict[str, Any]:
    """Create a JSON-RPC success response."""
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_response(
    request_id: RequestId,
    code: int,
    message: str,
    data: Any = None,
) -> Dict[str, Any]:
    """Create a JSON-RPC error response."""
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error}
