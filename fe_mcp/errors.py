"""
fe-mcp protocol error types.

Typed errors carrying JSON-RPC error codes. Anything raised as one of these
reaches the client unchanged; every other exception is wrapped as
InternalError at the tool-call boundary.
"""

from __future__ import annotations

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_REQUEST, METHOD_NOT_FOUND, ErrorData


class ProtocolError(McpError):
    """Base error for fe-mcp protocol failures."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str, *, code: int | None = None):
        if code is not None:
            self.code = code
        super().__init__(ErrorData(code=self.code, message=message))


class MethodNotFoundError(ProtocolError):
    """Tool name is not registered."""

    code = METHOD_NOT_FOUND


class InvalidRequestError(ProtocolError):
    """Request refers to something the server does not serve."""

    code = INVALID_REQUEST


class InternalError(ProtocolError):
    """Validation or primitive failure while executing a tool."""

    code = INTERNAL_ERROR
