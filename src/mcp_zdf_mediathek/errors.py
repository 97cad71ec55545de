"""Error kinds surfaced by the ZDF Mediathek tools."""

from typing import Any, Dict, Optional


class MCPError(Exception):
    """Base exception for errors reported back to the MCP caller."""

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.data = data or {}


class InvalidInputError(MCPError, ValueError):
    """A tool parameter is missing, malformed or out of range.

    Raised before any upstream call is made; never retried.
    """


class InvalidCursorError(InvalidInputError):
    """A pagination cursor that was not minted by this server."""

    def __init__(self, message: str = "Invalid cursor", data: Optional[Dict[str, Any]] = None):
        super().__init__(message, data=data)


class UpstreamError(MCPError):
    """The ZDF API call failed (transport, auth, non-2xx or GraphQL errors).

    The caller sees ``"<operation> failed: <cause>"``; the original exception
    stays available as ``cause`` and ``__cause__`` for diagnostics.
    """

    def __init__(
        self,
        operation: str,
        cause: BaseException | str,
        data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(f"{operation} failed: {cause}", data=data)
        self.operation = operation
        self.cause = cause if isinstance(cause, BaseException) else None
