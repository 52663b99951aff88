"""Exceptions raised while translating a tool call into Teamhood API requests.

Every error here is recovered per call by the MCP server and reported back to
the caller as an error-flagged text response.
"""
from typing import Iterable


class TeamhoodError(Exception):
    """Base class for all Teamhood MCP errors."""


class UnknownToolError(TeamhoodError):
    """Raised when a tool name is not part of the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class MissingArgumentError(TeamhoodError):
    """Raised when a call omits arguments its tool schema marks as required."""

    def __init__(self, tool_name: str, missing: Iterable[str]):
        self.tool_name = tool_name
        self.missing = list(missing)
        super().__init__(
            f"Missing required argument(s) for {tool_name}: {', '.join(self.missing)}"
        )


class InvalidArgumentError(TeamhoodError):
    """Raised when an argument is present but cannot be used (e.g. bad base64)."""


class BackendError(TeamhoodError):
    """Raised when the Teamhood API answers with a non-success status.

    The raw response text is kept so upstream validation failures can be
    diagnosed by the caller.
    """

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"API Error {status}: {body}")


class NotFoundError(TeamhoodError):
    """Raised when a resource searched for locally is absent."""
