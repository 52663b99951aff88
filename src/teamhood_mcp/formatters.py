"""Response formatting for MCP tool results.

Results are returned to the caller as pretty-printed JSON so they stay
readable for both humans and language models.
"""
import json
from typing import Any

from mcp.types import CallToolResult, TextContent


def format_result(result: Any) -> str:
    """Pretty-print an API response with 2-space indentation."""
    return json.dumps(result, indent=2, ensure_ascii=False)


def format_error(message: str) -> str:
    return f"Error: {message}"


def success_result(result: Any) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=format_result(result))])


def error_result(message: str) -> CallToolResult:
    """Wrap an error message in an error-flagged tool result."""
    return CallToolResult(
        content=[TextContent(type="text", text=format_error(message))],
        isError=True,
    )
