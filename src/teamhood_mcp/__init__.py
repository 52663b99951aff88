"""Teamhood MCP Server - Model Context Protocol integration.

This package exposes the Teamhood project-management API as MCP tools,
enabling AI assistants to manage workspaces, boards, items and attachments.

Modules:
- server: stdio MCP server implementation
- tools: MCP tool definitions
- handlers: Tool implementation handlers
- client: Teamhood HTTP client
- formatters: Response formatting utilities
- config: Settings and secrets loading
"""

__version__ = "1.0.0"

from . import formatters
from . import tools
from . import handlers

__all__ = ["formatters", "tools", "handlers", "__version__"]
