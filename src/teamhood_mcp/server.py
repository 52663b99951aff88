"""Teamhood MCP Server - Expose Teamhood project management to AI assistants."""
import sys
import asyncio
import logging
import traceback
from typing import Any, Optional

import httpx
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from . import __version__
from . import formatters
from . import tools
from . import handlers
from .client import TeamhoodClient
from .config import Settings, get_settings
from .errors import BackendError, TeamhoodError

logger = logging.getLogger("teamhood-mcp")

# MCP Server instance
app = Server(
    "teamhood-mcp",
    version=__version__,
    instructions="MCP server for the Teamhood project management API - "
                 "manage workspaces, boards, items, attachments and more.",
)


def configure_logging(level: str = "INFO") -> None:
    """Log to stderr; stdout carries the MCP protocol."""
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
        force=True
    )


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available MCP tools for the Teamhood API."""
    return tools.get_tools()


async def execute_tool(
    name: str,
    arguments: Optional[dict],
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CallToolResult:
    """Dispatch one tool call and wrap the outcome in a tool result.

    Every failure is turned into an error-flagged result so the server keeps
    serving subsequent calls.
    """
    settings = settings or get_settings()
    arguments = arguments or {}

    async with TeamhoodClient.from_settings(settings, transport=transport) as client:
        try:
            result = await handlers.dispatch(name, arguments, client)
            return formatters.success_result(result)

        except BackendError as e:
            logger.error(f"API error during {name} call:")
            logger.error(f"  Status: {e.status}")
            logger.error(f"  Response text: {e.body}")
            return formatters.error_result(str(e))

        except TeamhoodError as e:
            logger.warning(f"{name} call failed: {e}")
            return formatters.error_result(str(e))

        except httpx.RequestError as e:
            # Network/connection errors
            logger.error(f"Request error during {name} call:")
            logger.error(f"  Error type: {type(e).__name__}")
            logger.error(f"  Error message: {str(e)}")
            return formatters.error_result(f"Connection failed - {str(e)}")

        except Exception as e:
            # Catch-all for unexpected errors
            logger.error(f"Unexpected error during {name} call:")
            logger.error(f"  Error type: {type(e).__name__}")
            logger.error(f"  Error message: {str(e)}")
            logger.error(f"  Traceback:\n{traceback.format_exc()}")
            return formatters.error_result(f"{type(e).__name__}: {str(e)}")


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> CallToolResult:
    """Handle MCP tool calls by delegating to the shared handlers."""
    logger.info(f"Tool call: {name} with arguments: {sorted((arguments or {}).keys())}")
    return await execute_tool(name, arguments)


async def main():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run() -> None:
    """Console entry point: configure logging, then serve over stdio."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"MCP Server starting with base URL: {settings.base_url}")
    if not settings.api_key:
        logger.warning("TEAMHOOD_API_KEY is not set; API calls will be rejected")

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.critical(f"Fatal error: {type(e).__name__}: {e}")
        logger.critical(traceback.format_exc())
        sys.exit(1)


if __name__ == "__main__":
    run()
