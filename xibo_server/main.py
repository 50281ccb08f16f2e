"""Xibo CMS MCP Server.

Tool registration is controlled by the USE_INDIVIDUAL_TOOLS environment variable:
- USE_INDIVIDUAL_TOOLS=true: one tool per CMS operation for UI display
- USE_INDIVIDUAL_TOOLS=false (default): 2 meta-tools for LLM agents

Meta-tools:
| Tool        | Actions                                              |
|-------------|------------------------------------------------------|
| xibo        | help, or any operation name (get_layouts, ...)       |
| xibo_schema | Get JSON schema for the meta-tool or an action       |

Individual tools are grouped by resource: user, display, layout, playlist,
widget, command, sync_group, module, dataset, font, news, workflow and
generation. See ``tools/registry.py``.

The /ext-api HTTP routes (uploads, generated files, downloads, Swagger UI)
are served by the same process on the HTTP transport.
"""

import os

from fastmcp import FastMCP
from fastmcp.server.middleware.error_handling import ErrorHandlingMiddleware

from xibo_server.api.routes import register_routes
from xibo_server.middleware.logging import LoggingMiddleware
from xibo_server.middleware.validation_error_sanitizer import (
    ValidationErrorSanitizerMiddleware,
)
from xibo_server.utils.logging import setup_logger


def use_individual_tools() -> bool:
    return os.getenv("USE_INDIVIDUAL_TOOLS", "").lower() in ("true", "1", "yes")


def create_server() -> FastMCP:
    mcp = FastMCP(
        "xibo-server",
        instructions="Xibo digital signage CMS administration: users, displays, layouts, regions, playlists, widgets, commands, sync groups, modules, datasets and fonts through the CMS REST API, plus news feeds, Google Fonts imports, workflow runs and AI image generation. Use for building and scheduling signage content and for operating a display network.",
    )
    mcp.add_middleware(ErrorHandlingMiddleware(include_traceback=True))
    mcp.add_middleware(LoggingMiddleware())
    mcp.add_middleware(ValidationErrorSanitizerMiddleware())

    # Mutually exclusive: USE_INDIVIDUAL_TOOLS gets individual tools, otherwise meta-tools
    if use_individual_tools():
        from xibo_server.tools.registry import TOOL_REGISTRY

        for defn in TOOL_REGISTRY.values():
            mcp.tool(defn.impl)
    else:
        from xibo_server.tools._meta_tools import xibo, xibo_schema

        mcp.tool(xibo)
        mcp.tool(xibo_schema)

    register_routes(mcp)
    return mcp


def run() -> None:
    setup_logger()
    mcp = create_server()
    transport = os.getenv("MCP_TRANSPORT", "http").lower()
    if transport == "http":
        port = int(os.getenv("MCP_PORT", "4111"))
        mcp.run(transport="http", host="0.0.0.0", port=port)
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    run()
