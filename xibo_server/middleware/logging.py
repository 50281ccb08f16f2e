"""Middleware that logs every MCP tool call with its outcome and duration."""

import time
from typing_extensions import override

from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext
from fastmcp.tools.tool import ToolResult
from loguru import logger
from mcp.types import CallToolRequestParams


class LoggingMiddleware(Middleware):
    @override
    async def on_call_tool(
        self,
        context: MiddlewareContext[CallToolRequestParams],
        call_next: CallNext[CallToolRequestParams, ToolResult],
    ) -> ToolResult:
        tool_name = context.message.name
        with logger.contextualize(tool=tool_name):
            logger.info(f"Calling tool {tool_name}")
            started = time.perf_counter()
            try:
                result = await call_next(context)
            except Exception as e:
                elapsed = time.perf_counter() - started
                logger.warning(f"Tool {tool_name} raised after {elapsed:.2f}s: {e!r}")
                raise
            elapsed = time.perf_counter() - started
            logger.info(f"Tool {tool_name} finished in {elapsed:.2f}s")
            return result
