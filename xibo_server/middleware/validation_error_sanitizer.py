"""Middleware that turns Pydantic validation errors into short tool errors.

Arguments an agent sends to an individual tool are validated by FastMCP
before the tool runs. The raw ``ValidationError`` text carries input echoes
and ``https://errors.pydantic.dev/`` links; agents get one
``[VALIDATION_ERROR] field: message; ...`` line instead.
"""

from typing_extensions import override

from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext
from fastmcp.tools.tool import ToolResult
from loguru import logger
from mcp.types import CallToolRequestParams
from pydantic import ValidationError as PydanticValidationError

from xibo_server.utils.cms import validation_details
from xibo_server.utils.errors import ErrorCode, format_error


def format_validation_error(exc: PydanticValidationError) -> str:
    parts = [
        f"{item['loc'].removeprefix('request.')}: {item['msg']}" if item["loc"] else item["msg"]
        for item in validation_details(exc)
    ]
    return format_error(ErrorCode.VALIDATION_ERROR, "; ".join(parts))


class ToolInputError(Exception):
    """Concise replacement for a Pydantic ``ValidationError`` at the MCP boundary."""


class ValidationErrorSanitizerMiddleware(Middleware):
    @override
    async def on_call_tool(
        self,
        context: MiddlewareContext[CallToolRequestParams],
        call_next: CallNext[CallToolRequestParams, ToolResult],
    ) -> ToolResult:
        try:
            return await call_next(context)
        except PydanticValidationError as exc:
            clean = format_validation_error(exc)
            logger.debug(f"Sanitized validation error for {context.message.name}: {clean}")
            raise ToolInputError(clean) from None
