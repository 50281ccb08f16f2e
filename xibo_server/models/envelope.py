from typing import Any

from mcp_schema import OutputBaseModel
from pydantic import ConfigDict, Field

from xibo_server.utils.errors import ErrorCode, format_error


class ToolResult(OutputBaseModel):
    """Uniform result of every Xibo tool. Tools return this instead of raising."""

    model_config = ConfigDict(extra="forbid")

    success: bool = Field(
        ...,
        description="True if the operation completed successfully, false otherwise.",
    )
    message: str | None = Field(
        None,
        description="Human-readable status. On failure starts with an error code such as '[HTTP_ERROR]'.",
    )
    data: Any = Field(
        None,
        description="Operation payload on success (CMS objects, lists, ids). Null on failure unless partial data is useful.",
    )
    error: Any = Field(
        None,
        description="Failure detail: a string, or a list of {loc, msg, type} entries for validation failures.",
    )
    error_data: Any = Field(
        None,
        alias="errorData",
        description="Raw body returned by the CMS or remote service when the call failed.",
    )

    @classmethod
    def ok(cls, data: Any = None, message: str | None = None) -> "ToolResult":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(
        cls,
        code: ErrorCode,
        message: str,
        *,
        error: Any = None,
        error_data: Any = None,
        data: Any = None,
        details: dict[str, Any] | None = None,
    ) -> "ToolResult":
        return cls(
            success=False,
            message=format_error(code, message, details=details),
            error=error,
            error_data=error_data,
            data=data,
        )
