"""Error codes and exceptions shared by the CMS tools and the HTTP routes.

Tools never let these escape: they are turned into failure envelopes whose
``message`` uses ``format_error`` so agents can recognise the category.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for tool and route failures."""

    # Setup
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"

    # Remote calls
    NETWORK_ERROR = "NETWORK_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    RESPONSE_VALIDATION_ERROR = "RESPONSE_VALIDATION_ERROR"

    # Input
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Filesystem
    PATH_TRAVERSAL = "PATH_TRAVERSAL"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"

    OPERATION_FAILED = "OPERATION_FAILED"


def format_error(
    code: ErrorCode,
    message: str,
    *,
    details: dict[str, Any] | None = None,
) -> str:
    """Format an error as ``[CODE] message (k=v, ...)``."""
    error_str = f"[{code.value}] {message}"
    if details:
        detail_str = ", ".join(f"{k}={v}" for k, v in details.items())
        error_str += f" ({detail_str})"
    return error_str


class CmsConfigError(RuntimeError):
    """CMS URL or client credentials are missing."""


class CmsAuthError(RuntimeError):
    """The CMS refused to issue an access token."""

    def __init__(self, message: str, *, status_code: int | None = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
