"""Generic executor behind every Xibo CMS tool.

A tool is declared as a ``CmsEndpoint`` (verb, path template, body encoding,
expected response shape) plus a pydantic request model. ``call_cms`` turns a
validated request into exactly one authenticated HTTP call and normalizes
whatever comes back into a ``ToolResult``. It never raises.
"""

import json
from dataclasses import dataclass
from enum import StrEnum
from functools import cache
from string import Formatter
from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError

from xibo_server.models.envelope import ToolResult
from xibo_server.utils.auth import TokenProvider
from xibo_server.utils.config import get_settings
from xibo_server.utils.errors import CmsAuthError, CmsConfigError, ErrorCode

# (field name, (filename, content, content type))
UploadFiles = list[tuple[str, tuple[str, bytes, str]]]


class Encoding(StrEnum):
    """Where the non-path request fields travel."""

    QUERY = "query"
    FORM = "form"
    MULTIPART = "multipart"
    JSON = "json"
    NONE = "none"


@dataclass(frozen=True)
class CmsEndpoint:
    method: str
    path: str
    encoding: Encoding = Encoding.QUERY
    # Any type TypeAdapter accepts; None skips response validation
    response: Any = None
    success_message: str | None = None

    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(name for _, name, _, _ in Formatter().parse(self.path) if name)

    def render_path(self, values: dict[str, Any]) -> str:
        """Fill the path template, removing the consumed keys from ``values``."""
        missing = [name for name in self.path_params if values.get(name) in (None, "")]
        if missing:
            raise KeyError(", ".join(missing))
        return self.path.format(
            **{name: quote(str(values.pop(name)), safe="") for name in self.path_params}
        )


class CmsClient:
    """Authenticated HTTP access to one CMS instance."""

    def __init__(
        self,
        base_url: str,
        tokens: TokenProvider,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.tokens = tokens
        self.timeout = timeout
        self.transport = transport

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        headers = {"Accept": "application/json", **(await self.tokens.get_auth_headers())}
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            response = await client.request(method, path, headers=headers, **kwargs)
        if response.status_code == 401:
            # Revoked or rotated credentials: the next call fetches a new token
            self.tokens.invalidate()
        return response


@cache
def get_cms_client() -> CmsClient:
    settings = get_settings()
    if not settings.cms_base_url:
        raise CmsConfigError("CMS URL is not configured")
    if not settings.XIBO_CLIENT_ID or not settings.XIBO_CLIENT_SECRET:
        raise CmsConfigError("CMS client credentials are not configured")
    tokens = TokenProvider(
        settings.cms_base_url,
        settings.XIBO_CLIENT_ID,
        settings.XIBO_CLIENT_SECRET,
        timeout=settings.CMS_TIMEOUT_SECONDS,
        expiry_margin=settings.TOKEN_EXPIRY_MARGIN_SECONDS,
    )
    return CmsClient(settings.cms_base_url, tokens, timeout=settings.CMS_TIMEOUT_SECONDS)


@cache
def _adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def _flatten_fields(values: dict[str, Any]) -> dict[str, Any]:
    """Encode values the way the CMS's PHP form parser expects them."""
    fields: dict[str, Any] = {}
    for key, value in values.items():
        if isinstance(value, bool):
            fields[key] = int(value)
        elif isinstance(value, list):
            name = key if key.endswith("[]") else f"{key}[]"
            fields[name] = [int(v) if isinstance(v, bool) else v for v in value]
        elif isinstance(value, dict):
            fields[key] = json.dumps(value)
        else:
            fields[key] = value
    return fields


def build_request_kwargs(
    encoding: Encoding, values: dict[str, Any], files: UploadFiles | None = None
) -> dict[str, Any]:
    match encoding:
        case Encoding.QUERY:
            return {"params": _flatten_fields(values)} if values else {}
        case Encoding.FORM:
            return {"data": _flatten_fields(values)}
        case Encoding.MULTIPART:
            return {"data": _flatten_fields(values), "files": files or []}
        case Encoding.JSON:
            return {"json": values}
        case _:
            return {}


def decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def validation_details(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {
            "loc": ".".join(str(segment) for segment in err["loc"]),
            "msg": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]


def parse_cms_response(endpoint: CmsEndpoint, response: httpx.Response) -> ToolResult:
    status = response.status_code
    if not response.is_success:
        return ToolResult.fail(
            ErrorCode.HTTP_ERROR,
            f"HTTP error! status: {status}",
            error=response.reason_phrase,
            error_data=decode_body(response),
        )

    if status == 204 or not response.content:
        return ToolResult.ok(message=endpoint.success_message or "Request completed successfully")

    body = decode_body(response)
    if endpoint.response is None:
        return ToolResult.ok(body, endpoint.success_message)
    if isinstance(body, str):
        return ToolResult.fail(
            ErrorCode.RESPONSE_VALIDATION_ERROR,
            "API response validation failed",
            error="Response body is not JSON",
            error_data=body,
        )

    adapter = _adapter(endpoint.response)
    try:
        parsed = adapter.validate_python(body)
    except ValidationError as e:
        return ToolResult.fail(
            ErrorCode.RESPONSE_VALIDATION_ERROR,
            "API response validation failed",
            error=validation_details(e),
            error_data=body,
        )
    return ToolResult.ok(
        adapter.dump_python(parsed, mode="json", by_alias=True), endpoint.success_message
    )


async def send_cms(
    endpoint: CmsEndpoint,
    request: BaseModel | None = None,
    *,
    files: UploadFiles | None = None,
) -> httpx.Response | ToolResult:
    """Issue the request; a ``ToolResult`` means it never got a CMS response."""
    values = request.model_dump(exclude_none=True, by_alias=True) if request else {}
    try:
        path = endpoint.render_path(values)
    except KeyError as e:
        return ToolResult.fail(
            ErrorCode.VALIDATION_ERROR,
            f"Missing path parameter(s): {e.args[0]}",
        )

    try:
        client = get_cms_client()
    except CmsConfigError as e:
        return ToolResult.fail(ErrorCode.CONFIGURATION_ERROR, str(e))

    log = logger.bind(cms_method=endpoint.method, cms_path=path)
    try:
        response = await client.request(
            endpoint.method, path, **build_request_kwargs(endpoint.encoding, values, files)
        )
    except CmsAuthError as e:
        log.warning(f"CMS authentication failed: {e}")
        return ToolResult.fail(
            ErrorCode.AUTHENTICATION_ERROR, str(e), error_data=e.body
        )
    except httpx.HTTPError as e:
        log.warning(f"CMS request failed: {e!r}")
        return ToolResult.fail(
            ErrorCode.NETWORK_ERROR, "Request to CMS failed", error=repr(e)
        )

    log.debug(f"CMS {endpoint.method} {path} -> {response.status_code}")
    return response


async def call_cms(
    endpoint: CmsEndpoint,
    request: BaseModel | None = None,
    *,
    files: UploadFiles | None = None,
) -> ToolResult:
    """Run one CMS request described by ``endpoint`` with fields from ``request``."""
    response = await send_cms(endpoint, request, files=files)
    if isinstance(response, ToolResult):
        return response
    return parse_cms_response(endpoint, response)
