"""Google Fonts Developer API lookups and Google Fonts to CMS font imports."""

import httpx
from loguru import logger
from pydantic import ValidationError

from xibo_server.models.envelope import ToolResult
from xibo_server.models.font import (
    GetGoogleFontsRequest,
    GoogleFontList,
    UploadGoogleFontRequest,
)
from xibo_server.tools.font import upload_font_file
from xibo_server.utils.cms import decode_body, validation_details
from xibo_server.utils.config import get_settings
from xibo_server.utils.errors import ErrorCode
from xibo_server.utils.http_client import external_client
from xibo_server.utils.logging import mask_secrets

GOOGLE_FONTS_API_URL = "https://www.googleapis.com/webfonts/v1/webfonts"


async def fetch_google_fonts(params: dict[str, str]) -> GoogleFontList | ToolResult:
    """Query the Google Fonts API. A ``ToolResult`` is returned on any failure."""
    api_key = get_settings().GOOGLE_FONTS_API_KEY
    if not api_key:
        return ToolResult.fail(
            ErrorCode.CONFIGURATION_ERROR, "GOOGLE_FONTS_API_KEY is not configured"
        )

    async with external_client() as client:
        try:
            response = await client.get(GOOGLE_FONTS_API_URL, params={"key": api_key, **params})
        except httpx.HTTPError as e:
            logger.warning(f"Google Fonts request failed: {mask_secrets(repr(e))}")
            return ToolResult.fail(
                ErrorCode.NETWORK_ERROR, "Request to Google Fonts failed", error=mask_secrets(repr(e))
            )
    logger.debug(f"GET {mask_secrets(str(response.url))} -> {response.status_code}")

    if not response.is_success:
        return ToolResult.fail(
            ErrorCode.HTTP_ERROR,
            f"Google Fonts API error! status: {response.status_code}",
            error=response.reason_phrase,
            error_data=decode_body(response),
        )
    try:
        return GoogleFontList.model_validate_json(response.content)
    except ValidationError as e:
        return ToolResult.fail(
            ErrorCode.RESPONSE_VALIDATION_ERROR,
            "Google Fonts API response validation failed",
            error=validation_details(e),
            error_data=decode_body(response),
        )


async def get_google_fonts(request: GetGoogleFontsRequest) -> ToolResult:
    """Search Google Fonts by family, category or subset."""
    params = request.model_dump(exclude_none=True, exclude={"limit"})
    fonts = await fetch_google_fonts(params)
    if isinstance(fonts, ToolResult):
        return fonts
    items = fonts.items[: request.limit]
    return ToolResult.ok(
        {
            "total": len(items),
            "fonts": [item.model_dump(mode="json") for item in items],
        }
    )


async def upload_google_font(request: UploadGoogleFontRequest) -> ToolResult:
    """Download one variant of a Google Fonts family and add it to the CMS library."""
    fonts = await fetch_google_fonts({"family": request.family})
    if isinstance(fonts, ToolResult):
        return fonts
    if not fonts.items:
        return ToolResult.fail(
            ErrorCode.OPERATION_FAILED,
            f"Font family '{request.family}' not found in Google Fonts",
        )

    family = fonts.items[0]
    file_url = family.files.get(request.variant)
    if not file_url:
        return ToolResult.fail(
            ErrorCode.VALIDATION_ERROR,
            f"Variant '{request.variant}' is not available for '{family.family}'",
            error=sorted(family.files),
        )

    async with external_client() as client:
        try:
            response = await client.get(file_url)
        except httpx.HTTPError as e:
            return ToolResult.fail(
                ErrorCode.NETWORK_ERROR, "Font file download failed", error=repr(e)
            )
    if not response.is_success:
        return ToolResult.fail(
            ErrorCode.HTTP_ERROR,
            f"Font file download failed! status: {response.status_code}",
            error=response.reason_phrase,
        )

    display_name = request.name or family.family
    extension = file_url.rsplit(".", 1)[-1].lower() if "." in file_url.rsplit("/", 1)[-1] else "ttf"
    file_name = f"{display_name.replace(' ', '-')}-{request.variant}.{extension}"
    logger.info(f"Importing Google Font {family.family} ({request.variant}) as {file_name}")
    return await upload_font_file(file_name, response.content, name=display_name)


TOOLS = [get_google_fonts, upload_google_font]
