"""CMS font library tools, plus local PNG previews of library fonts."""

import base64
import binascii
import re
import uuid
from io import BytesIO

import httpx
from asyncer import asyncify
from loguru import logger
from PIL import Image, ImageDraw, ImageFont

from xibo_server.models.envelope import ToolResult
from xibo_server.models.font import (
    DownloadFontRequest,
    Font,
    FontDetails,
    FontIdRequest,
    FontUploadForm,
    GenerateFontPreviewRequest,
    GetFontsRequest,
    LibraryUploadResponse,
    UploadFontRequest,
)
from xibo_server.utils.cms import (
    CmsEndpoint,
    Encoding,
    call_cms,
    parse_cms_response,
    send_cms,
)
from xibo_server.utils.config import get_settings
from xibo_server.utils.errors import ErrorCode
from xibo_server.utils.path_utils import PathTraversalError, safe_file_name

GET_FONTS = CmsEndpoint("GET", "/api/fonts", response=list[Font])
GET_FONT_DETAILS = CmsEndpoint("GET", "/api/fonts/details/{id}", response=FontDetails)
DELETE_FONT = CmsEndpoint(
    "DELETE", "/api/fonts/{id}/delete", Encoding.NONE, success_message="Font deleted"
)
UPLOAD_FONT = CmsEndpoint(
    "POST", "/api/fonts", Encoding.MULTIPART, LibraryUploadResponse, "Font uploaded"
)
DOWNLOAD_FONT = CmsEndpoint("GET", "/api/fonts/download/{id}", Encoding.NONE)

_DISPOSITION_FILENAME = re.compile(r'filename="?([^";]+)"?')


def _has_font_extension(file_name: str) -> bool:
    extensions = get_settings().ALLOWED_FONT_EXTENSIONS.lower().split(",")
    return any(file_name.lower().endswith(ext.strip()) for ext in extensions if ext.strip())


def _attachment_name(response: httpx.Response, default: str) -> str:
    match = _DISPOSITION_FILENAME.search(response.headers.get("content-disposition", ""))
    if not match:
        return default
    try:
        return safe_file_name(match.group(1).strip())
    except PathTraversalError:
        logger.warning(f"Ignoring unsafe attachment name {match.group(1)!r}")
        return default


async def upload_font_file(
    file_name: str,
    content: bytes,
    *,
    name: str | None = None,
    old_media_id: int | None = None,
) -> ToolResult:
    """Upload raw font bytes to the CMS library and report the new mediaId."""
    if not _has_font_extension(file_name):
        return ToolResult.fail(
            ErrorCode.INVALID_FILE_TYPE,
            f"'{file_name}' is not a font file",
            error=get_settings().ALLOWED_FONT_EXTENSIONS,
        )

    form = FontUploadForm(name=name, oldMediaId=old_media_id)
    files = [("files", (file_name, content, "application/octet-stream"))]
    result = await call_cms(UPLOAD_FONT, form, files=files)
    if not result.success:
        return result

    uploaded = (result.data or {}).get("files") or []
    if not uploaded:
        return ToolResult.fail(
            ErrorCode.RESPONSE_VALIDATION_ERROR,
            "CMS upload response listed no files",
            error_data=result.data,
        )
    entry = uploaded[0]
    if entry.get("error"):
        return ToolResult.fail(
            ErrorCode.OPERATION_FAILED,
            f"CMS rejected '{file_name}'",
            error=entry["error"],
            error_data=result.data,
        )

    logger.info(f"Font '{file_name}' uploaded as media {entry.get('mediaId')}")
    return ToolResult.ok(
        {"mediaId": entry.get("mediaId"), "name": entry.get("name"), "fileName": file_name},
        f"Font '{file_name}' uploaded",
    )


def render_font_preview(font_bytes: bytes, text: str, font_size: int) -> bytes:
    """Render ``text`` black on white in the given font and return PNG bytes."""
    font = ImageFont.truetype(BytesIO(font_bytes), font_size)
    left, top, right, bottom = font.getbbox(text)
    padding = font_size // 2
    image = Image.new(
        "RGB", (right - left + 2 * padding, bottom - top + 2 * padding), "white"
    )
    ImageDraw.Draw(image).text((padding - left, padding - top), text, font=font, fill="black")
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


async def get_fonts(request: GetFontsRequest) -> ToolResult:
    """List fonts in the CMS library."""
    return await call_cms(GET_FONTS, request)


async def get_font_details(request: FontIdRequest) -> ToolResult:
    """Read a font's embedded metadata (family, style, designer, ...)."""
    return await call_cms(GET_FONT_DETAILS, request)


async def delete_font(request: FontIdRequest) -> ToolResult:
    """Delete a font from the CMS library."""
    return await call_cms(DELETE_FONT, request)


async def upload_font(request: UploadFontRequest) -> ToolResult:
    """Upload a font file (base64 content) to the CMS library. Returns its mediaId."""
    try:
        file_name = safe_file_name(request.fileName)
    except PathTraversalError as e:
        return ToolResult.fail(ErrorCode.VALIDATION_ERROR, str(e))
    try:
        content = base64.b64decode(request.contentBase64, validate=True)
    except binascii.Error as e:
        return ToolResult.fail(
            ErrorCode.VALIDATION_ERROR, "contentBase64 is not valid base64", error=str(e)
        )
    return await upload_font_file(
        file_name, content, name=request.name, old_media_id=request.oldMediaId
    )


async def download_font(request: DownloadFontRequest) -> ToolResult:
    """Download a CMS font into the server's downloads directory."""
    response = await send_cms(DOWNLOAD_FONT, request)
    if isinstance(response, ToolResult):
        return response
    if not response.is_success:
        return parse_cms_response(DOWNLOAD_FONT, response)

    file_name = _attachment_name(response, f"font-{request.id}.ttf")
    downloads_dir = get_settings().downloads_dir
    downloads_dir.mkdir(parents=True, exist_ok=True)
    target = downloads_dir / file_name
    target.write_bytes(response.content)
    logger.info(f"Font {request.id} saved to {target}")
    return ToolResult.ok(
        {"fileName": file_name, "path": str(target), "size": len(response.content)},
        f"Font '{file_name}' downloaded",
    )


async def generate_font_preview(request: GenerateFontPreviewRequest) -> ToolResult:
    """Render sample text in a CMS font and return the preview image URL."""
    response = await send_cms(DOWNLOAD_FONT, FontIdRequest(id=request.id))
    if isinstance(response, ToolResult):
        return response
    if not response.is_success:
        return parse_cms_response(DOWNLOAD_FONT, response)

    try:
        png = await asyncify(render_font_preview)(
            response.content, request.text, request.fontSize
        )
    except OSError as e:
        return ToolResult.fail(
            ErrorCode.INVALID_FILE_TYPE,
            f"Font {request.id} could not be rendered",
            error=str(e),
        )

    settings = get_settings()
    file_name = f"font-{request.id}-{uuid.uuid4().hex[:8]}.png"
    settings.font_preview_dir.mkdir(parents=True, exist_ok=True)
    (settings.font_preview_dir / file_name).write_bytes(png)
    url = f"{settings.EXT_API_URL.rstrip('/')}/getFontImage/{file_name}"
    return ToolResult.ok({"fileName": file_name, "url": url}, "Font preview generated")


TOOLS = [
    get_fonts,
    get_font_details,
    delete_font,
    upload_font,
    download_font,
    generate_font_preview,
]
