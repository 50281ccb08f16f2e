"""HTTP routes served next to the MCP endpoint under ``/ext-api``.

Every user-supplied file name is checked with ``safe_file_name`` and then
resolved under its base directory with ``resolve_under_root`` before any
filesystem access.
"""

import html
import os
import re
import shutil
import tempfile
from pathlib import Path
from urllib.parse import quote

from fastmcp import FastMCP
from loguru import logger
from starlette.datastructures import UploadFile
from starlette.requests import Request
from starlette.responses import FileResponse, HTMLResponse, JSONResponse, Response

from xibo_server.api.openapi import SWAGGER_UI_HTML, build_openapi
from xibo_server.utils.config import get_settings
from xibo_server.utils.path_utils import (
    PathTraversalError,
    resolve_under_root,
    safe_file_name,
    sanitize_product_name,
)

PREFIX = "/ext-api"
CHUNK_SIZE = 1024 * 1024

DOWNLOAD_NAME_PATTERNS = {
    "report": re.compile(r"[\w .-]+\.(md|pdf)"),
    "podcast": re.compile(r"[\w .-]+\.(wav|mp3|m4a)"),
    "presentation": re.compile(r"[\w .-]+\.(pptx|ppt)"),
}

DOWNLOAD_CONTENT_TYPES = {
    ".md": "text/markdown; charset=utf-8",
    ".pdf": "application/pdf",
    ".wav": "audio/wav",
    ".mp3": "audio/mpeg",
    ".m4a": "audio/mp4",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    ".ppt": "application/vnd.ms-powerpoint",
}


class FileTooLargeError(ValueError):
    pass


def error_response(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse({"error": error, **extra}, status_code=status_code)


def content_disposition(file_name: str) -> str:
    """``attachment`` header with an ASCII fallback and an RFC 5987 UTF-8 name."""
    ascii_fallback = re.sub(r'["\\]|[^\x20-\x7e]', "_", file_name)
    return f"attachment; filename=\"{ascii_fallback}\"; filename*=UTF-8''{quote(file_name, safe='')}"


def download_dirs() -> dict[str, Path]:
    settings = get_settings()
    return {
        "report": settings.reports_dir,
        "podcast": settings.podcast_dir,
        "presentation": settings.presentations_dir,
    }


async def save_upload(upload: UploadFile, target: Path, max_size: int) -> int:
    """Stream ``upload`` to ``target``; nothing is left behind if it is too large."""
    written = 0
    try:
        with target.open("wb") as out:
            while chunk := await upload.read(CHUNK_SIZE):
                written += len(chunk)
                if written > max_size:
                    raise FileTooLargeError(upload.filename)
                out.write(chunk)
    except FileTooLargeError:
        target.unlink(missing_ok=True)
        raise
    return written


def _serve_file(root: Path, file_name: str, media_type: str) -> Response:
    try:
        path = resolve_under_root(
            safe_file_name(file_name), root=root, check_exists=True, must_be_file=True
        )
    except PathTraversalError:
        logger.warning(f"Rejected file name {file_name!r} under {root}")
        return error_response(400, "Invalid file name")
    except (FileNotFoundError, ValueError):
        return error_response(404, "File not found")
    return FileResponse(path, media_type=media_type)


async def upload(request: Request) -> Response:
    settings = get_settings()
    form = await request.form()
    file = form.get("file")
    if not isinstance(file, UploadFile) or not file.filename:
        return error_response(400, "No file uploaded")

    extension = Path(file.filename).suffix.lower()
    if extension not in settings.allowed_upload_extensions:
        return error_response(
            400,
            "Invalid file type",
            allowedTypes=settings.allowed_upload_types,
            allowedExtensions=settings.allowed_upload_extensions,
        )

    try:
        settings.uploads_dir.mkdir(parents=True, exist_ok=True)
        target = resolve_under_root(safe_file_name(file.filename), root=settings.uploads_dir)
    except PathTraversalError:
        return error_response(400, "Invalid file name")

    try:
        size = await save_upload(file, target, settings.MAX_FILE_SIZE)
    except FileTooLargeError:
        return error_response(400, "File too large", maxSize=settings.MAX_FILE_SIZE)

    logger.info(f"File uploaded: {target.name} ({size} bytes)")
    return JSONResponse(
        {
            "message": "File uploaded successfully",
            "filename": target.name,
            "size": size,
            "type": file.content_type,
        }
    )


async def get_image(request: Request) -> Response:
    return _serve_file(get_settings().generated_dir, request.path_params["filename"], "image/png")


async def get_video(request: Request) -> Response:
    return _serve_file(get_settings().generated_dir, request.path_params["filename"], "video/mp4")


async def get_font_image(request: Request) -> Response:
    return _serve_file(
        get_settings().font_preview_dir, request.path_params["fileName"], "image/png"
    )


async def download(request: Request) -> Response:
    kind = request.path_params["kind"]
    file_name = request.path_params["fileName"]
    pattern = DOWNLOAD_NAME_PATTERNS.get(kind)
    if pattern is None:
        return error_response(400, "Invalid kind. Use report|podcast|presentation")
    if not pattern.fullmatch(file_name):
        return error_response(400, "Invalid fileName for kind")

    try:
        path = resolve_under_root(
            safe_file_name(file_name), root=download_dirs()[kind], check_exists=True
        )
    except PathTraversalError:
        logger.warning(f"Rejected download name {file_name!r} for {kind}")
        return error_response(400, "Invalid fileName for kind")
    except FileNotFoundError:
        return error_response(404, "File not found")

    return FileResponse(
        path,
        media_type=DOWNLOAD_CONTENT_TYPES[path.suffix.lower()],
        headers={
            "Content-Disposition": content_disposition(file_name),
            "Cache-Control": "no-store",
        },
    )


async def upload_products_info(request: Request) -> Response:
    settings = get_settings()
    try:
        product_name = sanitize_product_name(request.path_params["productName"])
    except PathTraversalError:
        return error_response(400, "Invalid productName")

    form = await request.form()
    files = [f for f in form.getlist("file") if isinstance(f, UploadFile) and f.filename]
    if not files:
        return error_response(400, "No file uploaded")

    allowed = settings.product_info_extensions
    for file in files:
        try:
            safe_file_name(file.filename)
        except PathTraversalError:
            return error_response(400, f"Invalid file name {file.filename}")
        if Path(file.filename).suffix.lower() not in allowed:
            return error_response(
                400, f"Invalid file type for {file.filename}", allowedExtensions=allowed
            )

    settings.products_info_dir.mkdir(parents=True, exist_ok=True)
    target_dir = resolve_under_root(product_name, root=settings.products_info_dir)
    # Sanitised product names never start with a dot
    staging_dir = Path(tempfile.mkdtemp(prefix=".upload-", dir=settings.products_info_dir))

    saved = []
    try:
        for file in files:
            staged = resolve_under_root(file.filename, root=staging_dir)
            try:
                size = await save_upload(file, staged, settings.MAX_FILE_SIZE)
            except FileTooLargeError:
                logger.warning(
                    f"Rejected products info batch for {product_name}: {file.filename} too large"
                )
                return error_response(
                    400, f"File too large: {file.filename}", maxSize=settings.MAX_FILE_SIZE
                )
            saved.append(
                {
                    "filename": file.filename,
                    "size": size,
                    "type": file.content_type,
                    "savedPath": str(target_dir / file.filename),
                }
            )

        shutil.rmtree(target_dir, ignore_errors=True)
        os.replace(staging_dir, target_dir)
    finally:
        shutil.rmtree(staging_dir, ignore_errors=True)

    logger.info(f"Products info for {product_name}: {len(saved)} file(s) saved to {target_dir}")
    return JSONResponse(
        {"success": True, "productName": product_name, "dir": str(target_dir), "files": saved}
    )


async def upload_products_info_form(request: Request) -> Response:
    product_name = request.path_params["productName"]
    action = f"{PREFIX}/products_info/upload/{quote(product_name, safe='')}"
    accept = ",".join(get_settings().product_info_extensions)
    return HTMLResponse(
        f"""<!doctype html>
<html lang="en">
<head><meta charset="utf-8" /><title>Upload product information</title></head>
<body>
  <h1>Upload product information: {html.escape(product_name)}</h1>
  <p>Files replace everything previously uploaded for this product. Allowed: {html.escape(accept)}</p>
  <form method="post" action="{html.escape(action)}" enctype="multipart/form-data">
    <input type="file" name="file" multiple accept="{html.escape(accept)}" />
    <button type="submit">Upload</button>
  </form>
</body>
</html>
"""
    )


async def openapi_json(request: Request) -> Response:
    base = str(request.base_url).rstrip("/")
    return JSONResponse(build_openapi(f"{base}{PREFIX}"))


async def swagger_ui(request: Request) -> Response:
    return HTMLResponse(SWAGGER_UI_HTML.replace("{openapi_url}", f"{PREFIX}/openapi.json"))


async def hello(request: Request) -> Response:
    return JSONResponse({"message": "Hello from the Xibo agent ext-api"})


ROUTES = [
    ("/upload", ["POST"], upload),
    ("/getImage/{filename:path}", ["GET"], get_image),
    ("/getVideo/{filename:path}", ["GET"], get_video),
    ("/getFontImage/{fileName:path}", ["GET"], get_font_image),
    ("/download/{kind}/{fileName:path}", ["GET"], download),
    ("/products_info/upload/{productName}", ["POST"], upload_products_info),
    ("/products_info/upload-form/{productName}", ["GET"], upload_products_info_form),
    ("/openapi.json", ["GET"], openapi_json),
    ("/swagger-ui", ["GET"], swagger_ui),
    ("/hello", ["GET"], hello),
]


def register_routes(mcp: FastMCP) -> None:
    for path, methods, handler in ROUTES:
        mcp.custom_route(f"{PREFIX}{path}", methods=methods)(handler)
