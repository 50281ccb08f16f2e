"""Image generation tools and the per-generator image history."""

import base64
import uuid
from io import BytesIO
from pathlib import Path

import httpx
from asyncer import asyncify
from litellm import aimage_generation
from loguru import logger
from openai import OpenAIError
from PIL import Image, UnidentifiedImageError

from xibo_server.models.envelope import ToolResult
from xibo_server.models.image import (
    ASPECT_RATIO_SIZES,
    EndImageGenerationRequest,
    GenerateImageRequest,
    GetImageHistoryRequest,
)
from xibo_server.utils.config import get_settings
from xibo_server.utils.errors import ErrorCode
from xibo_server.utils.http_client import external_client
from xibo_server.utils.image_history import (
    GeneratorNotFoundError,
    dump_history,
    get_image_history_store,
)


def save_png(image_bytes: bytes, target: Path) -> tuple[int, int]:
    """Re-encode ``image_bytes`` as PNG at ``target`` and return its size."""
    with Image.open(BytesIO(image_bytes)) as image:
        target.parent.mkdir(parents=True, exist_ok=True)
        image.save(target, format="PNG")
        return image.size


async def _image_bytes(item) -> bytes:
    if getattr(item, "b64_json", None):
        return base64.b64decode(item.b64_json)
    if getattr(item, "url", None):
        async with external_client() as client:
            response = await client.get(item.url)
            response.raise_for_status()
            return response.content
    raise ValueError("Image generation returned neither b64_json nor url")


async def generate_image(request: GenerateImageRequest) -> ToolResult:
    """Generate an image from a prompt and record it under generatorId.

    Returns the image URL served by this server. Call end_image_generation
    once the user has picked a result.
    """
    settings = get_settings()
    if not settings.GEMINI_API_KEY:
        return ToolResult.fail(ErrorCode.CONFIGURATION_ERROR, "GEMINI_API_KEY is not configured")

    store = get_image_history_store()
    if request.newGeneration:
        await asyncify(store.start_new_generation)(request.generatorId)

    width, height = ASPECT_RATIO_SIZES[request.aspectRatio]
    log = logger.bind(generator_id=request.generatorId)
    try:
        response = await aimage_generation(
            model=settings.IMAGE_GENERATION_MODEL,
            prompt=request.prompt,
            n=1,
            size=f"{width}x{height}",
            api_key=settings.GEMINI_API_KEY,
        )
        image_bytes = await _image_bytes(response.data[0])
    except (OpenAIError, httpx.HTTPError, ValueError, IndexError) as e:
        log.warning(f"Image generation failed: {e!r}")
        return ToolResult.fail(ErrorCode.OPERATION_FAILED, "Image generation failed", error=str(e))

    filename = f"{uuid.uuid4().hex}.png"
    try:
        actual_width, actual_height = await asyncify(save_png)(
            image_bytes, settings.generated_dir / filename
        )
    except UnidentifiedImageError as e:
        return ToolResult.fail(
            ErrorCode.RESPONSE_VALIDATION_ERROR, "Generated data is not an image", error=str(e)
        )

    record = await asyncify(store.add_image)(
        request.generatorId,
        filename=filename,
        prompt=request.prompt,
        aspect_ratio=request.aspectRatio,
        width=actual_width,
        height=actual_height,
    )
    url = f"{settings.EXT_API_URL.rstrip('/')}/getImage/{filename}"
    log.info(f"Generated image {record.id}: {filename}")
    return ToolResult.ok(
        {**record.model_dump(mode="json"), "generatorId": request.generatorId, "url": url},
        "Image generated",
    )


async def get_image_history(request: GetImageHistoryRequest) -> ToolResult:
    """Images generated so far, for one generator or for all of them."""
    store = get_image_history_store()
    if request.generatorId is None:
        return ToolResult.ok(dump_history(await asyncify(store.get_all_history)()))
    try:
        history = await asyncify(store.get_history)(request.generatorId)
    except GeneratorNotFoundError as e:
        return ToolResult.fail(ErrorCode.FILE_NOT_FOUND, str(e))
    return ToolResult.ok(history.model_dump(mode="json"))


async def end_image_generation(request: EndImageGenerationRequest) -> ToolResult:
    """Close a generation session.

    With isSuccess the generator's images are kept and every other
    generator's images are deleted. Without it the history is only compacted.
    """
    store = get_image_history_store()
    try:
        removed = await asyncify(store.end_generation)(request.generatorId, request.isSuccess)
    except GeneratorNotFoundError as e:
        return ToolResult.fail(ErrorCode.FILE_NOT_FOUND, str(e))
    return ToolResult.ok(
        {"generatorId": request.generatorId, "removedFiles": removed},
        "Image generation session ended",
    )


TOOLS = [generate_image, get_image_history, end_image_generation]
