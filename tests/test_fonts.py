"""Tests for CMS font tools and the Google Fonts import."""

import base64

import httpx
import pytest
from conftest import FakeCms

from xibo_server.models.font import (
    DownloadFontRequest,
    GenerateFontPreviewRequest,
    GetGoogleFontsRequest,
    UploadFontRequest,
    UploadGoogleFontRequest,
)
from xibo_server.tools.font import download_font, generate_font_preview, upload_font
from xibo_server.tools.google_fonts import (
    GOOGLE_FONTS_API_URL,
    get_google_fonts,
    upload_google_font,
)
from xibo_server.utils.config import get_settings

ROBOTO_REGULAR_URL = "https://fonts.gstatic.com/s/roboto/v30/KFOmCnqEu92Fr1Me5Q.ttf"
FONT_BYTES = b"\x00\x01\x00\x00fake-truetype-data"

GOOGLE_FONTS_RESPONSE = {
    "kind": "webfonts#webfontList",
    "items": [
        {
            "family": "Roboto",
            "category": "sans-serif",
            "variants": ["regular", "700"],
            "subsets": ["latin"],
            "files": {
                "regular": ROBOTO_REGULAR_URL,
                "700": "https://fonts.gstatic.com/s/roboto/v30/KFOlCnqEu92Fr1MmWUlvAw.ttf",
            },
        }
    ],
}

UPLOAD_RESPONSE = {
    "files": [{"name": "Roboto", "fileName": "Roboto-regular.ttf", "mediaId": 77, "size": 19}]
}


@pytest.fixture
def google_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_FONTS_API_KEY", "google-key")
    get_settings.cache_clear()


@pytest.fixture
def google_requests(mock_external, google_key) -> list[httpx.Request]:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if str(request.url).startswith(GOOGLE_FONTS_API_URL):
            family = request.url.params.get("family")
            if family and family != "Roboto":
                return httpx.Response(200, json={"items": []})
            return httpx.Response(200, json=GOOGLE_FONTS_RESPONSE)
        if str(request.url) == ROBOTO_REGULAR_URL:
            return httpx.Response(200, content=FONT_BYTES)
        return httpx.Response(404)

    mock_external("xibo_server.tools.google_fonts", handler)
    return seen


class TestUploadGoogleFont:
    @pytest.mark.asyncio
    async def test_roboto_regular_is_reuploaded_to_cms(
        self, fake_cms: FakeCms, google_requests: list[httpx.Request]
    ) -> None:
        fake_cms.add("POST", "/api/fonts", json=UPLOAD_RESPONSE)

        result = await upload_google_font(UploadGoogleFontRequest(family="Roboto", variant="regular"))

        assert result.success, f"Expected success: {result}"
        assert result.data["mediaId"] == 77, f"Unexpected data: {result.data}"

        urls = [str(r.url) for r in google_requests]
        assert ROBOTO_REGULAR_URL in urls, f"Font file was not downloaded: {urls}"
        assert google_requests[0].url.params["family"] == "Roboto"

        upload = fake_cms.requests[0]
        assert upload.headers["content-type"].startswith("multipart/form-data")
        assert b'name="files"; filename="Roboto-regular.ttf"' in upload.content
        assert FONT_BYTES in upload.content

    @pytest.mark.asyncio
    async def test_unknown_variant_lists_available_ones(
        self, fake_cms: FakeCms, google_requests: list[httpx.Request]
    ) -> None:
        result = await upload_google_font(UploadGoogleFontRequest(family="Roboto", variant="900"))

        assert not result.success
        assert result.message.startswith("[VALIDATION_ERROR]"), result.message
        assert result.error == ["700", "regular"]
        assert fake_cms.requests == [], "Nothing must be uploaded"

    @pytest.mark.asyncio
    async def test_unknown_family(
        self, fake_cms: FakeCms, google_requests: list[httpx.Request]
    ) -> None:
        result = await upload_google_font(UploadGoogleFontRequest(family="Nope"))

        assert not result.success
        assert "not found" in result.message

    @pytest.mark.asyncio
    async def test_cms_rejection_is_reported(
        self, fake_cms: FakeCms, google_requests: list[httpx.Request]
    ) -> None:
        fake_cms.add("POST", "/api/fonts", json={"files": [{"name": "x", "error": "Duplicate"}]})

        result = await upload_google_font(UploadGoogleFontRequest(family="Roboto"))

        assert not result.success
        assert result.error == "Duplicate"

    @pytest.mark.asyncio
    async def test_missing_api_key(self, fake_cms: FakeCms) -> None:
        result = await upload_google_font(UploadGoogleFontRequest(family="Roboto"))

        assert not result.success
        assert result.message.startswith("[CONFIGURATION_ERROR]"), result.message


class TestGetGoogleFonts:
    @pytest.mark.asyncio
    async def test_limit_and_key(self, google_requests: list[httpx.Request]) -> None:
        result = await get_google_fonts(GetGoogleFontsRequest(category="sans-serif", limit=1))

        assert result.success, f"Expected success: {result}"
        assert result.data["total"] == 1
        assert result.data["fonts"][0]["family"] == "Roboto"
        params = google_requests[0].url.params
        assert params["key"] == "google-key"
        assert params["category"] == "sans-serif"
        assert "limit" not in params


class TestCmsFontTools:
    @pytest.mark.asyncio
    async def test_upload_font_decodes_base64(self, fake_cms: FakeCms) -> None:
        fake_cms.add("POST", "/api/fonts", json=UPLOAD_RESPONSE)

        result = await upload_font(
            UploadFontRequest(
                fileName="Roboto-Regular.ttf",
                contentBase64=base64.b64encode(FONT_BYTES).decode(),
            )
        )

        assert result.success, f"Expected success: {result}"
        assert FONT_BYTES in fake_cms.requests[0].content

    @pytest.mark.asyncio
    async def test_upload_font_rejects_non_font(self, fake_cms: FakeCms) -> None:
        result = await upload_font(
            UploadFontRequest(fileName="notes.txt", contentBase64=base64.b64encode(b"x").decode())
        )

        assert not result.success
        assert result.message.startswith("[INVALID_FILE_TYPE]"), result.message
        assert fake_cms.requests == []

    @pytest.mark.asyncio
    async def test_upload_font_rejects_bad_base64(self, fake_cms: FakeCms) -> None:
        result = await upload_font(UploadFontRequest(fileName="a.ttf", contentBase64="***"))

        assert not result.success
        assert result.message.startswith("[VALIDATION_ERROR]"), result.message

    @pytest.mark.asyncio
    async def test_download_font_saves_attachment(self, fake_cms: FakeCms) -> None:
        fake_cms.add(
            "GET",
            "/api/fonts/download/4",
            content=FONT_BYTES,
            headers={"Content-Disposition": 'attachment; filename="Roboto-Regular.ttf"'},
        )

        result = await download_font(DownloadFontRequest(id=4))

        assert result.success, f"Expected success: {result}"
        saved = get_settings().downloads_dir / "Roboto-Regular.ttf"
        assert saved.read_bytes() == FONT_BYTES

    @pytest.mark.asyncio
    async def test_download_font_ignores_unsafe_attachment_name(self, fake_cms: FakeCms) -> None:
        fake_cms.add(
            "GET",
            "/api/fonts/download/4",
            content=FONT_BYTES,
            headers={"Content-Disposition": 'attachment; filename="..evil.ttf"'},
        )

        result = await download_font(DownloadFontRequest(id=4))

        assert result.data["fileName"] == "font-4.ttf"

    @pytest.mark.asyncio
    async def test_preview_of_unreadable_font(self, fake_cms: FakeCms) -> None:
        fake_cms.add("GET", "/api/fonts/download/4", content=b"not a font")

        result = await generate_font_preview(GenerateFontPreviewRequest(id=4))

        assert not result.success
        assert result.message.startswith("[INVALID_FILE_TYPE]"), result.message
