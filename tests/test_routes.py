"""Tests for the /ext-api HTTP routes."""

import pytest
from starlette.applications import Starlette
from starlette.routing import Route
from starlette.testclient import TestClient

from xibo_server.api.routes import PREFIX, ROUTES, content_disposition
from xibo_server.utils.config import get_settings


@pytest.fixture
def client() -> TestClient:
    app = Starlette(
        routes=[Route(f"{PREFIX}{path}", handler, methods=methods) for path, methods, handler in ROUTES]
    )
    return TestClient(app)


class TestUpload:
    def test_allowed_image_is_saved(self, client: TestClient) -> None:
        response = client.post(
            f"{PREFIX}/upload", files={"file": ("poster.png", b"\x89PNG data", "image/png")}
        )

        assert response.status_code == 200, f"Expected 200, got {response.status_code}: {response.text}"
        data = response.json()
        assert data["filename"] == "poster.png"
        assert data["size"] == 9
        assert (get_settings().uploads_dir / "poster.png").read_bytes() == b"\x89PNG data"

    def test_disallowed_extension_echoes_allow_list(self, client: TestClient) -> None:
        response = client.post(
            f"{PREFIX}/upload", files={"file": ("run.exe", b"MZ", "application/octet-stream")}
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Invalid file type"
        assert "image/png" in data["allowedTypes"]
        assert ".ttf" in data["allowedExtensions"]
        assert not get_settings().uploads_dir.joinpath("run.exe").exists()

    def test_missing_file(self, client: TestClient) -> None:
        response = client.post(f"{PREFIX}/upload", data={"other": "x"})

        assert response.status_code == 400
        assert response.json()["error"] == "No file uploaded"

    def test_too_large_file_is_removed(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MAX_FILE_SIZE", "4")
        get_settings.cache_clear()

        response = client.post(
            f"{PREFIX}/upload", files={"file": ("big.png", b"123456789", "image/png")}
        )

        assert response.status_code == 400
        assert response.json()["maxSize"] == 4
        assert not (get_settings().uploads_dir / "big.png").exists()


class TestServeFiles:
    def test_get_image(self, client: TestClient) -> None:
        generated = get_settings().generated_dir
        generated.mkdir(parents=True)
        (generated / "abc.png").write_bytes(b"png")

        response = client.get(f"{PREFIX}/getImage/abc.png")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content == b"png"

    def test_missing_image(self, client: TestClient) -> None:
        assert client.get(f"{PREFIX}/getImage/nope.png").status_code == 404

    def test_traversal_is_rejected(self, client: TestClient) -> None:
        secret = get_settings().PERSISTENT_DATA_DIR / "secret.png"
        secret.parent.mkdir(parents=True, exist_ok=True)
        secret.write_bytes(b"secret")

        response = client.get(f"{PREFIX}/getFontImage/..%2Fsecret.png")

        assert response.status_code == 400, f"Expected 400, got {response.status_code}"
        assert b"secret" not in response.content


class TestDownload:
    def test_report_download_headers(self, client: TestClient) -> None:
        reports = get_settings().reports_dir
        reports.mkdir(parents=True)
        (reports / "signage-2025-01-01.md").write_text("# Report")

        response = client.get(f"{PREFIX}/download/report/signage-2025-01-01.md")

        assert response.status_code == 200, f"Expected 200, got {response.status_code}: {response.text}"
        assert response.headers["content-type"].startswith("text/markdown")
        assert response.headers["cache-control"] == "no-store"
        assert "filename*=UTF-8''signage-2025-01-01.md" in response.headers["content-disposition"]
        assert response.text == "# Report"

    @pytest.mark.parametrize("file_name", ["..secret.md", "..%2F..%2Fsecret.md", "a..b.md"])
    def test_dotdot_names_are_rejected(self, client: TestClient, file_name: str) -> None:
        response = client.get(f"{PREFIX}/download/report/{file_name}")

        assert response.status_code == 400, f"Expected 400 for {file_name}, got {response.status_code}"
        assert response.json()["error"] == "Invalid fileName for kind"

    def test_wrong_extension_for_kind(self, client: TestClient) -> None:
        response = client.get(f"{PREFIX}/download/podcast/report.md")

        assert response.status_code == 400

    def test_unknown_kind(self, client: TestClient) -> None:
        response = client.get(f"{PREFIX}/download/video/a.mp4")

        assert response.status_code == 400
        assert "report|podcast|presentation" in response.json()["error"]

    def test_missing_file(self, client: TestClient) -> None:
        assert client.get(f"{PREFIX}/download/presentation/deck.pptx").status_code == 404

    def test_content_disposition_keeps_unicode(self) -> None:
        header = content_disposition("レポート.pdf")

        assert header.startswith('attachment; filename="____.pdf"')
        assert "filename*=UTF-8''%E3%83%AC%E3%83%9D%E3%83%BC%E3%83%88.pdf" in header


class TestProductsInfo:
    def test_upload_replaces_previous_files(self, client: TestClient) -> None:
        product_dir = get_settings().products_info_dir / "Signage Pro"
        product_dir.mkdir(parents=True)
        (product_dir / "stale.txt").write_text("old")

        response = client.post(
            f"{PREFIX}/products_info/upload/Signage Pro",
            files=[
                ("file", ("brochure.pdf", b"%PDF", "application/pdf")),
                ("file", ("links.url", b"https://example.com", "text/plain")),
            ],
        )

        assert response.status_code == 200, f"Expected 200, got {response.status_code}: {response.text}"
        data = response.json()
        assert data["productName"] == "Signage Pro"
        assert sorted(f["filename"] for f in data["files"]) == ["brochure.pdf", "links.url"]
        assert not (product_dir / "stale.txt").exists()
        assert (product_dir / "brochure.pdf").read_bytes() == b"%PDF"
        assert data["files"][0]["savedPath"] == str(product_dir.resolve() / data["files"][0]["filename"])

    def test_invalid_file_keeps_existing_directory(self, client: TestClient) -> None:
        product_dir = get_settings().products_info_dir / "Widget"
        product_dir.mkdir(parents=True)
        (product_dir / "keep.txt").write_text("old")

        response = client.post(
            f"{PREFIX}/products_info/upload/Widget",
            files=[("file", ("image.png", b"png", "image/png"))],
        )

        assert response.status_code == 400
        assert (product_dir / "keep.txt").exists()

    def test_oversized_file_keeps_existing_directory(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MAX_FILE_SIZE", "10")
        get_settings.cache_clear()
        products_dir = get_settings().products_info_dir
        product_dir = products_dir / "Widget"
        product_dir.mkdir(parents=True)
        (product_dir / "keep.txt").write_text("old")

        response = client.post(
            f"{PREFIX}/products_info/upload/Widget",
            files=[
                ("file", ("ok.txt", b"small", "text/plain")),
                ("file", ("big.txt", b"x" * 100, "text/plain")),
            ],
        )

        assert response.status_code == 400, f"Expected 400, got {response.status_code}"
        assert response.json()["error"] == "File too large: big.txt"
        assert sorted(p.name for p in product_dir.iterdir()) == ["keep.txt"]
        assert sorted(p.name for p in products_dir.iterdir()) == ["Widget"], (
            "No staging directory may be left behind"
        )

    def test_product_name_is_sanitised(self, client: TestClient) -> None:
        response = client.post(
            f"{PREFIX}/products_info/upload/Prod<1>",
            files=[("file", ("notes.txt", b"x", "text/plain"))],
        )

        assert response.status_code == 200, response.text
        assert response.json()["productName"] == "Prod_1_"

    def test_upload_form_escapes_product_name(self, client: TestClient) -> None:
        response = client.get(f"{PREFIX}/products_info/upload-form/<b>")

        assert response.status_code == 200
        assert "&lt;b&gt;" in response.text
        assert 'name="file" multiple' in response.text


class TestDocs:
    def test_openapi_lists_routes(self, client: TestClient) -> None:
        document = client.get(f"{PREFIX}/openapi.json").json()

        assert document["openapi"].startswith("3.")
        assert "/upload" in document["paths"]
        assert document["servers"][0]["url"].endswith(PREFIX)

    def test_swagger_ui_points_at_openapi(self, client: TestClient) -> None:
        response = client.get(f"{PREFIX}/swagger-ui")

        assert response.status_code == 200
        assert f"{PREFIX}/openapi.json" in response.text

    def test_hello(self, client: TestClient) -> None:
        assert client.get(f"{PREFIX}/hello").status_code == 200
