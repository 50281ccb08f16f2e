"""Pytest configuration and fixtures.

Every test runs against a fresh settings object whose persistent data lives
in a temporary directory. CMS traffic goes to ``FakeCms`` through an
``httpx.MockTransport``; no test touches the network.
"""

from collections.abc import Callable, Generator
from pathlib import Path
from urllib.parse import parse_qs

import httpx
import pytest

from xibo_server.utils import cms
from xibo_server.utils.auth import TOKEN_PATH, TokenProvider
from xibo_server.utils.config import get_settings

CMS_URL = "https://cms.example.test"

Handler = Callable[[httpx.Request], httpx.Response]


def form_fields(request: httpx.Request) -> dict[str, list[str]]:
    """Decode an urlencoded request body."""
    return parse_qs(request.content.decode())


class FakeCms:
    """In-memory Xibo CMS: routes keyed by (method, path), plus a token endpoint."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []
        self.token_requests = 0
        self.token_status = 200

    def add(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        *,
        json=None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if json is not None:
                return httpx.Response(status_code, json=json, headers=headers)
            return httpx.Response(status_code, content=content, headers=headers)

        self.routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == TOKEN_PATH:
            self.token_requests += 1
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "invalid_client"})
            return httpx.Response(200, json={"access_token": "test-token", "expires_in": 3600})

        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"error": f"No route {request.url.path}"})
        return handler(request)

    def client(self) -> cms.CmsClient:
        transport = httpx.MockTransport(self.handle)
        tokens = TokenProvider(CMS_URL, "client-id", "client-secret", transport=transport)
        return cms.CmsClient(CMS_URL, tokens, transport=transport)


@pytest.fixture(autouse=True)
def settings_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path]:
    """Point every setting at test values and a temporary data directory."""
    data_dir = tmp_path / "persistent_data"
    monkeypatch.setenv("PERSISTENT_DATA_DIR", str(data_dir))
    monkeypatch.setenv("CMS_URL", CMS_URL)
    monkeypatch.setenv("XIBO_CLIENT_ID", "client-id")
    monkeypatch.setenv("XIBO_CLIENT_SECRET", "client-secret")
    monkeypatch.setenv("EXT_API_URL", "http://agent.example.test/ext-api")
    monkeypatch.setenv("WORKFLOW_API_URL", "http://workflows.example.test")
    monkeypatch.setenv("ENV", "local")
    for name in ("GEMINI_API_KEY", "GOOGLE_FONTS_API_KEY", "USE_INDIVIDUAL_TOOLS"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_cms_client = cms.get_cms_client
    get_cms_client.cache_clear()

    yield data_dir

    get_settings.cache_clear()
    get_cms_client.cache_clear()


@pytest.fixture
def fake_cms(monkeypatch: pytest.MonkeyPatch) -> FakeCms:
    """A fake CMS wired in place of the configured CMS client."""
    fake = FakeCms()
    client = fake.client()
    monkeypatch.setattr(cms, "get_cms_client", lambda: client)
    return fake


@pytest.fixture
def mock_external(monkeypatch: pytest.MonkeyPatch) -> Callable[[str, Handler], None]:
    """Replace ``external_client`` in a tool module with one answering through a handler."""

    def install(module_path: str, handler: Handler) -> None:
        def factory() -> httpx.AsyncClient:
            return httpx.AsyncClient(
                transport=httpx.MockTransport(handler), follow_redirects=True
            )

        monkeypatch.setattr(f"{module_path}.external_client", factory)

    return install
