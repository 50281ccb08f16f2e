import httpx

from xibo_server.utils.config import get_settings


def external_client() -> httpx.AsyncClient:
    """HTTP client for third-party services (Google Fonts, RSS feeds)."""
    return httpx.AsyncClient(
        timeout=get_settings().HTTP_TIMEOUT_SECONDS,
        follow_redirects=True,
        headers={"User-Agent": "xibo-agent/0.1"},
    )
