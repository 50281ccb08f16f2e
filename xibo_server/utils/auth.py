"""OAuth2 client-credentials tokens for the Xibo CMS API."""

import asyncio
import time

import httpx
from loguru import logger

from xibo_server.utils.errors import CmsAuthError

TOKEN_PATH = "/api/authorize/access_token"


class TokenProvider:
    """Fetches a bearer token and reuses it until shortly before it expires.

    One provider is shared by every tool in the process; the lock keeps
    concurrent tool calls from stampeding the token endpoint on expiry.
    """

    def __init__(
        self,
        base_url: str,
        client_id: str,
        client_secret: str,
        *,
        timeout: float = 30.0,
        expiry_margin: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self.expiry_margin = expiry_margin
        self.transport = transport

        self._token: str | None = None
        self._expires_at: float = 0.0
        self._lock = asyncio.Lock()

    def _is_valid(self) -> bool:
        return self._token is not None and time.monotonic() < self._expires_at

    def invalidate(self) -> None:
        self._token = None
        self._expires_at = 0.0

    async def get_token(self) -> str:
        if self._is_valid():
            return self._token  # type: ignore[return-value]

        async with self._lock:
            if self._is_valid():
                return self._token  # type: ignore[return-value]
            token, expires_in = await self._fetch_token()
            self._token = token
            self._expires_at = time.monotonic() + max(expires_in - self.expiry_margin, 0)
            logger.debug(f"Obtained CMS access token valid for {expires_in}s")
            return token

    async def get_auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {await self.get_token()}"}

    async def _fetch_token(self) -> tuple[str, float]:
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            try:
                response = await client.post(
                    TOKEN_PATH,
                    data={
                        "grant_type": "client_credentials",
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                    },
                )
            except httpx.HTTPError as e:
                raise CmsAuthError(f"Token request failed: {e!r}") from e

        if response.status_code >= 400:
            raise CmsAuthError(
                f"Token request rejected with status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
            return str(payload["access_token"]), float(payload.get("expires_in", 3600))
        except (ValueError, KeyError, TypeError) as e:
            raise CmsAuthError(
                "Token response did not contain an access_token",
                status_code=response.status_code,
                body=response.text,
            ) from e
