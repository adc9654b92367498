"""HTTP transport for the Seal REST API (v5), built on ``httpx.AsyncClient``."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from seal_preview.config import SealSettings
from seal_preview.exceptions import AuthenticationError, TransportError

log = logging.getLogger(__name__)

SESSION_TOKEN_HEADER = "X-Session-Token"


class SealTransport:
    """Issues the raw preview, metadata and login requests.

    Every failure is raised as ``TransportError`` (``AuthenticationError`` for
    401/403); response bodies are never interpreted beyond JSON decoding.
    """

    def __init__(
        self,
        settings: SealSettings,
        *,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._session_token = settings.session_token
        self._client = httpx.AsyncClient(
            base_url=settings.api_url,
            timeout=settings.request_timeout,
            transport=http_transport,
        )
        log.debug(f"Created Seal transport for {settings.api_url} (timeout={settings.request_timeout}s)")

    @property
    def session_token(self) -> str:
        return self._session_token

    def set_session_token(self, token: str) -> None:
        self._session_token = token

    def _auth_headers(self) -> dict[str, str]:
        if not self._session_token:
            return {}
        return {SESSION_TOKEN_HEADER: self._session_token}

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if not response.is_success:
            status = response.status_code
            exc_type = AuthenticationError if status in (401, 403) else TransportError
            raise exc_type(
                f"{method} {url} returned HTTP {status}",
                status_code=status,
                body=response.text,
            )
        return response

    # ── Contract endpoints ───────────────────────────────────────────

    async def get_preview(self, resource_id: str) -> str:
        """Fetch the markup representation of a contract."""
        response = await self._request(
            "GET",
            f"/contracts/{resource_id}/preview",
            headers={**self._auth_headers(), "Accept": "text/html"},
        )
        return response.text

    async def get_metadata_page(self, resource_id: str, offset: int, limit: int) -> dict[str, Any]:
        """Fetch one page of contract metadata in the as-is API format."""
        response = await self._request(
            "GET",
            f"/contracts/{resource_id}/metadata",
            params={"limit": limit, "offset": offset},
            headers={**self._auth_headers(), "Accept": "application/json"},
        )
        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(
                f"Metadata response for {resource_id} is not valid JSON",
                status_code=response.status_code,
                body=response.text,
            ) from e
        # Envelope shape is checked by the paged fetch (StructuralError).
        return payload

    # ── Authentication ───────────────────────────────────────────────

    async def login(self, username: str, password: str) -> str:
        """Exchange credentials for a session token via the nonce handshake."""
        nonce = (await self._request("GET", "/security/nonce")).text
        response = await self._request(
            "POST",
            "/auths",
            json={"principal": username, "password": password, "nonce": nonce},
        )
        token = response.headers.get(SESSION_TOKEN_HEADER)
        if not token:
            raise AuthenticationError(
                f"Login response did not include a {SESSION_TOKEN_HEADER} header",
                status_code=response.status_code,
                body=response.text,
            )
        log.info(f"Logged in to {self._settings.api_url} as {username}")
        return token

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> SealTransport:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
