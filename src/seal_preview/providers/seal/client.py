"""High-level async client for contract previews and metadata."""

from __future__ import annotations

import logging
from typing import Any, Optional

from seal_preview.config import SealSettings
from seal_preview.core.logging_config import bind_contract
from seal_preview.core.normalize import CollisionPolicy
from seal_preview.core.pagination import fetch_all_pages
from seal_preview.core.startup_checks import validate_settings
from seal_preview.exceptions import ConfigurationError
from seal_preview.interfaces.transport import ISealTransport
from seal_preview.models import AggregateResult, MetadataGroup, MetadataIndex
from seal_preview.providers.seal.transport import SealTransport
from seal_preview.services.aggregate import fetch_all, fetch_metadata

log = logging.getLogger(__name__)


class SealClient:
    """Fetches contract preview markup and offset-indexed metadata.

    Settings are validated on construction, so a bad page limit is rejected
    before any request is issued.
    """

    def __init__(
        self,
        settings: SealSettings,
        transport: Optional[ISealTransport] = None,
        *,
        on_collision: CollisionPolicy = "overwrite",
    ) -> None:
        validate_settings(settings)
        self._settings = settings
        self._transport = transport or SealTransport(settings)
        self._on_collision = on_collision

    @property
    def settings(self) -> SealSettings:
        return self._settings

    async def login(self, username: str | None = None, password: str | None = None) -> str:
        """Log in and use the returned session token for later requests."""
        username = username or self._settings.username
        password = password or self._settings.password
        if not username or not password:
            raise ConfigurationError("Login requires SEAL_USERNAME and SEAL_PASSWORD.")
        token = await self._transport.login(username, password)
        self._transport.set_session_token(token)
        return token

    async def get_preview(self, contract_id: str) -> str:
        with bind_contract(contract_id):
            return await self._transport.get_preview(contract_id)

    async def get_metadata_pages(
        self,
        contract_id: str,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[MetadataGroup]:
        """Raw metadata groups, all pages concatenated in server order."""
        return await fetch_all_pages(
            self._transport.get_metadata_page,
            contract_id,
            offset=offset,
            limit=self._settings.page_limit if limit is None else limit,
        )

    async def get_metadata(self, contract_id: str) -> MetadataIndex:
        """All metadata for a contract, keyed by annotation id."""
        with bind_contract(contract_id):
            return await fetch_metadata(
                self._transport.get_metadata_page,
                contract_id,
                limit=self._settings.page_limit,
                on_collision=self._on_collision,
            )

    async def get_all(self, contract_id: str) -> AggregateResult:
        """Preview markup and indexed metadata, fetched in parallel."""
        with bind_contract(contract_id, page_limit=self._settings.page_limit):
            log.info(f"Fetching preview and metadata for contract {contract_id}")
            return await fetch_all(
                contract_id,
                request_preview=self._transport.get_preview,
                request_page=self._transport.get_metadata_page,
                limit=self._settings.page_limit,
                on_collision=self._on_collision,
            )

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> SealClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
