"""In-memory Seal transport for testing."""

from __future__ import annotations

import asyncio
from typing import Any

from seal_preview.exceptions import TransportError


def make_group(name: str, offsets: list[Any], *, origin: str = "ml") -> dict[str, Any]:
    """Raw metadata group with one value per offset (``None`` → no offset attribute)."""
    values = []
    for i, offset in enumerate(offsets):
        attributes = [{"name": "confidence", "value": 0.9}]
        if offset is not None:
            attributes.append({"name": "scd_start_offset", "value": offset})
        values.append({"value": f"{name}-{i}", "origin": origin, "attributes": attributes})
    return {"name": name, "values": values}


class FakeSealTransport:
    """Serves a fixed list of metadata groups page by page, no HTTP needed."""

    def __init__(
        self,
        items: list[dict[str, Any]] | None = None,
        *,
        html: str = "<p>contract</p>",
        total_count: int | None = None,
        fail_at_offset: int | None = None,
        fail_preview: bool = False,
        token: str = "fake-token",
    ) -> None:
        self._items = items or []
        self._html = html
        self._total_count = len(self._items) if total_count is None else total_count
        self._fail_at_offset = fail_at_offset
        self._fail_preview = fail_preview
        self._token = token
        self.page_calls: list[tuple[str, int, int]] = []
        self.preview_calls: list[str] = []
        self.login_calls: list[tuple[str, str]] = []
        self.session_token = ""
        self.closed = False

    async def get_preview(self, resource_id: str) -> str:
        self.preview_calls.append(resource_id)
        await asyncio.sleep(0)
        if self._fail_preview:
            raise TransportError("preview failed", status_code=500, body="boom")
        return self._html

    async def get_metadata_page(self, resource_id: str, offset: int, limit: int) -> dict[str, Any]:
        self.page_calls.append((resource_id, offset, limit))
        await asyncio.sleep(0)
        if self._fail_at_offset is not None and offset == self._fail_at_offset:
            raise TransportError(f"page at {offset} failed", status_code=502)
        return {
            "items": self._items[offset:offset + limit],
            "meta": {"totalCount": self._total_count},
        }

    async def login(self, username: str, password: str) -> str:
        self.login_calls.append((username, password))
        return self._token

    def set_session_token(self, token: str) -> None:
        self.session_token = token

    async def close(self) -> None:
        self.closed = True
