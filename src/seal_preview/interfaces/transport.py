"""Transport protocols consumed by the aggregation core."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IPageRequest(Protocol):
    """Issues one bounded metadata list request."""

    async def __call__(self, resource_id: str, offset: int, limit: int) -> Any:
        """Return a ``PageEnvelope`` (or its raw JSON dict) for the window."""
        ...


@runtime_checkable
class IPreviewRequest(Protocol):
    """Fetches the rendered preview markup of a resource."""

    async def __call__(self, resource_id: str) -> str:
        ...


@runtime_checkable
class ISealTransport(Protocol):
    """Protocol for Seal API transports (HTTP, in-memory fakes, etc.)."""

    async def get_preview(self, resource_id: str) -> str:
        """Return the preview markup as HTML."""
        ...

    async def get_metadata_page(self, resource_id: str, offset: int, limit: int) -> Any:
        """Return one metadata page envelope."""
        ...

    async def login(self, username: str, password: str) -> str:
        """Exchange credentials for a session token."""
        ...

    def set_session_token(self, token: str) -> None:
        ...

    async def close(self) -> None:
        ...
