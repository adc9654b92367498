"""Aggregate fetch: preview markup and indexed metadata in parallel."""

from __future__ import annotations

import logging

from seal_preview.core.join import join
from seal_preview.core.normalize import CollisionPolicy, normalize
from seal_preview.core.pagination import DEFAULT_PAGE_LIMIT, fetch_all_pages, validate_window
from seal_preview.interfaces.transport import IPageRequest, IPreviewRequest
from seal_preview.models import AggregateResult, MetadataIndex

log = logging.getLogger(__name__)


async def fetch_metadata(
    request_page: IPageRequest,
    resource_id: str,
    *,
    limit: int = DEFAULT_PAGE_LIMIT,
    on_collision: CollisionPolicy = "overwrite",
) -> MetadataIndex:
    """Fetch every metadata page for *resource_id* and normalize it."""
    groups = await fetch_all_pages(request_page, resource_id, limit=limit)
    return normalize(groups, on_collision=on_collision)


async def fetch_all(
    resource_id: str,
    *,
    request_preview: IPreviewRequest,
    request_page: IPageRequest,
    limit: int = DEFAULT_PAGE_LIMIT,
    on_collision: CollisionPolicy = "overwrite",
) -> AggregateResult:
    """Fetch preview markup and metadata concurrently.

    Runs under join keys ``"html"`` and ``"metadata"``.  A failure of either
    side surfaces as ``JoinFailure`` keyed by those names, raised only after
    both sides have settled.
    """
    validate_window(0, limit)

    results = await join({
        "html": lambda: request_preview(resource_id),
        "metadata": lambda: fetch_metadata(
            request_page, resource_id, limit=limit, on_collision=on_collision,
        ),
    })
    log.debug(f"Fetched preview and {len(results['metadata'])} annotations for {resource_id}")
    return AggregateResult(html=results["html"], metadata=results["metadata"])
