"""Sequential paged fetch of the metadata list resource."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from seal_preview.exceptions import ConfigurationError, StructuralError
from seal_preview.interfaces.transport import IPageRequest
from seal_preview.models import MetadataGroup, PageEnvelope

log = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 25


def validate_window(offset: int, limit: int) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ConfigurationError(f"Page limit must be a positive integer, got {limit!r}")
    if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
        raise ConfigurationError(f"Page offset must be a non-negative integer, got {offset!r}")


def _as_envelope(raw: Any) -> PageEnvelope:
    if isinstance(raw, PageEnvelope):
        return raw
    try:
        return PageEnvelope.model_validate(raw)
    except ValidationError as e:
        raise StructuralError(f"Malformed metadata page: {e}") from e


async def fetch_all_pages(
    request_page: IPageRequest,
    resource_id: str,
    offset: int = 0,
    limit: int = DEFAULT_PAGE_LIMIT,
) -> list[MetadataGroup]:
    """Fetch every page of a list resource and concatenate the items in order.

    Pages are requested one after another starting at *offset*.  A further
    page is requested while the envelope's ``totalCount`` exceeds
    ``offset + limit``.  The first failing request aborts the whole fetch and
    its exception propagates unchanged; no partial result is returned.

    Raises:
        ConfigurationError: *limit* is not positive or *offset* is negative.
            Raised before any request is issued.
        StructuralError: A page response does not have the envelope shape.
    """
    validate_window(offset, limit)

    items: list[MetadataGroup] = []
    requests = 0
    while True:
        log.debug(f"Requesting metadata page for {resource_id}: offset={offset} limit={limit}")
        envelope = _as_envelope(await request_page(resource_id, offset, limit))
        requests += 1
        items.extend(envelope.items)

        if envelope.meta.total_count <= offset + limit:
            break
        offset += limit

    log.debug(f"Fetched {len(items)} metadata groups for {resource_id} in {requests} request(s)")
    return items
