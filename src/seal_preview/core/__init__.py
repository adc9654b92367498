"""Aggregation core: parallel join, paged fetch, metadata normalization."""

from __future__ import annotations

from seal_preview.core.join import join
from seal_preview.core.normalize import group_annotations, normalize
from seal_preview.core.pagination import DEFAULT_PAGE_LIMIT, fetch_all_pages

__all__ = [
    "DEFAULT_PAGE_LIMIT",
    "fetch_all_pages",
    "group_annotations",
    "join",
    "normalize",
]
