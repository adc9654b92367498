"""Pydantic data models for seal-preview.

Raw API models (``PageEnvelope``, ``MetadataGroup`` ...) mirror the Seal
metadata endpoint.  ``Annotation`` is the derived, offset-anchored form used
when overlaying metadata onto preview markup.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# ── Raw API payload ──────────────────────────────────────────────────


class KeyValuePair(BaseModel):
    """A single ``{name, value}`` attribute entry."""

    name: str
    value: Any = None


class MetadataValue(BaseModel):
    """One extracted value inside a metadata category."""

    value: Any = None
    origin: str = ""
    attributes: list[KeyValuePair]


class MetadataGroup(BaseModel):
    """A metadata category (possibly suffixed ``.Review``) and its values."""

    name: str
    values: list[MetadataValue]


class PageMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_count: int = Field(alias="totalCount", ge=0)


class PageEnvelope(BaseModel):
    """A single page of the metadata list endpoint."""

    items: list[MetadataGroup]
    meta: PageMeta


# ── Derived models ───────────────────────────────────────────────────


class Annotation(BaseModel):
    """A normalized metadata fact anchored to a document offset."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    value: Any = None
    origin: str = ""
    category: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    offset: Optional[int] = None
    in_review: bool = Field(default=False, alias="inReview")


MetadataIndex = dict[str, Annotation]


class AggregateResult(BaseModel):
    """Preview markup plus the indexed metadata for one contract."""

    html: str
    metadata: MetadataIndex = Field(default_factory=dict)
