"""seal-preview: async client for Seal contract previews and metadata annotations.

Usage::

    from seal_preview import SealClient, SealSettings

    async with SealClient(SealSettings()) as client:
        result = await client.get_all("contract-id")
        result.html, result.metadata
"""

from __future__ import annotations

from seal_preview.config import SealSettings
from seal_preview.core import fetch_all_pages, group_annotations, join, normalize
from seal_preview.exceptions import (
    AnnotationCollisionError,
    AuthenticationError,
    ConfigurationError,
    JoinFailure,
    SealError,
    StructuralError,
    TransportError,
)
from seal_preview.models import (
    AggregateResult,
    Annotation,
    KeyValuePair,
    MetadataGroup,
    MetadataIndex,
    MetadataValue,
    PageEnvelope,
    PageMeta,
)
from seal_preview.providers.seal import SealClient, SealTransport
from seal_preview.services.aggregate import fetch_all

__all__ = [
    "SealSettings",
    "SealClient",
    "SealTransport",
    # Core
    "fetch_all",
    "fetch_all_pages",
    "group_annotations",
    "join",
    "normalize",
    # Models
    "AggregateResult",
    "Annotation",
    "KeyValuePair",
    "MetadataGroup",
    "MetadataIndex",
    "MetadataValue",
    "PageEnvelope",
    "PageMeta",
    # Errors
    "SealError",
    "TransportError",
    "AuthenticationError",
    "StructuralError",
    "AnnotationCollisionError",
    "ConfigurationError",
    "JoinFailure",
]
