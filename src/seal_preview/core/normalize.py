"""Reshape category-grouped metadata into an offset-keyed annotation index.

Each metadata value becomes an ``Annotation`` whose id is
``<category>_<offset>``.  The offset comes from the value's
``scd_start_offset`` attribute; values without one cannot be anchored in the
preview markup and are dropped.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterator, Sequence
from typing import Any, Literal

from pydantic import ValidationError

from seal_preview.exceptions import AnnotationCollisionError, StructuralError
from seal_preview.models import Annotation, MetadataGroup, MetadataIndex, MetadataValue

log = logging.getLogger(__name__)

REVIEW_SUFFIX = ".Review"
OFFSET_ATTRIBUTE = "scd_start_offset"

CollisionPolicy = Literal["overwrite", "raise"]


def split_category(name: str) -> tuple[str, bool]:
    """Return ``(category, in_review)`` with a trailing ``.Review`` stripped."""
    if name.endswith(REVIEW_SUFFIX):
        return name[: -len(REVIEW_SUFFIX)], True
    return name, False


def _coerce_offset(raw: Any) -> int:
    if isinstance(raw, bool):
        raise StructuralError(f"{OFFSET_ATTRIBUTE} must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
    raise StructuralError(f"{OFFSET_ATTRIBUTE} must be an integer, got {raw!r}")


def _as_group(raw: Any) -> MetadataGroup:
    if isinstance(raw, MetadataGroup):
        return raw
    try:
        return MetadataGroup.model_validate(raw)
    except ValidationError as e:
        raise StructuralError(f"Malformed metadata group: {e}") from e


def to_annotation(group_name: str, mdv: MetadataValue) -> Annotation:
    """Build the annotation for one metadata value (offset may be ``None``)."""
    category, in_review = split_category(group_name)
    # Last write wins on duplicate attribute names.
    attributes = {kv.name: kv.value for kv in mdv.attributes}
    raw_offset = attributes.get(OFFSET_ATTRIBUTE)
    offset = None if raw_offset is None else _coerce_offset(raw_offset)
    return Annotation(
        id=f"{category}_{offset}",
        value=mdv.value,
        origin=mdv.origin,
        category=category,
        attributes=attributes,
        offset=offset,
        in_review=in_review,
    )


def iter_annotations(groups: Sequence[Any]) -> Iterator[Annotation]:
    """Yield the anchorable annotations of *groups* in payload order.

    Every group is validated before the first annotation is yielded, so a
    malformed payload never produces partial output.
    """
    validated = [_as_group(g) for g in groups]
    for group in validated:
        for mdv in group.values:
            ann = to_annotation(group.name, mdv)
            if ann.offset is not None:
                yield ann


def normalize(
    groups: Sequence[Any],
    *,
    on_collision: CollisionPolicy = "overwrite",
) -> MetadataIndex:
    """Build the ``{annotation.id: Annotation}`` index from raw metadata groups.

    Args:
        groups: ``MetadataGroup`` models or their raw JSON dicts.
        on_collision: What to do when two annotations share a category and
            offset.  ``"overwrite"`` keeps the later one; ``"raise"`` raises
            ``AnnotationCollisionError``.

    Raises:
        StructuralError: A group or value is missing required fields, or an
            offset is not an integer.
    """
    if on_collision not in ("overwrite", "raise"):
        raise ValueError(f"Unknown collision policy: {on_collision!r}")

    index: MetadataIndex = {}
    for ann in iter_annotations(groups):
        if ann.id in index:
            if on_collision == "raise":
                raise AnnotationCollisionError(ann.id)
            log.debug(f"Annotation {ann.id} overwrites an earlier value")
        index[ann.id] = ann
    return index


def group_annotations(groups: Sequence[Any]) -> dict[str, list[Annotation]]:
    """List-valued variant of ``normalize`` that keeps every duplicate, in order."""
    grouped: dict[str, list[Annotation]] = defaultdict(list)
    for ann in iter_annotations(groups):
        grouped[ann.id].append(ann)
    return dict(grouped)
