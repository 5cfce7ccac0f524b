"""Normalization of client-supplied volume metadata.

Book metadata arrives from the browser, which copies it out of the catalog
response. Anything may be missing or wrongly typed, so every payload is mapped
onto a fixed-shape :class:`VolumeInfo` before it is stored. The mapping is
total: it never raises, and the worst case is a placeholder snapshot.
"""

import json
import logging
import math
from collections.abc import Mapping
from enum import Enum

from book_nest.domain.library import (
    UNKNOWN_TITLE,
    ImageLinks,
    IndustryIdentifier,
    VolumeInfo,
)

_logger = logging.getLogger(__name__)

_STRING_FIELDS = {
    "title": "title",
    "subtitle": "subtitle",
    "publisher": "publisher",
    "publishedDate": "published_date",
    "description": "description",
    "language": "language",
}
_NUMERIC_FIELDS = {
    "pageCount": "page_count",
    "averageRating": "average_rating",
    "ratingsCount": "ratings_count",
}
_LIST_FIELDS = {"authors": "authors", "categories": "categories"}


class VolumeInputKind(Enum):
    """How much of a raw payload survives normalization."""

    WELL_FORMED = "well_formed"
    PARTIALLY_MALFORMED = "partially_malformed"
    UNUSABLE = "unusable"


def classify_volume_info(raw: object) -> VolumeInputKind:
    """Classify a raw payload without normalizing it."""
    if not isinstance(raw, Mapping):
        return VolumeInputKind.UNUSABLE
    problems = 0
    for key in _STRING_FIELDS:
        if key in raw and not isinstance(raw[key], str):
            problems += 1
    for key in _NUMERIC_FIELDS:
        if key in raw and raw[key] is not None and _as_number(raw[key]) is None:
            problems += 1
    for key in _LIST_FIELDS:
        value = raw.get(key)
        if key in raw and not (
            isinstance(value, list) and all(isinstance(item, str) for item in value)
        ):
            problems += 1
    if "imageLinks" in raw and not isinstance(raw["imageLinks"], Mapping):
        problems += 1
    if "industryIdentifiers" in raw and not isinstance(
        raw["industryIdentifiers"], list
    ):
        problems += 1
    if not isinstance(raw.get("title"), str) or not raw.get("title"):
        problems += 1
    if problems:
        return VolumeInputKind.PARTIALLY_MALFORMED
    return VolumeInputKind.WELL_FORMED


def sanitize_volume_info(raw: object) -> VolumeInfo:
    """Map any payload onto a storable VolumeInfo. Never raises."""
    try:
        kind = classify_volume_info(raw)
        if kind is VolumeInputKind.UNUSABLE:
            _logger.warning("Unusable volumeInfo payload of type %s", type(raw))
            return VolumeInfo()
        if kind is VolumeInputKind.PARTIALLY_MALFORMED:
            _logger.info("Partially malformed volumeInfo, coercing bad fields")
        return _normalize(raw)
    except Exception:
        _logger.exception("Failed to sanitize volumeInfo: %r", raw)
        return _fallback(raw)


def _normalize(raw: Mapping) -> VolumeInfo:
    strings = {
        attr: raw.get(key) if isinstance(raw.get(key), str) else ""
        for key, attr in _STRING_FIELDS.items()
    }
    numbers = {attr: _as_number(raw.get(key)) for key, attr in _NUMERIC_FIELDS.items()}
    lists = {attr: _as_string_list(raw.get(key)) for key, attr in _LIST_FIELDS.items()}
    if not strings["title"]:
        strings["title"] = UNKNOWN_TITLE
    return VolumeInfo(
        **strings,
        **numbers,
        **lists,
        image_links=_image_links(raw.get("imageLinks")),
        industry_identifiers=_industry_identifiers(raw.get("industryIdentifiers")),
    )


def _fallback(raw: object) -> VolumeInfo:
    title = raw.get("title") if isinstance(raw, Mapping) else None
    if not isinstance(title, str) or not title:
        title = UNKNOWN_TITLE
    return VolumeInfo(title=title)


def _as_number(value: object) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _as_string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _image_links(value: object) -> ImageLinks:
    if not isinstance(value, Mapping):
        return ImageLinks()
    thumbnail = value.get("thumbnail")
    small_thumbnail = value.get("smallThumbnail")
    return ImageLinks(
        thumbnail=thumbnail if isinstance(thumbnail, str) else "",
        small_thumbnail=small_thumbnail if isinstance(small_thumbnail, str) else "",
    )


def _industry_identifiers(value: object) -> list[IndustryIdentifier]:
    """Accept a list of identifier objects or a JSON string holding one."""
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            _logger.warning("Malformed industryIdentifiers string: %r", value)
            return []
    if not isinstance(value, list):
        return []
    return [
        IndustryIdentifier(
            type=_coerce_text(item.get("type")),
            identifier=_coerce_text(item.get("identifier")),
        )
        for item in value
        if isinstance(item, Mapping)
    ]


def _coerce_text(value: object) -> str:
    if not value:
        return ""
    return str(value)
