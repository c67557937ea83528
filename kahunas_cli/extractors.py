"""Primitive parsers for raw attribute strings and JSON fragments."""

import json
import math
import re
from typing import Any, Optional

from kahunas_cli.models import BodyPartVolume, Number, WorkoutMedia

# Leading float literal, the way the platform's own scripts read "90 sec" as 90.
NUMBER_PREFIX = re.compile(r"^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?)")

MEDIA_URL_KEYS = ("url", "src", "file", "link", "media_url")
MEDIA_TYPE_KEYS = ("type", "media_type")
MEDIA_THUMBNAIL_KEYS = ("thumbnail", "thumb")


def _normalize_number(value: float) -> Optional[Number]:
    if not math.isfinite(value):
        return None
    if value.is_integer():
        return int(value)
    return value


def parse_number(value: Any) -> Optional[Number]:
    """Parse a number from an int, float or numeric-looking string.

    Returns None (never 0) when the value is missing or not a finite number.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _normalize_number(value)
    if isinstance(value, str):
        match = NUMBER_PREFIX.match(value)
        if not match:
            return None
        try:
            return _normalize_number(float(match.group(1)))
        except (ValueError, OverflowError):
            return None
    return None


def parse_index(value: Any) -> Optional[int]:
    """Parse a non-negative integer index."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and value >= 0:
            return int(value)
        return None
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def parse_text(value: Any) -> Optional[str]:
    """Return a stripped, non-empty string for text or numeric values."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = parse_number(value)
        return str(number) if number is not None else None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


def parse_json_array(value: Any) -> list:
    """Return a list from a list or a JSON-encoded array string."""
    if isinstance(value, list):
        return value
    if isinstance(value, str) and value.strip():
        try:
            decoded = json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return []
        return decoded if isinstance(decoded, list) else []
    return []


def parse_body_parts(value: Any) -> list[BodyPartVolume]:
    """Parse a body-part list such as [{"body_part_name": "Biceps", "body_volume": "1"}]."""
    body_parts = []
    for entry in parse_json_array(value):
        if not isinstance(entry, dict):
            continue
        name = parse_text(entry.get("body_part_name", entry.get("name")))
        if not name:
            continue
        volume = parse_number(entry.get("body_volume", entry.get("volume")))
        if volume is None:
            body_parts.append(BodyPartVolume(name=name))
        else:
            body_parts.append(BodyPartVolume(name=name, volume=volume))
    return body_parts


def _first_text(record: dict, keys: tuple[str, ...]) -> Optional[str]:
    for key in keys:
        text = parse_text(record.get(key))
        if text:
            return text
    return None


def parse_media(value: Any) -> list[WorkoutMedia]:
    """Parse exercise media from URL strings or media objects."""
    media = []
    for entry in parse_json_array(value):
        if isinstance(entry, str):
            url = entry.strip()
            if url:
                media.append(WorkoutMedia(url=url))
            continue
        if not isinstance(entry, dict):
            continue
        url = _first_text(entry, MEDIA_URL_KEYS)
        if not url:
            continue
        fields = {"url": url}
        media_type = _first_text(entry, MEDIA_TYPE_KEYS)
        if media_type:
            fields["type"] = media_type
        thumbnail = _first_text(entry, MEDIA_THUMBNAIL_KEYS)
        if thumbnail:
            fields["thumbnail"] = thumbnail
        media.append(WorkoutMedia(**fields))
    return media
