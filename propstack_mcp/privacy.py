"""GDPR data minimization for property records leaving the server."""

import math
from typing import Any, Dict

# Personal data of the listing broker
BROKER_FIELDS = (
    "broker",
    "openimmo_email",
    "openimmo_firstname",
    "openimmo_lastname",
    "openimmo_phone",
)

MEDIA_FIELDS = ("images", "documents", "videos", "360_views")

# 3 decimal places, roughly 111 m
COORDINATE_PRECISION = 3
_COORDINATE_SCALE = 10 ** COORDINATE_PRECISION


def _round_half_up(value: float) -> float:
    return math.floor(value * _COORDINATE_SCALE + 0.5) / _COORDINATE_SCALE


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def sanitize_property(record: Dict[str, Any], remove_media: bool = False) -> Dict[str, Any]:
    """
    Return a copy of a property record that is safe to hand to the caller.

    - Rounds ``lat``/``lng`` to 3 decimal places (~111 m precision)
    - Removes broker contact data
    - Removes media fields when ``remove_media`` is set

    The input record is not modified.
    """
    sanitized = dict(record)

    for coord in ("lat", "lng"):
        if _is_number(sanitized.get(coord)):
            sanitized[coord] = _round_half_up(sanitized[coord])

    for field in BROKER_FIELDS:
        sanitized.pop(field, None)

    if remove_media:
        for field in MEDIA_FIELDS:
            sanitized.pop(field, None)

    return sanitized
