"""Helpers that turn loosely typed front matter values into metadata fields."""

from __future__ import annotations

import datetime as dt
from typing import Any, List


def coerce_text(value: Any) -> str | None:
    """Return ``value`` as a string, keeping ``None`` for absent fields.

    Values explicitly tagged ``!!timestamp`` load as ``date``/``datetime``
    objects; they are turned back into ISO strings so that dates keep
    sorting lexically.
    """
    if value is None:
        return None
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return str(value)


def coerce_tags(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [text for text in (coerce_text(item) for item in value) if text is not None]
    return [coerce_text(value) or ""]
