"""Size-bounded JSON encoding for CSV cell values.

Every structured cell in the output (parameters, responses, schemas, ...) is
produced by :func:`safe_stringify`.  It never raises and never returns more
than :data:`MAX_STRING_SIZE` characters: oversized values are replaced by a
short summary and unencodable values by an error note, so one pathological
operation cannot abort a conversion or produce a runaway cell.
"""

from __future__ import annotations

import datetime
import json
import re
from typing import Any

MAX_STRING_SIZE = 1024 * 1024
"""Largest encoded value, in characters, written to a cell as-is."""

TOO_LARGE_NOTE = "Object too large, showing summary"
ENCODE_ERROR_NOTE = "Could not stringify object"

# Lone UTF-16 surrogates survive json.loads ("\ud800") but cannot be written as UTF-8.
_SURROGATE_RE = re.compile("[\ud800-\udfff]")


def safe_stringify(value: Any) -> str:
    """Encode *value* as compact JSON, degrading instead of failing.

    Args:
        value: Any in-memory value, typically a dict or list from the
            parsed document.

    Returns:
        The compact JSON encoding of *value* if it fits within
        :data:`MAX_STRING_SIZE` characters.  Otherwise a summary object
        ``{"note", "type", "length"}``.  If encoding fails (cycles created
        by YAML aliases, NaN, unsupported types), an error object
        ``{"error", "reason"}``.
    """
    try:
        text = _dumps(value)
    except (TypeError, ValueError, RecursionError) as exc:
        return _dumps({"error": ENCODE_ERROR_NOTE, "reason": str(exc) or type(exc).__name__})

    if len(text) > MAX_STRING_SIZE:
        return _dumps(
            {
                "note": TOO_LARGE_NOTE,
                "type": _shape_of(value),
                "length": len(value) if hasattr(value, "__len__") else 0,
            }
        )
    return text


def scrub_text(text: str) -> str:
    """Replace lone surrogates in *text* with U+FFFD so the cell encodes as UTF-8."""
    return _SURROGATE_RE.sub("\ufffd", text)


def _dumps(value: Any) -> str:
    return scrub_text(
        json.dumps(
            value,
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
            default=_encode_default,
        )
    )


def _encode_default(value: Any) -> Any:
    """Encode the non-JSON scalars YAML can produce.

    ``yaml.safe_load`` turns unquoted timestamps into ``date`` and
    ``datetime`` objects; they are written as ISO-8601 strings.
    """
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _shape_of(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, str):
        return "string"
    return type(value).__name__
