"""Flatten one OpenAPI operation into one CSV row.

Two row layouts are supported, selected by
:class:`~openapi2csv.models.OutputMode`:

* ``default`` -- 11 columns: endpoint, method, summary, description, then
  the JSON-encoded parameters, request body, responses, tags, security,
  document-level servers, and the operation's relevant schemas.
* ``rag`` -- 5 columns: ``code`` (the path) plus four JSON metadata blobs.
  ``metadata_small`` stays small enough to embed; the ``metadata_big_*``
  columns carry the bulky payloads.  ``metadata_big_3`` is reserved and
  always ``{}``.

Structured cells are encoded with
:func:`~openapi2csv.serializer.safe_stringify`, so every cell is a bounded
string.  Missing operation fields fall back to an empty list or mapping.
"""

from __future__ import annotations

from typing import Any

from openapi2csv.models import OutputMode
from openapi2csv.parser.refs import get_component_schemas, get_relevant_schemas
from openapi2csv.serializer import safe_stringify, scrub_text

# (field id, header title) pairs, in column order.
DEFAULT_COLUMNS: list[tuple[str, str]] = [
    ("endpoint", "ENDPOINT"),
    ("method", "METHOD"),
    ("summary", "SUMMARY"),
    ("description", "DESCRIPTION"),
    ("parameters", "PARAMETERS"),
    ("requestBody", "REQUEST_BODY"),
    ("responses", "RESPONSES"),
    ("tags", "TAGS"),
    ("security", "SECURITY"),
    ("servers", "SERVERS"),
    ("schemas", "SCHEMAS"),
]

RAG_COLUMNS: list[tuple[str, str]] = [
    ("code", "code"),
    ("metadata_small", "metadata_small"),
    ("metadata_big_1", "metadata_big_1"),
    ("metadata_big_2", "metadata_big_2"),
    ("metadata_big_3", "metadata_big_3"),
]


def columns_for(mode: OutputMode) -> list[tuple[str, str]]:
    """Return the ``(id, title)`` header schema for *mode*."""
    return RAG_COLUMNS if OutputMode(mode) == OutputMode.RAG else DEFAULT_COLUMNS


def flatten_endpoint(
    path: str,
    method: str,
    operation: Any,
    spec: dict[str, Any],
    mode: OutputMode = OutputMode.DEFAULT,
) -> dict[str, str]:
    """Produce the CSV row for one operation.

    Args:
        path: The path template, e.g. ``/pets/{petId}``.
        method: Lower-case HTTP method key from the path item.
        operation: The operation object.  Anything other than a mapping
            (e.g. an empty YAML node) is treated as an empty operation.
        spec: The full document, used for ``servers`` and
            ``components.schemas``.
        mode: Row layout to produce.

    Returns:
        Mapping of field id to cell text, keyed by the ids of
        :func:`columns_for`.
    """
    if not isinstance(operation, dict):
        operation = {}

    schemas = get_relevant_schemas(operation, get_component_schemas(spec))
    servers = _field(spec, "servers", [])

    if OutputMode(mode) == OutputMode.RAG:
        metadata_small = {
            "method": method.upper(),
            "summary": _text(operation.get("summary")),
            "description": _text(operation.get("description")),
            "parameters": _field(operation, "parameters", []),
        }
        metadata_big_1 = {
            "requestBody": _field(operation, "requestBody", {}),
            "responses": _field(operation, "responses", {}),
            "tags": _field(operation, "tags", []),
            "security": _field(operation, "security", []),
            "servers": servers,
        }
        return {
            "code": _text(path),
            "metadata_small": safe_stringify(metadata_small),
            "metadata_big_1": safe_stringify(metadata_big_1),
            "metadata_big_2": safe_stringify(schemas),
            "metadata_big_3": safe_stringify({}),
        }

    return {
        "endpoint": _text(path),
        "method": method.upper(),
        "summary": _text(operation.get("summary")),
        "description": _text(operation.get("description")),
        "parameters": safe_stringify(_field(operation, "parameters", [])),
        "requestBody": safe_stringify(_field(operation, "requestBody", {})),
        "responses": safe_stringify(_field(operation, "responses", {})),
        "tags": safe_stringify(_field(operation, "tags", [])),
        "security": safe_stringify(_field(operation, "security", [])),
        "servers": safe_stringify(servers),
        "schemas": safe_stringify(schemas),
    }


def _field(obj: dict[str, Any], key: str, default: Any) -> Any:
    value = obj.get(key)
    return default if value is None else value


def _text(value: Any) -> str:
    """Plain-text cell value; ``None`` becomes ``''`` and lone surrogates U+FFFD."""
    if value is None:
        return ""
    return scrub_text(value if isinstance(value, str) else str(value))
