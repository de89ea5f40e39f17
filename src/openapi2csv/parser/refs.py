"""Find the component schemas an operation actually depends on.

OpenAPI operations point at shared definitions through ``$ref`` pointers such
as ``{"$ref": "#/components/schemas/Pet"}``.  Rather than inlining those
targets (which can blow up badly on large specs), this module only collects
the referenced *names* so that each CSV row can carry the subset of
``components.schemas`` it needs.

Resolution is deliberately simple: the schema name is the last ``/``-separated
segment of the pointer, matched exactly against the keys of
``components.schemas``.  Pointers into other component sections, external
files, or names missing from ``components.schemas`` are dropped silently.
"""

from __future__ import annotations

from typing import Any

REF_KEY = "$ref"

# Operation fields scanned for references, in row order.
_REFERENCE_SOURCES = ("parameters", "requestBody", "responses")


def extract_refs(node: Any) -> list[str]:
    """Return every schema name referenced anywhere inside *node*.

    Walks mappings and sequences depth-first.  For each mapping entry whose
    key is ``$ref`` and whose value is a string, the text after the last
    ``/`` is collected.

    Args:
        node: Any sub-tree of a parsed document -- a dict, list, or scalar.

    Returns:
        De-duplicated names in order of first occurrence.  Scalars and empty
        containers yield an empty list.

    Example::

        >>> extract_refs({"schema": {"items": {"$ref": "#/components/schemas/Pet"}}})
        ['Pet']
    """
    names: dict[str, None] = {}
    _collect(node, names, set())
    return list(names)


def _collect(node: Any, names: dict[str, None], seen: set[int]) -> None:
    """Depth-first visitor behind :func:`extract_refs`.

    *seen* holds the ids of containers already visited so that YAML aliases
    are scanned once and alias cycles terminate.
    """
    if isinstance(node, dict):
        if id(node) in seen:
            return
        seen.add(id(node))
        for key, value in node.items():
            if key == REF_KEY and isinstance(value, str):
                names.setdefault(value.rsplit("/", 1)[-1], None)
            else:
                _collect(value, names, seen)
    elif isinstance(node, list):
        if id(node) in seen:
            return
        seen.add(id(node))
        for item in node:
            _collect(item, names, seen)


def get_component_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Return ``components.schemas`` from *spec*, or ``{}`` when absent or malformed."""
    components = spec.get("components")
    if not isinstance(components, dict):
        return {}
    schemas = components.get("schemas")
    return schemas if isinstance(schemas, dict) else {}


def get_relevant_schemas(
    operation: dict[str, Any], all_schemas: dict[str, Any]
) -> dict[str, Any]:
    """Build the relevant schema set for one operation.

    ``parameters``, ``requestBody`` and ``responses`` are each scanned once
    with :func:`extract_refs`.  Every referenced name that exists in
    *all_schemas* is kept with its definition; other names are dropped.

    Args:
        operation: A single operation object (e.g. ``paths['/pets']['get']``).
        all_schemas: The document's ``components.schemas`` mapping.

    Returns:
        Mapping of schema name to definition, ordered by first reference
        (parameters, then request body, then responses).
    """
    relevant: dict[str, Any] = {}
    for field in _REFERENCE_SOURCES:
        source = operation.get(field)
        if source is None:
            continue
        for name in extract_refs(source):
            if name in all_schemas and name not in relevant:
                relevant[name] = all_schemas[name]
    return relevant
