"""OpenAPI document handling -- load the document and find schema references.

Typical usage::

    from openapi2csv.parser import load_spec, get_relevant_schemas

    spec = load_spec("petstore.yaml", "yaml")
    op = spec["paths"]["/pets"]["get"]
    schemas = get_relevant_schemas(op, spec.get("components", {}).get("schemas", {}))

Sub-modules:

* :mod:`~openapi2csv.parser.loader` -- I/O layer (file, URL, stdin) and
  format-specific parsing.
* :mod:`~openapi2csv.parser.refs` -- ``$ref`` name extraction and the
  per-operation relevant schema set.
"""

from openapi2csv.parser.loader import load_spec
from openapi2csv.parser.refs import extract_refs, get_component_schemas, get_relevant_schemas

__all__ = ["load_spec", "extract_refs", "get_component_schemas", "get_relevant_schemas"]
