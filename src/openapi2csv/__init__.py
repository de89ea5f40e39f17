"""openapi2csv -- Flatten OpenAPI specifications into CSV for RAG pipelines.

This package reads an OpenAPI document (JSON or YAML), enumerates every
operation under ``paths``, works out which component schemas each operation
actually references, and writes one CSV row per operation.

Typical workflow::

    openapi2csv -i openapi.yaml -f yaml -o ./output
    openapi2csv -i openapi.json --output-format rag -b 50

Two row layouts are supported: ``default`` (one column per operation field)
and ``rag`` (five columns shaped for RAG ingestion tooling).

Modules:
    app: Typer CLI entry point.
    config: Validation of raw options into a :class:`~openapi2csv.models.ConvertConfig`.
    models: Pydantic models shared across the package.
    pipeline: Batch-driven conversion driver.
    flattener: Operation-to-row flattening for both output modes.
    serializer: Size-bounded JSON encoding of cell values.
    batching: Lazy enumeration of operations in fixed-size batches.
    sink: CSV output sink.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "1.0.0"
