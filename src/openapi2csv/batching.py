"""Enumerate a document's operations in fixed-size batches.

:func:`iter_batches` walks ``paths`` in document order and yields lists of
:class:`Endpoint` triples.  Only one batch is materialised at a time, which
bounds the number of rows the pipeline holds in memory regardless of how many
operations the document declares.

The generator is single-use; call :func:`iter_batches` again to restart the
enumeration from the document root.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from openapi2csv.exceptions import ConfigError

# HTTP methods recognised as operations inside a path item. Other keys
# (parameters, servers, summary, x-* extensions) are ignored.
HTTP_METHODS = ("get", "post", "put", "delete", "patch", "options", "head")


@dataclass(frozen=True)
class Endpoint:
    """One (path, method, operation) triple taken from ``paths``."""

    path: str
    method: str
    operation: Any


def iter_endpoints(spec: dict[str, Any]) -> Iterator[Endpoint]:
    """Yield every operation in *spec* in document order.

    Path items that are not mappings are skipped.
    """
    paths = spec.get("paths") or {}
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        for method, operation in path_item.items():
            if method in HTTP_METHODS:
                yield Endpoint(path=str(path), method=method, operation=operation)


def iter_batches(spec: dict[str, Any], batch_size: int) -> Iterator[list[Endpoint]]:
    """Yield the operations of *spec* in lists of at most *batch_size*.

    Every batch except possibly the last holds exactly *batch_size*
    endpoints.  A document without operations yields nothing.

    Args:
        spec: The parsed OpenAPI document.
        batch_size: Maximum endpoints per batch.  Must be a positive int.

    Raises:
        ConfigError: If *batch_size* is not a positive integer.  Raised on
            the first ``next()`` call, before any batch is produced.
    """
    check_batch_size(batch_size)

    batch: list[Endpoint] = []
    for endpoint in iter_endpoints(spec):
        batch.append(endpoint)
        if len(batch) >= batch_size:
            yield batch
            batch = []

    if batch:
        yield batch


def check_batch_size(batch_size: Any) -> int:
    """Return *batch_size* if it is a positive int, else raise :class:`ConfigError`."""
    if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size <= 0:
        raise ConfigError(f"Batch size must be a positive integer (got {batch_size!r})")
    return batch_size
