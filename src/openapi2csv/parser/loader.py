"""Load OpenAPI documents from a local file, a URL, or stdin.

This module handles all I/O for fetching the raw document and converting it
into a Python dictionary.  Unlike auto-detecting loaders, the caller declares
the format (``json`` or ``yaml``) and only that parser is tried, so a JSON
file with a typo is reported as a JSON error rather than a confusing YAML one.

The whole document is read into memory before processing starts.

The single public function is :func:`load_spec`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from openapi2csv.exceptions import ConfigError, SpecParseError
from openapi2csv.models import InputFormat


def load_spec(source: str, fmt: InputFormat | str = InputFormat.JSON) -> dict[str, Any]:
    """Load an OpenAPI document from a file path, URL, or stdin ('-').

    Args:
        source: A file path, an http(s) URL, or '-' for stdin.
        fmt: Declared document format, ``json`` or ``yaml``.

    Returns:
        The parsed document as a dictionary.

    Raises:
        ConfigError: If a local file does not exist or cannot be read.
        SpecParseError: If the content cannot be fetched or is not valid
            in the declared format.
    """
    try:
        fmt = InputFormat(fmt)
    except ValueError:
        raise ConfigError(f"Unsupported input format: {fmt!r} (expected json or yaml)") from None

    if source == "-":
        content = _read_stdin()
    elif source.startswith(("http://", "https://")):
        content = _read_url(source)
    else:
        content = _read_file(source)

    if not content.strip():
        raise SpecParseError(f"Spec is empty: {source}")

    return _parse_content(content, fmt)


def _read_stdin() -> str:
    """Read the document from stdin."""
    try:
        return sys.stdin.read()
    except Exception as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc


def _read_url(url: str) -> str:
    """Fetch the document from *url*.

    Raises:
        SpecParseError: On transport failures or HTTP error statuses.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc
    return response.text


def _read_file(path: str) -> str:
    """Read the document from a local file."""
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigError(f"Input file not found: {path}")

    try:
        return file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read input file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SpecParseError(f"Input file {path} is not valid UTF-8: {exc}") from exc


def _parse_content(content: str, fmt: InputFormat) -> dict[str, Any]:
    """Parse *content* with the parser for *fmt*.

    Raises:
        SpecParseError: If parsing fails, the root is not a mapping, or
            ``paths`` is present but not a mapping.
    """
    if fmt == InputFormat.YAML:
        try:
            result = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise SpecParseError(f"Invalid YAML: {exc}") from exc
        except RecursionError as exc:
            raise SpecParseError("Invalid YAML: document is nested too deeply") from exc
    else:
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            raise SpecParseError(f"Invalid JSON: {exc}") from exc
        except RecursionError as exc:
            raise SpecParseError("Invalid JSON: document is nested too deeply") from exc

    if not isinstance(result, dict):
        raise SpecParseError(
            "Spec must be a JSON/YAML object (got "
            f"{type(result).__name__ if result is not None else 'empty document'})"
        )

    paths = result.get("paths")
    if paths is not None and not isinstance(paths, dict):
        raise SpecParseError(
            f"'paths' must be a mapping of path strings to path items (got {type(paths).__name__})"
        )

    return result
