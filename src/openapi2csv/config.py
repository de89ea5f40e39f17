"""Turn raw CLI / environment values into a validated :class:`ConvertConfig`.

The CLI shell collects option values (Typer already applies the
``OPENAPI2CSV_*`` environment variables and defaults) and passes them to
:func:`build_config`, which:

* validates them through :class:`~openapi2csv.models.ConvertConfig`,
  translating Pydantic errors into :class:`~openapi2csv.exceptions.ConfigError`;
* resolves the input file and output directory to absolute paths;
* checks the input file exists and is readable;
* creates the output directory and checks it is writable.

All checks run before any row is produced so that a bad invocation never
leaves a half-written CSV file behind.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from openapi2csv.exceptions import ConfigError
from openapi2csv.models import ConvertConfig

ENV_PREFIX = "OPENAPI2CSV_"


def is_remote_source(source: str) -> bool:
    """Return True if *source* is an ``http(s)://`` URL."""
    return source.startswith(("http://", "https://"))


def build_config(**options: Any) -> ConvertConfig:
    """Validate *options* and prepare the filesystem for a conversion.

    Args:
        **options: Field values for :class:`ConvertConfig`.  Unknown keys
            are rejected.

    Returns:
        A frozen config with absolute ``input`` (for local files) and
        ``output`` paths.

    Raises:
        ConfigError: If any option is invalid, the input file is missing or
            unreadable, or the output directory cannot be created or written.
    """
    unknown = set(options) - set(ConvertConfig.model_fields)
    if unknown:
        raise ConfigError(f"Unknown option(s): {', '.join(sorted(unknown))}")

    try:
        config = ConvertConfig(**options)
    except ValidationError as exc:
        raise ConfigError(_format_validation_error(exc)) from exc

    updates: dict[str, Any] = {"output": prepare_output_dir(config.output)}
    if config.input != "-" and not is_remote_source(config.input):
        updates["input"] = str(_check_input_file(config.input))

    return config.model_copy(update=updates)


def _check_input_file(source: str) -> Path:
    """Resolve *source* and make sure it is a readable file."""
    path = Path(source).expanduser().resolve()
    if not path.is_file():
        raise ConfigError(f"Input file not found: {source}")
    if not os.access(path, os.R_OK):
        raise ConfigError(f"Input file is not readable: {path}")
    return path


def prepare_output_dir(directory: Path) -> Path:
    """Create *directory* (with parents) and make sure it is writable."""
    path = directory.expanduser().resolve()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"Cannot create output directory {path}: {exc}") from exc
    if not os.access(path, os.W_OK):
        raise ConfigError(f"Output directory is not writable: {path}")
    return path


def _format_validation_error(exc: ValidationError) -> str:
    """Render a Pydantic error as ``field: message`` lines."""
    lines = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "config"
        lines.append(f"{field}: {err['msg']}")
    return "Invalid configuration -- " + "; ".join(lines)
