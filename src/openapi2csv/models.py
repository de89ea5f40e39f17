"""Canonical Pydantic models shared across openapi2csv modules.

The models fall into two groups:

**Configuration models** -- built once by the CLI shell and handed to the
pipeline as a plain record:
    :class:`InputFormat`, :class:`OutputMode`, and :class:`ConvertConfig`.

**Result models** -- returned by the pipeline driver:
    :class:`ConversionResult`.

All models use Pydantic v2.  ``ConvertConfig`` is frozen because the driver
must see the same options for the whole run.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

OUTPUT_FILENAME = "api_spec.csv"
"""Name of the single CSV file written into the output directory."""


class InputFormat(str, enum.Enum):
    """Declared format of the input document.  Selects the parser."""

    JSON = "json"
    YAML = "yaml"


class OutputMode(str, enum.Enum):
    """Row layout of the produced CSV file.

    ``DEFAULT`` writes one column per operation field (11 columns).
    ``RAG`` writes the five ``code`` / ``metadata_*`` columns expected by
    csv-to-rag ingestion tooling.
    """

    DEFAULT = "default"
    RAG = "rag"


# Older releases of the tool called the rag layout "csv-to-rag".
_OUTPUT_MODE_ALIASES = {"csv-to-rag": OutputMode.RAG}


class ConvertConfig(BaseModel):
    """Options for a single conversion run.

    Example::

        ConvertConfig(
            input="/specs/petstore.yaml",
            output=Path("/tmp/out"),
            input_format="yaml",
            output_mode="rag",
            batch_size=50,
        )
    """

    model_config = ConfigDict(frozen=True)

    input: str = Field(
        default="./spec.json",
        description="Spec source: local file path, http(s) URL, or '-' for stdin",
    )
    output: Path = Field(
        default=Path("./output"),
        description="Directory that receives api_spec.csv",
    )
    input_format: InputFormat = InputFormat.JSON
    output_mode: OutputMode = OutputMode.DEFAULT
    batch_size: int = Field(
        default=100,
        gt=0,
        description="Operations flattened and written per batch",
    )
    delimiter: str = Field(
        default=";",
        min_length=1,
        max_length=1,
        description="CSV field delimiter",
    )
    verbose: bool = False

    @field_validator("input_format", "output_mode", mode="before")
    @classmethod
    def _normalise_choice(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            return _OUTPUT_MODE_ALIASES.get(value, value)
        return value

    @field_validator("delimiter")
    @classmethod
    def _check_delimiter(cls, value: str) -> str:
        if value in ('"', "\r", "\n"):
            raise ValueError(f"{value!r} cannot be used as a CSV delimiter")
        return value

    @property
    def output_file(self) -> Path:
        """Full path of the CSV file inside :attr:`output`."""
        return self.output / OUTPUT_FILENAME


class ConversionResult(BaseModel):
    """Outcome of a completed conversion."""

    success: bool = True
    output_file: Path
    total_endpoints: int = 0
