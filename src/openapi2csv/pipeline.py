"""Conversion driver: load the document, flatten it batch by batch, write CSV.

:func:`convert_spec` runs one complete conversion for a
:class:`~openapi2csv.models.ConvertConfig`::

    load_spec  ->  iter_batches  ->  flatten_endpoint (per endpoint)
                                 ->  CsvSink.append  (per batch)

Batches are processed strictly in document order, and a batch's rows are
handed to the sink before the next batch is flattened, so at most one
batch of rows is resident at a time.  :func:`max_buffered_chars` exposes that
bound so callers can size their runtime environment.
"""

from __future__ import annotations

from typing import Any

from openapi2csv.batching import check_batch_size, iter_batches
from openapi2csv.config import prepare_output_dir
from openapi2csv.flattener import columns_for, flatten_endpoint
from openapi2csv.models import ConversionResult, ConvertConfig, OutputMode
from openapi2csv.output import debug, progress
from openapi2csv.parser.loader import load_spec
from openapi2csv.serializer import MAX_STRING_SIZE
from openapi2csv.sink import CsvSink


def convert_spec(config: ConvertConfig) -> ConversionResult:
    """Convert the document described by *config* into ``api_spec.csv``.

    Args:
        config: Validated run options.

    Returns:
        The output file path and the number of endpoints written.

    Raises:
        ConfigError: If the batch size is invalid, the input file is
            missing, or the output directory cannot be prepared.
        SpecParseError: If the document is not valid in the declared format.
        SinkWriteError: If writing the CSV file fails.  Rows from earlier
            batches remain on disk.
    """
    batch_size = check_batch_size(config.batch_size)
    _log_config(config)

    output_dir = prepare_output_dir(config.output)
    output_file = output_dir / config.output_file.name

    debug("Reading and parsing OpenAPI spec...")
    spec = load_spec(config.input, config.input_format)

    debug(f"Setting up CSV writer for {output_file}...")
    with CsvSink(output_file, columns_for(config.output_mode), config.delimiter) as sink:
        debug("Processing spec in batches...")
        total = process_in_batches(spec, sink, batch_size, config.output_mode)

    debug(f"Successfully converted OpenAPI spec to CSV: {output_file}")
    debug(f"Total endpoints processed: {total}")
    return ConversionResult(success=True, output_file=output_file, total_endpoints=total)


def process_in_batches(
    spec: dict[str, Any],
    sink: CsvSink,
    batch_size: int,
    mode: OutputMode = OutputMode.DEFAULT,
) -> int:
    """Flatten every operation of *spec* and append the rows to *sink*.

    Each batch is written with a single :meth:`CsvSink.append` call.

    Returns:
        Total number of rows written.
    """
    total = 0
    for batch in iter_batches(spec, batch_size):
        rows = [
            flatten_endpoint(ep.path, ep.method, ep.operation, spec, mode)
            for ep in batch
        ]
        total += sink.append(rows)
        progress(f"Processed batch of {len(rows)} endpoints (Total: {total})")
    return total


def max_buffered_chars(batch_size: int, mode: OutputMode = OutputMode.DEFAULT) -> int:
    """Upper bound on structured cell text held in memory for one batch.

    Every JSON cell is capped at :data:`~openapi2csv.serializer.MAX_STRING_SIZE`
    characters; plain-text cells (path, method, summary, description) come
    straight from the document and are not included.
    """
    structured = {
        OutputMode.DEFAULT: 7,
        OutputMode.RAG: 4,
    }[OutputMode(mode)]
    return check_batch_size(batch_size) * structured * MAX_STRING_SIZE


def _log_config(config: ConvertConfig) -> None:
    debug("Configuration:")
    debug(f"- Input file: {config.input}")
    debug(f"- Output directory: {config.output}")
    debug(f"- Format: {config.input_format.value}")
    debug(f"- Output format: {config.output_mode.value}")
    debug(f"- Batch size: {config.batch_size}")
    debug(f"- Delimiter: {config.delimiter}")
    debug(
        "- Peak structured cell buffer: "
        f"{max_buffered_chars(config.batch_size, config.output_mode):,} chars"
    )
