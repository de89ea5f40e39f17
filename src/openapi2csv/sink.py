r"""CSV output sink.

:class:`CsvSink` owns the output file for the duration of a run.  Entering
the context truncates the file and writes the header row; each
:meth:`CsvSink.append` call writes one batch of rows and flushes it, so rows
from completed batches are on disk even if a later batch fails.

Rows end with ``\r\n``.  Quoting is minimal: a field is quoted only when it
contains the delimiter, a double quote, ``\r`` or ``\n``, and embedded quotes
are doubled.  ``csv`` only quotes the line-break characters that appear in
the line terminator, hence ``\r\n``.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import IO, Optional

from openapi2csv.exceptions import SinkWriteError


class CsvSink:
    """Append-only writer of delimited rows with a fixed header.

    Args:
        path: File to create (or truncate).
        columns: Ordered ``(field id, header title)`` pairs.  Rows are
            written in this order and must carry every id.
        delimiter: Single-character field delimiter.

    Example::

        with CsvSink(out_dir / "api_spec.csv", DEFAULT_COLUMNS, ";") as sink:
            sink.append(rows)
    """

    def __init__(
        self,
        path: Path,
        columns: list[tuple[str, str]],
        delimiter: str = ";",
    ) -> None:
        self.path = Path(path)
        self.columns = list(columns)
        self.delimiter = delimiter
        self.rows_written = 0
        self._file: Optional[IO[str]] = None
        self._writer: Optional[csv.DictWriter] = None

    def open(self) -> "CsvSink":
        """Create the file and write the header row.

        Raises:
            SinkWriteError: If the file cannot be created or written.
        """
        try:
            self._file = open(self.path, "w", encoding="utf-8", newline="")
            self._writer = csv.DictWriter(
                self._file,
                fieldnames=[field_id for field_id, _ in self.columns],
                delimiter=self.delimiter,
                quoting=csv.QUOTE_MINIMAL,
                lineterminator="\r\n",
                extrasaction="ignore",
            )
            csv.writer(
                self._file,
                delimiter=self.delimiter,
                quoting=csv.QUOTE_MINIMAL,
                lineterminator="\r\n",
            ).writerow([title for _, title in self.columns])
            self._file.flush()
        except (OSError, csv.Error) as exc:
            self.close()
            raise SinkWriteError(f"Cannot write {self.path}: {exc}") from exc
        return self

    def append(self, rows: Iterable[Mapping[str, str]]) -> int:
        """Write *rows* in header order and flush them to disk.

        Returns:
            Number of rows written by this call.

        Raises:
            SinkWriteError: If the sink is not open or the write fails.
        """
        if self._writer is None or self._file is None:
            raise SinkWriteError(f"CSV sink for {self.path} is not open")

        count = 0
        try:
            for row in rows:
                self._writer.writerow(row)
                count += 1
            self._file.flush()
        except (OSError, csv.Error, UnicodeError) as exc:
            raise SinkWriteError(f"Failed writing rows to {self.path}: {exc}") from exc
        self.rows_written += count
        return count

    def close(self) -> None:
        """Close the underlying file.  Safe to call more than once."""
        if self._file is not None:
            try:
                self._file.close()
            except OSError as exc:
                raise SinkWriteError(f"Failed closing {self.path}: {exc}") from exc
            finally:
                self._file = None
                self._writer = None

    def __enter__(self) -> "CsvSink":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()
