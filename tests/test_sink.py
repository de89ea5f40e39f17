"""Tests for openapi2csv.sink."""

from __future__ import annotations

import csv
from pathlib import Path

import pytest

from openapi2csv.exceptions import SinkWriteError
from openapi2csv.sink import CsvSink

COLUMNS = [("a", "A"), ("b", "B_TITLE")]


class TestCsvSink:
    """Test header writing, quoting, and repeated appends."""

    def test_writes_header_on_open(self, tmp_path: Path) -> None:
        target = tmp_path / "out.csv"
        with CsvSink(target, COLUMNS, ";"):
            pass
        assert target.read_bytes() == b"A;B_TITLE\r\n"

    def test_rows_follow_header_order(self, tmp_path: Path) -> None:
        target = tmp_path / "out.csv"
        with CsvSink(target, COLUMNS, ";") as sink:
            assert sink.append([{"b": "2", "a": "1"}]) == 1
        assert target.read_bytes() == b"A;B_TITLE\r\n1;2\r\n"

    def test_quotes_delimiter_quotes_and_newlines(self, tmp_path: Path) -> None:
        target = tmp_path / "out.csv"
        row = {"a": 'say "hi"; bye', "b": "line1\nline2"}
        with CsvSink(target, COLUMNS, ";") as sink:
            sink.append([row])

        text = target.read_text(encoding="utf-8")
        assert '"say ""hi""; bye"' in text
        with open(target, encoding="utf-8", newline="") as f:
            parsed = list(csv.reader(f, delimiter=";"))
        assert parsed == [["A", "B_TITLE"], ['say "hi"; bye', "line1\nline2"]]

    def test_json_cells_round_trip(self, tmp_path: Path) -> None:
        target = tmp_path / "out.csv"
        cell = '{"name":"limit","in":"query"}'
        with CsvSink(target, COLUMNS, ",") as sink:
            sink.append([{"a": cell, "b": "[]"}])
        with open(target, encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))
        assert rows == [{"A": cell, "B_TITLE": "[]"}]

    def test_repeated_appends_accumulate(self, tmp_path: Path) -> None:
        target = tmp_path / "out.csv"
        with CsvSink(target, COLUMNS) as sink:
            sink.append([{"a": "1", "b": "1"}])
            sink.append([{"a": "2", "b": "2"}, {"a": "3", "b": "3"}])
            assert sink.rows_written == 3
        assert target.read_text(encoding="utf-8").count("\n") == 4

    def test_reopening_truncates(self, tmp_path: Path) -> None:
        target = tmp_path / "out.csv"
        for _ in range(2):
            with CsvSink(target, COLUMNS) as sink:
                sink.append([{"a": "x", "b": "y"}])
        assert target.read_bytes() == b"A;B_TITLE\r\nx;y\r\n"

    def test_bare_carriage_return_is_quoted(self, tmp_path: Path) -> None:
        target = tmp_path / "out.csv"
        with CsvSink(target, COLUMNS, ";") as sink:
            sink.append([{"a": "one\rtwo", "b": "x"}, {"a": "next", "b": "y"}])

        assert b'"one\rtwo";x\r\n' in target.read_bytes()
        with open(target, encoding="utf-8", newline="") as f:
            parsed = list(csv.reader(f, delimiter=";"))
        assert parsed == [["A", "B_TITLE"], ["one\rtwo", "x"], ["next", "y"]]

    def test_unencodable_text_raises_sink_error(self, tmp_path: Path) -> None:
        with CsvSink(tmp_path / "out.csv", COLUMNS) as sink:
            with pytest.raises(SinkWriteError, match="Failed writing rows"):
                sink.append([{"a": "bad \ud800", "b": ""}])

    def test_unwritable_location_raises(self, tmp_path: Path) -> None:
        with pytest.raises(SinkWriteError, match="Cannot write"):
            CsvSink(tmp_path / "missing" / "out.csv", COLUMNS).open()

    def test_append_before_open_raises(self, tmp_path: Path) -> None:
        with pytest.raises(SinkWriteError, match="not open"):
            CsvSink(tmp_path / "out.csv", COLUMNS).append([])

    def test_close_is_idempotent(self, tmp_path: Path) -> None:
        sink = CsvSink(tmp_path / "out.csv", COLUMNS).open()
        sink.close()
        sink.close()
