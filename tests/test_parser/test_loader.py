"""Tests for openapi2csv.parser.loader."""

from __future__ import annotations

import io
import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from openapi2csv.exceptions import ConfigError, SpecParseError
from openapi2csv.models import InputFormat
from openapi2csv.parser.loader import _parse_content, load_spec

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# load_spec dispatch
# ---------------------------------------------------------------------------


class TestLoadSpec:
    """Test load_spec reads from each kind of source."""

    def test_loads_json_file(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "petstore.json"), "json")
        assert result["openapi"] == "3.0.3"
        assert result["info"]["title"] == "Petstore API"

    def test_loads_yaml_file(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "petstore.yaml"), InputFormat.YAML)
        assert result["info"]["title"] == "Petstore API"
        assert "/pets/{petId}" in result["paths"]

    def test_defaults_to_json(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "petstore.json"))
        assert "paths" in result

    def test_loads_from_stdin(self) -> None:
        spec_json = json.dumps({"openapi": "3.0.3", "paths": {}})
        with patch("openapi2csv.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(spec_json)
            result = load_spec("-", "json")
        assert result == {"openapi": "3.0.3", "paths": {}}

    def test_loads_from_url(self) -> None:
        mock_response = httpx.Response(
            status_code=200,
            text="openapi: '3.0.3'\npaths: {}\n",
            request=httpx.Request("GET", "https://example.com/spec.yaml"),
        )
        with patch("openapi2csv.parser.loader.httpx.get", return_value=mock_response) as get:
            result = load_spec("https://example.com/spec.yaml", "yaml")
        assert result["openapi"] == "3.0.3"
        get.assert_called_once()

    def test_url_http_error_raises(self) -> None:
        mock_response = httpx.Response(
            status_code=404,
            request=httpx.Request("GET", "https://example.com/missing.json"),
        )
        with patch("openapi2csv.parser.loader.httpx.get", return_value=mock_response):
            with pytest.raises(SpecParseError, match="HTTP 404"):
                load_spec("https://example.com/missing.json", "json")

    def test_url_connection_error_raises(self) -> None:
        request = httpx.Request("GET", "https://example.com/spec.json")
        with patch(
            "openapi2csv.parser.loader.httpx.get",
            side_effect=httpx.ConnectError("refused", request=request),
        ):
            with pytest.raises(SpecParseError, match="Failed to fetch"):
                load_spec("https://example.com/spec.json", "json")

    def test_missing_file_is_config_error(self) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_spec("/nonexistent/path/to/spec.json", "json")

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text("   \n", encoding="utf-8")
        with pytest.raises(SpecParseError, match="empty"):
            load_spec(str(empty), "json")

    def test_unknown_format_is_config_error(self) -> None:
        with pytest.raises(ConfigError, match="Unsupported input format"):
            load_spec(str(FIXTURES_DIR / "petstore.json"), "toml")


# ---------------------------------------------------------------------------
# _parse_content
# ---------------------------------------------------------------------------


class TestParseContent:
    """Test that the declared format alone selects the parser."""

    def test_valid_json(self) -> None:
        assert _parse_content('{"paths": {}}', InputFormat.JSON) == {"paths": {}}

    def test_invalid_json_raises_with_parser_message(self) -> None:
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            _parse_content('{"paths": {', InputFormat.JSON)

    def test_yaml_content_declared_as_json_is_rejected(self) -> None:
        content = textwrap.dedent("""\
            openapi: "3.0.3"
            paths: {}
        """)
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            _parse_content(content, InputFormat.JSON)

    def test_json_content_declared_as_yaml_is_accepted(self) -> None:
        assert _parse_content('{"paths": {}}', InputFormat.YAML) == {"paths": {}}

    def test_invalid_yaml_raises(self) -> None:
        with pytest.raises(SpecParseError, match="Invalid YAML"):
            _parse_content("paths: [unclosed", InputFormat.YAML)

    def test_non_mapping_root_raises(self) -> None:
        with pytest.raises(SpecParseError, match="must be a JSON/YAML object"):
            _parse_content("[1, 2, 3]", InputFormat.JSON)

    def test_null_yaml_document_raises(self) -> None:
        with pytest.raises(SpecParseError, match="empty document"):
            _parse_content("~", InputFormat.YAML)

    def test_deeply_nested_json_raises_parse_error(self) -> None:
        content = "[" * 100_000 + "]" * 100_000
        with pytest.raises(SpecParseError, match="nested too deeply"):
            _parse_content(content, InputFormat.JSON)

    def test_deeply_nested_yaml_raises_parse_error(self) -> None:
        content = "[" * 20_000 + "]" * 20_000
        with pytest.raises(SpecParseError, match="nested too deeply"):
            _parse_content(content, InputFormat.YAML)

    def test_paths_must_be_mapping(self) -> None:
        with pytest.raises(SpecParseError, match="'paths' must be a mapping"):
            _parse_content('{"paths": ["/pets"]}', InputFormat.JSON)

    def test_missing_paths_is_allowed(self) -> None:
        assert _parse_content('{"openapi": "3.1.0"}', InputFormat.JSON) == {"openapi": "3.1.0"}
