"""Tests for atproto_openapi.writer."""

from __future__ import annotations

import json
import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from atproto_openapi.exceptions import OutputWriteError
from atproto_openapi.models import OutputFileFormat
from atproto_openapi.writer import atomic_write, serialize_document, write_document

DOCUMENT = {
    "openapi": "3.1.0",
    "info": {"title": "T", "version": "0.0.0"},
    "paths": {"/b": {"get": {}}, "/a": {"post": {}}},
    "tags": [{"name": "é"}],
}


class TestSerializeDocument:
    def test_json_layout(self) -> None:
        text = serialize_document(DOCUMENT)
        assert text.endswith("}\n")
        assert text.startswith('{\n  "openapi": "3.1.0",\n  "info": {\n    "title"')
        assert json.loads(text) == DOCUMENT

    def test_json_keeps_insertion_order(self) -> None:
        text = serialize_document(DOCUMENT)
        assert text.index('"/b"') < text.index('"/a"')

    def test_json_keeps_unicode(self) -> None:
        assert '"é"' in serialize_document(DOCUMENT)

    def test_yaml(self) -> None:
        text = serialize_document(DOCUMENT, OutputFileFormat.YAML)
        assert text.startswith("openapi: 3.1.0\n")
        assert text.endswith("\n")
        assert yaml.safe_load(text) == DOCUMENT
        assert text.index("/b:") < text.index("/a:")


class TestWriteDocument:
    def test_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "spec" / "api.json"
        assert write_document(DOCUMENT, target) == target
        assert json.loads(target.read_text(encoding="utf-8")) == DOCUMENT

    def test_overwrites(self, tmp_path: Path) -> None:
        target = tmp_path / "api.json"
        target.write_text("old", encoding="utf-8")
        write_document(DOCUMENT, target)
        assert target.read_text(encoding="utf-8") == serialize_document(DOCUMENT)

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        write_document(DOCUMENT, tmp_path / "api.json")
        assert os.listdir(tmp_path) == ["api.json"]

    def test_os_error_wrapped(self, tmp_path: Path) -> None:
        with patch("atproto_openapi.writer.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OutputWriteError, match="disk full"):
                write_document(DOCUMENT, tmp_path / "api.json")
        assert not (tmp_path / "api.json").exists()
        assert os.listdir(tmp_path) == []


class TestYamlSharedValues:
    def test_generated_operation_has_no_aliases(self, definition) -> None:
        from atproto_openapi.converters.operations import convert_query

        op = convert_query(
            "com.example.getThing",
            "main",
            definition(type="query", output={"encoding": "application/json"}),
        )
        document = {"paths": {"/com.example.getThing": {"get": op}}}
        text = serialize_document(document, OutputFileFormat.YAML)
        assert "&id" not in text
        assert "*id" not in text


@pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
class TestFileMode:
    @pytest.fixture()
    def umask_022(self):
        previous = os.umask(0o022)
        yield
        os.umask(previous)

    def test_new_file_follows_umask(self, tmp_path: Path, umask_022) -> None:
        target = tmp_path / "api.json"
        write_document(DOCUMENT, target)
        assert stat.S_IMODE(target.stat().st_mode) == 0o644

    def test_existing_file_keeps_its_mode(self, tmp_path: Path, umask_022) -> None:
        target = tmp_path / "api.json"
        target.write_text("old", encoding="utf-8")
        target.chmod(0o640)
        write_document(DOCUMENT, target)
        assert stat.S_IMODE(target.stat().st_mode) == 0o640


def test_atomic_write_cleans_up_on_failure(tmp_path: Path) -> None:
    with patch("atproto_openapi.writer.os.fsync", side_effect=OSError("boom")):
        with pytest.raises(OSError):
            atomic_write(tmp_path / "x.json", "{}")
    assert os.listdir(tmp_path) == []
