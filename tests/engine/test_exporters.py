from __future__ import annotations

import csv
import json

import pytest

from listing_aggregator.engine.exporter import CsvExporter, JsonExporter, build_exporter
from listing_aggregator.errors import UnsupportedFormatError


def test_json_exporter_writes_array(tmp_path) -> None:
    path = tmp_path / "out" / "listings.json"
    records = [{"title": "บ้าน", "priceValue": 5, "images": ["a", "b"]}]
    assert JsonExporter().write(records, path)
    assert json.loads(path.read_text(encoding="utf-8")) == records
    assert "บ้าน" in path.read_text(encoding="utf-8")


def test_json_exporter_empty_snapshot(tmp_path) -> None:
    path = tmp_path / "listings.json"
    JsonExporter().write([], path)
    assert json.loads(path.read_text(encoding="utf-8")) == []


def test_json_exporter_overwrites(tmp_path) -> None:
    path = tmp_path / "listings.json"
    path.write_text("stale content that is longer than the new one", encoding="utf-8")
    JsonExporter(indent=0).write([{"a": 1}], path)
    assert json.loads(path.read_text(encoding="utf-8")) == [{"a": 1}]


def test_csv_exporter_header_union_and_quoting(tmp_path) -> None:
    path = tmp_path / "listings.csv"
    records = [
        {"title": 'He said "hi"', "images": ["x.jpg", "y.jpg"], "priceValue": None},
        {"title": "Second", "agentInfo": "Agent, Co."},
    ]
    assert CsvExporter().write(records, path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == '"title","images","priceValue","agentInfo"'
    assert lines[1] == '"He said ""hi""","x.jpg;y.jpg","",""'
    assert lines[2] == '"Second","","","Agent, Co."'

    with path.open(encoding="utf-8", newline="") as stream:
        rows = list(csv.DictReader(stream))
    assert rows[0]["title"] == 'He said "hi"'
    assert rows[1]["agentInfo"] == "Agent, Co."


def test_csv_exporter_custom_delimiter(tmp_path) -> None:
    path = tmp_path / "listings.csv"
    CsvExporter(list_delimiter="|").write([{"images": ["a", "b"]}], path)
    assert path.read_text(encoding="utf-8").splitlines()[1] == '"a|b"'


def test_csv_exporter_empty_snapshot_is_noop(tmp_path) -> None:
    path = tmp_path / "listings.csv"
    assert not CsvExporter().write([], path)
    assert not path.exists()

    path.write_text("previous", encoding="utf-8")
    CsvExporter().write([], path)
    assert path.read_text(encoding="utf-8") == "previous"


def test_build_exporter() -> None:
    assert isinstance(build_exporter("JSON"), JsonExporter)
    csv_exporter = build_exporter("csv", list_delimiter="|")
    assert isinstance(csv_exporter, CsvExporter)
    assert csv_exporter.list_delimiter == "|"
    with pytest.raises(UnsupportedFormatError):
        build_exporter("xml")


def test_json_exporter_keeps_previous_file_when_serialization_fails(tmp_path) -> None:
    path = tmp_path / "listings.json"
    path.write_text('[{"title": "previous"}]', encoding="utf-8")
    with pytest.raises(TypeError):
        JsonExporter().write([{"title": "new", "extra": object()}], path)
    assert json.loads(path.read_text(encoding="utf-8")) == [{"title": "previous"}]
