# test/test_schema_document.py
import json

import pytest

from flightrec.core import IoError, ParseError, SchemaError
from flightrec.io.schema_document import SchemaDocument


TEXT = """{
  "record_size": 4,
  "signals": [ {"name": "a", "value_type": "int16", "byte_offset": 0} ]
}
"""


def test_load_file_keeps_text_and_path(tmp_path):
    path = tmp_path / "format.json"
    path.write_text(TEXT, encoding="utf-8")

    doc = SchemaDocument()
    assert not doc.has_schema

    schema = doc.load_file(path)
    assert doc.has_schema
    assert doc.schema is schema
    assert doc.text == TEXT
    assert doc.path == path


def test_failed_load_leaves_previous_state(tmp_path):
    doc = SchemaDocument()
    doc.load_text(TEXT)
    before = doc.schema

    with pytest.raises(ParseError):
        doc.load_text("{broken")
    with pytest.raises(SchemaError):
        doc.load_text(json.dumps({"record_size": 0, "signals": []}))
    with pytest.raises(IoError):
        doc.load_file(tmp_path / "missing.json")

    assert doc.schema is before
    assert doc.text == TEXT
    assert doc.path is None


def test_save_writes_text_verbatim(tmp_path):
    path = tmp_path / "format.json"
    path.write_text(TEXT, encoding="utf-8")

    doc = SchemaDocument()
    doc.load_file(path)
    edited = TEXT.replace('"int16"', '"uint16"')
    doc.load_text(edited)
    doc.save()

    assert path.read_text(encoding="utf-8") == edited


def test_save_without_path_fails_and_save_as_sets_it(tmp_path):
    doc = SchemaDocument()
    doc.load_text(TEXT)
    with pytest.raises(IoError):
        doc.save()

    target = tmp_path / "copy.json"
    doc.save_as(target)
    assert doc.path == target
    assert target.read_text(encoding="utf-8") == TEXT


def test_clear():
    doc = SchemaDocument()
    doc.load_text(TEXT)
    doc.clear()
    assert not doc.has_schema
    assert doc.text == ""
    assert doc.path is None
