"""Tests for the pure helpers used by the Streamlit views."""

from vector_lens.ui.details import format_vector_preview
from vector_lens.ui.main_view import _parse_vector_json
from vector_lens.ui.sidebar import _parse_insert_json


def test_vector_preview_truncates():
    preview = format_vector_preview([0.123456, 1, -2.5], n_values=2)
    assert preview == "[0.1235, 1.0000, ...]"


def test_vector_preview_short_vector():
    assert format_vector_preview([0.5]) == "[0.5000]"


def test_parse_vector_json():
    assert _parse_vector_json("[1, 2.5, -3]") == [1.0, 2.5, -3.0]


def test_parse_vector_json_rejects_bad_input():
    assert _parse_vector_json("not json") is None
    assert _parse_vector_json('{"a": 1}') is None
    assert _parse_vector_json('[1, "two"]') is None
    assert _parse_vector_json("[true, 1]") is None


def test_parse_insert_json_object():
    vector, metadata = _parse_insert_json('{"vector": [1, 2], "metadata": {"text_preview": "x"}}')
    assert vector == [1.0, 2.0]
    assert metadata == {"text_preview": "x"}


def test_parse_insert_json_bare_array():
    assert _parse_insert_json("[0.5, -1]") == ([0.5, -1.0], None)


def test_parse_insert_json_rejects_bad_input():
    assert _parse_insert_json("[]") is None
    assert _parse_insert_json("[false]") is None
    assert _parse_insert_json('{"metadata": {}}') is None
    assert _parse_insert_json('{"vector": [1], "metadata": [1]}') is None
    assert _parse_insert_json("{oops") is None
