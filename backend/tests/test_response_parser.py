"""Tests for recovering a JSON object from free-form model output."""

import pytest

from services.errors import MalformedStructure, NoStructureFound
from services.response_parser import find_object_span, parse_response, strip_fences


def test_fenced_json_with_braces_in_strings():
    raw = '```json\n{"a": "text with { and } inside", "b": 1}\n```'
    assert parse_response(raw) == {"a": "text with { and } inside", "b": 1}


def test_prose_around_object():
    raw = 'Here is the analysis you asked for:\n{"score": 80, "nested": {"k": [1, 2]}}\nHope this helps!'
    assert parse_response(raw) == {"score": 80, "nested": {"k": [1, 2]}}


def test_leading_json_tag():
    assert parse_response('json\n{"ok": true}') == {"ok": True}


def test_escaped_quotes_inside_strings():
    raw = '{"quote": "she said \\"}\\" loudly", "n": 2}'
    assert parse_response(raw) == {"quote": 'she said "}" loudly', "n": 2}


def test_first_object_wins():
    assert parse_response('{"first": 1} {"second": 2}') == {"first": 1}


def test_no_brace_raises():
    with pytest.raises(NoStructureFound):
        parse_response("I am unable to analyze this resume.")


def test_unbalanced_raises():
    with pytest.raises(NoStructureFound):
        parse_response('{"a": {"b": 1}')


def test_malformed_json_raises():
    with pytest.raises(MalformedStructure) as exc_info:
        parse_response("{'single': 'quotes'}")
    assert exc_info.value.code == "PARSING_ERROR"


def test_strip_fences():
    assert strip_fences("```\n{}\n```") == "{}"


def test_find_object_span_ignores_leading_text():
    text = 'xx {"a": "}"} yy'
    start, end = find_object_span(text)
    assert text[start:end] == '{"a": "}"}'
