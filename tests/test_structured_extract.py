# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: test_structured_extract.py
# -----------------------------------------------------------------------------
from utility.structured_extract import ExtractionStatus, extract_json_object


def test_object_wrapped_in_prose_and_fences_is_parsed():
    text = 'Here you go:\n```json\n{"revised_text": "Hi", "corrections": []}\n```\nThanks!'
    result = extract_json_object(text)

    assert result.status is ExtractionStatus.PARSED
    assert result.data == {"revised_text": "Hi", "corrections": []}
    assert result.raw == text


def test_nested_objects_span_first_to_last_brace():
    text = '{"a": {"b": 1}, "c": [{"d": 2}]}'
    result = extract_json_object(text)
    assert result.status is ExtractionStatus.PARSED
    assert result.data["c"][0]["d"] == 2


def test_no_braces_is_not_found():
    for text in ("plain prose, no json", "", None):
        result = extract_json_object(text)
        assert result.status is ExtractionStatus.NOT_FOUND
        assert result.data is None


def test_broken_json_is_invalid():
    result = extract_json_object('{"revised_text": "unterminated}')
    assert result.status is ExtractionStatus.INVALID
    assert result.data is None
    assert result.error


def test_two_separate_objects_are_invalid():
    # greedy span covers both objects, which is not a single JSON document
    result = extract_json_object('{"a": 1} and then {"b": 2}')
    assert result.status is ExtractionStatus.INVALID
