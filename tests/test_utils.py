"""
Tests for JSON extraction from model responses.
"""

from sector_experts.utils import extract_first_json


class TestExtractFirstJson:
    """Test tolerant JSON object extraction."""

    def test_bare_json(self):
        assert extract_first_json('{"score": 72}') == {'score': 72}

    def test_markdown_fence(self):
        content = 'Here is the analysis:\n```json\n{"score": 72, "ok": true}\n```\nThanks.'
        assert extract_first_json(content) == {'score': 72, 'ok': True}

    def test_fence_without_language(self):
        assert extract_first_json('```\n{"a": 1}\n```') == {'a': 1}

    def test_tilde_fence(self):
        assert extract_first_json('~~~json\n{"a": 1}\n~~~') == {'a': 1}

    def test_surrounding_prose(self):
        content = 'Sure! {"sectorScore": 64, "nested": {"x": [1, 2]}} Let me know.'
        assert extract_first_json(content) == {'sectorScore': 64, 'nested': {'x': [1, 2]}}

    def test_braces_inside_strings(self):
        content = '{"note": "use {curly} braces", "quote": "say \\"hi\\" {"}'
        assert extract_first_json(content) == {'note': 'use {curly} braces', 'quote': 'say "hi" {'}

    def test_skips_malformed_candidates(self):
        content = 'Format: {placeholder}. Result: {"score": 50}'
        assert extract_first_json(content) == {'score': 50}

    def test_first_object_wins(self):
        assert extract_first_json('{"a": 1} {"b": 2}') == {'a': 1}

    def test_quotes_in_prose_do_not_break_scan(self):
        content = 'The model said "here it is": {"a": 1}'
        assert extract_first_json(content) == {'a': 1}

    def test_no_json(self):
        assert extract_first_json('I cannot analyze this deal.') is None
        assert extract_first_json('') is None
        assert extract_first_json(None) is None

    def test_arrays_are_not_objects(self):
        assert extract_first_json('[1, 2, 3]') is None

    def test_stray_brace_before_json(self):
        content = 'Note: the scale is {0-100. Here is the answer:\n{"sectorScore": 70}'
        assert extract_first_json(content) == {'sectorScore': 70}

    def test_stray_brace_inside_fence(self):
        content = '```json\nscores use {0-100}\n{"a": 1}\n```'
        assert extract_first_json(content) == {'a': 1}

    def test_truncated_response_yields_nothing(self):
        """A cut-off object must not surface one of its nested objects."""
        assert extract_first_json('{"a": {"b": 1}') is None
        assert extract_first_json('{"fit": {"score": 80}, "summary": "Strong te') is None
