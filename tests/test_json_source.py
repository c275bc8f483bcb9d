"""Tests for JSON discovery"""

import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quickgen.core.json_source import JsonCandidate, find_json_value, first_json, parse_value


class TestParseValue:
    """Strict JSON first, relaxed JS literal second"""

    def test_json_array(self):
        assert parse_value("[1, 2]") == [1, 2]

    def test_js_object_literal(self):
        assert parse_value("{name: 'Ada', tags: ['a', 'b']}") == {"name": "Ada", "tags": ["a", "b"]}

    def test_scalar_rejected(self):
        with pytest.raises(ValueError):
            parse_value("42")

    def test_code_block_rejected(self):
        with pytest.raises(ValueError):
            parse_value("{ return [1, 2]; }")

    def test_call_in_block_rejected(self):
        with pytest.raises(ValueError):
            parse_value("{ g() }")

    def test_bare_key_rejected(self):
        with pytest.raises(ValueError):
            parse_value("{a}")

    def test_exponent_number(self):
        assert parse_value("{a: 1e3, b: -2.5E-1}") == {"a": 1000.0, "b": -0.25}

    def test_yaml_booleans_stay_strings(self):
        value = parse_value("{on: 1, yes: off, b: no, c: true}")
        assert value == {"on": 1, "yes": "off", "b": "no", "c": True}

    def test_only_json_scalars_resolve(self):
        value = parse_value("{c: 1_000, d: 2024-01-01, e: null, f: ~}")
        assert value == {"c": "1_000", "d": "2024-01-01", "e": None, "f": "~"}

    def test_plain_keys_are_strings(self):
        assert parse_value("{1: a, true: b, 2.5: c}") == {"1": "a", "true": "b", "2.5": "c"}

    def test_date_like_key_rejected(self):
        with pytest.raises(ValueError):
            parse_value("{2024-01-01: 1}")


class TestFindJsonValue:
    """Backward search from the cursor"""

    def test_object_before_semicolon(self):
        buffer = 'const data = {"a": 1, "b": [true, null]};'
        candidate = find_json_value(buffer)
        assert candidate.value == {"a": 1, "b": [True, None]}
        assert candidate.start == 13
        assert candidate.end == len(buffer) - 1

    def test_relaxed_literal(self):
        candidate = find_json_value("x = {name: 'Ada', tags: ['a', 'b']}")
        assert candidate.value == {"name": "Ada", "tags": ["a", "b"]}

    def test_falls_back_to_inner_value(self):
        candidate = find_json_value("function f() { return [1, 2]; }")
        assert candidate.value == [1, 2]
        assert candidate.text == "[1, 2]"

    def test_skips_unbalanced_closer(self):
        candidate = find_json_value("[1] }")
        assert candidate.value == [1]
        assert (candidate.start, candidate.end) == (0, 3)

    def test_cursor_limits_search(self):
        assert find_json_value("[1] [2]", 3).value == [1]

    def test_nothing_found(self):
        assert find_json_value("no brackets here") is None

    def test_function_body_is_not_a_value(self):
        assert find_json_value("function f() { g() }") is None

    def test_many_rejected_closers(self):
        buffer = "[1] " + "{ g() } " * 200
        candidate = find_json_value(buffer)
        assert candidate.value == [1]
        assert (candidate.start, candidate.end) == (0, 3)


class TestFirstJson:
    """Sequential fallback over candidate strings"""

    def test_first_parseable_wins(self):
        candidate = first_json(["", "not json", "{'a': 1}", "[2]"])
        assert candidate.value == {"a": 1}
        assert candidate.start is None

    def test_none_parse(self):
        assert first_json(["nope", "  "]) is None


class TestJsonCandidate:
    def test_to_json(self):
        assert JsonCandidate(None, None, "[1]", [1]).to_json(indent=None) == "[1]"

    def test_to_dict(self):
        data = JsonCandidate(0, 3, "[1]", [1]).to_dict()
        assert data == {"found": True, "start": 0, "end": 3, "value": [1]}
