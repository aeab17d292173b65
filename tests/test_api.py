import json
import logging

import jsonmend
import pytest
from jsonmend import (
    ParseMode,
    repair,
    repair_and_parse,
    repair_and_parse_lenient,
    settings,
)
from jsonmend._core.logging import ROOT_LOGGER_NAME, clear_logging_config
from jsonmend._core.repair.scanner import scan_strings

VALID_DOCUMENTS = [
    '{}',
    '[]',
    '"text"',
    '42',
    'null',
    '{"a": 1, "b": [true, false, null], "c": {"d": "e"}}',
    '[{"url": "http://x.io/a//b", "note": "/* keep */"}, -1.5e10]',
    '{"escaped": "quote \\" and backslash \\\\", "unicode": "\\u00e9"}',
    '{\n  "pretty": [\n    1,\n    2\n  ]\n}',
    '{"words": "True False None NULL", "list": ["a,,b", "[x", "}"]}',
]

TRUNCATED_DOCUMENTS = [
    '{"items": [1, 2, 3',
    '[1, 2, 3, 4, 5',
    '{"a": {"b": [{"c": "d"',
    '{"message": "Hello, wor',
    '[{"a": 1}, {"b":',
    '{"k": "brackets ] } inside", "n": [',
    '[[[["deep"',
    '{"a": [1, 2,',
    '{"config": {"name": "x", "mode"',
]


def _structural_counts(text):
    scan = scan_strings(text)
    code = [ch for i, ch in enumerate(text) if not scan.in_string(i)]
    return code.count('{'), code.count('}'), code.count('['), code.count(']')


def _string_literals(text):
    return [text[start:end] for start, end in scan_strings(text).string_spans()]


@pytest.mark.parametrize('text', VALID_DOCUMENTS)
def test_valid_json_is_unchanged(text):
    assert repair(text) == text
    assert json.loads(repair(text)) == json.loads(text)


@pytest.mark.parametrize('text', VALID_DOCUMENTS)
def test_repair_is_idempotent_on_valid_json(text):
    assert repair(repair(text)) == repair(text)


@pytest.mark.parametrize('text', TRUNCATED_DOCUMENTS)
def test_truncated_input_is_bracket_balanced(text):
    opens, closes, opens_sq, closes_sq = _structural_counts(repair(text))
    assert opens == closes
    assert opens_sq == closes_sq


@pytest.mark.parametrize('text', TRUNCATED_DOCUMENTS)
def test_truncated_input_parses(text):
    assert repair_and_parse(text) is not None


@pytest.mark.parametrize(
    'text',
    [
        '{"a": "// not a comment", "b": "x,,y", "c": "True"} // trailing',
        '{"a": "/* nope */" /* yes */, "b": "None"}',
        '["1 2", "}{" "][",]',
    ],
)
def test_string_content_preserved(text):
    assert _string_literals(repair(text)) == _string_literals(text)


def test_python_literals():
    result = repair_and_parse('{"active": True, "deleted": False, "value": None}')
    assert result == {'active': True, 'deleted': False, 'value': None}


def test_truncated_object():
    assert repair('{"items": [1, 2, 3') == '{"items": [1, 2, 3]}'


def test_truncated_array_root():
    assert repair('[1, 2, 3, 4, 5') == '[1, 2, 3, 4, 5]'


def test_unquoted_keys_and_single_quotes():
    assert repair_and_parse("{name: 'John', age: 30}") == {'name': 'John', 'age': 30}


def test_comma_cleanup():
    text = '{,,"name": "John",,,"age": 30,,,}'
    assert repair_and_parse(text) == {'name': 'John', 'age': 30}
    assert repair_and_parse_lenient(text) == {'name': 'John', 'age': 30}


def test_comments_removed():
    text = """{
        // Line comment
        "a": 1, /* Block comment */
        "b": 2
        /* Multi-line
           comment */
    }"""
    assert repair_and_parse(text) == {'a': 1, 'b': 2}


def test_missing_commas():
    assert repair_and_parse('[{"a": 1} {"b": 2}]') == [{'a': 1}, {'b': 2}]
    assert repair_and_parse('{"name": "John" "age": 30}') == {'name': 'John', 'age': 30}


def test_bare_key_after_missing_comma_stays_unquoted():
    # Keys are quoted before missing commas are inserted, so a bare key that
    # only gains its comma in the later stage is not quoted.
    text = '{"a": 1\n b: 2}'
    assert repair(text) == '{"a": 1,\n b: 2}'
    assert repair_and_parse(text) is None


def test_repair_never_raises():
    for text in ['', '}', ']]]', '"', "'", '/*', ':', ',', '{:}', '\\']:
        assert isinstance(repair(text), str)


def test_strict_returns_none_for_unrepairable_input():
    assert repair_and_parse('this is not json') is None


def test_lenient_tolerates_trailing_text():
    text = '{"a": 1} and then some prose'
    assert repair_and_parse(text) is None
    assert repair_and_parse_lenient(text) == {'a': 1}


def test_mismatched_closer_is_not_corrected():
    assert repair('{"a": [1, 2}') == '{"a": [1, 2}]}'
    assert repair_and_parse('{"a": [1, 2}') is None


def test_extract_then_repair_llm_response():
    text = 'Sure, here is the data:\n```json\n{"status": "ok", "items": [1, 2'
    assert repair_and_parse(jsonmend.extract_json(text)) == {'status': 'ok', 'items': [1, 2]}


class TestInit:
    @pytest.fixture(autouse=True)
    def restore_state(self, monkeypatch):
        monkeypatch.setattr(settings, 'default_parse_mode', settings.default_parse_mode)
        yield
        clear_logging_config()
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(settings.log_level)

    def test_init_sets_parse_mode_and_level(self):
        jsonmend.init(log_level='DEBUG', log_rich=False, parse_mode='lenient')
        assert settings.default_parse_mode is ParseMode.LENIENT
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.DEBUG
        assert jsonmend.try_parse('[1] tail') == [1]

    def test_init_rejects_unknown_parse_mode(self):
        with pytest.raises(jsonmend.InvalidConfig):
            jsonmend.init(parse_mode='sloppy')
