import json

import pytest
from jsonmend._core.repair.literals import normalize_literals
from jsonmend._core.repair.stats import RepairStats


@pytest.mark.parametrize(
    'text, expected',
    [
        ('True', 'true'),
        ('[TRUE, False, FALSE]', '[true, false, false]'),
        ('{"v": None}', '{"v": null}'),
        ('{"v": NULL}', '{"v": null}'),
    ],
)
def test_python_and_sql_spellings_are_canonicalized(text, expected):
    assert normalize_literals(text) == expected


def test_object_with_python_literals_parses():
    result = normalize_literals('{"active": True, "deleted": False, "value": None}')
    assert json.loads(result) == {'active': True, 'deleted': False, 'value': None}


@pytest.mark.parametrize(
    'text',
    [
        '[Truest, Falsehood, Nonesuch]',
        '[none, nUll, tRUE]',
        '{"is_True": 1}',
        '[true, false, null]',
    ],
)
def test_non_matching_words_untouched(text):
    assert normalize_literals(text) == text


def test_literals_inside_strings_untouched():
    text = '{"answer": "True", "note": "None of the above", "k": True}'
    assert normalize_literals(text) == '{"answer": "True", "note": "None of the above", "k": true}'


def test_literal_adjacent_to_string_is_replaced():
    assert normalize_literals('["x",None]') == '["x",null]'


def test_stats_count_replacements():
    stats = RepairStats()
    normalize_literals('[True, "True", None]', stats)
    assert stats.literals_normalized == 2
