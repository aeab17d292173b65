import json

import pytest
from jsonmend._core.repair.separators import insert_missing_commas, remove_extra_commas
from jsonmend._core.repair.stats import RepairStats


class TestInsertMissingCommas:
    @pytest.mark.parametrize(
        'text, expected',
        [
            ('[{"a": 1}{"b": 2}]', '[{"a": 1},{"b": 2}]'),
            ('[[1] [2]]', '[[1], [2]]'),
            ('[{"a": 1} [2]]', '[{"a": 1}, [2]]'),
            ('[[1]\n{"b": 2}]', '[[1],\n{"b": 2}]'),
            ('{"name": "John" "age": 30}', '{"name": "John", "age": 30}'),
            ('[1 2 3 4 5]', '[1, 2, 3, 4, 5]'),
            ('["a" {"b": 1}]', '["a", {"b": 1}]'),
            ('[{"a": 1} "b"]', '[{"a": 1}, "b"]'),
            ('[-1.5e3 true]', '[-1.5e3, true]'),
        ],
    )
    def test_inserts_between_adjacent_tokens(self, text, expected):
        assert insert_missing_commas(text) == expected

    @pytest.mark.parametrize(
        'text',
        [
            '{"a": 1, "b": [1, 2, {"c": null}]}',
            '[]',
            '{}',
            '"just a string"',
            '[-1, 2.5e-3, true, false, null]',
        ],
    )
    def test_valid_json_unchanged(self, text):
        assert insert_missing_commas(text) == text

    def test_string_content_untouched(self):
        text = '["} {", "1 2"]'
        assert insert_missing_commas(text) == text

    def test_stats_count_insertions(self):
        stats = RepairStats()
        insert_missing_commas('[1 2 3]', stats)
        assert stats.commas_inserted == 2


class TestRemoveExtraCommas:
    @pytest.mark.parametrize(
        'text, expected',
        [
            ('[1,,2]', '[1,2]'),
            ('[1, , ,2]', '[1,  2]'),
            ('[,1]', '[1]'),
            ('{"a": 1,}', '{"a": 1}'),
            ('[1, 2, ]', '[1, 2 ]'),
            ('[1, 2,', '[1, 2'),
            ('{,,"name": "John",,,"age": 30,,,}', '{"name": "John","age": 30}'),
        ],
    )
    def test_removes_extra_commas(self, text, expected):
        assert remove_extra_commas(text) == expected

    def test_commas_inside_strings_untouched(self):
        text = '[",,", ",]"]'
        assert remove_extra_commas(text) == text

    def test_valid_json_unchanged(self):
        text = '{"a": [1, 2], "b": {"c": "d"}}'
        assert remove_extra_commas(text) == text

    def test_stats_count_removals(self):
        stats = RepairStats()
        remove_extra_commas('[,1,,2,]', stats)
        assert stats.commas_removed == 3


def test_insert_then_remove_converges():
    text = '[1 2,, 3,]'
    result = remove_extra_commas(insert_missing_commas(text))
    assert json.loads(result) == [1, 2, 3]
