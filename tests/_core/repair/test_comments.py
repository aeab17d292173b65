import pytest
from jsonmend._core.repair.comments import strip_comments
from jsonmend._core.repair.stats import RepairStats


def test_line_comment_removed_and_newline_kept():
    text = '{\n  "a": 1, // first\n  "b": 2\n}'
    assert strip_comments(text) == '{\n  "a": 1,\n  "b": 2\n}'


def test_block_comment_removed():
    text = '{"a": /* inline */ 1}'
    assert strip_comments(text) == '{"a":  1}'


def test_multiline_block_comment_removed():
    text = '{\n/* Multi-line\n   comment */\n"a": 1}'
    assert strip_comments(text) == '{\n\n"a": 1}'


def test_unterminated_block_comment_drops_rest_of_input():
    assert strip_comments('[1, 2] /* trailing') == '[1, 2] '


def test_line_comment_at_end_of_input():
    assert strip_comments('[1, 2] // done') == '[1, 2]'


@pytest.mark.parametrize(
    'text',
    [
        '{"url": "http://example.com/a"}',
        '{"note": "/* not a comment */"}',
        r'{"tricky": "quote \" // still text"}',
    ],
)
def test_comment_markers_inside_strings_survive(text):
    assert strip_comments(text) == text


def test_comment_markers_inside_single_quoted_literal_survive():
    text = "{'url': 'http://example.com'}"
    assert strip_comments(text) == text


def test_quote_inside_comment_does_not_open_string():
    text = '{"a": 1, /* "b": 2 */ "c": 3}'
    assert strip_comments(text) == '{"a": 1,  "c": 3}'


def test_stats_count_removed_comments():
    stats = RepairStats()
    strip_comments('// one\n[1 /* two */]', stats)
    assert stats.comments_removed == 2


def test_single_slash_is_kept():
    assert strip_comments('{"a": 1/2}') == '{"a": 1/2}'
