from typing import List, Optional

from jsonmend._core.logging import get_logger
from jsonmend._core.repair.scanner import (
    QUOTE,
    SINGLE_QUOTE,
    find_string_end,
    is_closed,
)
from jsonmend._core.repair.stats import RepairStats, record

logger = get_logger(__name__)


def strip_comments(text: str, stats: Optional[RepairStats] = None) -> str:
    """
    Remove ``//`` line comments and ``/* */`` block comments outside string literals.

    A line comment runs up to, but not including, the newline. A block comment
    without a closing ``*/`` swallows the rest of the text.

    Args:
        text: JSON text that may contain comments
        stats: Optional counters to update

    Returns:
        Text with every comment removed
    """
    out: List[str] = []
    removed = 0
    length = len(text)
    i = 0
    while i < length:
        char = text[i]

        if char == QUOTE:
            end = find_string_end(text, i)
            out.append(text[i:end])
            i = end
            continue

        # Single-quoted literals are converted later, so a '//' in one is content too.
        if char == SINGLE_QUOTE:
            end = find_string_end(text, i, SINGLE_QUOTE)
            if is_closed(text, i, end, SINGLE_QUOTE):
                out.append(text[i:end])
                i = end
                continue

        if char == '/' and i + 1 < length:
            marker = text[i + 1]
            if marker == '/':
                while out and out[-1] in (' ', '\t'):
                    out.pop()
                newline = text.find('\n', i + 2)
                i = length if newline == -1 else newline
                removed += 1
                continue
            if marker == '*':
                close = text.find('*/', i + 2)
                if close == -1:
                    logger.debug('Unterminated block comment, dropping the rest of input')
                    i = length
                else:
                    i = close + 2
                removed += 1
                continue

        out.append(char)
        i += 1

    record(stats, 'comments_removed', removed)
    return ''.join(out)
