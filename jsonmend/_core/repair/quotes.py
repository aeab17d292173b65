import re
from typing import List, Optional

from jsonmend._core.logging import get_logger
from jsonmend._core.repair.scanner import (
    BACKSLASH,
    QUOTE,
    SINGLE_QUOTE,
    find_string_end,
    is_closed,
    scan_strings,
)
from jsonmend._core.repair.stats import RepairStats, record

logger = get_logger(__name__)

# Bare key between '{' or ',' and ':'; applied to code segments only.
UNQUOTED_KEY = re.compile(r'([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)(\s*:)')


def normalize_quotes(text: str, stats: Optional[RepairStats] = None) -> str:
    """
    Rewrite single-quoted literals and bare object keys as double-quoted strings.

    Args:
        text: JSON text to fix
        stats: Optional counters to update

    Returns:
        Text using double quotes only
    """
    return quote_unquoted_keys(convert_single_quotes(text, stats), stats)


def convert_single_quotes(text: str, stats: Optional[RepairStats] = None) -> str:
    """
    Convert single-quoted string literals to double-quoted ones.

    Double-quoted literals are copied untouched. A ``'`` with no closing partner
    is kept as plain text.

    Args:
        text: JSON text to fix
        stats: Optional counters to update

    Returns:
        Fixed JSON text
    """
    if SINGLE_QUOTE not in text:
        return text

    out: List[str] = []
    converted = 0
    length = len(text)
    i = 0
    while i < length:
        char = text[i]
        if char == QUOTE:
            end = find_string_end(text, i)
            out.append(text[i:end])
            i = end
        elif char == SINGLE_QUOTE:
            end = find_string_end(text, i, SINGLE_QUOTE)
            if is_closed(text, i, end, SINGLE_QUOTE):
                out.append(_requote(text[i + 1 : end - 1]))
                converted += 1
                i = end
            else:
                logger.debug(f"Unmatched ' at offset {i}, keeping it as text")
                out.append(char)
                i += 1
        else:
            out.append(char)
            i += 1

    record(stats, 'single_quotes_converted', converted)
    return ''.join(out)


def _requote(content: str) -> str:
    """Wrap single-quoted content in double quotes, fixing the escapes that change meaning."""
    out: List[str] = [QUOTE]
    i = 0
    length = len(content)
    while i < length:
        char = content[i]
        if char == BACKSLASH and i + 1 < length:
            nxt = content[i + 1]
            # \' is not a JSON escape
            out.append(nxt if nxt == SINGLE_QUOTE else char + nxt)
            i += 2
            continue
        if char == QUOTE:
            out.append(BACKSLASH + QUOTE)
        else:
            out.append(char)
        i += 1
    out.append(QUOTE)
    return ''.join(out)


def quote_unquoted_keys(text: str, stats: Optional[RepairStats] = None) -> str:
    """
    Wrap bare identifiers used as object keys in double quotes.

    A key qualifies when it follows ``{`` or ``,`` and precedes ``:``, ignoring
    whitespace. Identifiers inside string literals are never touched.

    Args:
        text: JSON text to fix
        stats: Optional counters to update

    Returns:
        Fixed JSON text
    """
    quoted = 0

    def wrap(match: re.Match) -> str:
        nonlocal quoted
        quoted += 1
        return f'{match.group(1)}"{match.group(2)}"{match.group(3)}'

    parts: List[str] = []
    for segment in scan_strings(text).segments():
        if segment.in_string:
            parts.append(segment.text)
        else:
            parts.append(UNQUOTED_KEY.sub(wrap, segment.text))

    record(stats, 'keys_quoted', quoted)
    return ''.join(parts)
