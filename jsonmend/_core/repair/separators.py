"""
Comma repair.

Both passes walk the text once, skipping string literals with the shared
scanner primitive, and classify everything else into coarse tokens:

- ``opener``: ``{`` or ``[``
- ``closer``: ``}`` or ``]``
- ``value``: a string literal or a bare word (numbers, ``true``, ``None``, ...)
- ``comma`` / ``colon``
- ``other``: any remaining non-whitespace character

Insertion runs over the whole text before removal so that input with both
missing and extra commas converges in one pass of the pipeline.
"""

from typing import List, Optional

from jsonmend._core.logging import get_logger
from jsonmend._core.repair.scanner import QUOTE, find_string_end
from jsonmend._core.repair.stats import RepairStats, record

logger = get_logger(__name__)

OPENERS = '{['
CLOSERS = '}]'
WORD_CHARS = frozenset(
    'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_.+-'
)

OPENER = 'opener'
CLOSER = 'closer'
VALUE = 'value'
COMMA = 'comma'
COLON = 'colon'
OTHER = 'other'


def _word_end(text: str, start: int) -> int:
    i = start
    while i < len(text) and text[i] in WORD_CHARS:
        i += 1
    return i


def insert_missing_commas(text: str, stats: Optional[RepairStats] = None) -> str:
    """
    Insert a comma between adjacent values or structures that lack one.

    A comma is placed directly after a value or closer whose next significant
    token is a value or an opener, so ``}{``, ``][``, ``"a" "b"``, ``1 2`` and
    ``"a" {`` all gain a separator. Whitespace between the tokens is kept.

    Args:
        text: JSON text to fix
        stats: Optional counters to update

    Returns:
        Fixed JSON text
    """
    out: List[str] = []
    inserted = 0
    previous: Optional[str] = None
    length = len(text)
    i = 0
    while i < length:
        char = text[i]

        if char.isspace():
            out.append(char)
            i += 1
            continue

        if char == QUOTE:
            kind, end = VALUE, find_string_end(text, i)
        elif char in WORD_CHARS:
            kind, end = VALUE, _word_end(text, i)
        elif char in OPENERS:
            kind, end = OPENER, i + 1
        elif char in CLOSERS:
            kind, end = CLOSER, i + 1
        elif char == ',':
            kind, end = COMMA, i + 1
        elif char == ':':
            kind, end = COLON, i + 1
        else:
            kind, end = OTHER, i + 1

        if kind in (VALUE, OPENER) and previous in (VALUE, CLOSER):
            _insert_after_last_token(out, ',')
            inserted += 1

        out.append(text[i:end])
        previous = kind
        i = end

    if inserted:
        logger.debug(f'Inserted {inserted} missing comma(s)')
    record(stats, 'commas_inserted', inserted)
    return ''.join(out)


def _insert_after_last_token(out: List[str], separator: str) -> None:
    """Place ``separator`` right after the last non-whitespace chunk of ``out``."""
    j = len(out)
    while j > 0 and out[j - 1].isspace():
        j -= 1
    out.insert(j, separator)


def remove_extra_commas(text: str, stats: Optional[RepairStats] = None) -> str:
    """
    Drop commas that have no value on one side.

    Collapses runs of commas to one, removes commas directly after an opener
    or directly before a closer, and removes a comma dangling at the end of a
    truncated text so the closers appended later produce valid JSON.

    Args:
        text: JSON text to fix
        stats: Optional counters to update

    Returns:
        Fixed JSON text
    """
    out: List[str] = []
    removed = 0
    previous: Optional[str] = None
    pending_comma: Optional[int] = None
    length = len(text)
    i = 0
    while i < length:
        char = text[i]

        if char.isspace():
            out.append(char)
            i += 1
            continue

        if char == ',':
            if previous in (None, OPENER, COMMA):
                removed += 1
            else:
                pending_comma = len(out)
                out.append(char)
                previous = COMMA
            i += 1
            continue

        if char in CLOSERS and pending_comma is not None and previous == COMMA:
            out[pending_comma] = ''
            removed += 1

        if char == QUOTE:
            end = find_string_end(text, i)
        else:
            end = i + 1
        out.append(text[i:end])
        previous = OPENER if char in OPENERS else CLOSER if char in CLOSERS else VALUE
        pending_comma = None
        i = end

    if previous == COMMA and pending_comma is not None:
        out[pending_comma] = ''
        removed += 1

    if removed:
        logger.debug(f'Removed {removed} extra comma(s)')
    record(stats, 'commas_removed', removed)
    return ''.join(out)
