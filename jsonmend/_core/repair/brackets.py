from typing import List, NamedTuple, Optional

from jsonmend._core.logging import get_logger
from jsonmend._core.repair.scanner import BACKSLASH, QUOTE, scan_strings
from jsonmend._core.repair.stats import RepairStats, record

logger = get_logger(__name__)

CLOSER_FOR = {'{': '}', '[': ']'}
OPENER_FOR = {'}': '{', ']': '['}
OPENERS = '{['
CLOSERS = '}]'
KEY_PREFIXES = ('{', ',')


class StackScan(NamedTuple):
    """Structural state at the end of a text."""

    stack: List[str]
    unmatched: List[int]
    # Last non-whitespace character outside strings; QUOTE when a string came last.
    last_significant: str
    # Last significant character before the final string literal started.
    before_last_string: str
    ends_in_string: bool


def open_structures(text: str) -> List[str]:
    """
    Return the stack of structures still open at the end of ``text``.

    Closers outside strings pop the stack only when they match its top; a
    mismatched closer is ignored.

    Args:
        text: JSON text to inspect

    Returns:
        Opening characters, outermost first
    """
    return _scan_stack(text).stack


def _scan_stack(text: str) -> StackScan:
    scan = scan_strings(text)
    stack: List[str] = []
    unmatched: List[int] = []
    last_significant = ''
    before_last_string = ''
    for i, char in enumerate(text):
        if scan.mask[i]:
            if last_significant != QUOTE:
                before_last_string = last_significant
            last_significant = QUOTE
            continue
        if char.isspace():
            continue
        last_significant = char
        if char in OPENERS:
            stack.append(char)
        elif char in CLOSERS:
            if stack and stack[-1] == OPENER_FOR[char]:
                stack.pop()
            else:
                unmatched.append(i)
    return StackScan(
        stack, unmatched, last_significant, before_last_string, scan.ends_in_string
    )


def balance_brackets(text: str, stats: Optional[RepairStats] = None) -> str:
    """
    Append the closers a truncated text is missing.

    An unterminated string literal is closed first. Inside an object, a key
    left waiting for its value receives ``null`` (``{"a":`` and ``{"a"`` both
    become ``{"a": null}``). Then one closer per open structure is appended,
    innermost first. Mismatched closers are reported but not corrected.

    Args:
        text: JSON text to fix
        stats: Optional counters to update

    Returns:
        Text whose structures are all closed
    """
    state = _scan_stack(text)

    if state.unmatched:
        logger.warning(
            f'Found {len(state.unmatched)} closing bracket(s) without a matching '
            f'opener at offset(s) {state.unmatched[:5]}, leaving them in place'
        )
        record(stats, 'unmatched_closers', len(state.unmatched))

    result = text
    if state.ends_in_string:
        result = _close_string(result)
        record(stats, 'strings_closed')

    filler = _missing_value(state)
    if filler:
        logger.debug('Input ends on a key, filling in a null value')
        result += filler
        record(stats, 'values_filled')

    if state.stack:
        closers = ''.join(CLOSER_FOR[opener] for opener in reversed(state.stack))
        logger.debug(f'Closing {len(state.stack)} open structure(s) with {closers!r}')
        result += closers
        record(stats, 'brackets_closed', len(state.stack))

    return result


def _missing_value(state: StackScan) -> str:
    """Return the text that completes a dangling key in an open object, if any."""
    if not state.stack or state.stack[-1] != '{':
        return ''
    if state.last_significant == ':':
        return ' null'
    if state.last_significant == QUOTE and state.before_last_string in KEY_PREFIXES:
        return ': null'
    return ''


def _close_string(text: str) -> str:
    """Terminate a trailing string literal, dropping a half-written escape."""
    trailing = len(text) - len(text.rstrip(BACKSLASH))
    if trailing % 2:
        text = text[:-1]
    return text + QUOTE
