"""
Public repair API.

    >>> from jsonmend import repair, repair_and_parse
    >>> repair('{"items": [1, 2, 3')
    '{"items": [1, 2, 3]}'
    >>> repair_and_parse("{name: 'John', age: 30}")
    {'name': 'John', 'age': 30}

``repair`` always returns a string. The ``repair_and_parse*`` helpers return
``None`` when the candidate cannot be decoded; since a candidate of ``null``
also decodes to ``None``, use ``try_parse`` when the two must be told apart.
"""

from typing import Optional

from jsonmend._core.environment import ParseMode
from jsonmend._core.repair.pipeline import JSONRepairer
from jsonmend._core.repair.validation import JSONValue, ParseFailure, try_parse


def repair(text: str) -> str:
    """
    Repair malformed or truncated JSON text.

    Args:
        text: Text intended to be JSON

    Returns:
        Best-effort repaired candidate; never raises
    """
    return JSONRepairer().repair(text)


def _repair_and_parse(text: str, mode: ParseMode) -> Optional[JSONValue]:
    result = try_parse(repair(text), mode)
    if isinstance(result, ParseFailure):
        return None
    return result


def repair_and_parse(text: str) -> Optional[JSONValue]:
    """
    Repair ``text`` and decode it strictly.

    Args:
        text: Text intended to be JSON

    Returns:
        Decoded value, or None when the repaired candidate is still invalid
    """
    return _repair_and_parse(text, ParseMode.STRICT)


def repair_and_parse_lenient(text: str) -> Optional[JSONValue]:
    """
    Repair ``text`` and decode it leniently.

    Trailing content after the first value, raw control characters inside
    strings and ``NaN``/``Infinity`` are tolerated.

    Args:
        text: Text intended to be JSON

    Returns:
        Decoded value, or None when the repaired candidate is still invalid
    """
    return _repair_and_parse(text, ParseMode.LENIENT)
