from dataclasses import dataclass
from typing import Iterator, List

QUOTE = '"'
SINGLE_QUOTE = "'"
BACKSLASH = '\\'


@dataclass(frozen=True)
class Segment:
    """A maximal run of text that is either entirely inside or outside a string literal."""

    text: str
    start: int
    in_string: bool

    @property
    def end(self) -> int:
        return self.start + len(self.text)


class StringScan:
    """
    Per-position string classification of a text.

    ``mask[i]`` is 1 when ``text[i]`` belongs to a double-quoted string literal,
    delimiting quotes included, and 0 when it is structural code.
    """

    def __init__(self, text: str, mask: bytearray, ends_in_string: bool):
        self.text = text
        self.mask = mask
        self.ends_in_string = ends_in_string

    def in_string(self, index: int) -> bool:
        """Return whether the character at ``index`` is part of a string literal."""
        return bool(self.mask[index])

    def segments(self) -> Iterator[Segment]:
        """Yield alternating code/string runs covering the whole text in order."""
        if not self.text:
            return
        start = 0
        current = self.mask[0]
        for i in range(1, len(self.text)):
            if self.mask[i] != current:
                yield Segment(self.text[start:i], start, bool(current))
                start = i
                current = self.mask[i]
        yield Segment(self.text[start:], start, bool(current))

    def string_spans(self) -> List[tuple]:
        """Return ``(start, end)`` pairs of every string literal, end exclusive."""
        return [(s.start, s.end) for s in self.segments() if s.in_string]

    def __repr__(self):
        return (
            f'StringScan(length={len(self.text)}, '
            f'strings={len(self.string_spans())}, '
            f'ends_in_string={self.ends_in_string})'
        )


def find_string_end(text: str, start: int, quote: str = QUOTE) -> int:
    """
    Find the end of the string literal opened by the quote at ``start``.

    A backslash consumes the character after it, so a quote preceded by an odd
    run of backslashes never terminates the literal while ``\\\\`` pairs do not
    escape what follows them.

    Args:
        text: Text being scanned
        start: Index of the opening quote
        quote: Delimiter character of the literal

    Returns:
        Index one past the closing quote, or ``len(text)`` if the literal never closes
    """
    i = start + 1
    length = len(text)
    while i < length:
        char = text[i]
        if char == BACKSLASH:
            i += 2
            continue
        if char == quote:
            return i + 1
        i += 1
    return length


def is_closed(text: str, start: int, end: int, quote: str = QUOTE) -> bool:
    """Check whether the literal spanning ``start:end`` ended on a real closing quote."""
    if end - start < 2 or end > len(text) or text[end - 1] != quote:
        return False
    # An escaped final quote means the scan ran off the end of the text.
    backslashes = 0
    j = end - 2
    while j > start and text[j] == BACKSLASH:
        backslashes += 1
        j -= 1
    return backslashes % 2 == 0


def scan_strings(text: str, start: int = 0) -> StringScan:
    """
    Classify every position of ``text`` as inside or outside a string literal.

    Scanning begins at ``start``; positions before it are classified as code.

    Args:
        text: Text to classify
        start: Offset at which scanning starts

    Returns:
        StringScan holding the mask and the end-of-text string state
    """
    length = len(text)
    mask = bytearray(length)
    ends_in_string = False
    i = max(start, 0)
    while i < length:
        if text[i] != QUOTE:
            i += 1
            continue
        end = find_string_end(text, i)
        mask[i:end] = b'\x01' * (end - i)
        if end >= length and not is_closed(text, i, end):
            ends_in_string = True
        i = end
    return StringScan(text, mask, ends_in_string)
