import re
from typing import Dict, List, Optional, Tuple

from jsonmend._core.logging import get_logger
from jsonmend._core.repair.scanner import QUOTE, find_string_end

logger = get_logger(__name__)

BARE_FENCE = '```'
# Language tag after an opening fence, e.g. python in ```python
FENCE_LANGUAGE = re.compile(r'[A-Za-z][\w+.-]*')

# Paired start/end markers, checked in order.
JSON_MARKERS: Dict[str, List[Tuple[str, str]]] = {
    'markdown': [
        ('```json', BARE_FENCE),
        ('```JSON', BARE_FENCE),
        ('~~~json', '~~~'),
        (BARE_FENCE, BARE_FENCE),
    ],
    'xml': [('<json>', '</json>')],
}


def extract_json(text: str) -> str:
    """
    Extract the first JSON structure from a text blob.

    Markup (fenced code blocks, ``<json>`` tags) wins; otherwise the span from
    the first ``{`` or ``[`` to its balanced closer is returned. A structure
    that never closes is returned up to the end of the text so the repair
    pipeline can finish it.

    Args:
        text: Input text that may contain JSON

    Returns:
        Extracted JSON text, or the original text if no JSON is found
    """
    if not text:
        return ''

    extracted = _extract_from_markup(text)
    if extracted is not None:
        return extracted

    starts = [idx for idx in (text.find('{'), text.find('[')) if idx != -1]
    if not starts:
        return text

    start = min(starts)
    end = _balanced_end(text, start)
    if end is None:
        logger.debug('JSON block never closes, returning it through end of text')
        return text[start:].strip()
    return text[start:end]


def _extract_from_markup(text: str) -> Optional[str]:
    """Extract JSON from common markup formats like Markdown code blocks or XML tags."""
    for format_type, markers in JSON_MARKERS.items():
        for start_marker, end_marker in markers:
            content = _find_block(text, start_marker, end_marker)
            if content:
                logger.debug(f'Extracted JSON from {format_type} block')
                return content
    return None


def _find_block(text: str, start_marker: str, end_marker: str) -> Optional[str]:
    """
    Return the stripped content of the first block delimited by the markers.

    For the bare fence, blocks whose info string names another language
    (```python, ```yaml) are skipped. An unterminated block runs to the end
    of the text.
    """
    search_from = 0
    while True:
        start_idx = text.find(start_marker, search_from)
        if start_idx == -1:
            return None
        content_start = start_idx + len(start_marker)
        end_idx = text.find(end_marker, content_start)

        language = ''
        if start_marker == BARE_FENCE:
            language = _fence_language(text, content_start)
        if language not in ('', 'json'):
            if end_idx == -1:
                return None
            search_from = end_idx + len(end_marker)
            continue

        if end_idx == -1:
            # An unterminated fence still delimits where the JSON begins.
            return text[content_start:].strip()
        return text[content_start:end_idx].strip()


def _fence_language(text: str, info_start: int) -> str:
    """Return the lower-cased language tag after an opening fence, or '' if there is none."""
    line_end = text.find('\n', info_start)
    if line_end == -1:
        line_end = len(text)
    info = text[info_start:line_end].strip()
    return info.lower() if FENCE_LANGUAGE.fullmatch(info) else ''


def _balanced_end(text: str, start: int) -> Optional[int]:
    """Return the index one past the closer balancing the opener at ``start``."""
    depth = 0
    i = start
    length = len(text)
    while i < length:
        char = text[i]
        if char == QUOTE:
            i = find_string_end(text, i)
            continue
        if char in '{[':
            depth += 1
        elif char in '}]':
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return None
