import re
from typing import Dict, List, Optional

from jsonmend._core.repair.scanner import scan_strings
from jsonmend._core.repair.stats import RepairStats, record

CANONICAL_LITERALS: Dict[str, str] = {
    'True': 'true',
    'TRUE': 'true',
    'False': 'false',
    'FALSE': 'false',
    'None': 'null',
    'NULL': 'null',
}

LITERAL_PATTERN = re.compile(
    r'\b(' + '|'.join(map(re.escape, CANONICAL_LITERALS)) + r')\b'
)


def normalize_literals(text: str, stats: Optional[RepairStats] = None) -> str:
    """
    Map Python/SQL style boolean and null spellings to JSON literals.

    Matching is case-sensitive and whole-word, so ``Truest`` or ``none`` are
    left alone, and text inside string literals is never touched.

    Args:
        text: JSON text to fix
        stats: Optional counters to update

    Returns:
        Fixed JSON text
    """
    replaced = 0

    def canonical(match: re.Match) -> str:
        nonlocal replaced
        replaced += 1
        return CANONICAL_LITERALS[match.group(1)]

    parts: List[str] = []
    for segment in scan_strings(text).segments():
        if segment.in_string:
            parts.append(segment.text)
        else:
            parts.append(LITERAL_PATTERN.sub(canonical, segment.text))

    record(stats, 'literals_normalized', replaced)
    return ''.join(parts)
