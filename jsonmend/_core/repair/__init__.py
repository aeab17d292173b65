from jsonmend._core.repair.brackets import balance_brackets, open_structures
from jsonmend._core.repair.comments import strip_comments
from jsonmend._core.repair.extract import extract_json
from jsonmend._core.repair.literals import normalize_literals
from jsonmend._core.repair.pipeline import (
    REPAIR_STAGES,
    JSONRepairer,
    RepairStage,
)
from jsonmend._core.repair.quotes import (
    convert_single_quotes,
    normalize_quotes,
    quote_unquoted_keys,
)
from jsonmend._core.repair.scanner import StringScan, find_string_end, scan_strings
from jsonmend._core.repair.separators import insert_missing_commas, remove_extra_commas
from jsonmend._core.repair.stats import RepairStats
from jsonmend._core.repair.validation import (
    JSONValue,
    ParseFailure,
    is_failure,
    try_parse,
)

__all__ = [
    'balance_brackets',
    'convert_single_quotes',
    'extract_json',
    'find_string_end',
    'insert_missing_commas',
    'is_failure',
    'JSONRepairer',
    'JSONValue',
    'normalize_literals',
    'normalize_quotes',
    'open_structures',
    'ParseFailure',
    'quote_unquoted_keys',
    'remove_extra_commas',
    'REPAIR_STAGES',
    'RepairStage',
    'RepairStats',
    'scan_strings',
    'StringScan',
    'strip_comments',
    'try_parse',
]
