from typing import Optional

# Environment
from jsonmend._core.environment import ParseMode, settings

# Repair engine
from jsonmend._core.repair import (
    REPAIR_STAGES,
    JSONRepairer,
    ParseFailure,
    RepairStage,
    RepairStats,
    extract_json,
    try_parse,
)
from jsonmend.error import InvalidConfig, JsonMendError, ParsingError
from jsonmend.logging import configure_logging, get_logger
from jsonmend.api import repair, repair_and_parse, repair_and_parse_lenient


def init(
    log_level: Optional[str] = None,
    log_rich: Optional[bool] = None,
    parse_mode: Optional[str] = None,
) -> None:
    """
    Initialize jsonmend with optional overrides.

    Call once at startup to override settings loaded from the environment.
    If not called, logging auto-configures on first use.

    Args:
        log_level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR').
            If None, uses JSONMEND_LOG_LEVEL or 'WARNING'.
        log_rich: Enable rich formatting. If None, uses JSONMEND_LOG_USE_RICH.
        parse_mode: Default mode for try_parse ('strict' or 'lenient').

    Example:
        >>> import jsonmend
        >>> jsonmend.init(log_level='DEBUG', parse_mode='lenient')
    """
    from jsonmend._core.environment import resolve_parse_mode

    if parse_mode is not None:
        settings.default_parse_mode = resolve_parse_mode(parse_mode)
    configure_logging(level=log_level, use_rich=log_rich, force=True)


__all__ = [
    # Initialization
    'init',
    # Repair
    'repair',
    'repair_and_parse',
    'repair_and_parse_lenient',
    'extract_json',
    'JSONRepairer',
    'RepairStage',
    'REPAIR_STAGES',
    'RepairStats',
    # Validation
    'try_parse',
    'ParseFailure',
    'ParseMode',
    # Errors
    'JsonMendError',
    'InvalidConfig',
    'ParsingError',
    # Logging
    'configure_logging',
    'get_logger',
    # Environment
    'settings',
]
