import io
import logging
import time
from contextlib import contextmanager
from logging import StreamHandler
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from jsonmend._core.environment import settings
from jsonmend._core.utils import Timer

# --- Global State ---
_log_stats: Dict[str, Dict[str, int]] = {}
_session_start_time: float = time.monotonic()
_logging_configured = False
_handlers: List[logging.Handler] = []
DEFAULT_LOG_LEVEL = 'WARNING'
ROOT_LOGGER_NAME = 'jsonmend'
LEVEL_NAMES = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
TABLE_WIDTH = 120


class RichLogger(logging.Logger):
    """
    Package logger that counts emitted records per level and adds helpers for
    timing operations and rendering tabular diagnostics.
    """

    def _log(
        self,
        level,
        msg,
        args,
        exc_info=None,
        extra=None,
        stack_info=False,
        stacklevel=1,
        **kwargs,
    ):
        """Count the record against this logger before handing it on."""
        counts = _log_stats.setdefault(self.name, dict.fromkeys(LEVEL_NAMES, 0))
        level_name = logging.getLevelName(level)
        if level_name in counts:
            counts[level_name] += 1
        super()._log(level, msg, args, exc_info, extra, stack_info, stacklevel)

    def log_table(
        self,
        rows: List[Dict[str, Any]],
        title: Optional[str] = None,
        columns: Optional[List[str]] = None,
        level: int = logging.INFO,
    ) -> None:
        """Render ``rows`` as a rich table and log it as plain text."""
        if not self.isEnabledFor(level):
            return
        if not rows:
            self.log(level, f"{title or 'Table'}: No data to display")
            return

        columns = columns or list(rows[0])
        table = Table(title=title, show_header=True, header_style='bold magenta')
        for column in columns:
            table.add_column(str(column), style='cyan')
        for row in rows:
            table.add_row(*(str(row.get(column, '')) for column in columns))

        # Render off-screen; the handler decides where the text goes.
        console = Console(file=io.StringIO(), record=True, width=TABLE_WIDTH)
        console.print(table)
        self.log(level, '\n' + console.export_text(clear=True).rstrip())

    def log_performance(
        self, operation: str, duration: float, level: int = logging.INFO, **metrics: Any
    ) -> None:
        """Log the duration of ``operation`` with optional ``key=value`` metrics."""
        parts = [f'⚡ Performance | {operation} | Duration: {duration:.4f}s']
        parts.extend(f'{key}={value}' for key, value in metrics.items())
        self.log(level, ' | '.join(parts))

    @contextmanager
    def log_operation(self, operation_name: str, level: int = logging.INFO):
        """
        Time the wrapped block, logging its start, completion and duration.

        Failures are logged at ERROR and re-raised. When ``level`` is disabled
        the block still runs and receives a Timer, but nothing is logged.
        """
        timer = Timer()
        if not self.isEnabledFor(level):
            yield timer
            return

        self.log(level, f'🔹 Starting | {operation_name}')
        timer.start()
        try:
            yield timer
        except Exception as e:
            timer.stop()
            self.error(
                f'❌ Failed   | {operation_name} after {timer.elapsed_time:.4f}s',
                exc_info=e,
            )
            raise
        timer.stop()
        self.log(level, f'✅ Completed | {operation_name} in {timer.elapsed_time:.4f}s')
        self.log_performance(operation_name, timer.elapsed_time, level=level)


def configure_logging(
    level: Optional[str] = None,
    use_rich: Optional[bool] = None,
    format_string: Optional[str] = None,
    file_path: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configures the package's logging system.

    Prioritizes direct function arguments over global settings, which in turn
    are loaded from environment variables or .env files. Handlers are attached
    to the ``jsonmend`` logger only, so applications embedding the package keep
    control of the root logger.

    Args:
        level: Override the log level (e.g., 'DEBUG').
        use_rich: Override the use of rich formatting.
        format_string: Override the log format string.
        file_path: Override the log file path.
        force: If True, will overwrite an existing configuration.
    """
    global _logging_configured, _session_start_time
    init_logger = logging.getLogger(__name__)

    if _logging_configured and not force:
        init_logger.debug('Logging already configured. Skipping reconfiguration.')
        return

    if not _logging_configured:
        _session_start_time = time.monotonic()

    # 1. Resolve configuration, prioritizing direct arguments over global settings.
    final_level = (
        level
        or ('DEBUG' if settings.debug else settings.log_level)
        or DEFAULT_LOG_LEVEL
    )
    # A specific check for `is not None` is needed for bools, as `False` is a valid override.
    final_use_rich = use_rich if use_rich is not None else settings.log_use_rich
    final_format_string = format_string or settings.log_format_string
    final_file_path = file_path or settings.log_file_path

    # 2. Configure the package logger
    logging.setLoggerClass(RichLogger)
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(final_level.upper())
    _remove_handlers(package_logger)

    init_logger.debug(
        f'--- Configuring logging. Level: {final_level}, Rich: {final_use_rich} ---'
    )

    if final_use_rich:
        handler: logging.Handler = RichHandler(
            rich_tracebacks=True, show_path=False, markup=False
        )
        formatter = logging.Formatter('%(message)s', datefmt='[%X]')
    else:
        handler = StreamHandler()
        formatter = logging.Formatter(
            final_format_string
            or '%(asctime)s | %(name)-20s | %(levelname)-8s | %(message)s'
        )

    handler.setFormatter(formatter)
    package_logger.addHandler(handler)
    _handlers.append(handler)

    # Configure file handler if a path is provided
    if final_file_path:
        try:
            Path(final_file_path).parent.mkdir(parents=True, exist_ok=True)
            file_formatter = logging.Formatter(
                final_format_string
                or '%(asctime)s | %(name)s | %(levelname)s | %(message)s'
            )
            file_handler = logging.FileHandler(final_file_path, mode='a')
            file_handler.setFormatter(file_formatter)
            package_logger.addHandler(file_handler)
            _handlers.append(file_handler)
            init_logger.debug(f'Logging also configured for file: {final_file_path}')
        except OSError as e:
            package_logger.error(
                f'Failed to configure file handler at {final_file_path}: {e}'
            )

    _logging_configured = True


def _remove_handlers(package_logger: logging.Logger) -> None:
    for handler in _handlers:
        package_logger.removeHandler(handler)
        handler.close()
    _handlers.clear()


def is_logging_configured() -> bool:
    """Return whether configure_logging has run."""
    return _logging_configured


def clear_logging_config() -> None:
    """Detach the handlers installed by configure_logging and reset the state (useful for testing)."""
    global _logging_configured
    _remove_handlers(logging.getLogger(ROOT_LOGGER_NAME))
    _log_stats.clear()
    _logging_configured = False


def get_logger(name: str) -> RichLogger:
    """
    Gets a logger instance. If logging is not yet configured,
    it applies a safe default configuration first.
    """
    if not _logging_configured:
        configure_logging()
    logging.setLoggerClass(RichLogger)
    return logging.getLogger(name)


def log_summary(level: int = logging.INFO) -> None:
    """Log the session runtime and a table of records emitted per logger and level."""
    summary_logger = get_logger(f'{ROOT_LOGGER_NAME}.summary')
    runtime = time.monotonic() - _session_start_time
    rows = [
        {'logger': name, **counts, 'total': sum(counts.values())}
        for name, counts in sorted(_log_stats.items())
        if any(counts.values())
    ]
    grand_total = sum(row['total'] for row in rows)
    summary_logger.log_table(
        rows,
        title=f'Logging summary: {grand_total} records in {runtime:.2f}s',
        columns=['logger', *LEVEL_NAMES, 'total'],
        level=level,
    )


# CONVENIENCE ACCESS
logger: RichLogger = get_logger(ROOT_LOGGER_NAME)


__all__ = [
    'configure_logging',
    'get_logger',
    'is_logging_configured',
    'clear_logging_config',
    'log_summary',
    'RichLogger',
    'logger',
]
