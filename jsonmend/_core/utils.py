import time
from typing import Optional


class Timer:
    """
    A timer class to record execution time
    and human-readable timestamps using the time module.

    Usage:
        with Timer() as timer:
            repairer.repair(text)
        print(timer.elapsed_time)       # e.g., 0.002
        print(timer.start_timestamp)    # e.g., '2025-05-13 18:42:01'
    """

    def __init__(self):
        self._elapsed_time: Optional[float] = None
        self._start_time: Optional[float] = None
        self.start_timestamp: Optional[str] = None
        self.end_timestamp: Optional[str] = None
        self.start()

    @property
    def elapsed_time(self) -> Optional[float]:
        """Return the last recorded elapsed time, rounded to microseconds."""
        return round(self._elapsed_time, 6) if self._elapsed_time is not None else None

    @staticmethod
    def current_timestamp() -> str:
        """Return the current time as a human-readable string."""
        return time.strftime('%Y-%m-%d %H:%M:%S', time.gmtime())

    def start(self) -> None:
        """Start or restart the timer."""
        self._start_time = time.perf_counter()
        self.start_timestamp = self.current_timestamp()

    def stop(self) -> None:
        """Stop the timer and store the elapsed time and human-readable end timestamp."""
        now = time.perf_counter()
        if self._start_time is not None:
            self._elapsed_time = now - self._start_time
        self.end_timestamp = self.current_timestamp()

    def __enter__(self) -> 'Timer':
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
        return None


def preview(text: str, max_chars: int = 80) -> str:
    """Collapse whitespace in ``text`` and cut it to ``max_chars`` for log lines."""
    compact = ' '.join(text.split())
    if max_chars <= 0 or len(compact) <= max_chars:
        return compact
    return compact[:max_chars] + '...(truncated)'
