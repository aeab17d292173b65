from typing import Dict, Optional

from pydantic import BaseModel, Field


class RepairStats(BaseModel):
    """Counters describing what a single repair call changed."""

    comments_removed: int = Field(default=0, description='Line and block comments dropped.')
    single_quotes_converted: int = Field(
        default=0, description='Single-quoted literals rewritten with double quotes.'
    )
    keys_quoted: int = Field(default=0, description='Bare object keys wrapped in quotes.')
    commas_inserted: int = Field(default=0, description='Missing separators added.')
    commas_removed: int = Field(
        default=0, description='Duplicate, leading, trailing or dangling commas dropped.'
    )
    literals_normalized: int = Field(
        default=0, description='Boolean/null spellings rewritten to canonical form.'
    )
    brackets_closed: int = Field(default=0, description='Closers appended at end of input.')
    strings_closed: int = Field(default=0, description='Unterminated literals closed.')
    values_filled: int = Field(default=0, description='Dangling keys given a null value.')
    unmatched_closers: int = Field(
        default=0, description='Closers that matched no open structure, left in place.'
    )

    def record(self, counter: str, amount: int = 1) -> None:
        """Increment ``counter`` by ``amount``."""
        setattr(self, counter, getattr(self, counter) + amount)

    @property
    def total(self) -> int:
        """Total number of edits, not counting closers that were left alone."""
        return sum(
            value
            for name, value in self.model_dump().items()
            if name != 'unmatched_closers'
        )

    def changed(self) -> Dict[str, int]:
        """Return only the non-zero counters."""
        return {name: value for name, value in self.model_dump().items() if value}


def record(stats: Optional[RepairStats], counter: str, amount: int = 1) -> None:
    """Increment a counter on ``stats`` when statistics are being collected."""
    if stats is not None and amount:
        stats.record(counter, amount)
