import logging
from typing import Callable, NamedTuple, Optional, Tuple

from jsonmend._core.environment import settings
from jsonmend._core.logging import get_logger
from jsonmend._core.repair.brackets import balance_brackets
from jsonmend._core.repair.comments import strip_comments
from jsonmend._core.repair.literals import normalize_literals
from jsonmend._core.repair.quotes import normalize_quotes
from jsonmend._core.repair.separators import insert_missing_commas, remove_extra_commas
from jsonmend._core.repair.stats import RepairStats
from jsonmend._core.utils import preview

logger = get_logger(__name__)


class RepairStage(NamedTuple):
    """One step of the repair pipeline: a name for logs and a text-to-text function."""

    name: str
    func: Callable[[str, Optional[RepairStats]], str]


# Order matters: commas are inserted before extra ones are removed, and every
# textual fix happens before brackets are balanced on the final shape.
REPAIR_STAGES: Tuple[RepairStage, ...] = (
    RepairStage('strip_comments', strip_comments),
    RepairStage('normalize_quotes', normalize_quotes),
    RepairStage('insert_missing_commas', insert_missing_commas),
    RepairStage('normalize_literals', normalize_literals),
    RepairStage('remove_extra_commas', remove_extra_commas),
    RepairStage('balance_brackets', balance_brackets),
)


class JSONRepairer:
    """
    Runs malformed JSON text through a fixed sequence of repair stages.

    Each stage receives the previous stage's output and returns a new string.
    The repairer never raises for bad input: a stage that fails unexpectedly is
    logged and skipped, and whatever text exists at the end is returned. Use
    ``try_parse`` on the result to find out whether it is valid JSON.

    Instances keep the statistics of their last call, so give each thread its
    own repairer (the module-level ``repair`` helper creates one per call).
    """

    def __init__(self, stages: Tuple[RepairStage, ...] = REPAIR_STAGES):
        """
        Initialize the repairer.

        Args:
            stages: Ordered stages to apply; defaults to the standard pipeline
        """
        self.stages = tuple(stages)
        self.reset_stats()

    def reset_stats(self) -> None:
        """Reset the repair statistics."""
        self.stats = RepairStats()

    def repair(self, text: str) -> str:
        """
        Repair ``text`` into a JSON candidate.

        Args:
            text: Possibly malformed or truncated JSON text

        Returns:
            Best-effort repaired JSON text
        """
        self.reset_stats()
        if not isinstance(text, str):
            logger.warning(f'Expected str, got {type(text).__name__}; returning empty text')
            return ''

        result = text.strip()
        if not result:
            return result

        with logger.log_operation('json_repair', level=logging.DEBUG):
            for stage in self.stages:
                result = self._run_stage(stage, result)

        changed = self.stats.changed()
        if changed:
            logger.log_table(
                [{'counter': name, 'count': count} for name, count in changed.items()],
                title='Repair stats',
                level=logging.DEBUG,
            )
        return result.strip()

    def _run_stage(self, stage: RepairStage, text: str) -> str:
        try:
            repaired = stage.func(text, self.stats)
        except Exception as e:
            logger.warning(
                f'Repair stage {stage.name} failed with {type(e).__name__}: {e}; '
                'continuing with its input'
            )
            return text

        if settings.log_repair_stages and repaired != text:
            logger.debug(
                f'{stage.name}: {preview(repaired, settings.log_preview_chars)}'
            )
        return repaired

    def __repr__(self):
        names = ', '.join(stage.name for stage in self.stages)
        return f'JSONRepairer(stages=[{names}])'
