import json
from typing import Any, Dict, List, NoReturn, Optional, Union

from pydantic import BaseModel, Field

from jsonmend._core.environment import ParseMode, resolve_parse_mode, settings
from jsonmend._core.error import ParsingError
from jsonmend._core.logging import get_logger
from jsonmend._core.utils import preview

logger = get_logger(__name__)

JSONValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


class ParseFailure(BaseModel):
    """Describes why a candidate could not be decoded."""

    message: str = Field(description='Decoder error message.')
    mode: ParseMode = Field(description='Mode the candidate was decoded with.')
    position: Optional[int] = Field(
        default=None, description='Character offset of the error, if known.'
    )
    line: Optional[int] = Field(default=None, description='1-based line of the error.')
    column: Optional[int] = Field(
        default=None, description='1-based column of the error.'
    )

    @classmethod
    def from_decode_error(cls, error: json.JSONDecodeError, mode: ParseMode):
        return cls(
            message=error.msg,
            mode=mode,
            position=error.pos,
            line=error.lineno,
            column=error.colno,
        )

    def raise_error(self) -> NoReturn:
        """Raise this failure as a ParsingError."""
        location = f' (line {self.line}, column {self.column})' if self.line else ''
        raise ParsingError(
            f'{self.mode.value} parse failed: {self.message}{location}',
            position=self.position,
            line=self.line,
            column=self.column,
        )


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f'{name} is not valid JSON')


def try_parse(
    candidate: str, mode: Optional[Union[str, ParseMode]] = None
) -> Union[JSONValue, ParseFailure]:
    """
    Decode a repaired candidate without raising.

    Args:
        candidate: JSON text produced by the repair pipeline
        mode: ParseMode (or its name) to decode with; defaults to the configured mode

    Returns:
        The decoded value, or a ParseFailure describing the error
    """
    resolved = resolve_parse_mode(mode)
    if not isinstance(candidate, str):
        return ParseFailure(
            message=f'Expected str, got {type(candidate).__name__}', mode=resolved
        )

    try:
        if resolved is ParseMode.STRICT:
            return json.loads(candidate, parse_constant=_reject_constant)
        return _parse_lenient(candidate)
    except json.JSONDecodeError as e:
        logger.debug(
            f'{resolved.value} parse failed at {e.pos}: {e.msg} | '
            f'{preview(candidate, settings.log_preview_chars)}'
        )
        return ParseFailure.from_decode_error(e, resolved)
    except (ValueError, RecursionError) as e:
        logger.debug(f'{resolved.value} parse failed: {e}')
        return ParseFailure(message=str(e) or type(e).__name__, mode=resolved)


def _parse_lenient(candidate: str) -> JSONValue:
    decoder = json.JSONDecoder(strict=False)
    text = candidate.lstrip()
    value, end = decoder.raw_decode(text)
    trailing = text[end:].strip()
    if trailing:
        logger.debug(
            f'Ignoring {len(trailing)} trailing character(s) after the first value'
        )
    return value


def is_failure(result: Any) -> bool:
    """Check whether a try_parse result is a ParseFailure."""
    return isinstance(result, ParseFailure)
