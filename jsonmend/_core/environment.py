import os
from enum import Enum
from typing import Any, Optional, Union

from dotenv import find_dotenv
from pydantic import BaseModel, Field, GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema
from pydantic_settings import BaseSettings, SettingsConfigDict

from jsonmend._core.error import InvalidConfig


###################################
# .env File Loading Logic
# 1. It first checks for an environment variable `ENV_PATH` for an explicit file path.
# 2. If `ENV_PATH` is not set or the file doesn't exist, it falls back to `find_dotenv()`,
#    which automatically searches for a `.env` file in the current and parent directories.
###################################


env_path_from_var = os.getenv('ENV_PATH')
dotenv_path = (
    env_path_from_var
    if env_path_from_var and os.path.exists(env_path_from_var)
    else find_dotenv(usecwd=True)
)


class ParseMode(str, Enum):
    """
    How a repaired candidate is handed to the JSON decoder.

    Available modes:
        - strict: standard decoding; trailing content, control characters in
          strings and NaN/Infinity are all rejected
        - lenient: the first complete value is decoded, trailing content is
          ignored, control characters and NaN/Infinity are accepted
    """

    STRICT = 'strict'
    LENIENT = 'lenient'

    @classmethod
    def _missing_(cls, value: Any) -> Optional['ParseMode']:
        # Mode names are matched case-insensitively, so 'LENIENT' from an env var works.
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    def __str__(self) -> str:
        return self.value


class LogLevel(str):
    """Custom type for log levels, ensuring the value is one of the standard levels."""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        def validate_log_level(v: str) -> str:
            valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
            v_upper = v.upper()
            if v_upper not in valid_levels:
                raise ValueError(f'Log level must be one of: {valid_levels}')
            return v_upper

        return core_schema.no_info_after_validator_function(
            validate_log_level, core_schema.str_schema()
        )


###################################
# Core Configuration Schema
###################################
class JsonMendConfig(BaseModel):
    """Defines the configuration schema for the jsonmend package.
    This class does not load from the environment; it only defines the data shape.
    """

    debug: bool = Field(
        default=False,
        description='Enable debug mode for verbose logging and diagnostics.',
    )

    # Repair Settings
    default_parse_mode: ParseMode = Field(
        default=ParseMode.STRICT,
        description='Decoder mode used by try_parse when no mode is given.',
    )
    log_repair_stages: bool = Field(
        default=False,
        description='Log a DEBUG line for every pipeline stage that changed the text.',
    )
    log_preview_chars: int = Field(
        default=80,
        ge=0,
        description='How many characters of input/output to show in log lines (0 = all).',
    )

    # Logging Settings
    log_level: LogLevel = Field(
        default='WARNING', description='The minimum logging level.'
    )
    log_use_rich: bool = Field(
        default=True, description='Use rich for beautiful, formatted logging output.'
    )
    log_format_string: Optional[str] = Field(
        default=None, description='A custom format string for the console logger.'
    )
    log_file_path: Optional[str] = Field(
        default=None, description='If set, logs will also be written to this file.'
    )


###################################
# Settings Initialization
###################################
class AppSettings(BaseSettings, JsonMendConfig):
    """Application settings that load from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix='JSONMEND_',
        case_sensitive=False,
        validate_assignment=True,
        extra='ignore',
        env_file=dotenv_path or None,
        env_file_encoding='utf-8',
    )


# Global Settings
settings = AppSettings()


def resolve_parse_mode(mode: Optional[Union[str, ParseMode]] = None) -> ParseMode:
    """
    Resolves a parse mode by prioritizing a direct argument over global settings.

    Args:
        mode: A ParseMode, its case-insensitive name, or None for the configured default.

    Returns:
        The resolved ParseMode.
    """
    if mode is None:
        return settings.default_parse_mode
    if isinstance(mode, ParseMode):
        return mode
    try:
        return ParseMode(mode)
    except ValueError:
        expected = [member.value for member in ParseMode]
        raise InvalidConfig(f"Unknown parse mode '{mode}'. Expected one of: {expected}")
