from jsonmend._core.error import InvalidConfig, JsonMendError, ParsingError

__all__ = ['InvalidConfig', 'JsonMendError', 'ParsingError']
