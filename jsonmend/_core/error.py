from __future__ import annotations


class JsonMendError(Exception):
    """
    Base exception class.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidConfig(JsonMendError):
    """Raised when a configuration value cannot be interpreted."""

    pass


class ParsingError(JsonMendError):
    """Raised when a repaired candidate still fails to parse."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        line: int | None = None,
        column: int | None = None,
    ):
        self.position = position
        self.line = line
        self.column = column
        super().__init__(message)
