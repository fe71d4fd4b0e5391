"""Error codes and exceptions raised by the random source."""
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for random source failures."""

    INVALID_INPUT = "INVALID_INPUT"
    FORMAT_ERROR = "FORMAT_ERROR"
    RANGE_ERROR = "RANGE_ERROR"


class RandomSourceError(Exception):
    """Base error carrying a stable code and message."""

    code: ErrorCode = ErrorCode.INVALID_INPUT

    def __init__(self, message: str | None = None):
        self.message = message or f"Error: {self.code.value}"
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain error body."""
        return {
            "code": self.code.value,
            "message": self.message,
        }


class InvalidInputError(RandomSourceError, ValueError):
    """Continuation requested without a usable history."""

    code = ErrorCode.INVALID_INPUT


class FormatError(RandomSourceError, ValueError):
    """Serialized history does not match the expected record shape."""

    code = ErrorCode.FORMAT_ERROR


class RangeError(RandomSourceError, ValueError):
    """Bounded draw requested with an invalid range."""

    code = ErrorCode.RANGE_ERROR
