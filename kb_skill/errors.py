"""Error codes and exceptions shared by the store and the skill envelope."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    INVALID_ACTION = "INVALID_ACTION"
    INVALID_KEY = "INVALID_KEY"
    INVALID_CONTENT = "INVALID_CONTENT"
    INVALID_QUERY = "INVALID_QUERY"
    EMPTY_QUERY_TOKENS = "EMPTY_QUERY_TOKENS"
    NOT_FOUND = "NOT_FOUND"


class SkillError(Exception):
    """A recoverable request failure carrying a machine-readable code."""

    def __init__(self, code: ErrorCode, message: str, **details: Any):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class KeyNotFoundError(SkillError, KeyError):
    """Raised when a key is not present in the knowledge store."""

    def __init__(self, key: str):
        super().__init__(ErrorCode.NOT_FOUND, f'No entry found with key "{key}".', key=key)

    def __str__(self) -> str:
        return self.message


def require_text(value: Any, code: ErrorCode, message: str) -> str:
    """Return ``value`` stripped, or raise SkillError if it is not a non-blank string."""
    if not isinstance(value, str) or not value.strip():
        raise SkillError(code, message)
    return value.strip()
