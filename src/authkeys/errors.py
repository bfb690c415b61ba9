"""Errors raised while reading, editing and writing authorized_keys files."""

from __future__ import annotations
from typing import Optional


class AuthKeysError(Exception):
    """Base error for this package."""


class ParseError(AuthKeysError):
    """Raised when an input line cannot be parsed into a key record.

    Recoverable: the file reader logs it and skips the line.
    """

    def __init__(self, message: str, lineno: Optional[int] = None) -> None:
        super().__init__(message)
        self.lineno = lineno


class KeysFileError(AuthKeysError):
    """Raised when the authorized_keys file cannot be opened."""


class RuleError(AuthKeysError):
    """Raised when an edit rule is invalid or cannot be applied."""
