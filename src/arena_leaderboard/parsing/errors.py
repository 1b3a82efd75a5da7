"""Structured parsing errors for remote payloads."""

from __future__ import annotations
from typing import Any


class ParsingError(Exception):
    """Base class for parsing related issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ResultParseError(ParsingError):
    """Raised when a tournament results record cannot be parsed."""


class TournamentMetadataError(ParsingError):
    """Raised when tournament metadata lacks a required field."""
