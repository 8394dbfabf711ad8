"""Typed exception hierarchy for CLI-related errors.

This module defines all custom exceptions used by the CLI.
All exceptions inherit from CLIError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from src.sheets_client.errors import SyncError


class CLIError(SyncError):
    """Base exception for all CLI-related errors."""
    pass


class LanguageNotFoundError(CLIError):
    """Raised when the language directory to push does not exist."""

    def __init__(self, lang_path: str):
        super().__init__(
            f"Language directory not found: {lang_path}"
        )
        self.lang_path = lang_path


class InitError(CLIError):
    """Raised when initialization fails."""

    def __init__(self, message: str):
        super().__init__(message)
