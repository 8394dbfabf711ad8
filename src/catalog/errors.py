"""Typed exception hierarchy for catalog errors.

This module defines all custom exceptions used by the catalog library.
All exceptions inherit from CatalogError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional

from src.sheets_client.errors import SyncError


class CatalogError(SyncError):
    """Base exception for all catalog errors."""
    pass


class FilesystemError(CatalogError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ConfigError(CatalogError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class CatalogFileError(CatalogError):
    """Raised when a translation file cannot be parsed."""

    def __init__(self, file_path: str, message: str):
        super().__init__(
            f"Translation file error in {file_path}: {message}"
        )
        self.file_path = file_path
        self.message = message
