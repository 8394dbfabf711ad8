"""Google Sheets client library for translation sync.

This package provides Python abstractions over the Google Sheets API v4,
exposing the small range/sheet CRUD surface the sync commands need.
"""

from .errors import (
    SyncError,
    SheetsError,
    InvalidCredentialsError,
    CredentialsFileError,
    PermissionDeniedError,
    SpreadsheetNotFoundError,
    SheetNotFoundError,
    InvalidRangeError,
    APIUnreachableError,
    APIAccessError,
)
from .models import SheetInfo

__all__ = [
    "SyncError",
    "SheetsError",
    "InvalidCredentialsError",
    "CredentialsFileError",
    "PermissionDeniedError",
    "SpreadsheetNotFoundError",
    "SheetNotFoundError",
    "InvalidRangeError",
    "APIUnreachableError",
    "APIAccessError",
    "SheetInfo",
]
