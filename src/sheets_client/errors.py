"""Typed exception hierarchy for Google Sheets-related errors.

This module defines all custom exceptions used by the Sheets client library.
All exceptions inherit from SheetsError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all translation-sheet-sync errors.

    Use this to catch any application-level error from the sync tool.
    """
    pass


class SheetsError(SyncError):
    """Base exception for all Google Sheets-related errors."""

    status_code: Optional[int] = None


class InvalidCredentialsError(SheetsError):
    """Raised when credentials or the spreadsheet ID are missing or rejected."""

    def __init__(self, setting: str, reason: str):
        super().__init__(
            f"Google Sheets {setting} is not usable: {reason}"
        )
        self.setting = setting
        self.reason = reason


class CredentialsFileError(SheetsError):
    """Raised when the service account credentials file is missing or malformed."""

    def __init__(self, credentials_path: str, reason: str):
        super().__init__(
            f"Google Sheets credentials file {credentials_path}: {reason}"
        )
        self.credentials_path = credentials_path
        self.reason = reason


class PermissionDeniedError(SheetsError):
    """Raised when the service account may not access the spreadsheet (HTTP 403)."""

    status_code = 403

    def __init__(self, spreadsheet_id: str, service_account_email: Optional[str] = None):
        message = (
            f"Permission denied accessing spreadsheet {spreadsheet_id}. "
            "Share the spreadsheet with the service account"
        )
        if service_account_email:
            message += f" ({service_account_email})"
        super().__init__(message)
        self.spreadsheet_id = spreadsheet_id
        self.service_account_email = service_account_email


class SpreadsheetNotFoundError(SheetsError):
    """Raised when the configured spreadsheet does not exist (HTTP 404)."""

    status_code = 404

    def __init__(self, spreadsheet_id: str):
        super().__init__(
            f"Spreadsheet {spreadsheet_id} not found. "
            "Verify the spreadsheet ID in your configuration"
        )
        self.spreadsheet_id = spreadsheet_id


class SheetNotFoundError(SheetsError):
    """Raised when the target sheet (tab) cannot be found in the spreadsheet."""

    def __init__(self, sheet_name: Optional[str]):
        if sheet_name:
            message = f"Sheet '{sheet_name}' not found in spreadsheet"
        else:
            message = "Spreadsheet has no sheets"
        super().__init__(message)
        self.sheet_name = sheet_name


class InvalidRangeError(SheetsError):
    """Raised when a range is rejected by the API (HTTP 400, unparsable range)."""

    status_code = 400

    def __init__(self, range_spec: str):
        super().__init__(
            f"Invalid range format '{range_spec}'. Use A1 notation (e.g. 'A1:C100')"
        )
        self.range_spec = range_spec


class APIUnreachableError(SheetsError):
    """Raised when the Google Sheets API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(SheetsError):
    """Raised when API access fails after retries or for an unclassified reason."""

    def __init__(
        self,
        message: str = "Google Sheets API failure (after 3 retries)",
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
