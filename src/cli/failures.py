"""Mapping of sync errors to failure reports.

Commands catch errors in one place and turn them into a SyncReport with
a categorized SyncFailure, printing an actionable message on the way.
"""

import logging

from src.catalog.errors import CatalogError, CatalogFileError, ConfigError, FilesystemError
from src.sheets_client.errors import (
    APIAccessError,
    APIUnreachableError,
    CredentialsFileError,
    InvalidCredentialsError,
    SheetsError,
)

from .errors import LanguageNotFoundError
from .models import ErrorKind, ExitCode, SyncFailure, SyncReport
from .output import OutputHandler

logger = logging.getLogger(__name__)


def classify(error: Exception) -> SyncFailure:
    """Build a SyncFailure describing ``error``."""
    if isinstance(error, (ConfigError, InvalidCredentialsError)):
        return SyncFailure(ErrorKind.CONFIG, str(error))
    if isinstance(error, CredentialsFileError):
        return SyncFailure(ErrorKind.CONFIG, str(error), path=error.credentials_path)
    if isinstance(error, SheetsError):
        return SyncFailure(ErrorKind.REMOTE, str(error), status_code=error.status_code)
    if isinstance(error, LanguageNotFoundError):
        return SyncFailure(ErrorKind.CATALOG, str(error), path=error.lang_path)
    if isinstance(error, (FilesystemError, CatalogFileError)):
        return SyncFailure(ErrorKind.CATALOG, str(error), path=error.file_path)
    if isinstance(error, CatalogError):
        return SyncFailure(ErrorKind.CATALOG, str(error))
    return SyncFailure(ErrorKind.UNEXPECTED, f"Unexpected error: {error}")


def report_failure(error: Exception, action: str, output: OutputHandler) -> SyncReport:
    """Log and display ``error`` and return the failed SyncReport.

    Args:
        error: Exception raised by the command
        action: Command name used in messages ("Push", "Pull")
        output: Output handler for terminal messages

    Returns:
        SyncReport with GENERAL_ERROR exit code and the classified failure
    """
    failure = classify(error)

    if failure.kind != ErrorKind.UNEXPECTED:
        logger.error(f"{action} failed: {error}")

    output.error(f"{action} failed: {failure.message}")

    if isinstance(error, (InvalidCredentialsError, CredentialsFileError)):
        output.info(
            "Check GOOGLE_SHEETS_CREDENTIALS_PATH and GOOGLE_SHEETS_SPREADSHEET_ID "
            "or the credentials_path and spreadsheet_id settings"
        )
    elif isinstance(error, (APIUnreachableError, APIAccessError)):
        output.info("Check your internet connection and try again")

    return SyncReport(exit_code=ExitCode.GENERAL_ERROR, failure=failure)
