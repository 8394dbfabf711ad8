"""API wrapper for the Google Sheets REST API v4.

This module wraps the google-api-python-client Sheets service and provides
error translation from HTTP exceptions to our typed exception hierarchy.
It integrates with the retry logic for handling rate limits.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from google.oauth2 import service_account
from googleapiclient.discovery import build

from .auth import Authenticator, Credentials
from .errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    InvalidRangeError,
    PermissionDeniedError,
    SheetsError,
    SpreadsheetNotFoundError,
)
from .models import SheetInfo
from .ranges import with_sheet
from .retry_logic import get_status_code, retry_on_rate_limit

logger = logging.getLogger(__name__)


class SheetsAPIWrapper:
    """Wrapper around the google-api-python-client Sheets service with error translation.

    This class provides a thin wrapper over the Sheets API that:
    1. Handles authentication using the Authenticator
    2. Prefixes ranges with the configured sheet name
    3. Translates HTTP errors to typed exceptions
    4. Integrates retry logic for 429 rate limits

    Example:
        >>> auth = Authenticator()
        >>> api = SheetsAPIWrapper(auth, sheet_name="Translations")
        >>> rows = api.get_values("A1:C")
    """

    SCOPES = ['https://www.googleapis.com/auth/spreadsheets']
    API_ENDPOINT = 'https://sheets.googleapis.com'

    def __init__(self, authenticator: Authenticator, sheet_name: Optional[str] = None):
        """Initialize the API wrapper.

        Args:
            authenticator: Authenticator instance for loading credentials
            sheet_name: Sheet (tab) that unqualified ranges refer to; None for the first sheet
        """
        self._authenticator = authenticator
        self._sheet_name = sheet_name
        self._credentials: Optional[Credentials] = None
        self._service: Any = None

    @property
    def sheet_name(self) -> Optional[str]:
        return self._sheet_name

    @property
    def spreadsheet_id(self) -> str:
        return self._get_credentials().spreadsheet_id

    @property
    def service_account_email(self) -> Optional[str]:
        return self._get_credentials().service_account_email

    def _get_credentials(self) -> Credentials:
        if self._credentials is None:
            self._credentials = self._authenticator.get_credentials()
        return self._credentials

    def _get_service(self) -> Any:
        """Get or create the Sheets API service.

        The service is built lazily on first use so that configuration
        errors surface only when the spreadsheet is actually needed.

        Raises:
            InvalidCredentialsError: If the key file is rejected by google-auth
        """
        if self._service is None:
            creds = self._get_credentials()
            try:
                google_creds = service_account.Credentials.from_service_account_info(
                    creds.service_account_info,
                    scopes=self.SCOPES,
                )
            except ValueError as e:
                raise InvalidCredentialsError('service account key', str(e)) from e
            self._service = build('sheets', 'v4', credentials=google_creds, cache_discovery=False)
        return self._service

    def _sanitize_credentials(self, text: str) -> str:
        """Sanitize error messages to prevent credential leakage.

        Masks bearer tokens, private keys, access tokens and the local part
        of email addresses.

        Example:
            >>> api._sanitize_credentials("Bearer ya29.abc failed for bot@proj.iam.gserviceaccount.com")
            'Bearer ***REDACTED*** failed for ***@proj.iam.gserviceaccount.com'
        """
        if not text:
            return text

        sanitized = text

        sanitized = re.sub(
            r'-----BEGIN [A-Z ]*PRIVATE KEY-----.*?-----END [A-Z ]*PRIVATE KEY-----',
            '***REDACTED***',
            sanitized,
            flags=re.DOTALL
        )

        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )

        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )

        sanitized = re.sub(
            r'(access_token|private_key|token)["\']?\s*[:=]\s*["\']?([^"\'\s&]+)',
            r'\1=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )

        sanitized = re.sub(
            r'\b[\w.-]+@([\w.-]+\.[a-z]{2,})\b',
            r'***@\1',
            sanitized,
            flags=re.IGNORECASE
        )

        return sanitized

    def _translate_error(
        self,
        exception: Exception,
        operation: str,
        range_spec: Optional[str] = None,
    ) -> SheetsError:
        """Translate HTTP exceptions to typed Sheets exceptions.

        Args:
            exception: The original exception from the API client
            operation: Description of the operation that failed (for logging)
            range_spec: Range involved in the operation, if any

        Returns:
            SheetsError: Translated exception
        """
        if isinstance(exception, (TimeoutError, ConnectionError)):
            return APIUnreachableError(endpoint=self.API_ENDPOINT)

        status_code = get_status_code(exception)
        error_msg = str(exception)

        if status_code == 401:
            return InvalidCredentialsError(
                'service account',
                'authentication was rejected by Google'
            )

        if status_code == 403:
            return PermissionDeniedError(
                spreadsheet_id=self.spreadsheet_id,
                service_account_email=self.service_account_email,
            )

        if status_code == 404:
            return SpreadsheetNotFoundError(spreadsheet_id=self.spreadsheet_id)

        if status_code == 400 and 'unable to parse range' in error_msg.lower():
            return InvalidRangeError(range_spec or 'unknown')

        if status_code == 0 and any(keyword in error_msg.lower() for keyword in [
            'connection',
            'timed out',
            'unreachable',
            'name or service not known',
            'failed to establish',
        ]):
            return APIUnreachableError(endpoint=self.API_ENDPOINT)

        safe_error_msg = self._sanitize_credentials(error_msg)
        logger.error(f"API operation failed: {operation} - {safe_error_msg}")
        return APIAccessError(
            f"Google Sheets API error during {operation}: {safe_error_msg}",
            status_code=status_code or None,
        )

    def _execute(self, request: Any, operation: str, range_spec: Optional[str] = None) -> Any:
        """Execute a prepared API request with rate-limit retries and error translation."""
        try:
            return retry_on_rate_limit(request.execute)
        except SheetsError:
            raise
        except Exception as e:
            raise self._translate_error(e, operation, range_spec) from e

    def get_values(self, range_spec: str) -> List[List[str]]:
        """Read a rectangular block of cells.

        Args:
            range_spec: A1 notation range (e.g. 'A1:C' or 'Sheet1!A1:C100')

        Returns:
            Row-major cell values. Trailing empty cells and rows are absent.

        Raises:
            SheetsError: If the API call fails
        """
        full_range = with_sheet(range_spec, self._sheet_name)
        service = self._get_service()
        request = service.spreadsheets().values().get(
            spreadsheetId=self.spreadsheet_id,
            range=full_range,
            majorDimension='ROWS',
        )
        response = self._execute(request, f"get_values({full_range})", full_range)
        values = response.get('values', []) if response else []
        logger.debug(f"Read {len(values)} row(s) from {full_range}")
        return values

    def update_values(self, range_spec: str, rows: Sequence[Sequence[Any]]) -> None:
        """Overwrite the addressed cells with ``rows`` (valueInputOption RAW).

        ``None`` cells are left untouched by the API.

        Raises:
            SheetsError: If the API call fails
        """
        full_range = with_sheet(range_spec, self._sheet_name)
        service = self._get_service()
        request = service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=full_range,
            valueInputOption='RAW',
            body={'values': [list(row) for row in rows]},
        )
        self._execute(request, f"update_values({full_range})", full_range)
        logger.debug(f"Wrote {len(rows)} row(s) to {full_range}")

    def clear_values(self, range_spec: str) -> None:
        """Clear all values in the addressed range.

        Raises:
            SheetsError: If the API call fails
        """
        full_range = with_sheet(range_spec, self._sheet_name)
        service = self._get_service()
        request = service.spreadsheets().values().clear(
            spreadsheetId=self.spreadsheet_id,
            range=full_range,
            body={},
        )
        self._execute(request, f"clear_values({full_range})", full_range)
        logger.debug(f"Cleared {full_range}")

    def list_sheets(self) -> List[SheetInfo]:
        """List all sheets (tabs) in the spreadsheet in tab order.

        Raises:
            SheetsError: If the API call fails
        """
        service = self._get_service()
        request = service.spreadsheets().get(
            spreadsheetId=self.spreadsheet_id,
            fields='sheets.properties',
        )
        metadata = self._execute(request, 'list_sheets()') or {}

        sheets: List[SheetInfo] = []
        for sheet in metadata.get('sheets', []):
            props: Dict[str, Any] = sheet.get('properties', {})
            if 'sheetId' not in props or 'title' not in props:
                continue
            sheets.append(SheetInfo(
                sheet_id=int(props['sheetId']),
                title=str(props['title']),
                index=int(props.get('index', len(sheets))),
            ))
        sheets.sort(key=lambda s: s.index)
        return sheets

    def duplicate_sheet(
        self,
        source_sheet_id: int,
        new_name: str,
        insert_index: Optional[int] = None,
    ) -> SheetInfo:
        """Duplicate a sheet under a new name.

        Args:
            source_sheet_id: Numeric ID of the sheet to copy
            new_name: Title for the copy
            insert_index: Tab position for the copy (None lets the API decide)

        Returns:
            SheetInfo describing the new sheet

        Raises:
            SheetsError: If the API call fails
        """
        duplicate: Dict[str, Any] = {
            'sourceSheetId': source_sheet_id,
            'newSheetName': new_name,
        }
        if insert_index is not None:
            duplicate['insertSheetIndex'] = insert_index

        service = self._get_service()
        request = service.spreadsheets().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={'requests': [{'duplicateSheet': duplicate}]},
        )
        response = self._execute(request, f"duplicate_sheet({source_sheet_id})") or {}

        replies = response.get('replies', [])
        props = replies[0].get('duplicateSheet', {}).get('properties', {}) if replies else {}
        return SheetInfo(
            sheet_id=int(props.get('sheetId', -1)),
            title=str(props.get('title', new_name)),
            index=int(props.get('index', insert_index or 0)),
        )

    def delete_sheets(self, sheet_ids: Sequence[int]) -> None:
        """Delete several sheets in a single batch request.

        Raises:
            SheetsError: If the API call fails
        """
        if not sheet_ids:
            return
        service = self._get_service()
        request = service.spreadsheets().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={'requests': [
                {'deleteSheet': {'sheetId': sheet_id}} for sheet_id in sheet_ids
            ]},
        )
        self._execute(request, f"delete_sheets({len(sheet_ids)})")
        logger.debug(f"Deleted {len(sheet_ids)} sheet(s)")
