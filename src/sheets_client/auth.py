"""Authentication module for loading Google Sheets credentials.

This module resolves the service account credentials file and the target
spreadsheet ID from environment variables (loaded with python-dotenv) and
the sync configuration. It validates the credentials file and raises
appropriate errors if anything required is missing.
"""

import json
import os
from typing import Any, Dict, NamedTuple, Optional

from dotenv import load_dotenv

from .errors import CredentialsFileError, InvalidCredentialsError


class Credentials(NamedTuple):
    """Google Sheets service account credentials and target spreadsheet."""
    credentials_path: str
    spreadsheet_id: str
    service_account_info: Dict[str, Any]

    @property
    def service_account_email(self) -> Optional[str]:
        return self.service_account_info.get('client_email')


class Authenticator:
    """Loads and validates Google Sheets credentials.

    Values are loaded from a .env file using python-dotenv. Environment
    variables win over the defaults passed in from the configuration file.
    The parsed key material is never logged.

    Environment variables:
        GOOGLE_SHEETS_CREDENTIALS_PATH: Path to the service account JSON file
        GOOGLE_SHEETS_SPREADSHEET_ID: ID of the spreadsheet to sync with

    Example:
        >>> auth = Authenticator(credentials_path=".translation-sync/service-account.json")
        >>> creds = auth.get_credentials()
        >>> print(f"Syncing spreadsheet {creds.spreadsheet_id}")
    """

    CREDENTIALS_ENV = 'GOOGLE_SHEETS_CREDENTIALS_PATH'
    SPREADSHEET_ENV = 'GOOGLE_SHEETS_SPREADSHEET_ID'

    def __init__(
        self,
        credentials_path: Optional[str] = None,
        spreadsheet_id: Optional[str] = None,
    ):
        """Initialize the authenticator by loading environment variables from .env file.

        Args:
            credentials_path: Fallback credentials path from the configuration
            spreadsheet_id: Fallback spreadsheet ID from the configuration
        """
        load_dotenv()
        self._default_credentials_path = credentials_path
        self._default_spreadsheet_id = spreadsheet_id

    def get_credentials(self) -> Credentials:
        """Resolve and validate credentials.

        Returns:
            Credentials: credentials path, spreadsheet ID and parsed key file

        Raises:
            InvalidCredentialsError: If the credentials path or spreadsheet ID is missing
            CredentialsFileError: If the credentials file is missing or invalid
        """
        credentials_path = os.getenv(self.CREDENTIALS_ENV) or self._default_credentials_path
        spreadsheet_id = os.getenv(self.SPREADSHEET_ENV) or self._default_spreadsheet_id

        if not credentials_path:
            raise InvalidCredentialsError(
                'credentials path',
                f"not configured; set {self.CREDENTIALS_ENV} in your .env file"
            )

        if not spreadsheet_id:
            raise InvalidCredentialsError(
                'spreadsheet ID',
                f"not configured; set {self.SPREADSHEET_ENV} in your .env file"
            )

        info = self.load_service_account_file(credentials_path)
        return Credentials(
            credentials_path=credentials_path,
            spreadsheet_id=spreadsheet_id,
            service_account_info=info,
        )

    @staticmethod
    def load_service_account_file(credentials_path: str) -> Dict[str, Any]:
        """Read and validate a service account JSON file.

        Args:
            credentials_path: Path to the JSON key file

        Returns:
            Parsed key file contents

        Raises:
            CredentialsFileError: If the file is missing, not JSON, or not a service account key
        """
        try:
            with open(credentials_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise CredentialsFileError(
                credentials_path,
                'file not found. Download the service account JSON key and place it there'
            )
        except OSError as e:
            raise CredentialsFileError(credentials_path, str(e))

        try:
            info = json.loads(content)
        except json.JSONDecodeError as e:
            raise CredentialsFileError(credentials_path, f"invalid JSON: {e}")

        if not isinstance(info, dict) or info.get('type') != 'service_account':
            raise CredentialsFileError(
                credentials_path,
                'not a service account key file. Download the key from Google Cloud Console'
            )

        return info
