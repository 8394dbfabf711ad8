"""InitCommand for configuration initialization.

This module implements the init command that publishes the default
configuration file so a project can start syncing with a shared sheet.
"""

import logging
import os
from typing import Optional

from src.catalog.config_loader import ConfigLoader
from src.catalog.errors import FilesystemError
from src.catalog.models import SheetSyncConfig
from src.sheets_client.auth import Authenticator
from src.sheets_client.errors import CredentialsFileError
from .errors import InitError

logger = logging.getLogger(__name__)


class InitCommand:
    """Handles initialization of sync configuration.

    Writes ``.translation-sync/config.yaml`` with every setting at its
    default value. An existing file is only replaced with ``force``.

    Example:
        >>> init = InitCommand()
        >>> init.run(force=False)
        '.translation-sync/config.yaml'
    """

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the init command.

        Args:
            config_path: Optional config file path (defaults to .translation-sync/config.yaml)
        """
        self.config_path = config_path or ConfigLoader.DEFAULT_CONFIG_PATH

    def run(self, force: bool = False, config: Optional[SheetSyncConfig] = None) -> str:
        """Write the configuration file.

        Args:
            force: Overwrite an existing configuration file
            config: Configuration to write (defaults to SheetSyncConfig())

        Returns:
            Path of the written configuration file

        Raises:
            InitError: If the file exists (without force) or cannot be written
        """
        if os.path.exists(self.config_path) and not force:
            raise InitError(
                f"Configuration already exists at {self.config_path}. "
                "Use --force to overwrite it"
            )

        sync_config = config or SheetSyncConfig()
        try:
            ConfigLoader.save(self.config_path, sync_config)
        except FilesystemError as e:
            raise InitError(f"Failed to write configuration: {e}")

        logger.info(f"Wrote configuration to {self.config_path}")
        return self.config_path

    @staticmethod
    def service_account_email(credentials_path: Optional[str]) -> Optional[str]:
        """Return the client email of the service account key, if it can be read.

        Used to tell the user which address to share the spreadsheet with.
        """
        if not credentials_path:
            return None
        try:
            info = Authenticator.load_service_account_file(credentials_path)
        except CredentialsFileError as e:
            logger.debug(f"No usable service account key: {e}")
            return None
        return info.get('client_email')
