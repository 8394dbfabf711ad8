"""Backup sheets created before a push overwrites the translation sheet.

Each backup is a duplicate of the translation sheet titled
``Backup YYYY-MM-DD HH:MM:SS``. Old backups are pruned so that only the
most recent ones remain.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from src.sheets_client.api_wrapper import SheetsAPIWrapper
from src.sheets_client.errors import SheetNotFoundError
from src.sheets_client.models import SheetInfo

logger = logging.getLogger(__name__)


class BackupManager:
    """Creates and rotates backup sheets.

    Example:
        >>> backups = BackupManager(api, sheet_name="Translations")
        >>> title = backups.create_backup()
        >>> deleted = backups.prune_backups(keep=5)
    """

    BACKUP_PREFIX = "Backup "
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

    def __init__(self, api: SheetsAPIWrapper, sheet_name: Optional[str] = None, clock=None):
        """Initialize the backup manager.

        Args:
            api: Sheets API wrapper
            sheet_name: Translation sheet title; None for the first sheet
            clock: Callable returning the current datetime (defaults to datetime.now)
        """
        self.api = api
        self.sheet_name = sheet_name
        self._clock = clock or datetime.now

    def _find_target(self, sheets: List[SheetInfo]) -> SheetInfo:
        if self.sheet_name:
            for sheet in sheets:
                if sheet.title == self.sheet_name:
                    return sheet
            raise SheetNotFoundError(self.sheet_name)
        if not sheets:
            raise SheetNotFoundError(None)
        return sheets[0]

    def _target_id(self, sheets: List[SheetInfo]) -> Optional[int]:
        if self.sheet_name:
            return next((s.sheet_id for s in sheets if s.title == self.sheet_name), None)
        return sheets[0].sheet_id if sheets else None

    def backup_title(self, when: datetime) -> str:
        return f"{self.BACKUP_PREFIX}{when.strftime(self.TIMESTAMP_FORMAT)}"

    def parse_backup_time(self, title: str) -> Optional[datetime]:
        """Return the timestamp encoded in a backup title, or None if it is not a backup."""
        if not title.startswith(self.BACKUP_PREFIX):
            return None
        try:
            return datetime.strptime(title[len(self.BACKUP_PREFIX):], self.TIMESTAMP_FORMAT)
        except ValueError:
            return None

    def create_backup(self) -> str:
        """Duplicate the translation sheet as the last tab.

        Sheet titles must be unique, so a timestamp already taken by another
        backup is moved forward one second at a time.

        Returns:
            Title of the backup sheet

        Raises:
            SheetNotFoundError: If the translation sheet does not exist
            SheetsError: If an API call fails
        """
        sheets = self.api.list_sheets()
        target = self._find_target(sheets)
        titles = {sheet.title for sheet in sheets}
        when = self._clock().replace(microsecond=0)
        title = self.backup_title(when)
        while title in titles:
            when += timedelta(seconds=1)
            title = self.backup_title(when)

        logger.info(f"Backing up sheet '{target.title}' as '{title}'")
        self.api.duplicate_sheet(target.sheet_id, title, insert_index=len(sheets))
        return title

    def prune_backups(self, keep: int) -> int:
        """Delete all but the ``keep`` most recent backups in one request.

        Sheets whose title does not parse as a backup timestamp are never deleted,
        nor is the translation sheet itself (the configured sheet, or the first one).

        Args:
            keep: Number of backups to retain

        Returns:
            Number of backups deleted

        Raises:
            SheetsError: If an API call fails
        """
        sheets = self.api.list_sheets()
        target_id = self._target_id(sheets)

        backups: List[Tuple[datetime, SheetInfo]] = []
        for sheet in sheets:
            if sheet.sheet_id == target_id:
                continue
            timestamp = self.parse_backup_time(sheet.title)
            if timestamp is not None:
                backups.append((timestamp, sheet))

        backups.sort(key=lambda item: item[0], reverse=True)
        to_delete = [sheet for _, sheet in backups[max(keep, 0):]]

        if not to_delete:
            logger.debug(f"{len(backups)} backup(s) present, nothing to prune")
            return 0

        logger.info(f"Pruning {len(to_delete)} old backup(s)")
        for sheet in to_delete:
            logger.debug(f"Pruning backup '{sheet.title}'")
        self.api.delete_sheets([sheet.sheet_id for sheet in to_delete])
        return len(to_delete)
