"""Push command orchestration for CLI.

This module provides the PushCommand class that publishes the local
translation catalog of one language to the translation sheet, keeping
translator edits for keys whose source text has not changed.
"""

import logging
import os
from typing import List, Optional

from src.catalog.catalog_reader import CatalogReader
from src.catalog.models import SheetSyncConfig
from src.sheets_client.api_wrapper import SheetsAPIWrapper
from src.sheets_client.auth import Authenticator
from src.sheets_client.errors import SyncError

from .backup_manager import BackupManager
from .errors import LanguageNotFoundError
from .failures import report_failure
from .models import ExistingSheetState, ReconcileResult, SheetRow, SyncReport
from .output import OutputHandler
from .reconciler import Reconciler
from .sheet_layout import SheetLayout
from .sheet_reader import SheetStateReader

logger = logging.getLogger(__name__)


class PushCommand:
    """Orchestrates a push from the catalog to the sheet.

    The push workflow:
        1. Collect the flat catalog of the language
        2. Read the existing sheet (an unreadable sheet counts as empty)
        3. Back up the sheet and prune old backups (skipped when empty or --no-backup)
        4. Clear the table columns when --clear is given
        5. Build rows: initial mode for an empty sheet, --clear or --force-initial,
           otherwise diff against the existing records
        6. Write all rows in one request, blanking rows left over from a longer table

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> push_cmd = PushCommand(config, output_handler=output)
        >>> report = push_cmd.run(lang="en")
        >>> sys.exit(report.exit_code)
    """

    def __init__(
        self,
        config: SheetSyncConfig,
        api: Optional[SheetsAPIWrapper] = None,
        output_handler: Optional[OutputHandler] = None,
        catalog_reader: Optional[CatalogReader] = None,
        backup_manager: Optional[BackupManager] = None,
    ):
        """Initialize push command with dependencies.

        Args:
            config: Loaded sync configuration
            api: Sheets API wrapper (built from the configuration if omitted)
            output_handler: OutputHandler for terminal output (optional)
            catalog_reader: CatalogReader for collecting translations (optional)
            backup_manager: BackupManager for backup rotation (optional)
        """
        self.config = config
        self.api = api
        self.output_handler = output_handler or OutputHandler()
        self.catalog_reader = catalog_reader or CatalogReader()
        self.backup_manager = backup_manager
        self.layout = SheetLayout.from_config(config)
        self.reconciler = Reconciler(self.layout, config.diff_policy)

    def _get_api(self) -> SheetsAPIWrapper:
        if self.api is None:
            authenticator = Authenticator(
                credentials_path=self.config.credentials_path,
                spreadsheet_id=self.config.spreadsheet_id,
            )
            self.api = SheetsAPIWrapper(authenticator, sheet_name=self.config.sheet_name)
        return self.api

    def _get_backup_manager(self) -> BackupManager:
        if self.backup_manager is None:
            self.backup_manager = BackupManager(self._get_api(), self.config.sheet_name)
        return self.backup_manager

    def run(
        self,
        lang: str = "en",
        clear: bool = False,
        force_initial: bool = False,
        no_backup: bool = False,
    ) -> SyncReport:
        """Execute a push.

        Args:
            lang: Language directory name under the configured lang_path
            clear: Clear the table columns before writing (implies initial mode)
            force_initial: Rebuild the sheet from the catalog, dropping all edits
            no_backup: Skip the backup sheet

        Returns:
            SyncReport with exit code, stats and any failure
        """
        try:
            return self._push(lang, clear, force_initial, no_backup)
        except SyncError as e:
            return report_failure(e, "Push", self.output_handler)
        except Exception as e:
            logger.exception("Unexpected error during push")
            return report_failure(e, "Push", self.output_handler)

    def _push(self, lang: str, clear: bool, force_initial: bool, no_backup: bool) -> SyncReport:
        lang_path = os.path.join(self.config.lang_path, lang)
        if not os.path.isdir(lang_path):
            raise LanguageNotFoundError(lang_path)

        logger.info(f"Collecting translations from {lang_path}")
        self.output_handler.info(f"Collecting translations from {lang_path}...")
        snapshot = self.catalog_reader.collect(lang_path)

        if not snapshot:
            self.output_handler.warning("No translations found to push.")
            return SyncReport(nothing_to_do=True)

        self.output_handler.info(f"Found {len(snapshot)} translation key(s).")

        api = self._get_api()
        reader = SheetStateReader(api, self.layout)
        with self.output_handler.spinner("Reading existing sheet data..."):
            existing = reader.read()
        if not existing.readable:
            self.output_handler.warning("Could not read existing sheet data; treating the sheet as empty.")

        report = SyncReport()

        if not no_backup and not existing.is_empty:
            backups = self._get_backup_manager()
            self.output_handler.info("Creating backup sheet...")
            report.backup_title = backups.create_backup()
            self.output_handler.info(f"Backup created: {report.backup_title}")
            report.pruned_backups = backups.prune_backups(self.config.backup_keep)
            if report.pruned_backups:
                self.output_handler.info(f"Pruned {report.pruned_backups} old backup(s).")
        elif existing.is_empty:
            logger.debug("Skipping backup, sheet is empty")

        if clear:
            self.output_handler.info("Clearing existing sheet data...")
            api.clear_values(self.layout.clear_range)

        if force_initial or clear or existing.is_empty:
            self.output_handler.info("Performing initial push (Updated Value column will be empty)...")
            result = self.reconciler.initial_rows(snapshot)
        else:
            self.output_handler.info("Comparing with existing sheet data...")
            result = self.reconciler.diff_rows(snapshot, existing.records)

        cells = self._build_cells(result, existing, cleared=clear)

        logger.info(f"Writing {len(result.rows)} row(s) at {self.layout.write_anchor}")
        with self.output_handler.spinner("Writing to Google Sheets..."):
            api.update_values(self.layout.write_anchor, cells)

        report.stats = result.stats
        report.mode = result.mode
        self.output_handler.print_push_summary(result.stats, result.mode, result.removed_keys)
        return report

    def _build_cells(
        self,
        result: ReconcileResult,
        existing: ExistingSheetState,
        cleared: bool,
    ) -> List[List[Optional[str]]]:
        """Lay out result rows as cells and blank rows left over from the old table."""
        cells = [self.layout.to_cells(row) for row in result.rows]

        if not cleared:
            previous_rows = existing.data_row_count + (1 if self.layout.has_header else 0)
            stale = previous_rows - len(cells)
            if stale > 0:
                logger.debug(f"Blanking {stale} stale row(s) below the table")
                blank = self.layout.to_cells(SheetRow("", "", ""))
                cells.extend(list(blank) for _ in range(stale))

        return cells
