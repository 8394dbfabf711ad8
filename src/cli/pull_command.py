"""Pull command orchestration for CLI.

This module provides the PullCommand class that brings translator edits
from the translation sheet back into the local catalog of one language.
"""

import logging
import os
from typing import Dict, Optional

from src.catalog.catalog_reader import CatalogReader
from src.catalog.catalog_writer import CatalogWriter
from src.catalog.models import SheetSyncConfig
from src.sheets_client.api_wrapper import SheetsAPIWrapper
from src.sheets_client.auth import Authenticator
from src.sheets_client.errors import SyncError

from .failures import report_failure
from .models import SyncReport
from .output import OutputHandler
from .resolver import PullResolver
from .sheet_layout import SheetLayout
from .sheet_reader import SheetStateReader

logger = logging.getLogger(__name__)


class PullCommand:
    """Orchestrates a pull from the sheet to the catalog.

    The pull workflow:
        1. Read the sheet records (errors are reported, not ignored)
        2. Collect the current catalog of the language (missing directory = empty)
        3. Resolve each record to its effective value and merge into the catalog
        4. Plan group files; on --dry-run report per-group counts and stop
        5. Write changed group files atomically

    Example:
        >>> pull_cmd = PullCommand(config, output_handler=OutputHandler())
        >>> report = pull_cmd.run(lang="en", dry_run=True)
        >>> report.group_counts
        {'auth': 1}
    """

    def __init__(
        self,
        config: SheetSyncConfig,
        api: Optional[SheetsAPIWrapper] = None,
        output_handler: Optional[OutputHandler] = None,
        catalog_reader: Optional[CatalogReader] = None,
        catalog_writer: Optional[CatalogWriter] = None,
        resolver: Optional[PullResolver] = None,
    ):
        """Initialize pull command with dependencies.

        Args:
            config: Loaded sync configuration
            api: Sheets API wrapper (built from the configuration if omitted)
            output_handler: OutputHandler for terminal output (optional)
            catalog_reader: CatalogReader for the current catalog (optional)
            catalog_writer: CatalogWriter for writing group files (optional)
            resolver: PullResolver for merging sheet values (optional)
        """
        self.config = config
        self.api = api
        self.output_handler = output_handler or OutputHandler()
        self.catalog_reader = catalog_reader or CatalogReader()
        self.catalog_writer = catalog_writer or CatalogWriter(
            config.catalog_format, reader=self.catalog_reader
        )
        self.resolver = resolver or PullResolver()
        self.layout = SheetLayout.from_config(config)

    def _get_api(self) -> SheetsAPIWrapper:
        if self.api is None:
            authenticator = Authenticator(
                credentials_path=self.config.credentials_path,
                spreadsheet_id=self.config.spreadsheet_id,
            )
            self.api = SheetsAPIWrapper(authenticator, sheet_name=self.config.sheet_name)
        return self.api

    def run(self, lang: str = "en", dry_run: bool = False) -> SyncReport:
        """Execute a pull.

        Args:
            lang: Language directory name under the configured lang_path
            dry_run: Report what would be written without touching any file

        Returns:
            SyncReport with exit code, stats, group counts and any failure
        """
        try:
            return self._pull(lang, dry_run)
        except SyncError as e:
            return report_failure(e, "Pull", self.output_handler)
        except Exception as e:
            logger.exception("Unexpected error during pull")
            return report_failure(e, "Pull", self.output_handler)

    def _collect_catalog(self, lang_path: str) -> Dict[str, str]:
        if not os.path.isdir(lang_path):
            logger.info(f"{lang_path} does not exist yet - starting from an empty catalog")
            return {}
        return self.catalog_reader.collect(lang_path)

    def _pull(self, lang: str, dry_run: bool) -> SyncReport:
        reader = SheetStateReader(self._get_api(), self.layout)
        with self.output_handler.spinner("Reading translations from Google Sheets..."):
            state = reader.read(strict=True)

        if not state.records:
            self.output_handler.warning("No translations found in the sheet. Nothing to pull.")
            return SyncReport(nothing_to_do=True, dry_run=dry_run)

        self.output_handler.info(f"Found {len(state.records)} translation key(s) in the sheet.")

        lang_path = os.path.join(self.config.lang_path, lang)
        snapshot = self._collect_catalog(lang_path)

        resolved = self.resolver.resolve(state.records)
        plan = self.resolver.merge(resolved, snapshot)
        planned_files = self.catalog_writer.plan(lang_path, plan.translations)

        if dry_run:
            logger.info(f"Dry run: {len(planned_files)} file(s) planned, nothing written")
            self.output_handler.print_dryrun_summary(plan.group_counts)
            return SyncReport(
                stats=plan.stats,
                group_counts=plan.group_counts,
                dry_run=True,
            )

        with self.output_handler.spinner("Writing translation files..."):
            written = self.catalog_writer.write_files(planned_files, lang_path)

        logger.info(f"Pull wrote {len(written)} file(s) under {lang_path}")
        self.output_handler.print_pull_summary(plan.stats, written, plan.removed_keys)
        return SyncReport(
            stats=plan.stats,
            group_counts=plan.group_counts,
            files_written=written,
        )
