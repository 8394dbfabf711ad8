"""Reading the current contents of the translation sheet.

This module provides SheetStateReader, which turns the raw cell block of
the translation table into SheetRecords keyed by translation key.
"""

import logging
from typing import Dict, List

from src.sheets_client.api_wrapper import SheetsAPIWrapper
from src.sheets_client.errors import SheetsError

from .models import ExistingSheetState, SheetRecord
from .sheet_layout import SheetLayout

logger = logging.getLogger(__name__)


class SheetStateReader:
    """Reads existing key/original/updated records from the sheet.

    Rows whose key cell is empty are skipped. When a key appears more than
    once, the last row wins.

    Example:
        >>> reader = SheetStateReader(api, SheetLayout())
        >>> state = reader.read()
        >>> state.records["auth.failed"]
        SheetRecord(original='Bad creds', updated='Nope, try again')
    """

    def __init__(self, api: SheetsAPIWrapper, layout: SheetLayout):
        self.api = api
        self.layout = layout

    def read(self, strict: bool = False) -> ExistingSheetState:
        """Read the translation table.

        Args:
            strict: Re-raise API errors instead of returning an empty, unreadable state

        Returns:
            ExistingSheetState with records and the number of data rows

        Raises:
            SheetsError: If the sheet cannot be read and ``strict`` is True
        """
        try:
            rows = self.api.get_values(self.layout.data_range)
        except SheetsError as e:
            if strict:
                raise
            logger.warning(f"Could not read existing sheet data, treating sheet as empty: {e}")
            return ExistingSheetState(readable=False)

        return self.parse(rows)

    def parse(self, rows: List[List[str]]) -> ExistingSheetState:
        """Build an ExistingSheetState from raw rows starting at the table's first row."""
        data_rows = rows[1:] if self.layout.has_header else rows

        records: Dict[str, SheetRecord] = {}
        skipped = 0
        for cells in data_rows:
            row = self.layout.from_cells(cells)
            if not row.key:
                skipped += 1
                continue
            records[row.key] = SheetRecord(original=row.original, updated=row.updated)

        if skipped:
            logger.debug(f"Skipped {skipped} row(s) without a key")
        logger.info(f"Read {len(records)} existing record(s) from sheet")

        return ExistingSheetState(
            records=records,
            data_row_count=len(data_rows),
        )
