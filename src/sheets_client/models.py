"""Data models for the Sheets client library."""

from dataclasses import dataclass


@dataclass
class SheetInfo:
    """A single sheet (tab) inside a spreadsheet.

    Attributes:
        sheet_id: Numeric sheet ID used by batchUpdate requests
        title: Sheet title as shown on the tab
        index: Zero-based position of the tab
    """
    sheet_id: int
    title: str
    index: int = 0
