"""Data models for the translation catalog and sync configuration.

This module defines the configuration object passed to every component
and the enums that select catalog file format and diff policy.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CatalogFormat(str, Enum):
    """Serialization used for translation group files."""
    YAML = "yaml"
    JSON = "json"

    @property
    def extension(self) -> str:
        return f".{self.value}"


class DiffPolicy(str, Enum):
    """How a push decides that a key already present in the sheet is unchanged.

    - BASELINE_ONLY: the catalog value must equal the sheet's Original Value.
    - BASELINE_OR_UPDATED: equality with either the Original Value or the
      Updated Value counts as unchanged, so a push right after a pull is a
      no-op instead of a change.

    In both policies a changed key keeps the Original Value and has its
    Updated Value overwritten with the catalog value, discarding any pending
    edit in the sheet.
    """
    BASELINE_ONLY = "baseline_only"
    BASELINE_OR_UPDATED = "baseline_or_updated"


HEADER_TITLES = ("Key", "Original Value", "Updated Value")


@dataclass
class SheetSyncConfig:
    """Configuration for syncing one catalog with one spreadsheet.

    Loaded once per invocation by ConfigLoader and handed to every
    component constructor.

    Attributes:
        spreadsheet_id: Target spreadsheet ID (env GOOGLE_SHEETS_SPREADSHEET_ID wins)
        credentials_path: Service account JSON key path (env GOOGLE_SHEETS_CREDENTIALS_PATH wins)
        sheet_name: Sheet (tab) holding the translations; None for the first sheet
        key_column: Column letter holding translation keys
        original_value_column: Column letter holding the baseline value
        updated_value_column: Column letter holding the editable value
        header_row: 1-indexed header row, or None when the sheet has no header
        backup_keep: Number of backup sheets retained after a push
        lang_path: Directory holding one subdirectory per language
        catalog_format: Format used when a pull creates a new group file
        diff_policy: Unchanged-detection policy used by push
    """
    spreadsheet_id: Optional[str] = None
    credentials_path: Optional[str] = ".translation-sync/service-account.json"
    sheet_name: Optional[str] = None
    key_column: str = "A"
    original_value_column: str = "B"
    updated_value_column: str = "C"
    header_row: Optional[int] = 1
    backup_keep: int = 5
    lang_path: str = "lang"
    catalog_format: CatalogFormat = CatalogFormat.YAML
    diff_policy: DiffPolicy = DiffPolicy.BASELINE_OR_UPDATED
