"""Sheet layout: where keys and values live in the translation sheet.

Derives column offsets and A1 ranges from the configured column letters
and header row, and converts between raw cell rows and SheetRows.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from src.catalog.models import HEADER_TITLES, SheetSyncConfig
from src.sheets_client.ranges import column_to_index, index_to_column

from .models import SheetRow


@dataclass(frozen=True)
class SheetLayout:
    """Column and row positions of the translation table.

    The three configured columns need not be adjacent or ordered. The table
    spans from the leftmost to the rightmost configured column; cells in
    between are never written.

    Example:
        >>> layout = SheetLayout(key_column="A", original_value_column="B",
        ...                      updated_value_column="D", header_row=1)
        >>> layout.data_range
        'A1:D'
        >>> layout.to_cells(SheetRow("auth.failed", "Bad creds", ""))
        ['auth.failed', 'Bad creds', None, '']
    """
    key_column: str = "A"
    original_value_column: str = "B"
    updated_value_column: str = "C"
    header_row: Optional[int] = 1

    @classmethod
    def from_config(cls, config: SheetSyncConfig) -> "SheetLayout":
        return cls(
            key_column=config.key_column,
            original_value_column=config.original_value_column,
            updated_value_column=config.updated_value_column,
            header_row=config.header_row,
        )

    @property
    def _indexes(self) -> List[int]:
        return [
            column_to_index(self.key_column),
            column_to_index(self.original_value_column),
            column_to_index(self.updated_value_column),
        ]

    @property
    def first_column(self) -> str:
        return index_to_column(min(self._indexes))

    @property
    def last_column(self) -> str:
        return index_to_column(max(self._indexes))

    @property
    def width(self) -> int:
        return max(self._indexes) - min(self._indexes) + 1

    @property
    def offsets(self) -> List[int]:
        """Positions of key, original and updated cells within a row of the table."""
        first = min(self._indexes)
        return [index - first for index in self._indexes]

    @property
    def has_header(self) -> bool:
        return self.header_row is not None

    @property
    def start_row(self) -> int:
        """First sheet row of the table (the header row, or 1 without a header)."""
        return self.header_row if self.header_row is not None else 1

    @property
    def data_range(self) -> str:
        """Range covering the header and all data rows."""
        return f"{self.first_column}{self.start_row}:{self.last_column}"

    @property
    def clear_range(self) -> str:
        """Whole columns spanned by the table."""
        return f"{self.first_column}:{self.last_column}"

    @property
    def write_anchor(self) -> str:
        """Top-left cell of a full table write."""
        return f"{self.first_column}{self.start_row}"

    def header(self) -> SheetRow:
        return SheetRow(*HEADER_TITLES)

    def to_cells(self, row: Sequence[str]) -> List[Optional[str]]:
        """Place key, original and updated values at their column offsets.

        Cells between configured columns are None so the API leaves them untouched.
        """
        cells: List[Optional[str]] = [None] * self.width
        for offset, value in zip(self.offsets, row):
            cells[offset] = value
        return cells

    def from_cells(self, cells: Sequence[Any]) -> SheetRow:
        """Read key, original and updated values from a raw sheet row.

        Missing trailing cells (the API omits them) read as empty strings.
        """
        values = []
        for offset in self.offsets:
            value = cells[offset] if offset < len(cells) else None
            values.append('' if value is None else str(value))
        return SheetRow(*values)
