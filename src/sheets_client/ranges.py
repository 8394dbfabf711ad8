"""A1 notation helpers for Google Sheets ranges."""

import re
from typing import Optional

_COLUMN_RE = re.compile(r'^[A-Z]{1,3}$')
_SIMPLE_TITLE_RE = re.compile(r'^[A-Za-z0-9_]+$')


def is_valid_column(column: str) -> bool:
    """Return True if ``column`` is an upper-case column label such as ``A`` or ``AB``."""
    return bool(column) and bool(_COLUMN_RE.match(column))


def column_to_index(column: str) -> int:
    """Convert a column label to a zero-based index (``A`` -> 0, ``AA`` -> 26).

    Raises:
        ValueError: If the label is not a valid column
    """
    if not is_valid_column(column):
        raise ValueError(f"Invalid column label: '{column}'")
    index = 0
    for char in column:
        index = index * 26 + (ord(char) - ord('A') + 1)
    return index - 1


def index_to_column(index: int) -> str:
    """Convert a zero-based index to a column label (0 -> ``A``, 26 -> ``AA``)."""
    if index < 0:
        raise ValueError(f"Column index must be non-negative, got {index}")
    index += 1
    label = ""
    while index:
        index, remainder = divmod(index - 1, 26)
        label = chr(65 + remainder) + label
    return label


def quote_sheet_title(title: str) -> str:
    """Return a sheet title safely formatted for A1 notation."""
    if _SIMPLE_TITLE_RE.fullmatch(title):
        return title
    escaped = title.replace("'", "''")
    return f"'{escaped}'"


def with_sheet(range_spec: str, sheet_name: Optional[str]) -> str:
    """Prefix ``range_spec`` with ``sheet_name`` unless it already names a sheet."""
    if not sheet_name or '!' in range_spec:
        return range_spec
    return f"{quote_sheet_title(sheet_name)}!{range_spec}"
