"""Unit tests for cli.sheet_reader module."""

import pytest
from unittest.mock import Mock

from src.cli.models import SheetRecord
from src.cli.sheet_layout import SheetLayout
from src.cli.sheet_reader import SheetStateReader
from src.sheets_client.errors import PermissionDeniedError


class TestSheetStateReader:
    """Test cases for SheetStateReader.read."""

    def test_reads_records_below_header(self):
        api = Mock()
        api.get_values.return_value = [
            ["Key", "Original Value", "Updated Value"],
            ["auth.failed", "Bad creds", "Nope, try again"],
            ["auth.throttle", "Slow down"],
        ]

        state = SheetStateReader(api, SheetLayout()).read()

        api.get_values.assert_called_once_with("A1:C")
        assert state.records == {
            "auth.failed": SheetRecord("Bad creds", "Nope, try again"),
            "auth.throttle": SheetRecord("Slow down", ""),
        }
        assert state.data_row_count == 2
        assert state.readable is True
        assert state.is_empty is False

    def test_skips_rows_without_key(self):
        api = Mock()
        api.get_values.return_value = [
            ["Key", "Original Value", "Updated Value"],
            [],
            ["", "orphan value"],
            ["auth.failed", "Bad creds"],
        ]

        state = SheetStateReader(api, SheetLayout()).read()

        assert list(state.records) == ["auth.failed"]
        assert state.data_row_count == 3

    def test_header_only_sheet_is_empty(self):
        api = Mock()
        api.get_values.return_value = [["Key", "Original Value", "Updated Value"]]

        state = SheetStateReader(api, SheetLayout()).read()

        assert state.is_empty is True
        assert state.records == {}

    def test_without_header_first_row_is_data(self):
        api = Mock()
        api.get_values.return_value = [["auth.failed", "Bad creds"]]

        state = SheetStateReader(api, SheetLayout(header_row=None)).read()

        assert state.records == {"auth.failed": SheetRecord("Bad creds", "")}

    def test_custom_columns_and_header_row(self):
        api = Mock()
        api.get_values.return_value = [
            ["Key", "Original Value", "", "Updated Value"],
            ["auth.failed", "Bad creds", "note", "Nope"],
        ]
        layout = SheetLayout(key_column="B", original_value_column="C", updated_value_column="E", header_row=2)

        state = SheetStateReader(api, layout).read()

        api.get_values.assert_called_once_with("B2:E")
        assert state.records == {"auth.failed": SheetRecord("Bad creds", "Nope")}

    def test_unreadable_sheet_is_lenient(self):
        """A lenient read turns API errors into an empty, unreadable state."""
        api = Mock()
        api.get_values.side_effect = PermissionDeniedError("sheet-123")

        state = SheetStateReader(api, SheetLayout()).read()

        assert state.readable is False
        assert state.is_empty is True

    def test_strict_read_raises(self):
        api = Mock()
        api.get_values.side_effect = PermissionDeniedError("sheet-123")

        with pytest.raises(PermissionDeniedError):
            SheetStateReader(api, SheetLayout()).read(strict=True)
