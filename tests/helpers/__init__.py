"""Test helper modules for translation sheet sync testing.

This package provides utilities for unit and integration testing:
- fake_sheets: In-memory stand-in for the Google Sheets API wrapper
"""

from .fake_sheets import FakeSheetsAPI

__all__ = [
    'FakeSheetsAPI',
]
