"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest
import yaml

from src.catalog.models import SheetSyncConfig
from tests.helpers.fake_sheets import FakeSheetsAPI

# googleapiclient logs discovery and cache details at INFO/WARNING;
# tests never talk to Google, so keep its output quiet.
logging.getLogger("googleapiclient").setLevel(logging.ERROR)


@pytest.fixture
def write_yaml():
    """Write a mapping as YAML, creating parent directories."""
    def _write(path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            yaml.safe_dump(data, allow_unicode=True, sort_keys=False),
            encoding="utf-8",
        )
        return path
    return _write


@pytest.fixture
def lang_root(tmp_path):
    """Empty language root directory (``<tmp>/lang``)."""
    root = tmp_path / "lang"
    root.mkdir()
    return root


@pytest.fixture
def sync_config(lang_root):
    """Default configuration pointing at ``lang_root``."""
    return SheetSyncConfig(
        spreadsheet_id="sheet-123",
        lang_path=str(lang_root),
    )


@pytest.fixture
def fake_sheets():
    """In-memory spreadsheet with a single empty sheet."""
    return FakeSheetsAPI()
