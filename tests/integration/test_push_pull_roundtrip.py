"""Integration tests for a full push -> edit -> pull cycle.

Uses the in-memory spreadsheet from tests.helpers so the real commands,
reconciler, catalog reader and writer run end to end.
"""

import io
from datetime import datetime, timedelta

import pytest
import yaml
from rich.console import Console

from src.cli.backup_manager import BackupManager
from src.cli.models import SyncMode
from src.cli.output import OutputHandler
from src.cli.pull_command import PullCommand
from src.cli.push_command import PushCommand

HEADER = ["Key", "Original Value", "Updated Value"]


class StepClock:
    """Returns a time one minute later on every call."""

    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, 0)

    def __call__(self):
        self.now += timedelta(minutes=1)
        return self.now


@pytest.fixture
def output():
    return OutputHandler(console=Console(file=io.StringIO()))


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def push(sync_config, fake_sheets, output, clock):
    def _push(**kwargs):
        command = PushCommand(
            sync_config,
            api=fake_sheets,
            output_handler=output,
            backup_manager=BackupManager(fake_sheets, clock=clock),
        )
        return command.run(lang="en", **kwargs)
    return _push


@pytest.fixture
def pull(sync_config, fake_sheets, output):
    def _pull(**kwargs):
        return PullCommand(sync_config, api=fake_sheets, output_handler=output).run(lang="en", **kwargs)
    return _pull


class TestPushEditPull:
    """A translator edits the sheet and the edit comes back into the catalog."""

    def test_roundtrip(self, push, pull, fake_sheets, lang_root, write_yaml):
        auth_file = lang_root / "en" / "auth.yaml"
        write_yaml(auth_file, {"failed": "Bad creds"})

        report = push()

        assert report.mode == SyncMode.INITIAL
        assert fake_sheets.read() == [HEADER, ["auth.failed", "Bad creds"]]

        fake_sheets.set_rows([["auth.failed", "Bad creds", "Nope, try again"]], anchor="A2")

        preview = pull(dry_run=True)

        assert preview.group_counts == {"auth": 1}
        assert yaml.safe_load(auth_file.read_text()) == {"failed": "Bad creds"}

        result = pull()

        assert result.files_written == [str(auth_file)]
        assert yaml.safe_load(auth_file.read_text()) == {"failed": "Nope, try again"}

        again = push()

        assert again.mode == SyncMode.DIFF
        assert again.stats.unchanged == 1
        assert again.stats.changed == 0
        assert fake_sheets.read()[1] == ["auth.failed", "Bad creds", "Nope, try again"]


class TestRepeatedPushes:
    """Catalog changes between pushes."""

    def test_edits_survive_unrelated_catalog_changes(self, push, fake_sheets, lang_root, write_yaml):
        write_yaml(lang_root / "en" / "auth.yaml", {"failed": "Bad creds", "throttle": "Slow"})
        push()
        fake_sheets.set_rows([[None, None, "Nope"]], anchor="A2")

        write_yaml(lang_root / "en" / "auth.yaml", {"failed": "Bad creds", "throttle": "Slow down"})
        write_yaml(lang_root / "en" / "validation.yaml", {"required": "Required"})
        report = push()

        assert (report.stats.new, report.stats.changed, report.stats.unchanged) == (1, 1, 1)
        assert fake_sheets.read() == [
            HEADER,
            ["auth.failed", "Bad creds", "Nope"],
            ["auth.throttle", "Slow", "Slow down"],
            ["validation.required", "Required"],
        ]

    def test_deleted_keys_leave_no_stale_rows(self, push, fake_sheets, lang_root, write_yaml):
        write_yaml(lang_root / "en" / "auth.yaml", {"failed": "Bad creds", "throttle": "Slow"})
        write_yaml(lang_root / "en" / "legacy.yaml", {"title": "Old"})
        push()

        (lang_root / "en" / "legacy.yaml").unlink()
        write_yaml(lang_root / "en" / "auth.yaml", {"failed": "Bad creds"})
        report = push()

        assert report.stats.removed == 2
        assert fake_sheets.read() == [HEADER, ["auth.failed", "Bad creds"]]

    def test_backups_rotate(self, push, sync_config, fake_sheets, lang_root, write_yaml):
        sync_config.backup_keep = 2
        write_yaml(lang_root / "en" / "auth.yaml", {"failed": "Bad creds"})

        for _ in range(4):
            push()

        assert fake_sheets.titles() == [
            "Sheet1",
            "Backup 2024-01-01 12:02:00",
            "Backup 2024-01-01 12:03:00",
        ]
