"""Unit tests for cli.output module."""

import io

import pytest
from rich.console import Console

from src.cli.models import ChangeStats, SyncMode
from src.cli.output import OutputHandler


@pytest.fixture
def buffer():
    return io.StringIO()


def make_handler(buffer, verbosity=0):
    return OutputHandler(verbosity=verbosity, console=Console(file=buffer, width=120))


class TestMessages:
    """Test cases for message methods and verbosity."""

    def test_info_hidden_at_verbosity_zero(self, buffer):
        handler = make_handler(buffer)

        handler.info("Collecting translations")
        handler.debug("details")

        assert buffer.getvalue() == ""

    def test_info_and_debug_shown_when_verbose(self, buffer):
        handler = make_handler(buffer, verbosity=2)

        handler.info("Collecting translations")
        handler.debug("details")

        assert "Collecting translations" in buffer.getvalue()
        assert "details" in buffer.getvalue()

    def test_error_and_warning_always_shown(self, buffer):
        handler = make_handler(buffer)

        handler.error("Push failed")
        handler.warning("No translations found")

        assert "Push failed" in buffer.getvalue()
        assert "No translations found" in buffer.getvalue()

    def test_spinner_without_terminal(self, buffer):
        handler = make_handler(buffer)
        ran = []

        with handler.spinner("Working..."):
            ran.append(True)

        assert ran == [True]


class TestSummaries:
    """Test cases for push, pull and dry-run summaries."""

    def test_initial_push_summary(self, buffer):
        make_handler(buffer).print_push_summary(ChangeStats(new=3), SyncMode.INITIAL)

        text = buffer.getvalue()
        assert "Push Summary:" in text
        assert "Initial push: 3 key(s)" in text
        assert "Translations pushed successfully" in text

    def test_diff_push_summary(self, buffer):
        stats = ChangeStats(new=1, changed=2, removed=1, unchanged=4)

        make_handler(buffer, verbosity=1).print_push_summary(stats, SyncMode.DIFF, ["legacy.title"])

        text = buffer.getvalue()
        assert "New: 1 key(s) added" in text
        assert "Changed: 2 key(s) updated" in text
        assert "Removed: 1 key(s) no longer in catalog" in text
        assert "Unchanged: 4 key(s)" in text
        assert "legacy.title" in text

    def test_removed_keys_listed_only_when_verbose(self, buffer):
        make_handler(buffer).print_push_summary(ChangeStats(removed=1), SyncMode.DIFF, ["legacy.title"])

        assert "legacy.title" not in buffer.getvalue()

    def test_up_to_date_push_summary(self, buffer):
        make_handler(buffer).print_push_summary(ChangeStats(unchanged=2), SyncMode.DIFF)

        assert "Sheet already up to date." in buffer.getvalue()

    def test_pull_summary(self, buffer):
        stats = ChangeStats(new=1, changed=1, removed=2)

        make_handler(buffer).print_pull_summary(stats, ["lang/en/auth.yaml"])

        text = buffer.getvalue()
        assert "Pull Summary:" in text
        assert "Not in sheet: 2 key(s) kept" in text
        assert "Wrote 1 file(s)" in text

    def test_dryrun_summary(self, buffer):
        make_handler(buffer).print_dryrun_summary({"auth": 2, "validation": 1})

        text = buffer.getvalue()
        assert "• auth: 2" in text
        assert "• validation: 1" in text
        assert "3 translation(s) in 2 group(s), including catalog keys kept from disk." in text
        assert "No files written." in text

    def test_keys_with_markup_characters_printed_literally(self, buffer):
        make_handler(buffer, verbosity=1).print_push_summary(
            ChangeStats(removed=1), SyncMode.DIFF, ["ui.[/x]closing"]
        )

        assert "ui.[/x]closing" in buffer.getvalue()

    def test_messages_with_markup_characters_printed_literally(self, buffer):
        handler = make_handler(buffer)

        handler.error("Push failed: bad key [/bold]")

        assert "bad key [/bold]" in buffer.getvalue()
