"""Unit tests for catalog.catalog_writer module."""

import json
import os
from unittest.mock import patch

import pytest
import yaml

from src.catalog.catalog_writer import CatalogWriter, PlannedFile
from src.catalog.errors import FilesystemError
from src.catalog.models import CatalogFormat


class TestResolveTarget:
    """Test cases for CatalogWriter.resolve_target."""

    def test_new_group_file_uses_configured_format(self, tmp_path):
        """A key without an existing file should map to a new file in the configured format."""
        writer = CatalogWriter(CatalogFormat.JSON)

        target = writer.resolve_target(str(tmp_path), "auth.failed")

        assert target == (os.path.join(str(tmp_path), "auth.json"), "auth", "failed")

    def test_existing_file_keeps_its_extension(self, tmp_path):
        (tmp_path / "auth.yml").write_text("failed: x\n")
        writer = CatalogWriter(CatalogFormat.JSON)

        file_path, _, relative = writer.resolve_target(str(tmp_path), "auth.throttle.short")

        assert file_path == os.path.join(str(tmp_path), "auth.yml")
        assert relative == "throttle.short"

    def test_descends_into_existing_subdirectory(self, tmp_path):
        """A key whose first segment names a directory should go into that directory."""
        (tmp_path / "admin").mkdir()
        writer = CatalogWriter()

        file_path, group_key, relative = writer.resolve_target(str(tmp_path), "admin.users.title")

        assert file_path == os.path.join(str(tmp_path), "admin", "users.yaml")
        assert group_key == "admin.users"
        assert relative == "title"

    def test_group_file_wins_over_directory_without_match(self, tmp_path):
        """An existing group file wins when the directory has no file for the next segment."""
        (tmp_path / "admin").mkdir()
        (tmp_path / "admin.yaml").write_text("title: Admin\n")
        writer = CatalogWriter()

        file_path, _, relative = writer.resolve_target(str(tmp_path), "admin.menu.home")

        assert file_path == os.path.join(str(tmp_path), "admin.yaml")
        assert relative == "menu.home"

    def test_directory_file_wins_when_it_matches(self, tmp_path):
        (tmp_path / "admin").mkdir()
        (tmp_path / "admin.yaml").write_text("title: Admin\n")
        (tmp_path / "admin" / "users.yaml").write_text("title: Users\n")
        writer = CatalogWriter()

        file_path, _, relative = writer.resolve_target(str(tmp_path), "admin.users.title")

        assert file_path == os.path.join(str(tmp_path), "admin", "users.yaml")
        assert relative == "title"

    def test_two_segment_key_never_descends(self, tmp_path):
        """With only group and leaf, the group is a file even if a directory exists."""
        (tmp_path / "admin").mkdir()
        writer = CatalogWriter()

        file_path, _, relative = writer.resolve_target(str(tmp_path), "admin.title")

        assert file_path == os.path.join(str(tmp_path), "admin.yaml")
        assert relative == "title"

    def test_single_segment_key_has_no_target(self, tmp_path):
        assert CatalogWriter().resolve_target(str(tmp_path), "orphan") is None


class TestPlan:
    """Test cases for CatalogWriter.plan."""

    def test_groups_keys_by_file_and_inflates(self, tmp_path):
        flat = {
            "auth.failed": "Nope",
            "validation.required": "Required",
            "auth.throttle.short": "Slow",
        }

        planned = CatalogWriter().plan(str(tmp_path), flat)

        assert [os.path.basename(p.file_path) for p in planned] == ["auth.yaml", "validation.yaml"]
        assert planned[0].mapping == {"failed": "Nope", "throttle": {"short": "Slow"}}
        assert planned[1].mapping == {"required": "Required"}
        assert all(p.changed for p in planned)

    def test_skips_single_segment_keys(self, tmp_path):
        planned = CatalogWriter().plan(str(tmp_path), {"orphan": "x", "auth.failed": "Nope"})

        assert len(planned) == 1
        assert planned[0].entries == {"failed": "Nope"}

    def test_marks_identical_file_unchanged(self, tmp_path):
        """plan should mark a file unchanged when its content already matches."""
        (tmp_path / "auth.yaml").write_text("failed: Nope\n")

        planned = CatalogWriter().plan(str(tmp_path), {"auth.failed": "Nope"})

        assert planned[0].changed is False

    def test_existing_typed_values_keep_file_unchanged(self, tmp_path):
        (tmp_path / "auth.yaml").write_text("retries: 3\nenabled: true\nchoices: [a, b]\n")

        planned = CatalogWriter().plan(str(tmp_path), {"auth.retries": "3", "auth.enabled": "true"})

        assert planned[0].changed is False
        assert planned[0].mapping == {"retries": 3, "enabled": True, "choices": ["a", "b"]}


class TestOverlay:
    """Test cases for CatalogWriter.overlay."""

    def test_only_changed_leaves_replaced(self):
        existing = {"failed": "Bad creds", "retries": 3, "choices": ["a", "b"]}

        merged = CatalogWriter().overlay(existing, {"failed": "Nope", "retries": "3"})

        assert merged == {"failed": "Nope", "retries": 3, "choices": ["a", "b"]}
        assert existing["failed"] == "Bad creds"

    def test_nested_and_new_keys(self):
        existing = {"throttle": {"short": "Slow", "limit": 5}}

        merged = CatalogWriter().overlay(existing, {"throttle.short": "Slow down", "throttle.long": "Wait"})

        assert merged == {"throttle": {"short": "Slow down", "limit": 5, "long": "Wait"}}

    def test_integer_keys_matched_by_string_form(self):
        """YAML loads numeric keys as ints; the dotted key refers to them as text."""
        existing = {"codes": {404: "Not found", 500: "Server error"}}

        merged = CatalogWriter().overlay(existing, {"codes.404": "Missing"})

        assert merged == {"codes": {404: "Missing", 500: "Server error"}}

    def test_scalar_parent_replaced_by_mapping(self):
        merged = CatalogWriter().overlay({"throttle": "Slow"}, {"throttle.short": "Slow down"})

        assert merged == {"throttle": {"short": "Slow down"}}


class TestRender:
    """Test cases for CatalogWriter.render."""

    def test_yaml_keeps_insertion_order_and_unicode(self):
        content = CatalogWriter().render("auth.yaml", {"zeta": "Ünïcode", "alpha": "a"})

        assert content == "zeta: Ünïcode\nalpha: a\n"

    def test_json_uses_four_space_indent_and_trailing_newline(self):
        content = CatalogWriter().render("auth.json", {"failed": "Nope, try again"})

        assert content == '{\n    "failed": "Nope, try again"\n}\n'

    def test_json_does_not_escape_unicode(self):
        content = CatalogWriter().render("auth.json", {"greeting": "Grüß Gott"})

        assert "Grüß Gott" in content


class TestWriteFiles:
    """Test cases for CatalogWriter.write_files."""

    def test_writes_planned_files(self, tmp_path):
        lang_path = tmp_path / "en"
        writer = CatalogWriter()
        planned = writer.plan(str(lang_path), {
            "auth.failed": "Nope, try again",
            "admin.users.title": "Users",
        })

        written = writer.write_files(planned, str(lang_path))

        assert sorted(os.path.basename(p) for p in written) == ["admin.yaml", "auth.yaml"]
        assert yaml.safe_load((lang_path / "auth.yaml").read_text(encoding="utf-8")) == {
            "failed": "Nope, try again",
        }
        assert yaml.safe_load((lang_path / "admin.yaml").read_text(encoding="utf-8")) == {
            "users": {"title": "Users"},
        }

    def test_leaves_no_temp_directory(self, tmp_path):
        writer = CatalogWriter()
        planned = writer.plan(str(tmp_path), {"auth.failed": "Nope"})

        writer.write_files(planned, str(tmp_path))

        assert sorted(os.listdir(tmp_path)) == ["auth.yaml"]

    def test_skips_unchanged_files(self, tmp_path):
        (tmp_path / "auth.yaml").write_text("failed: Nope\n")
        writer = CatalogWriter()
        planned = writer.plan(str(tmp_path), {"auth.failed": "Nope"})

        assert writer.write_files(planned, str(tmp_path)) == []

    def test_phase_one_failure_leaves_catalog_untouched(self, tmp_path):
        """A render failure should abort before any file is moved into place."""
        (tmp_path / "auth.yaml").write_text("failed: Old\n")
        writer = CatalogWriter()
        planned = writer.plan(str(tmp_path), {"auth.failed": "New", "validation.required": "Req"})

        with patch.object(writer, "render", side_effect=["failed: New\n", TypeError("boom")]):
            with pytest.raises(FilesystemError) as exc_info:
                writer.write_files(planned, str(tmp_path))

        assert exc_info.value.operation == "write"
        assert (tmp_path / "auth.yaml").read_text() == "failed: Old\n"
        assert not (tmp_path / "validation.yaml").exists()
        assert sorted(os.listdir(tmp_path)) == ["auth.yaml"]

    def test_write_mapping_writes_single_file(self, tmp_path):
        path = tmp_path / "sub" / "auth.json"

        CatalogWriter().write_mapping(str(path), {"failed": "Nope"})

        assert json.loads(path.read_text(encoding="utf-8")) == {"failed": "Nope"}

    def test_empty_plan_writes_nothing(self, tmp_path):
        assert CatalogWriter().write_files([PlannedFile("x.yaml", "x", changed=False)], str(tmp_path)) == []
