"""Unit tests for catalog.flattener module."""

from src.catalog.flattener import (
    flatten,
    inflate,
    join_key,
    scalar_to_string,
    top_level_group,
)


class TestFlatten:
    """Test cases for flatten function."""

    def test_flattens_nested_mapping_with_prefix(self):
        """flatten should join nested keys with dots under the prefix."""
        nested = {"failed": "Bad creds", "throttle": {"short": "Slow down"}}

        result = flatten(nested, "auth")

        assert result == {
            "auth.failed": "Bad creds",
            "auth.throttle.short": "Slow down",
        }

    def test_no_prefix_at_first_level(self):
        """flatten without prefix should not add a leading dot."""
        assert flatten({"a": {"b": "c"}}) == {"a.b": "c"}

    def test_preserves_declaration_order_depth_first(self):
        """flatten should emit keys depth-first in each level's order."""
        nested = {"z": "1", "m": {"y": "2", "b": "3"}, "a": "4"}

        assert list(flatten(nested)) == ["z", "m.y", "m.b", "a"]

    def test_converts_scalars_to_strings(self):
        """flatten should stringify numbers, booleans and None."""
        nested = {"count": 3, "ratio": 1.5, "on": True, "off": False, "nothing": None}

        result = flatten(nested)

        assert result == {
            "count": "3",
            "ratio": "1.5",
            "on": "true",
            "off": "false",
            "nothing": "",
        }

    def test_skips_lists(self):
        """flatten should silently skip list values."""
        nested = {"choices": ["a", "b"], "label": "Pick"}

        assert flatten(nested) == {"label": "Pick"}

    def test_does_not_mutate_input(self):
        """flatten should leave the input mapping untouched."""
        nested = {"a": {"b": "c"}}

        flatten(nested, "x")

        assert nested == {"a": {"b": "c"}}

    def test_empty_mapping(self):
        """flatten of an empty mapping is empty."""
        assert flatten({}, "auth") == {}


class TestInflate:
    """Test cases for inflate function."""

    def test_rebuilds_nested_structure(self):
        """inflate should reverse flatten."""
        flat = {"failed": "Nope", "throttle.short": "Slow"}

        assert inflate(flat) == {"failed": "Nope", "throttle": {"short": "Slow"}}

    def test_flatten_inflate_idempotent(self):
        """inflate(flatten(m)) should equal m for string leaves without dotted keys."""
        nested = {
            "auth": {"failed": "Bad creds", "throttle": {"short": "Slow", "long": "Wait"}},
            "title": "Welcome",
        }

        assert inflate(flatten(nested)) == nested

    def test_scalar_replaced_by_mapping_on_collision(self):
        """inflate should replace a scalar with a mapping when a deeper key needs it."""
        flat = {"a": "leaf", "a.b": "deeper"}

        assert inflate(flat) == {"a": {"b": "deeper"}}

    def test_later_scalar_overwrites_mapping(self):
        """inflate should let the last write win at a leaf position."""
        flat = {"a.b": "deeper", "a": "leaf"}

        assert inflate(flat) == {"a": "leaf"}


class TestHelpers:
    """Test cases for key helpers."""

    def test_join_key(self):
        assert join_key("", "auth") == "auth"
        assert join_key("admin", "users") == "admin.users"

    def test_join_key_stringifies_segment(self):
        assert join_key("codes", 404) == "codes.404"

    def test_scalar_to_string_rejects_containers(self):
        assert scalar_to_string({"a": 1}) is None
        assert scalar_to_string([1]) is None

    def test_top_level_group(self):
        assert top_level_group("auth.throttle.short") == "auth"
        assert top_level_group("single") == "single"
