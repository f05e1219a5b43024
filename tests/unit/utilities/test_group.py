"""
Unit tests for the group key codec.
"""

import pytest

from stowage.utilities.group import (
    KEY_MARKER,
    child_group,
    group_key_prefix,
    namespaced_key,
    normalize_group,
)


class TestNormalizeGroup:
    """Test group path normalization."""

    def test_string_is_kept(self):
        assert normalize_group("cache") == "cache"

    def test_sequence_is_joined(self):
        assert normalize_group(["a", "b", "c"]) == "a/b/c"

    def test_empty_segments_are_dropped(self):
        assert normalize_group(["a", "", "b"]) == "a/b"

    def test_repeated_delimiters_collapse(self):
        assert normalize_group(["a//b/", "/c"]) == "a/b/c"

    def test_empty_input(self):
        assert normalize_group([]) == ""
        assert normalize_group("") == ""

    @pytest.mark.parametrize(
        "segments",
        ["a", ["a", "b"], ["a//b", "", "/c/"], "@global/users", ["x/", "/y"]],
    )
    def test_idempotent(self, segments):
        once = normalize_group(segments)
        assert normalize_group(once) == once


class TestNamespacedKey:
    """Test namespaced key construction."""

    def test_key_layout(self):
        assert namespaced_key("@a", "user") == f"@a/{KEY_MARKER}/user"

    def test_nested_group(self):
        assert namespaced_key(["@a", "b"], "k") == f"@a/b/{KEY_MARKER}/k"

    def test_distinct_keys_in_one_group_do_not_collide(self):
        assert namespaced_key("g", "a") != namespaced_key("g", "b")

    def test_same_key_in_two_groups_does_not_collide(self):
        assert namespaced_key("g1", "a") != namespaced_key("g2", "a")

    def test_key_is_not_normalized(self):
        assert namespaced_key("g", "page/") == f"g/{KEY_MARKER}/page/"
        assert namespaced_key("g", "a//b") != namespaced_key("g", "a/b")
        assert namespaced_key("g", "https://x") != namespaced_key("g", "https:/x")

    def test_empty_group(self):
        assert namespaced_key("", "k") == f"{KEY_MARKER}/k"

    def test_child_group_key_does_not_collide_with_parent_key(self):
        parent_key = namespaced_key("g", "child")
        child_key = namespaced_key(child_group("g", "child"), "a")
        assert not child_key.startswith(parent_key + "/")


class TestGroupHelpers:
    """Test child groups and key prefixes."""

    def test_child_group(self):
        assert child_group("@a", "b") == "@a/b"
        assert child_group("@a/", ["b", "c"]) == "@a/b/c"

    def test_group_key_prefix_matches_group_keys(self):
        prefix = group_key_prefix("@a")
        assert namespaced_key("@a", "x").startswith(prefix)
        assert not namespaced_key(child_group("@a", "b"), "x").startswith(prefix)
