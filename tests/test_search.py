"""Tests for subsequence matching and the match cursor."""

import pytest

from deptui.search import SearchState, find_matches, is_subsequence_match


@pytest.mark.parametrize("query, name", [
    ("ab", "Alpha-Beta"),
    ("ab", "Zab"),
    ("SJ", "serde_json"),
    ("serde", "serde"),
    ("mdit", "markdown-it-py"),
])
def test_subsequence_matches(query, name):
    assert is_subsequence_match(query, name)


@pytest.mark.parametrize("query, name", [
    ("ab", "ba"),
    ("serdes", "serde"),
    ("x", ""),
    ("jsonx", "serde_json"),
])
def test_subsequence_rejects(query, name):
    assert not is_subsequence_match(query, name)


def test_repeated_characters_need_repeated_occurrences():
    assert is_subsequence_match("ss", "sans-serif")
    assert not is_subsequence_match("ss", "serde")


def test_find_matches_in_storage_order(crates_tree):
    assert find_matches("se", crates_tree) == [0, 1]
    assert find_matches("o", crates_tree) == [1, 2]
    assert find_matches("zzz", crates_tree) == []


def test_empty_query_has_no_matches(crates_tree):
    search = SearchState()
    assert search.recompute(crates_tree) is None
    assert search.matches == []
    assert search.cursor is None


def test_recompute_sets_cursor_to_first_match(crates_tree):
    search = SearchState(query="json")
    assert search.recompute(crates_tree) == 1
    assert search.matches == [1]
    assert search.cursor == 0


def test_advance_wraps_both_ways(deep_tree):
    search = SearchState(query="r")
    search.recompute(deep_tree)
    assert search.matches == [2, 3, 4, 5]

    assert search.advance(-1) == 5
    assert search.cursor == 3
    assert search.advance(1) == 2
    assert search.cursor == 0


def test_advance_full_cycle_returns_to_start(deep_tree):
    search = SearchState(query="m")
    search.recompute(deep_tree)
    search.advance(1)
    start = search.cursor

    for _ in range(len(search.matches)):
        search.advance(1)

    assert search.cursor == start


def test_advance_without_matches_is_noop():
    search = SearchState()
    assert search.advance(1) is None
    assert search.cursor is None


def test_advance_without_cursor_is_noop(crates_tree):
    search = SearchState(query="se")
    search.recompute(crates_tree)
    search.cursor = None

    assert search.advance(1) is None
    assert search.cursor is None


def test_position_and_clear(crates_tree):
    search = SearchState(query="se")
    search.recompute(crates_tree)
    search.advance(1)
    assert search.position == (2, 2)

    search.clear()
    assert (search.query, search.matches, search.cursor) == ("", [], None)
    assert search.position is None
