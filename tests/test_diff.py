"""Unit tests for comparing search index snapshots."""

from __future__ import annotations

from pathlib import Path

from documenter_index.codec import load_search_index
from documenter_index.diff import diff_indexes, format_key
from documenter_index.models import Category, DocEntry, SearchIndex

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def test_identical_snapshots_have_empty_diff() -> None:
    index = load_search_index(FIXTURES / "dev_search_index.js")
    assert diff_indexes(index, index).is_empty


def test_release_to_dev_reports_new_tutorial_pages() -> None:
    """The development build adds the tutorials and re-anchors get_parameter."""
    old = load_search_index(FIXTURES / "v0.1.0_search_index.js")
    new = load_search_index(FIXTURES / "dev_search_index.js")
    result = diff_indexes(old, new)
    assert result.pages_added == ["Tutorial 1", "Tutorial 2", "Tutorial 3"]
    assert result.pages_removed == []
    removed_key = (
        "reference/#SpmGrids.get_parameter-Tuple{SpmGrids.SpmGrid, AbstractString, Any, Any}",
        Category.METHOD,
        "SpmGrids.get_parameter",
    )
    assert removed_key in result.removed
    unchanged_key = ("#About", Category.SECTION, "About")
    assert unchanged_key not in result.added + result.removed + result.changed


def test_split_page_pieces_compare_as_a_sequence() -> None:
    """Reordering the pieces of one page counts as a change, not add/remove."""
    first = DocEntry("a/", "A", "A", "one", Category.PAGE)
    second = DocEntry("a/", "A", "A", "two", Category.PAGE)
    result = diff_indexes(SearchIndex((first, second)), SearchIndex((second, first)))
    assert result.changed == [("a/", Category.PAGE, "A")]
    assert result.added == []
    assert result.removed == []


def test_format_key_marks_root_location() -> None:
    assert format_key(("", Category.PAGE, "Introduction")) == "/ [page] Introduction"
