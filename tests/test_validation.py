"""Unit tests for record well-formedness and consistency checks."""

from __future__ import annotations

from pathlib import Path

import pytest

from documenter_index.codec import load_search_index
from documenter_index.models import Category, DocEntry, IndexFormatError, SearchIndex
from documenter_index.validation import (
    Issue,
    Severity,
    check_consistency,
    entries_from_records,
    validate_records,
)

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def _record(**overrides: object) -> dict[str, object]:
    record: dict[str, object] = {
        "location": "tutorial_1/",
        "page": "Tutorial 1",
        "title": "Tutorial 1",
        "text": "OK, let's look at some examples.",
        "category": "page",
    }
    record.update(overrides)
    return record


def test_well_formed_records_have_no_issues() -> None:
    assert validate_records([_record(), _record(category="section")]) == []


def test_non_string_fields_are_reported_per_field() -> None:
    issues = validate_records([_record(page=None, title=["x"])])
    assert issues == [
        Issue("must be a string, got null", position=0, field="page"),
        Issue("must be a string, got list", position=0, field="title"),
    ]


def test_empty_text_is_allowed() -> None:
    assert validate_records([_record(text="")]) == []


def test_extra_fields_are_warnings() -> None:
    issues = validate_records([_record(score=0.5)])
    assert [issue.severity for issue in issues] == [Severity.WARNING]
    assert issues[0].field == "score"


def test_entries_from_records_raises_on_first_error() -> None:
    with pytest.raises(IndexFormatError, match="#1 location: missing field"):
        entries_from_records([_record(), {"page": "x"}])


def test_entries_from_records_builds_typed_entries() -> None:
    (entry,) = entries_from_records([_record(category="function")])
    assert entry.category is Category.FUNCTION


@pytest.mark.parametrize("name", ["v0.1.0_search_index.js", "dev_search_index.js"])
def test_generator_output_is_consistent(name: str) -> None:
    """Real generator output produces no consistency warnings."""
    index = load_search_index(FIXTURES / name)
    issues = check_consistency(index)
    assert issues == [], f"unexpected warnings for {name}: {issues!r}"


def test_consistency_flags_misplaced_anchors() -> None:
    index = SearchIndex(
        (
            DocEntry("a/#frag", "A", "A", "", Category.PAGE),
            DocEntry("a/", "A", "Heading", "", Category.SECTION),
        )
    )
    messages = [issue.message for issue in check_consistency(index)]
    assert messages == [
        "page record points at an anchor",
        "section record has no anchor",
    ]


def test_consistency_flags_conflicting_titles() -> None:
    index = SearchIndex(
        (
            DocEntry("a/", "Alpha", "Alpha", "", Category.PAGE),
            DocEntry("a/#x", "Beta", "X", "", Category.SECTION),
            DocEntry("a/#x", "Alpha", "Y", "", Category.SECTION),
        )
    )
    issues = check_consistency(index)
    assert [(issue.position, issue.field) for issue in issues] == [
        (1, "page"),
        (2, "title"),
    ]
    assert all(issue.severity is Severity.WARNING for issue in issues)
