"""Unit tests for reading and writing ``search_index.js`` files.

The fixtures under ``tests/fixtures`` are real generator output for two
documentation builds (a tagged release and the development branch). The tests
check that they parse into the expected records, that malformed envelopes and
records raise :class:`IndexFormatError`, and that writing reproduces the
generator's layout.

Usage
-----
Run ``pytest tests/test_codec.py -v``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from documenter_index.codec import (
    check_search_index_text,
    dump_search_index,
    load_search_index,
    parse_search_index,
    write_search_index,
)
from documenter_index.models import Category, DocEntry, IndexFormatError, SearchIndex

FIXTURES = Path(__file__).resolve().parent / "fixtures"
RELEASE_FIXTURE = FIXTURES / "v0.1.0_search_index.js"
DEV_FIXTURE = FIXTURES / "dev_search_index.js"


def test_release_fixture_parses_in_emitted_order() -> None:
    """The tagged release index yields its records in file order."""
    index = load_search_index(RELEASE_FIXTURE)
    assert index.variable == "documenterSearchIndex", (
        f"unexpected variable name {index.variable!r}"
    )
    assert len(index) == 14, f"expected 14 records, got {len(index)}"
    first = index[0]
    assert first == DocEntry(
        location="reference/#Reference",
        page="Reference",
        title="Reference",
        text="",
        category=Category.SECTION,
    ), f"unexpected first record {first!r}"
    assert index[-1].page == "Introduction", "last record should be on Introduction"


def test_dev_fixture_preserves_unicode_and_escapes() -> None:
    """Non-ASCII characters and escaped quotes survive decoding."""
    index = load_search_index(DEV_FIXTURE)
    assert len(index) == 116, f"expected 116 records, got {len(index)}"
    texts = "".join(entry.text for entry in index)
    assert "≥" in texts, "expected the non-ASCII '≥' sign in record text"
    assert 'Z rel"' in texts, "expected decoded double quotes in record text"


def test_dev_fixture_round_trips_byte_for_byte() -> None:
    """Writing a parsed generator file reproduces it exactly."""
    original = DEV_FIXTURE.read_text(encoding="utf-8")
    assert dump_search_index(parse_search_index(original)) == original, (
        "canonical dump should match the generator output"
    )


def test_dump_layout_matches_generator() -> None:
    """Records are compact JSON on a line between the assignment lines."""
    index = SearchIndex(
        (DocEntry("a/", "A", "A", "Hi", Category.PAGE),), variable="searchIdx"
    )
    expected = (
        'var searchIdx = {"docs":\n'
        '[{"location":"a/","page":"A","title":"A","text":"Hi","category":"page"}]\n'
        "}\n"
    )
    assert dump_search_index(index) == expected


@pytest.mark.parametrize(
    "text",
    [
        'var documenterSearchIndex = {"docs": []};',
        '  let documenterSearchIndex={"docs":[]}  \n',
        'const documenterSearchIndex = {"docs": [], "config": {}}',
    ],
)
def test_envelope_variants_are_accepted(text: str) -> None:
    """Trailing semicolons, whitespace and extra members are tolerated."""
    assert len(parse_search_index(text)) == 0


@pytest.mark.parametrize(
    ("text", "fragment"),
    [
        ('{"docs": []}', "assignment"),
        ("var x = {docs: []}", "not valid JSON"),
        ("var x = []", "must be a JSON object"),
        ('var x = {"pages": []}', "no 'docs' member"),
        ('var x = {"docs": {}}', "'docs' must be an array"),
        (
            'var x = {"docs": [{"location": "", "page": "P", "title": "T",'
            ' "text": "", "category": "module"}]}',
            "unknown category 'module'",
        ),
    ],
)
def test_malformed_input_raises(text: str, fragment: str) -> None:
    """Every malformed input raises IndexFormatError naming the problem."""
    with pytest.raises(IndexFormatError) as excinfo:
        parse_search_index(text)
    assert fragment in str(excinfo.value), (
        f"expected {fragment!r} in error message, got {excinfo.value!s}"
    )


def test_write_creates_parent_directories(tmp_path: Path) -> None:
    """Writing to a nested path creates the directories first."""
    index = load_search_index(RELEASE_FIXTURE)
    target = tmp_path / "build" / "v0.1.0" / "search_index.js"
    write_search_index(index, target)
    assert load_search_index(target) == index, "rewritten index should be equal"


def test_check_collects_every_record_issue() -> None:
    """Lenient checking reports all problems instead of the first one."""
    text = (
        'var documenterSearchIndex = {"docs": ['
        '{"location": "", "page": "P", "title": "T", "text": 3, "category": "page"},'
        '"not a record",'
        '{"location": "", "page": "P", "title": "T", "text": ""}'
        "]}"
    )
    report = check_search_index_text(text, source="broken.js")
    assert not report.ok, "expected the report to flag errors"
    assert report.index is None, "no index should be built from broken records"
    described = [issue.describe() for issue in report.issues]
    assert described == [
        "error #0 text: must be a string, got int",
        "error #1 record must be an object, got str",
        "error #2 category: missing field",
    ], f"unexpected issues {described!r}"


def test_check_reports_envelope_problem_once() -> None:
    report = check_search_index_text("window.index = 1")
    assert len(report.issues) == 1
    assert report.issues[0].position is None


def test_check_builds_index_and_keeps_warnings() -> None:
    """Well-formed records produce an index even when warnings are present."""
    text = (
        'var documenterSearchIndex = {"docs": ['
        '{"location": "a/#x", "page": "A", "title": "X", "text": "",'
        ' "category": "page", "score": 1}'
        "]}"
    )
    report = check_search_index_text(text)
    assert report.ok, f"warnings alone should not fail the check: {report.issues}"
    assert report.index is not None
    fields = sorted(issue.field or "" for issue in report.warnings)
    assert fields == ["location", "score"], f"unexpected warnings {fields!r}"
