"""Well-formedness and consistency checks for search index records.

Two layers of checks are provided:

* :func:`validate_records` inspects the raw decoded ``docs`` array and reports
  every structural problem: records that are not objects, missing fields,
  fields that are not strings, and categories outside the fixed set.
* :func:`check_consistency` inspects an already-built
  :class:`~documenter_index.models.SearchIndex` and reports warnings for
  records that parse fine but do not look like what the generator emits
  (page records carrying anchors, paths shared by differently titled pages).

Issues are collected rather than raised so callers can print a full report;
:func:`entries_from_records` is the strict path that raises on the first
error.

Examples
--------
>>> issues = validate_records([{"location": "", "page": "Home"}])
>>> [issue.field for issue in issues]
['title', 'text', 'category']
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from ._constants import RECORD_FIELDS
from .models import Category, DocEntry, IndexFormatError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import SearchIndex

_KNOWN_CATEGORIES = frozenset(category.value for category in Category)


class Severity(enum.StrEnum):
    """How serious a reported issue is."""

    ERROR = "error"
    WARNING = "warning"


@dc.dataclass(frozen=True, slots=True)
class Issue:
    """A single finding about the search index.

    Attributes
    ----------
    message : str
        Human-readable description of the problem.
    position : int | None
        Zero-based record position, or ``None`` for file-level problems.
    field : str | None
        Record field the issue concerns, if any.
    severity : Severity
        ``ERROR`` for structural problems, ``WARNING`` for consistency hints.
    """

    message: str
    position: int | None = None
    field: str | None = None
    severity: Severity = Severity.ERROR

    def describe(self) -> str:
        """Return a one-line rendering such as ``error #3 title: ...``."""
        parts = [self.severity.value]
        if self.position is not None:
            parts.append(f"#{self.position}")
        if self.field:
            parts.append(f"{self.field}:")
        parts.append(self.message)
        return " ".join(parts)


@dc.dataclass(slots=True)
class CheckReport:
    """Outcome of checking one search index source."""

    source: str
    index: SearchIndex | None
    issues: list[Issue] = dc.field(default_factory=list)

    @property
    def errors(self) -> list[Issue]:
        return [issue for issue in self.issues if issue.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Issue]:
        return [
            issue for issue in self.issues if issue.severity is Severity.WARNING
        ]

    @property
    def ok(self) -> bool:
        """Whether the source is well-formed (warnings are allowed)."""
        return not self.errors


def _type_name(value: object) -> str:
    if value is None:
        return "null"
    return type(value).__name__


def _validate_record(position: int, record: object) -> list[Issue]:
    """Return the structural issues for a single raw record."""
    if not isinstance(record, dict):
        return [
            Issue(
                f"record must be an object, got {_type_name(record)}",
                position=position,
            )
        ]
    issues: list[Issue] = []
    for field in RECORD_FIELDS:
        if field not in record:
            issues.append(Issue("missing field", position=position, field=field))
            continue
        value = record[field]
        if not isinstance(value, str):
            issues.append(
                Issue(
                    f"must be a string, got {_type_name(value)}",
                    position=position,
                    field=field,
                )
            )
        elif field == "category" and value not in _KNOWN_CATEGORIES:
            known = ", ".join(sorted(_KNOWN_CATEGORIES))
            issues.append(
                Issue(
                    f"unknown category {value!r} (expected one of {known})",
                    position=position,
                    field=field,
                )
            )
    issues.extend(
        Issue(
            "unexpected field",
            position=position,
            field=str(extra),
            severity=Severity.WARNING,
        )
        for extra in record
        if extra not in RECORD_FIELDS
    )
    return issues


def validate_records(records: object) -> list[Issue]:
    """Check the raw ``docs`` array and report every structural problem.

    Parameters
    ----------
    records : object
        The decoded value of the ``docs`` member. Anything other than a list
        yields a single file-level error.

    Returns
    -------
    list[Issue]
        Issues in record order; empty when every record is well-formed.
    """
    if not isinstance(records, list):
        return [Issue(f"'docs' must be an array, got {_type_name(records)}")]
    issues: list[Issue] = []
    for position, record in enumerate(records):
        issues.extend(_validate_record(position, record))
    return issues


def entries_from_records(records: object) -> tuple[DocEntry, ...]:
    """Convert raw records into :class:`DocEntry` objects.

    Raises
    ------
    IndexFormatError
        On the first error-severity issue reported by :func:`validate_records`.
    """
    for issue in validate_records(records):
        if issue.severity is Severity.ERROR:
            msg = f"Invalid search index record: {issue.describe()}"
            raise IndexFormatError(msg)
    rows = typ.cast("list[dict[str, str]]", records)
    return tuple(
        DocEntry(
            location=row["location"],
            page=row["page"],
            title=row["title"],
            text=row["text"],
            category=Category(row["category"]),
        )
        for row in rows
    )


def check_consistency(index: cabc.Iterable[DocEntry]) -> list[Issue]:
    """Report records that are well-formed but inconsistent with their peers.

    Checks
    ------
    * ``page`` records point at a page path, never at an anchor.
    * ``section``, ``method`` and ``function`` records point at an anchor.
    * Records sharing a page path share the same page title.
    * A repeated anchor location keeps the same entry title.

    All findings are warnings; the index remains usable.
    """
    issues: list[Issue] = []
    page_titles: dict[str, str] = {}
    anchor_titles: dict[str, str] = {}
    for position, entry in enumerate(index):
        if entry.category is Category.PAGE and entry.is_anchor:
            issues.append(
                Issue(
                    "page record points at an anchor",
                    position=position,
                    field="location",
                    severity=Severity.WARNING,
                )
            )
        elif entry.category is not Category.PAGE and not entry.is_anchor:
            issues.append(
                Issue(
                    f"{entry.category.value} record has no anchor",
                    position=position,
                    field="location",
                    severity=Severity.WARNING,
                )
            )

        expected_page = page_titles.setdefault(entry.path, entry.page)
        if expected_page != entry.page:
            issues.append(
                Issue(
                    f"path {entry.path!r} already titled {expected_page!r}",
                    position=position,
                    field="page",
                    severity=Severity.WARNING,
                )
            )

        if entry.is_anchor:
            expected_title = anchor_titles.setdefault(entry.location, entry.title)
            if expected_title != entry.title:
                issues.append(
                    Issue(
                        f"anchor already titled {expected_title!r}",
                        position=position,
                        field="title",
                        severity=Severity.WARNING,
                    )
                )
    return issues


__all__ = [
    "CheckReport",
    "Issue",
    "Severity",
    "check_consistency",
    "entries_from_records",
    "validate_records",
]
