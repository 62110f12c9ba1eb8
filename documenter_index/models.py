"""Typed records describing a generated documentation search index.

A ``search_index.js`` file holds one ordered list of records. Each record pairs
a documentation location (a page path, optionally followed by ``#anchor``)
with the page's display title, the entry title, the extracted text, and a
category marking what kind of anchor it is. Records are immutable and the
whole index is rebuilt wholesale by the documentation generator on every
build, so :class:`SearchIndex` is a read-only view over the emitted order.

Examples
--------
>>> entry = DocEntry(
...     location="reference/#Reference",
...     page="Reference",
...     title="Reference",
...     text="",
...     category=Category.SECTION,
... )
>>> entry.path, entry.anchor
('reference/', 'Reference')
>>> SearchIndex((entry,)).pages()
['Reference']
"""

from __future__ import annotations

import collections
import dataclasses as dc
import enum
import typing as typ

from ._constants import ANCHOR_SEPARATOR, DEFAULT_VARIABLE

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class IndexFormatError(ValueError):
    """Raised when a search index file or record is malformed."""


class Category(enum.StrEnum):
    """Kind of location a search record points at."""

    PAGE = "page"
    SECTION = "section"
    METHOD = "method"
    FUNCTION = "function"


@dc.dataclass(frozen=True, slots=True)
class DocEntry:
    """One record of the generated search index.

    Attributes
    ----------
    location : str
        URL fragment relative to the docs root, e.g. ``"tutorial_1/"`` or
        ``"reference/#SpmGrids.load_grid-Tuple{AbstractString}"``.
    page : str
        Display title of the page the record belongs to.
    title : str
        Section or entry title.
    text : str
        Rendered prose or docstring content; may be empty.
    category : Category
        What kind of anchor the record describes.
    """

    location: str
    page: str
    title: str
    text: str
    category: Category

    @property
    def path(self) -> str:
        """Return the page path portion of ``location`` (before ``#``)."""
        return self.location.partition(ANCHOR_SEPARATOR)[0]

    @property
    def anchor(self) -> str | None:
        """Return the anchor portion of ``location`` or None when absent."""
        _, sep, anchor = self.location.partition(ANCHOR_SEPARATOR)
        return anchor if sep else None

    @property
    def is_anchor(self) -> bool:
        """Whether the record points at an anchor inside a page."""
        return self.anchor is not None

    def to_record(self) -> dict[str, str]:
        """Return the record as a plain mapping in generator field order."""
        return {
            "location": self.location,
            "page": self.page,
            "title": self.title,
            "text": self.text,
            "category": self.category.value,
        }


@dc.dataclass(frozen=True, slots=True)
class SearchIndex:
    """Ordered, immutable collection of :class:`DocEntry` records.

    Attributes
    ----------
    entries : tuple[DocEntry, ...]
        Records in the order the generator emitted them.
    variable : str
        Name of the global JavaScript variable the index is assigned to.
    """

    entries: tuple[DocEntry, ...] = ()
    variable: str = DEFAULT_VARIABLE

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> cabc.Iterator[DocEntry]:
        return iter(self.entries)

    def __getitem__(self, position: int) -> DocEntry:
        return self.entries[position]

    def pages(self) -> list[str]:
        """Return page titles in first-seen order."""
        return list(dict.fromkeys(entry.page for entry in self.entries))

    def by_page(self) -> dict[str, list[DocEntry]]:
        """Group records by page title, preserving emitted order."""
        grouped: dict[str, list[DocEntry]] = {}
        for entry in self.entries:
            grouped.setdefault(entry.page, []).append(entry)
        return grouped

    def at(self, location: str) -> list[DocEntry]:
        """Return every record sharing ``location``, in emitted order."""
        return [entry for entry in self.entries if entry.location == location]

    def categories(self) -> dict[Category, int]:
        """Return the number of records per category (zero counts included)."""
        counts = collections.Counter(entry.category for entry in self.entries)
        return {category: counts.get(category, 0) for category in Category}

    def anchors(self) -> list[str]:
        """Return distinct anchor locations in first-seen order."""
        return list(
            dict.fromkeys(
                entry.location for entry in self.entries if entry.is_anchor
            )
        )


__all__ = ["Category", "DocEntry", "IndexFormatError", "SearchIndex"]
