"""Compare two search index snapshots.

Every documentation build regenerates the index wholesale, so the only way to
see what changed between two builds (``dev`` against a tagged release, say) is
to compare snapshots. Records are keyed by ``(location, category, title)``.
Page records that share a key are split pieces of the same page, so their
texts are compared as an ordered sequence rather than one by one.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from .models import Category, SearchIndex

EntryKey = tuple[str, "Category", str]


@dc.dataclass(slots=True)
class IndexDiff:
    """Differences between an old and a new search index.

    Attributes
    ----------
    added : list[EntryKey]
        Keys present only in the new index, in new-index order.
    removed : list[EntryKey]
        Keys present only in the old index, in old-index order.
    changed : list[EntryKey]
        Keys present in both whose text sequence differs.
    pages_added : list[str]
        Page titles only in the new index.
    pages_removed : list[str]
        Page titles only in the old index.
    """

    added: list[EntryKey] = dc.field(default_factory=list)
    removed: list[EntryKey] = dc.field(default_factory=list)
    changed: list[EntryKey] = dc.field(default_factory=list)
    pages_added: list[str] = dc.field(default_factory=list)
    pages_removed: list[str] = dc.field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.added
            or self.removed
            or self.changed
            or self.pages_added
            or self.pages_removed
        )


def _texts_by_key(index: SearchIndex) -> dict[EntryKey, list[str]]:
    grouped: dict[EntryKey, list[str]] = {}
    for entry in index:
        key = (entry.location, entry.category, entry.title)
        grouped.setdefault(key, []).append(entry.text)
    return grouped


def diff_indexes(old: SearchIndex, new: SearchIndex) -> IndexDiff:
    """Return the :class:`IndexDiff` turning ``old`` into ``new``."""
    old_texts = _texts_by_key(old)
    new_texts = _texts_by_key(new)
    old_pages = old.pages()
    new_pages = new.pages()
    return IndexDiff(
        added=[key for key in new_texts if key not in old_texts],
        removed=[key for key in old_texts if key not in new_texts],
        changed=[
            key
            for key, texts in new_texts.items()
            if key in old_texts and old_texts[key] != texts
        ],
        pages_added=[page for page in new_pages if page not in old_pages],
        pages_removed=[page for page in old_pages if page not in new_pages],
    )


def format_key(key: EntryKey) -> str:
    """Render a diff key as ``<location> [<category>] <title>``."""
    location, category, title = key
    return f"{location or '/'} [{category}] {title}"


__all__ = ["EntryKey", "IndexDiff", "diff_indexes", "format_key"]
