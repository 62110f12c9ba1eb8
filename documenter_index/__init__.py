"""Tools for reading, checking and comparing documentation search indexes.

Documenter writes a ``search_index.js`` file next to every documentation build.
This package parses that file into typed records, checks that every record is
well-formed, compares snapshots from different builds, and renders an HTML
overview. The ``docindex`` console script exposes the same operations.

Exports
-------
- ``parse_search_index`` / ``dump_search_index``: file format codec.
- ``DocEntry`` / ``SearchIndex`` / ``Category``: record types.
- ``app`` / ``main``: Cyclopts application entry points.

Examples
--------
>>> from documenter_index import parse_search_index
>>> index = parse_search_index('var documenterSearchIndex = {"docs": []}')
>>> len(index)
0
"""

from __future__ import annotations

from .cli import app, main
from .codec import (
    check_search_index_text,
    dump_search_index,
    load_search_index,
    parse_search_index,
    write_search_index,
)
from .models import Category, DocEntry, IndexFormatError, SearchIndex

__all__ = [
    "Category",
    "DocEntry",
    "IndexFormatError",
    "SearchIndex",
    "app",
    "check_search_index_text",
    "dump_search_index",
    "load_search_index",
    "main",
    "parse_search_index",
    "write_search_index",
]
