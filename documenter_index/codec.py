r"""Read and write ``search_index.js`` files emitted by Documenter.

The generator writes a single JavaScript assignment whose right-hand side is a
JSON object with a ``docs`` array::

    var documenterSearchIndex = {"docs":
    [{"location":"","page":"Introduction","title":"Introduction","text":"...","category":"page"}]
    }

This module strips the assignment, decodes the JSON payload with ``msgspec``,
and turns records into :class:`~documenter_index.models.DocEntry` objects. The
writer reproduces the generator's layout so a read/write cycle leaves a file
byte-identical when it was already in canonical form.

Examples
--------
>>> text = 'var documenterSearchIndex = {"docs":\n[]\n}\n'
>>> index = parse_search_index(text)
>>> len(index), index.variable
(0, 'documenterSearchIndex')
>>> dump_search_index(index) == text
True
"""

from __future__ import annotations

import re
import typing as typ

import msgspec

from ._constants import DOCS_KEY
from .models import IndexFormatError, SearchIndex
from .validation import (
    CheckReport,
    Issue,
    check_consistency,
    entries_from_records,
    validate_records,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

ASSIGNMENT_PATTERN = re.compile(
    r"^\s*(?:var|let|const)\s+(?P<name>[A-Za-z_$][\w$]*)\s*=\s*(?P<payload>.*?)\s*;?\s*$",
    re.DOTALL,
)


def decode_payload(text: str) -> tuple[str, object]:
    """Split the JavaScript assignment and return ``(variable, docs)``.

    Parameters
    ----------
    text : str
        Full contents of a ``search_index.js`` file.

    Returns
    -------
    tuple[str, object]
        The assigned variable name and the undecoded-by-type ``docs`` value.

    Raises
    ------
    IndexFormatError
        If the assignment is missing, the payload is not valid JSON, or the
        payload is not an object with a ``docs`` member.
    """
    match = ASSIGNMENT_PATTERN.match(text)
    if match is None:
        msg = "Expected a 'var <name> = {...}' assignment."
        raise IndexFormatError(msg)
    try:
        payload = msgspec.json.decode(match.group("payload"))
    except msgspec.DecodeError as exc:
        msg = f"Search index payload is not valid JSON: {exc}"
        raise IndexFormatError(msg) from exc
    if not isinstance(payload, dict):
        msg = "Search index payload must be a JSON object."
        raise IndexFormatError(msg)
    if DOCS_KEY not in payload:
        msg = f"Search index payload has no '{DOCS_KEY}' member."
        raise IndexFormatError(msg)
    return match.group("name"), payload[DOCS_KEY]


def parse_search_index(text: str) -> SearchIndex:
    """Parse ``search_index.js`` content into a :class:`SearchIndex`.

    Raises
    ------
    IndexFormatError
        On a malformed envelope or the first malformed record.
    """
    variable, records = decode_payload(text)
    return SearchIndex(entries=entries_from_records(records), variable=variable)


def dump_search_index(index: SearchIndex) -> str:
    """Serialize ``index`` in the generator's canonical layout."""
    records = msgspec.json.encode([entry.to_record() for entry in index])
    return f'var {index.variable} = {{"{DOCS_KEY}":\n{records.decode("utf-8")}\n}}\n'


def load_search_index(path: Path) -> SearchIndex:
    """Read and parse a ``search_index.js`` file from disk."""
    return parse_search_index(path.read_text(encoding="utf-8"))


def write_search_index(index: SearchIndex, path: Path) -> Path:
    """Write ``index`` to ``path`` as UTF-8, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_search_index(index), encoding="utf-8")
    return path


def check_search_index_text(text: str, *, source: str = "<string>") -> CheckReport:
    """Check ``text`` leniently and collect every issue found.

    Envelope problems produce a single file-level error. Otherwise all record
    issues are reported and, when the records are well-formed, the index is
    built and consistency warnings are appended.
    """
    try:
        variable, records = decode_payload(text)
    except IndexFormatError as exc:
        return CheckReport(source=source, index=None, issues=[Issue(str(exc))])

    report = CheckReport(source=source, index=None, issues=validate_records(records))
    if report.ok:
        index = SearchIndex(entries=entries_from_records(records), variable=variable)
        report.index = index
        report.issues.extend(check_consistency(index))
    return report


__all__ = [
    "ASSIGNMENT_PATTERN",
    "check_search_index_text",
    "decode_payload",
    "dump_search_index",
    "load_search_index",
    "parse_search_index",
    "write_search_index",
]
