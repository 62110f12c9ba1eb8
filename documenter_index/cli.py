"""Cyclopts CLI entrypoint for inspecting generated documentation search indexes.

The ``docindex`` console script defined here can check ``search_index.js``
files for well-formedness, print per-page summaries, compare two snapshots,
rewrite a file in the generator's canonical layout, and render an HTML report
for every source listed in ``config/indexes.yaml``. Sources may be local
paths or ``http(s)`` URLs of published documentation.

Examples
--------
Check the development build and a tagged release:

>>> from documenter_index.cli import app
>>> app(["check", "build/dev/search_index.js", "build/v0.1.0/search_index.js"])  # doctest: +SKIP

Compare the two snapshots:

>>> app(["diff", "build/v0.1.0/search_index.js", "build/dev/search_index.js"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG_PATH
from .codec import write_search_index
from .config import load_index_config
from .diff import diff_indexes, format_key
from .fetch import IndexFetcher, IndexFetchError
from .models import IndexFormatError, SearchIndex
from .report import ReportBuilder, summarize

DEFAULT_CONFIG = Path(DEFAULT_CONFIG_PATH)

app = App(name="docindex", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:
            return str(path)
    return str(path)


def _fail(message: str, code: int = 2) -> typ.NoReturn:
    print(f"error: {message}", file=sys.stderr)
    raise SystemExit(code)


def _load(source: str) -> SearchIndex:
    """Load ``source`` strictly, exiting with status 2 when it is unusable."""
    with IndexFetcher() as fetcher:
        try:
            return fetcher.load(source)
        except (IndexFetchError, IndexFormatError) as exc:
            _fail(str(exc))


@app.command(help="Check search index files for well-formed records.")
def check(
    *sources: typ.Annotated[str, Parameter(help="Paths or URLs of search_index.js")],
    strict: typ.Annotated[
        bool, Parameter(help="Treat consistency warnings as failures")
    ] = False,
) -> None:
    """Report every structural and consistency issue in each source.

    Parameters
    ----------
    sources : str
        One or more local paths or ``http(s)`` URLs.
    strict : bool, optional
        When ``True`` warnings also cause a non-zero exit status.

    Raises
    ------
    SystemExit
        With status 1 when any source has errors (or warnings under
        ``--strict``), and 2 when a source cannot be read.
    """
    if not sources:
        _fail("at least one source is required")
    failed = False
    with IndexFetcher() as fetcher:
        for source in sources:
            try:
                report = fetcher.check(source)
            except IndexFetchError as exc:
                _fail(str(exc))
            for issue in report.issues:
                print(f"{source}: {issue.describe()}")
            status = "ok" if report.ok else "invalid"
            count = len(report.index) if report.index is not None else 0
            print(f"{source}: {status} ({count} records, {len(report.issues)} issues)")
            if not report.ok or (strict and report.warnings):
                failed = True
    if failed:
        raise SystemExit(1)


@app.command(help="Print record counts per category and per page.")
def summary(
    source: typ.Annotated[str, Parameter(help="Path or URL of search_index.js")],
) -> None:
    """Print an overview of the pages and anchors ``source`` indexes."""
    index = _load(source)
    overview = summarize(index)
    print(f"{overview.entries} records ({overview.empty_text} with empty text)")
    for category, count in overview.categories.items():
        print(f"  {category.value}: {count}")
    for page in overview.pages:
        print(f"{page.title}: {page.entries} records, {len(page.anchors)} anchors")


@app.command(help="Compare two search index snapshots.")
def diff(
    old: typ.Annotated[str, Parameter(help="Baseline path or URL")],
    new: typ.Annotated[str, Parameter(help="Updated path or URL")],
) -> None:
    """Print ``+``/``-``/``~`` lines for added, removed and changed records.

    Raises
    ------
    SystemExit
        With status 1 when the snapshots differ.
    """
    result = diff_indexes(_load(old), _load(new))
    for page in result.pages_added:
        print(f"+ page {page}")
    for page in result.pages_removed:
        print(f"- page {page}")
    for key in result.added:
        print(f"+ {format_key(key)}")
    for key in result.removed:
        print(f"- {format_key(key)}")
    for key in result.changed:
        print(f"~ {format_key(key)}")
    if not result.is_empty:
        raise SystemExit(1)
    print("no differences")


@app.command(help="Rewrite a search index in the generator's canonical layout.")
def normalize(
    source: typ.Annotated[str, Parameter(help="Path or URL of search_index.js")],
    output: typ.Annotated[Path, Parameter(help="Where to write the result")],
) -> None:
    """Parse ``source`` strictly and write it back to ``output``."""
    index = _load(source)
    written = write_search_index(index, output)
    print(f"wrote {_format_path(written)}")


@app.command(help="Render an HTML report for every configured index source.")
def report(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to index config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Build the HTML report described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``indexes.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    """
    site_config = load_index_config(config)
    output_path = ReportBuilder(site_config).run()
    print(f"wrote {_format_path(output_path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docindex`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
