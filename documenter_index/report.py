"""Summarize search index snapshots and render them as an HTML report.

This module takes a resolved :class:`~documenter_index.config.IndexSiteConfig`
and produces ``public/search-report.html`` (or the configured output path)
listing every configured source: how many records it holds per category, which
pages and anchors it covers, and any well-formedness or consistency issues.

Typical usage pairs the loader with a config file:

>>> from pathlib import Path
>>> from documenter_index.config import load_index_config
>>> from documenter_index.report import ReportBuilder
>>> config = load_index_config(Path("config/indexes.yaml"))  # doctest: +SKIP
>>> ReportBuilder(config).run()  # doctest: +SKIP
PosixPath('public/search-report.html')

The builder reads Jinja templates from ``documenter_index/templates`` by
default. Side effects include reading local or remote index files and writing
the rendered HTML to disk.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .fetch import IndexFetcher, IndexFetchError
from .models import Category
from .validation import CheckReport, Issue, Severity

if typ.TYPE_CHECKING:
    from .config import IndexSiteConfig, SourceConfig
    from .models import SearchIndex


@dc.dataclass(slots=True)
class PageSummary:
    """Per-page counts shown in reports and the ``summary`` command."""

    title: str
    paths: list[str]
    entries: int
    anchors: list[str]


@dc.dataclass(slots=True)
class IndexSummary:
    """Aggregate view of a single search index."""

    entries: int
    categories: dict[Category, int]
    pages: list[PageSummary]
    empty_text: int


def summarize(index: SearchIndex) -> IndexSummary:
    """Return counts per category and per page for ``index``."""
    pages = [
        PageSummary(
            title=title,
            paths=list(dict.fromkeys(entry.path for entry in entries)),
            entries=len(entries),
            anchors=list(
                dict.fromkeys(entry.location for entry in entries if entry.is_anchor)
            ),
        )
        for title, entries in index.by_page().items()
    ]
    return IndexSummary(
        entries=len(index),
        categories=index.categories(),
        pages=pages,
        empty_text=sum(1 for entry in index if not entry.text.strip()),
    )


@dc.dataclass(slots=True)
class SourceReport:
    """Everything the template needs to render one source."""

    source: SourceConfig
    check: CheckReport
    summary: IndexSummary | None


class ReportBuilder:
    """Render an HTML overview of every configured search index source."""

    def __init__(
        self,
        config: IndexSiteConfig,
        *,
        templates_dir: Path | None = None,
        fetcher: IndexFetcher | None = None,
    ) -> None:
        """Initialize the report builder.

        Parameters
        ----------
        config : IndexSiteConfig
            Parsed configuration listing the sources to report on.
        templates_dir : Path, optional
            Directory containing the Jinja templates. Defaults to the
            ``documenter_index/templates`` directory when ``None``.
        fetcher : IndexFetcher, optional
            Loader used for every source; a default fetcher is created when
            ``None``.
        """
        self.config = config
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.fetcher = fetcher or IndexFetcher()
        self._owns_fetcher = fetcher is None
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("search_report.jinja")

    def run(self) -> Path:
        """Render the report HTML file to the configured output path."""
        try:
            reports = self.gather()
        finally:
            if self._owns_fetcher:
                self.fetcher.close()
        output_path = self.config.report_output
        output_path.parent.mkdir(parents=True, exist_ok=True)
        context = {
            "title": self.config.report_title,
            "reports": reports,
            "categories": list(Category),
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        output_path.write_text(html, encoding="utf-8")
        return output_path

    def gather(self) -> list[SourceReport]:
        """Check and summarize every configured source in config order."""
        return [self._report_source(source) for source in self.config.sources.values()]

    def _report_source(self, source: SourceConfig) -> SourceReport:
        self.fetcher.timeout = source.timeout
        try:
            check = self.fetcher.check(source.location)
        except IndexFetchError as exc:
            check = CheckReport(source=source.location, index=None, issues=[Issue(str(exc))])
        if check.index is not None and check.index.variable != source.variable:
            check.issues.append(
                Issue(
                    f"assigned to '{check.index.variable}', expected '{source.variable}'",
                    severity=Severity.WARNING,
                )
            )
        summary = summarize(check.index) if check.index is not None else None
        return SourceReport(source=source, check=check, summary=summary)


__all__ = [
    "IndexSummary",
    "PageSummary",
    "ReportBuilder",
    "SourceReport",
    "summarize",
]
