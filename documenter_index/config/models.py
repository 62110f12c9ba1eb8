"""Typed dataclasses describing configured search index sources."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from documenter_index._constants import (
    DEFAULT_REPORT_OUTPUT,
    DEFAULT_TIMEOUT,
    DEFAULT_VARIABLE,
)


class IndexConfigError(ValueError):
    """Raised when the index configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SourceConfig:
    """A fully resolved search index source sourced from YAML config.

    Attributes
    ----------
    key : str
        Identifier of the source (usually the docs version, e.g. ``"dev"``).
    label : str
        Human-friendly name shown in reports.
    location : str
        Absolute filesystem path or ``http(s)`` URL of ``search_index.js``.
    variable : str
        Expected name of the global variable in the file.
    timeout : float
        Request timeout in seconds for remote sources.
    """

    key: str
    label: str
    location: str
    variable: str = DEFAULT_VARIABLE
    timeout: float = DEFAULT_TIMEOUT


@dc.dataclass(slots=True)
class IndexSiteConfig:
    """Collection of source configs alongside shared defaults."""

    sources: dict[str, SourceConfig]
    default_source: str | None = None
    report_output: Path = Path(DEFAULT_REPORT_OUTPUT)
    report_title: str = "Search index report"

    def get_source(self, key: str | None) -> SourceConfig:
        """Return the requested source or fall back to the configured default."""
        if key is None:
            return self._get_default_source()
        try:
            return self.sources[key]
        except KeyError as exc:
            available = ", ".join(sorted(self.sources))
            msg = f"Unknown source '{key}'. Known sources: {available}"
            raise KeyError(msg) from exc

    def _get_default_source(self) -> SourceConfig:
        if self.default_source and self.default_source in self.sources:
            return self.sources[self.default_source]
        if not self.sources:  # pragma: no cover - loader rejects empty configs
            msg = "No sources configured."
            raise IndexConfigError(msg)
        return self.sources[next(iter(self.sources))]


__all__ = ["IndexConfigError", "IndexSiteConfig", "SourceConfig"]
