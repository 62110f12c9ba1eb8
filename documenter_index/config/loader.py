"""Load index source configuration YAML into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from documenter_index._constants import (
    DEFAULT_REPORT_OUTPUT,
    DEFAULT_TIMEOUT,
    DEFAULT_VARIABLE,
)

from .models import IndexConfigError, IndexSiteConfig, SourceConfig


def load_index_config(path: Path) -> IndexSiteConfig:
    """Load the YAML configuration describing search index sources.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML file (for example, ``config/indexes.yaml``).
        Relative ``path`` and ``report_output`` values inside the file are
        resolved against the file's directory.

    Returns
    -------
    IndexSiteConfig
        Parsed configuration with every source resolved.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    IndexConfigError
        If no sources are defined or a source is incomplete.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_index_config(Path("config/indexes.yaml"))  # doctest: +SKIP
    >>> sorted(config.sources)  # doctest: +SKIP
    ['dev', 'v0.1.0']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}
    if not isinstance(defaults, dict):
        msg = "The 'defaults' section must be a mapping."
        raise IndexConfigError(msg)
    base_dir = path.parent

    source_defaults = _SourceDefaults(
        variable=str(defaults.get("variable", DEFAULT_VARIABLE)),
        timeout=float(defaults.get("timeout", DEFAULT_TIMEOUT)),
        base_dir=base_dir,
    )

    sources_raw = raw.get("sources") or {}
    if not sources_raw:
        msg = "No sources defined in index configuration."
        raise IndexConfigError(msg)
    if not isinstance(sources_raw, dict):
        msg = "The 'sources' section must map source keys to paths or URLs."
        raise IndexConfigError(msg)

    sources: dict[str, SourceConfig] = {}
    for key, payload in sources_raw.items():
        match payload:
            case dict():
                sources[str(key)] = _build_source_config(
                    key=str(key), payload=payload, defaults=source_defaults
                )
            case str() as location:
                sources[str(key)] = _build_source_config(
                    key=str(key),
                    payload={_location_field(location): location},
                    defaults=source_defaults,
                )
            case _:
                msg = f"Source '{key}' must be a mapping or a path/URL string."
                raise IndexConfigError(msg)

    report_output = _resolve_path(
        defaults.get("report_output", DEFAULT_REPORT_OUTPUT), base_dir
    )
    return IndexSiteConfig(
        sources=sources,
        default_source=defaults.get("default_source"),
        report_output=Path(report_output),
        report_title=defaults.get("report_title", "Search index report"),
    )


@dc.dataclass(slots=True)
class _SourceDefaults:
    """Internal container for source default configuration values."""

    variable: str
    timeout: float
    base_dir: Path


def _label_from_key(key: str) -> str:
    """Return a label for ``key``; single-word keys such as ``v0.1.0`` are kept."""
    words = key.replace("-", " ").replace("_", " ")
    if words == key:
        return key
    return words[:1].upper() + words[1:]


def _location_field(location: str) -> str:
    return "url" if location.startswith(("http://", "https://")) else "path"


def _resolve_path(value: str | Path, base_dir: Path) -> str:
    """Return ``value`` as an absolute path string, anchored at ``base_dir``."""
    candidate = Path(value).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    return str(candidate)


def _build_source_config(
    *,
    key: str,
    payload: typ.Mapping[str, typ.Any],
    defaults: _SourceDefaults,
) -> SourceConfig:
    """Build a SourceConfig for a single source entry using defaults."""
    path = payload.get("path")
    url = payload.get("url")
    if bool(path) == bool(url):
        msg = f"Source '{key}' needs exactly one of 'path' or 'url'."
        raise IndexConfigError(msg)
    location = url or _resolve_path(path, defaults.base_dir)
    label = payload.get("label") or _label_from_key(key)
    return SourceConfig(
        key=key,
        label=label,
        location=location,
        variable=str(payload.get("variable", defaults.variable)),
        timeout=float(payload.get("timeout", defaults.timeout)),
    )


__all__ = ["load_index_config"]
