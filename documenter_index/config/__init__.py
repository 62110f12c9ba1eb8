"""Load and validate index source configuration YAML.

This subpackage parses the project's ``indexes.yaml`` file, merges global
defaults with per-source overrides, resolves local paths against the file's
directory, and produces dataclasses (:class:`IndexSiteConfig`,
:class:`SourceConfig`) that the report builder and CLI consume.

Examples
--------
>>> from pathlib import Path
>>> from documenter_index.config import load_index_config
>>> config = load_index_config(Path("config/indexes.yaml"))  # doctest: +SKIP
>>> config.get_source("dev").location  # doctest: +SKIP
'/srv/docs/build/dev/search_index.js'
"""

from .loader import load_index_config
from .models import IndexConfigError, IndexSiteConfig, SourceConfig

__all__ = [
    "IndexConfigError",
    "IndexSiteConfig",
    "SourceConfig",
    "load_index_config",
]
