"""Load search index snapshots from local paths or published documentation.

Documenter deployments publish ``search_index.js`` next to every built
version (``dev/``, ``v0.1.0/`` ...). :class:`IndexFetcher` reads either a file
on disk or an ``http(s)`` URL, retrying transient server failures the same way
for every caller.

Example
-------
>>> from documenter_index.fetch import IndexFetcher
>>> fetcher = IndexFetcher(timeout=10)
>>> index = fetcher.load(
...     "https://example.org/docs/dev/search_index.js"
... )  # doctest: +SKIP
>>> index.pages()  # doctest: +SKIP
['Introduction', 'Tutorial 1', 'Reference']
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlsplit

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ._constants import DEFAULT_TIMEOUT
from .codec import check_search_index_text, parse_search_index
from .models import SearchIndex
from .validation import CheckReport


class IndexFetchError(RuntimeError):
    """Raised when a search index source cannot be read."""


def is_remote(source: str) -> bool:
    """Return True when ``source`` is an ``http`` or ``https`` URL."""
    return urlsplit(source).scheme in {"http", "https"}


def _build_session() -> requests.Session:
    """Return a session whose adapters retry idempotent requests."""
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class IndexFetcher:
    """Read ``search_index.js`` content from disk or over HTTP."""

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialise the fetcher.

        Parameters
        ----------
        session : requests.Session, optional
            Transport used for remote sources. A retrying session is created
            lazily on the first remote fetch when ``None``.
        timeout : float, optional
            Per-request timeout in seconds for remote sources.
        """
        self._session = session
        self._owns_session = session is None
        self.timeout = timeout

    def __enter__(self) -> IndexFetcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = _build_session()
        return self._session

    def close(self) -> None:
        """Close the session this fetcher created; injected sessions are left open."""
        if self._owns_session and self._session is not None:
            self._session.close()
            self._session = None

    def fetch(self, source: str | Path) -> str:
        """Return the raw text of ``source``.

        Raises
        ------
        IndexFetchError
            When the file cannot be read or the HTTP request fails.
        """
        if isinstance(source, Path) or not is_remote(source):
            path = Path(source)
            try:
                return path.read_text(encoding="utf-8")
            except OSError as exc:
                msg = f"Unable to read search index '{path}': {exc}"
                raise IndexFetchError(msg) from exc
        try:
            resp = self.session.get(source, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            msg = f"Unable to download search index '{source}': {exc}"
            raise IndexFetchError(msg) from exc
        resp.encoding = resp.encoding or "utf-8"
        return resp.text

    def load(self, source: str | Path) -> SearchIndex:
        """Fetch and strictly parse ``source``."""
        return parse_search_index(self.fetch(source))

    def check(self, source: str | Path) -> CheckReport:
        """Fetch ``source`` and return a lenient :class:`CheckReport`."""
        return check_search_index_text(self.fetch(source), source=str(source))


__all__ = ["IndexFetchError", "IndexFetcher", "is_remote"]
