"""Retrieve referenced documents from the local filesystem or over HTTP."""

from __future__ import annotations

import mimetypes
from logging import getLogger
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

import httpx

from noticeingest.domain.ports.documents import DocumentRetrievalError, RetrievedDocument

if TYPE_CHECKING:
    from types import TracebackType

log = getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS = 30.0
_FALLBACK_FILENAME = "document"


def is_remote(location: str) -> bool:
    return urlparse(location).scheme.lower() in {"http", "https"}


class LocalAndHttpDocumentFetcher:
    """Blocking fetcher that owns one ``httpx.Client`` per batch.

    The client is opened on ``__enter__`` and closed on ``__exit__``. Each fetch is
    a single attempt; failures surface as ``DocumentRetrievalError``.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self._transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> LocalAndHttpDocumentFetcher:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def open(self) -> None:
        if self._client is not None:
            return
        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        self._client = httpx.Client(
            timeout=self.timeout_seconds,
            headers=headers,
            transport=self._transport,
            follow_redirects=True,
        )

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    def fetch(self, location: str) -> RetrievedDocument:
        if is_remote(location):
            return self._fetch_remote(location)
        return self._fetch_local(location)

    def _fetch_local(self, location: str) -> RetrievedDocument:
        path = Path(location)
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise DocumentRetrievalError(location, exc.strerror or str(exc)) from exc
        content_type, _ = mimetypes.guess_type(path.name)
        log.debug("Read %s (%d bytes)", path, len(content))
        return RetrievedDocument(
            location=location,
            filename=path.name,
            content=content,
            content_type=content_type,
        )

    def _fetch_remote(self, url: str) -> RetrievedDocument:
        if self._client is None:
            raise RuntimeError("Fetcher must be opened before fetching remote documents")
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise DocumentRetrievalError(url, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise DocumentRetrievalError(url, str(exc) or type(exc).__name__) from exc

        filename = _filename_from_url(url)
        content_type = response.headers.get("content-type")
        if content_type:
            content_type = content_type.split(";", 1)[0].strip() or None
        else:
            content_type, _ = mimetypes.guess_type(filename)
        log.debug("Downloaded %s (%d bytes)", url, len(response.content))
        return RetrievedDocument(
            location=url,
            filename=filename,
            content=response.content,
            content_type=content_type,
        )


def _filename_from_url(url: str) -> str:
    name = PurePosixPath(unquote(urlparse(url).path)).name
    return name or _FALLBACK_FILENAME
