"""
fetchkit - HTTP & local filesystem resource fetcher.

Downloads http(s) resources into the fetchkit cache directory and passes
local files (plain paths or file:// URIs) through untouched.
"""
from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import List, Optional
from urllib.parse import unquote, urlparse

import requests

from fetchkit.core.errors import InvalidSourceError, ResourceReadError
from fetchkit.core.types import ProgressCallback, ResourceSource, ResourceSpec
from fetchkit.infra.storage.cache import (
    content_length,
    get_session,
    stream_download,
    url_to_filename,
)
from fetchkit.settings import get_retries, get_timeout, logger, resolve_cache_dir

REMOTE_SCHEMES = {"http", "https"}


@dataclass(frozen=True)
class ResolvedSource:
    path: Path
    url: Optional[str] = None

    @property
    def is_remote(self) -> bool:
        return self.url is not None


class ProgressTracker:
    """
    Aggregates per-file download progress into one 0-100 value.

    Uses byte counts when every size is known, otherwise gives each file an
    equal share. Only reports values that moved forward.
    """

    def __init__(self, callback: ProgressCallback, sizes: List[Optional[int]]):
        self._callback = callback
        self._sizes = sizes
        self._by_bytes = bool(sizes) and all(s is not None for s in sizes) and sum(sizes) > 0
        self._total = sum(sizes) if self._by_bytes else 0
        self._done_bytes = 0
        self._done_files = 0
        self._current_bytes = 0
        self._last = 0.0

    @property
    def last(self) -> float:
        return self._last

    def _value(self) -> float:
        if self._by_bytes:
            return min(100.0, 100.0 * self._done_bytes / self._total)
        n = len(self._sizes)
        if n == 0:
            return 100.0
        share = 0.0
        if self._done_files < n:
            size = self._sizes[self._done_files]
            if size:
                share = min(1.0, self._current_bytes / size)
        return 100.0 * (self._done_files + share) / n

    def _report(self) -> None:
        value = self._value()
        if value > self._last:
            self._last = value
            self._callback(value)

    def advance(self, n_bytes: int) -> None:
        self._done_bytes += n_bytes
        self._current_bytes += n_bytes
        self._report()

    def finish_file(self) -> None:
        self._done_files += 1
        self._current_bytes = 0
        self._report()


class HttpResourceFetcher:
    """Resource fetcher backed by `requests` and the local filesystem."""

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        *,
        timeout: Optional[int] = None,
        retries: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        self._cache_dir = Path(cache_dir) if cache_dir is not None else None
        self.timeout = timeout if timeout is not None else get_timeout()
        self.retries = retries if retries is not None else get_retries()
        self._session = session
        self._cancelled = threading.Event()
        self._lock = threading.Lock()

    @property
    def cache_dir(self) -> Path:
        return resolve_cache_dir(self._cache_dir).resolve()

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = get_session(retries=self.retries)
        return self._session

    def cancel(self) -> None:
        """
        Interrupts the running fetch; it will return None.

        Fetches on one instance run one at a time, so this only affects the
        call currently downloading. Callers waiting their turn start clean.
        """
        self._cancelled.set()

    # ------------------------------------------------------------------
    # Source resolution
    # ------------------------------------------------------------------

    def _remote_target(self, url: str, filename: Optional[str] = None) -> Path:
        raw = filename or unquote(urlparse(url).path)
        # Only the last component; "../../x" must not leave the cache dir
        name = PurePosixPath(raw.replace("\\", "/")).name or "resource"
        cache_dir = self.cache_dir
        target = (cache_dir / f"{url_to_filename(url)[:12]}_{name}").resolve()
        if not target.is_relative_to(cache_dir):
            raise InvalidSourceError(f"Resource filename escapes the cache directory: {filename!r}")
        return target

    def _local_target(self, raw: str) -> Path:
        path = Path(raw).expanduser()
        if not path.exists():
            raise InvalidSourceError(f"Local resource not found: '{raw}'")
        return path.resolve()

    def resolve(self, source: ResourceSource) -> ResolvedSource:
        if isinstance(source, ResourceSpec):
            if urlparse(source.url).scheme.lower() in REMOTE_SCHEMES:
                return ResolvedSource(
                    path=self._remote_target(source.url, source.filename), url=source.url
                )
            return self.resolve(source.url)

        if isinstance(source, os.PathLike):
            return ResolvedSource(path=self._local_target(os.fspath(source)))

        if not isinstance(source, str) or not source:
            raise InvalidSourceError(f"Unsupported resource source: {source!r}")

        scheme = urlparse(source).scheme.lower()
        if scheme in REMOTE_SCHEMES:
            return ResolvedSource(path=self._remote_target(source), url=source)
        if scheme == "file":
            return ResolvedSource(path=self._local_target(unquote(urlparse(source).path)))
        if scheme == "" or len(scheme) == 1:
            # Plain path (single letter covers Windows drives)
            return ResolvedSource(path=self._local_target(source))
        raise InvalidSourceError(f"Unsupported URI scheme '{scheme}' in '{source}'")

    # ------------------------------------------------------------------
    # Adapter contract
    # ------------------------------------------------------------------

    def fetch(self, callback: ProgressCallback, *sources: ResourceSource) -> Optional[List[str]]:
        """
        Downloads every remote source not yet on disk.

        Returns paths in input order, or None if `cancel()` was called while
        downloading. Files completed before the interruption are kept.
        """
        if not sources:
            raise InvalidSourceError("At least one resource source is required.")

        with self._lock:
            self._cancelled.clear()
            return self._fetch_locked(callback, sources)

    def _fetch_locked(self, callback: ProgressCallback, sources) -> Optional[List[str]]:
        resolved = [self.resolve(s) for s in sources]

        pending: List[ResolvedSource] = []
        seen = set()
        for item in resolved:
            if item.is_remote and not item.path.exists() and item.path not in seen:
                seen.add(item.path)
                pending.append(item)

        tracker = None
        if pending:
            sizes = [content_length(self.session, item.url, timeout=self.timeout) for item in pending]
            tracker = ProgressTracker(callback, sizes)
            logger.info(f"Fetching {len(pending)} of {len(resolved)} resource(s)")

            for item in pending:
                completed = stream_download(
                    item.url,
                    item.path,
                    session=self.session,
                    timeout=self.timeout,
                    on_chunk=tracker.advance,
                    should_stop=self._cancelled.is_set,
                )
                if not completed:
                    return None
                tracker.finish_file()

        if tracker is None or tracker.last < 100.0:
            callback(100)
        return [str(item.path) for item in resolved]

    def read_as_string(self, path: str, encoding: str = "utf-8") -> str:
        try:
            return Path(path).read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read '{path}': {e}")
            raise ResourceReadError(f"Could not read '{path}' as text: {e}") from e

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def list_downloaded_files(self) -> List[str]:
        return sorted(
            str(p)
            for p in self.cache_dir.iterdir()
            if p.is_file() and not p.name.endswith(".tmp")
        )

    def delete_resources(self, *sources: ResourceSource) -> None:
        """Removes downloaded copies of remote sources. Local files are never touched."""
        for source in sources:
            item = self.resolve(source)
            if not item.is_remote:
                logger.debug(f"Skipping local resource: {item.path}")
                continue
            if item.path.exists():
                item.path.unlink()
                logger.info(f"Deleted: {item.path}")
