"""fetchkit download storage utilities."""

from __future__ import annotations

import hashlib
import tempfile
from pathlib import Path
from typing import Callable, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from fetchkit.core.errors import DownloadError, ErrorCode, FetchKitError
from fetchkit.settings import logger

CHUNK_SIZE = 8192


def url_to_filename(url: str, *, suffix: str = "") -> str:
    """Generates a filesystem-safe filename from a URL using SHA256."""
    h = hashlib.sha256(url.encode("utf-8")).hexdigest()
    return f"{h}{suffix}"


def get_session(retries: int = 3, backoff_factor: float = 0.5) -> requests.Session:
    """Creates a requests Session with automatic retries and exponential backoff."""
    session = requests.Session()
    retry = Retry(
        total=retries,
        read=retries,
        connect=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(500, 502, 503, 504),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def content_length(session: requests.Session, url: str, *, timeout: int = 60) -> Optional[int]:
    """Returns the size advertised by a HEAD request, or None if unknown."""
    try:
        response = session.head(url, allow_redirects=True, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.debug(f"HEAD failed for {url}: {e}")
        return None
    value = response.headers.get("Content-Length")
    if value is None or not str(value).isdigit():
        return None
    return int(value)


def stream_download(
    url: str,
    out: Path,
    *,
    session: requests.Session,
    timeout: int = 180,
    on_chunk: Optional[Callable[[int], None]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> bool:
    """
    Download a URL to `out`.

    Features:
      - Streaming Download (Memory efficiency).
      - Atomic Writes (Prevents corrupted partial downloads).
      - Per-call temp file (Concurrent writers never share one).
      - Cooperative interruption through `should_stop`.

    Returns True when the file was written, False when interrupted.
    """
    out.parent.mkdir(parents=True, exist_ok=True)
    tmp = tempfile.NamedTemporaryFile(
        dir=out.parent, prefix=f"{out.name}.", suffix=".tmp", delete=False
    )
    temp_out = Path(tmp.name)
    completed = False

    logger.info(f"Downloading: {url}")

    try:
        finished = False
        with tmp as f, session.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            # Stream in chunks (8KB) to avoid loading large files into RAM
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if should_stop is not None and should_stop():
                    break
                if chunk:
                    f.write(chunk)
                    if on_chunk is not None:
                        on_chunk(len(chunk))
            else:
                finished = True

        if finished:
            # Rename only on success to ensure atomicity
            temp_out.replace(out)
            completed = True
    except requests.RequestException as e:
        logger.error(f"Download failed for {url}: {e}")
        raise DownloadError(f"Failed to download {url} after retries.") from e
    except OSError as e:
        raise FetchKitError(ErrorCode.FILE_WRITE_FAILED, f"Failed to write {out}: {e}") from e
    finally:
        if not completed:
            temp_out.unlink(missing_ok=True)

    if not completed:
        logger.info(f"Download interrupted: {url}")
    return completed
