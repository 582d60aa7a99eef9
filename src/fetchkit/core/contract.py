"""
fetchkit - Adapter Contract.

The only surface library code may rely on when it needs resources on disk.
"""
from typing import List, Optional, Protocol, runtime_checkable

from fetchkit.core.types import ProgressCallback, ResourceSource


@runtime_checkable
class ResourceFetcherAdapter(Protocol):
    """
    Interface for resource fetching backends.

    Required methods:
      - fetch: download resources to local storage (used by all modules).
      - read_as_string: read file contents as text (used for config files).
    """

    def fetch(
        self, callback: ProgressCallback, *sources: ResourceSource
    ) -> Optional[List[str]]:
        """
        Download resources to local storage.

        Args:
            callback: Receives download progress (0-100). May be called any
                number of times, including never.
            sources: One or more resources to download.

        Returns:
            Local file paths, one per source and in the same order, or None
            if the download was interrupted.

        Raises:
            Any I/O failure that prevents completing the download.
        """
        ...

    def read_as_string(self, path: str) -> str:
        """
        Read file contents as a string.

        Args:
            path: Absolute local file path.

        Raises:
            An I/O failure when the file is missing, unreadable or not text.
        """
        ...
