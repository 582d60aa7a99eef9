"""
fetchkit - Resource Fetcher Registry.

Holds at most one adapter and forwards every call to it unchanged.
A default registry backs the module-level helpers; code that prefers explicit
wiring can build its own ResourceFetcher and pass it around.
"""
from typing import List, Optional

from fetchkit.core.contract import ResourceFetcherAdapter
from fetchkit.core.errors import AdapterNotInitializedError
from fetchkit.core.types import ProgressCallback, ResourceSource
from fetchkit.settings import logger

NOT_INITIALIZED_MESSAGE = (
    "ResourceFetcher adapter is not initialized. "
    "Please call 'fetchkit.init(resource_fetcher=...)' with a valid adapter, "
    "e.g. 'fetchkit.HttpResourceFetcher()', or install one with "
    "'fetchkit.set_adapter(...)'."
)


def _noop(progress: float) -> None:
    return None


class _FileSystem:
    """Filesystem-style grouping for file operations on a registry."""

    def __init__(self, registry: "ResourceFetcher"):
        self._registry = registry

    def read_as_string(self, path: str) -> str:
        return self._registry.get_adapter().read_as_string(path)


class ResourceFetcher:
    """Registry for the single active ResourceFetcherAdapter."""

    def __init__(self, adapter: Optional[ResourceFetcherAdapter] = None):
        self._adapter: Optional[ResourceFetcherAdapter] = adapter
        self.fs = _FileSystem(self)

    @property
    def is_ready(self) -> bool:
        return self._adapter is not None

    def set_adapter(self, adapter: ResourceFetcherAdapter) -> None:
        """Installs an adapter, replacing any previous one."""
        self._adapter = adapter
        logger.debug(f"Resource fetcher adapter set: {type(adapter).__name__}")

    def reset_adapter(self) -> None:
        self._adapter = None

    def get_adapter(self) -> ResourceFetcherAdapter:
        if self._adapter is None:
            raise AdapterNotInitializedError(NOT_INITIALIZED_MESSAGE)
        return self._adapter

    def fetch(
        self,
        callback: Optional[ProgressCallback] = None,
        *sources: ResourceSource,
    ) -> Optional[List[str]]:
        """
        Downloads sources through the installed adapter.

        Returns the adapter's result as-is: one local path per source, or
        None when the download was interrupted.
        """
        adapter = self.get_adapter()
        if callback is None:
            callback = _noop
        return adapter.fetch(callback, *sources)


# --- Default registry & Public Helpers (Exposed in __init__.py) ---

_default_registry = ResourceFetcher()
fs = _default_registry.fs


def get_default_registry() -> ResourceFetcher:
    return _default_registry


def set_adapter(adapter: ResourceFetcherAdapter) -> None:
    """Installs the adapter used by every library call."""
    _default_registry.set_adapter(adapter)


def reset_adapter() -> None:
    _default_registry.reset_adapter()


def get_adapter() -> ResourceFetcherAdapter:
    return _default_registry.get_adapter()


def fetch(
    callback: Optional[ProgressCallback] = None, *sources: ResourceSource
) -> Optional[List[str]]:
    return _default_registry.fetch(callback, *sources)
