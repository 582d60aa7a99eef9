__version__ = "0.1.0"

from .settings import configure_logging, get_cache_dir, set_cache_dir
from .core.contract import ResourceFetcherAdapter
from .core.errors import (
    AdapterNotInitializedError,
    DownloadError,
    ErrorCode,
    FetchKitError,
    InvalidSourceError,
    ResourceReadError,
)
from .core.registry import (
    ResourceFetcher,
    fetch,
    fs,
    get_adapter,
    get_default_registry,
    reset_adapter,
    set_adapter,
)
from .core.types import ResourceSource, ResourceSpec

__all__ = [
    "configure_logging",
    "get_cache_dir",
    "set_cache_dir",
    "init",
    "ResourceFetcherAdapter",
    "ResourceFetcher",
    "ResourceSource",
    "ResourceSpec",
    "set_adapter",
    "reset_adapter",
    "get_adapter",
    "get_default_registry",
    "fetch",
    "fs",
    "ErrorCode",
    "FetchKitError",
    "AdapterNotInitializedError",
    "DownloadError",
    "InvalidSourceError",
    "ResourceReadError",
    "HttpResourceFetcher",
]

import logging
logging.getLogger("fetchkit").addHandler(logging.NullHandler())


def init(resource_fetcher: ResourceFetcherAdapter) -> None:
    """Installs the resource fetcher every library call will go through."""
    set_adapter(resource_fetcher)


def __getattr__(name: str):
    if name == "HttpResourceFetcher":
        from .infra.adapters.http_fetcher import HttpResourceFetcher
        return HttpResourceFetcher
    raise AttributeError(f"module 'fetchkit' has no attribute {name}")

def __dir__():
    return sorted(list(globals().keys()) + __all__)
