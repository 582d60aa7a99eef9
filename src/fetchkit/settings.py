"""
fetchkit - Global Settings & Logging.
"""
import os
import logging
from pathlib import Path
from typing import Optional

# Define a library-specific logger
logger = logging.getLogger("fetchkit")
logger.addHandler(logging.NullHandler()) # Default to silence unless configured

# Environment Variable Names
ENV_CACHE_DIR = "FETCHKIT_CACHE_DIR"
ENV_TIMEOUT = "FETCHKIT_TIMEOUT"
ENV_RETRIES = "FETCHKIT_RETRIES"

DEFAULT_TIMEOUT = 180
DEFAULT_RETRIES = 3


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable '{name}' must be an integer, got {raw!r}.") from None


class Settings:
    _instance = None

    def __init__(self):
        # Default cache location
        env_cache = os.getenv(ENV_CACHE_DIR)
        if env_cache:
            self.cache_dir = Path(env_cache)
        else:
            self.cache_dir = Path.cwd() / ".fetchkit_cache"

        self.timeout: int = _env_int(ENV_TIMEOUT, DEFAULT_TIMEOUT)
        self.retries: int = _env_int(ENV_RETRIES, DEFAULT_RETRIES)

    @classmethod
    def _get_instance(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reload(cls):
        """Drops the cached instance so the environment is read again."""
        cls._instance = None

    @classmethod
    def get_cache_dir(cls) -> Path:
        inst = cls._get_instance()
        # Ensure dir exists when requested
        inst.cache_dir.mkdir(parents=True, exist_ok=True)
        return inst.cache_dir

    @classmethod
    def set_cache_dir(cls, path):
        inst = cls._get_instance()
        inst.cache_dir = Path(path)

    @classmethod
    def get_timeout(cls) -> int:
        return cls._get_instance().timeout

    @classmethod
    def get_retries(cls) -> int:
        return cls._get_instance().retries

# --- Public Helpers (Exposed in __init__.py) ---

def get_cache_dir() -> Path:
    """Retrieves the current download directory path."""
    return Settings.get_cache_dir()

def resolve_cache_dir(cache_dir: Optional[Path]) -> Path:
    """Return an explicit cache_dir or fall back to Settings/env."""
    if cache_dir is None:
        return get_cache_dir()
    path = Path(cache_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path

def set_cache_dir(path):
    """Sets the download directory for all subsequent fetches."""
    Settings.set_cache_dir(path)

def get_timeout() -> int:
    return Settings.get_timeout()

def get_retries() -> int:
    return Settings.get_retries()

def configure_logging(level: int = logging.INFO):
    """Enable console logging for the library (idempotent)."""
    # Check if a StreamHandler is already attached to avoid duplicates
    has_stream = any(isinstance(h, logging.StreamHandler) for h in logger.handlers)

    if not has_stream:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
