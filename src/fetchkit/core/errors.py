"""
fetchkit - Error codes and exceptions.

The registry itself only raises AdapterNotInitializedError. Everything else
here is raised by adapter implementations and reaches callers unchanged.
"""
from enum import IntEnum


class ErrorCode(IntEnum):
    NOT_IMPLEMENTED = 101
    DOWNLOAD_FAILED = 180
    INVALID_SOURCE = 182
    FILE_READ_FAILED = 190
    FILE_WRITE_FAILED = 191


class FetchKitError(Exception):
    """Base exception carrying an ErrorCode."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message}"


class AdapterNotInitializedError(FetchKitError):
    """No resource fetcher adapter has been installed."""

    def __init__(self, message: str):
        super().__init__(ErrorCode.NOT_IMPLEMENTED, message)


class DownloadError(FetchKitError):
    def __init__(self, message: str):
        super().__init__(ErrorCode.DOWNLOAD_FAILED, message)


class InvalidSourceError(FetchKitError):
    def __init__(self, message: str):
        super().__init__(ErrorCode.INVALID_SOURCE, message)


class ResourceReadError(FetchKitError):
    def __init__(self, message: str):
        super().__init__(ErrorCode.FILE_READ_FAILED, message)
