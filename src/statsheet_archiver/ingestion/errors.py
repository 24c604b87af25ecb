from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class ArchiverError(RuntimeError):
    """Base exception for archiver failures."""


class SeasonArgumentError(ArchiverError, ValueError):
    """Season argument missing, non-numeric, or not a positive integer."""


class ProviderError(ArchiverError):
    """Base exception for remote data service failures."""


class ProviderRequestError(ProviderError):
    """HTTP/network/transport layer failures (timeouts, connection errors, non-2xx, etc.)."""


class ProviderDecodeError(ProviderError):
    """Response body was not a JSON array of records matching the expected schema."""


@dataclass(eq=False)
class ArchiveWriteError(ArchiverError):
    """Creating a directory or writing a record file failed, or its path was unsafe."""

    path: Path
    cause: OSError | ValueError

    def __str__(self) -> str:
        return f"Failed to write {self.path}: {self.cause}"
