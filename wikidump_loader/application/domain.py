"""
This module defines the core domain models for the application.

These classes represent the pure, technology-agnostic entities and data
structures that the application's business logic operates on, together with
the ports (interfaces) the infrastructure layer implements.
"""

import dataclasses
import re
from pathlib import Path

from abc import ABC, abstractmethod
from typing import BinaryIO, ContextManager, Iterable, Iterator, List

from .exceptions import ConfigurationError

DUMP_NAME_PREFIX = "wiki-latest-pages-articles"
PART_SUFFIX = ".part"

_LANGUAGE_PATTERN = re.compile(r"^[a-z]{2,12}$")


def normalize_language(locale: str) -> str:
    """
    Reduce a locale identifier to the language code used by the dump source.

    Only the primary subtag is kept, so "de_DE", "de-AT" and "DE" all map
    to "de".

    Raises:
        ConfigurationError: If no valid language code can be extracted.
    """
    language = re.split(r"[-_.@]", (locale or "").strip(), maxsplit=1)[0]
    language = language.lower()
    if not _LANGUAGE_PATTERN.match(language):
        raise ConfigurationError(f"Invalid dump language code: {locale!r}")
    return language


def snapshot_file_name(locale: str, timestamp_ms: int) -> str:
    """Name of a stored snapshot, e.g. 'dewiki-latest-pages-articles.123.xml'."""
    return f"{locale}{DUMP_NAME_PREFIX}.{timestamp_ms}.xml"


# --- Domain Models ---

@dataclasses.dataclass(frozen=True)
class SnapshotEntry:
    """A decompressed dump stored locally, with its modification time."""

    path: Path
    modified_ms: int


@dataclasses.dataclass(frozen=True)
class RemoteMetadata:
    """
    A transient result of a freshness probe.

    A failed probe is reported with probe_failed=True and a zero timestamp,
    so it compares as older than any stored snapshot.
    """

    locale: str
    last_modified_ms: int
    probe_failed: bool = False

    @classmethod
    def failed(cls, locale: str) -> "RemoteMetadata":
        return cls(locale=locale, last_modified_ms=0, probe_failed=True)


# --- Ports (Interfaces) ---

class Storage(ABC):
    """A port for the filesystem holding the snapshot entries."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        pass

    @abstractmethod
    def mkdirs(self, path: Path):
        """Creates a directory and any missing parents."""
        pass

    @abstractmethod
    def list_entries(self, directory: Path) -> List[SnapshotEntry]:
        """Lists the files of a directory in a stable order."""
        pass

    @abstractmethod
    def open_write(self, path: Path) -> ContextManager[BinaryIO]:
        """Creates (or truncates) a file and opens it for binary writing."""
        pass

    @abstractmethod
    def rename(self, source: Path, destination: Path):
        pass

    @abstractmethod
    def delete(self, path: Path):
        """Deletes a file, ignoring it if it is already gone."""
        pass


class FreshnessProbe(ABC):
    """A port for reading the last-modified time of the remote dump."""

    @abstractmethod
    def probe(self, locale: str) -> RemoteMetadata:
        """
        Fetches the dump metadata without downloading the body.
        Never raises: failures are reported through RemoteMetadata.
        """
        pass


class StreamDecoder(ABC):
    """A port for decompressing a stream of byte chunks."""

    @abstractmethod
    def decode(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        """
        Lazily decodes compressed chunks.
        Raises DecompressionError on corrupt or truncated input.
        """
        pass


class SnapshotFetcher(ABC):
    """A port for downloading and unpacking a dump into storage."""

    @abstractmethod
    def fetch(self, storage_root: Path, locale: str, timestamp_ms: int) -> Path:
        """Materializes a new snapshot entry and returns its path."""
        pass


class JobInputs(ABC):
    """A port for the batch job that consumes the snapshot."""

    @abstractmethod
    def add_input_path(self, path: Path):
        pass
