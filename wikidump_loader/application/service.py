"""
The core application service, containing pure business logic.

This module defines the orchestrator (SnapshotService) deciding whether a
newer dump has to be fetched, and handing the freshest local snapshot to a
batch job.
"""

import logging
from pathlib import Path
from typing import Optional

from .domain import *
from .exceptions import NoSnapshotAvailableError
from .inventory import LocalInventoryScanner


class SnapshotService:
    """Keeps the freshest dump of a locale available in local storage."""

    def __init__(
        self,
        scanner: LocalInventoryScanner,
        probe: FreshnessProbe,
        fetcher: SnapshotFetcher,
        check_new: bool = True,
    ):
        """Initializes the service with its dependencies (ports)."""
        self.logger = logging.getLogger(self.__class__.__name__)
        self.scanner = scanner
        self.probe = probe
        self.fetcher = fetcher
        self.check_new = check_new

    def ensure_freshest(
        self,
        storage_root: Path,
        locale: str,
        check_remote: Optional[bool] = None,
    ) -> Path:
        """
        Guarantee the freshest snapshot is stored, fetching only if needed.

        A fetch happens when nothing is stored yet or when the remote dump
        is strictly newer than the newest stored one. Stored snapshots are
        never removed.

        Args:
            storage_root: Directory holding one subdirectory per locale.
            locale: A locale or language code, e.g. 'en' or 'de_DE'.
            check_remote: Whether to ask the remote source for a newer dump.
                          Defaults to the service's configured check_new.

        Returns:
            The path of the snapshot the caller should use.

        Raises:
            NoSnapshotAvailableError: If nothing is stored and remote checks
                                      are disabled.
            DownloadError: If fetching the new dump fails.
            DecompressionError: If the fetched dump cannot be decompressed.
        """

        locale = normalize_language(locale)
        storage_root = Path(storage_root)
        if check_remote is None:
            check_remote = self.check_new

        local = self.scanner.scan(storage_root, locale)
        chosen = local.path if local else None

        if not check_remote:
            if chosen is None:
                raise NoSnapshotAvailableError(
                    f"No stored '{locale}' snapshot under {storage_root} "
                    f"and remote checks are disabled."
                )
            self.logger.info(f"Using stored snapshot {chosen.name}")
            return chosen

        remote = self.probe.probe(locale)
        if remote.probe_failed:
            self.logger.warning(
                f"Remote freshness of '{locale}' dump is unknown."
            )

        if local is None or remote.last_modified_ms > local.modified_ms:
            self.logger.info(f"Fetching new '{locale}' dump...")
            chosen = self.fetcher.fetch(
                storage_root, locale, remote.last_modified_ms
            )
        else:
            self.logger.info(f"Stored snapshot {chosen.name} is up to date.")

        return chosen

    def add_wikidump(
        self,
        job: JobInputs,
        storage_root: Path,
        locale: str = "en",
        check_remote: Optional[bool] = None,
    ) -> Path:
        """Registers the freshest snapshot of a locale as a job input."""
        path = self.ensure_freshest(storage_root, locale, check_remote)
        job.add_input_path(path)
        self.logger.info(f"Registered {path} as job input.")
        return path
