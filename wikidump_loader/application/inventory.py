"""Scanner for the snapshots already stored for a locale."""

import logging
from pathlib import Path
from typing import Optional

from .domain import PART_SUFFIX, SnapshotEntry, Storage


class LocalInventoryScanner:
    """Finds the most recently modified snapshot stored for a locale."""

    def __init__(self, storage: Storage):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.storage = storage

    def scan(self, storage_root: Path, locale: str) -> Optional[SnapshotEntry]:
        """
        Return the newest stored snapshot of a locale, if any.

        A missing locale directory is created and reported as empty. Entries
        sharing the newest timestamp resolve to the first one listed.
        Storage failures are logged and reported as "no local snapshot", so
        the caller falls back to fetching.

        Args:
            storage_root: Directory holding one subdirectory per locale.
            locale: The language code of the dump.

        Returns:
            The newest SnapshotEntry, or None.
        """

        directory = Path(storage_root) / locale
        latest = None

        try:
            if not self.storage.exists(directory):
                self.logger.info(f"Creating snapshot directory {directory}")
                self.storage.mkdirs(directory)
                return None

            for entry in self.storage.list_entries(directory):
                if entry.path.name.endswith(PART_SUFFIX):
                    continue
                if latest is None or entry.modified_ms > latest.modified_ms:
                    latest = entry
        except OSError as e:
            self.logger.error(f"Failed to scan {directory}: {e}")
            return None

        if latest is None:
            self.logger.info(f"No stored snapshot found in {directory}")
        else:
            self.logger.info(f"Latest stored snapshot is {latest.path.name}")

        return latest
