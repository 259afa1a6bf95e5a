"""Local filesystem implementation of the Storage port."""

from pathlib import Path
from typing import BinaryIO, List

from ..application.domain import SnapshotEntry, Storage


class LocalStorage(Storage):
    """Stores snapshot entries on the local (or a mounted) filesystem."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def mkdirs(self, path: Path):
        Path(path).mkdir(parents=True, exist_ok=True)

    def list_entries(self, directory: Path) -> List[SnapshotEntry]:
        """Lists the regular files of a directory, sorted by name."""
        entries = []
        for path in sorted(Path(directory).iterdir()):
            if not path.is_file():
                continue
            modified_ms = path.stat().st_mtime_ns // 1_000_000
            entries.append(SnapshotEntry(path=path, modified_ms=modified_ms))
        return entries

    def open_write(self, path: Path) -> BinaryIO:
        return open(path, "wb")

    def rename(self, source: Path, destination: Path):
        Path(source).replace(destination)

    def delete(self, path: Path):
        Path(path).unlink(missing_ok=True)
