"""HTTP implementation of the SnapshotFetcher port."""

import contextlib
from pathlib import Path
from typing import Generator, Iterator

import httpx
from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from ..application.domain import (
    PART_SUFFIX,
    SnapshotFetcher,
    Storage,
    StreamDecoder,
    snapshot_file_name,
)
from ..application.exceptions import DownloadError

from .base_client import BaseClient
from .decorators import retry_on_network_error


def _content_length(response: httpx.Response) -> int:
    """Announced body size in bytes, or 0 when unknown."""
    try:
        return int(response.headers.get("content-length", 0))
    except ValueError:
        return 0


class HttpSnapshotFetcher(BaseClient, SnapshotFetcher):
    """A fetcher that streams a dump via HTTP and unpacks it atomically."""

    def __init__(
        self,
        client: httpx.Client,
        dump_url: str,
        timeout: int,
        storage: Storage,
        decoder: StreamDecoder,
        chunk_size: int = 65536,
        show_progress: bool = True,
    ):
        """Initializes the fetcher adapter."""
        super().__init__(client, dump_url, timeout)
        self.storage = storage
        self.decoder = decoder
        self.chunk_size = chunk_size
        self.show_progress = show_progress

    @contextlib.contextmanager
    def _atomic_target(self, destination: Path) -> Generator[Path, None, None]:
        """Provides a temporary '.part' path and ensures cleanup."""
        part_path = destination.with_name(destination.name + PART_SUFFIX)
        self.storage.mkdirs(destination.parent)
        try:
            yield part_path
        finally:
            self.storage.delete(part_path)

    def _write_decoded(self, response: httpx.Response, target_file: Path):
        """Decode the response body into a file, checking its size."""
        total_size = _content_length(response)
        received = 0

        with tqdm(
            total=total_size or None,
            unit="B",
            unit_scale=True,
            desc=target_file.name,
            disable=not self.show_progress,
        ) as progress_bar:

            def received_chunks() -> Iterator[bytes]:
                nonlocal received
                for chunk in response.iter_bytes(self.chunk_size):
                    received += len(chunk)
                    progress_bar.update(len(chunk))
                    yield chunk

            with self.storage.open_write(target_file) as out_fh:
                for data in self.decoder.decode(received_chunks()):
                    out_fh.write(data)

        # Content-Length counts encoded bytes, iter_bytes yields decoded ones.
        if "content-encoding" in response.headers:
            return
        if total_size != 0 and received != total_size:
            raise DownloadError(f"Size mismatch: {received} != {total_size}")

    @retry_on_network_error
    def _open_stream(self, url: str) -> httpx.Response:
        """Send the GET request and return the response before its body."""
        request = self.client.build_request("GET", url, timeout=self.timeout)
        response = self.client.send(request, stream=True, follow_redirects=True)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError:
            response.close()
            raise
        return response

    def _stream_from_network(self, url: str, target_file: Path):
        """Manage the network request and the streaming process."""
        with contextlib.closing(self._open_stream(url)) as response:
            with logging_redirect_tqdm():
                self._write_decoded(response, target_file)

    def _execute_atomic_download(self, url: str, destination: Path):
        """Orchestrate the entire atomic download operation."""
        self.logger.info(f"Downloading {url} into {destination.name}...")
        with self._atomic_target(destination) as part_path:
            self._stream_from_network(url, part_path)
            self.storage.rename(part_path, destination)
        self.logger.info(f"Finished unpacking {destination.name}")

    def fetch(self, storage_root: Path, locale: str, timestamp_ms: int) -> Path:
        """
        Download the current dump of a locale and store it decompressed.

        This is the public method that fulfills the SnapshotFetcher port
        contract. The entry only appears under its final name once the whole
        dump has been decoded; a failed attempt leaves nothing behind.

        Args:
            storage_root: Directory holding one subdirectory per locale.
            locale: The language code of the dump.
            timestamp_ms: Remote modification time embedded in the name.

        Returns:
            The path of the new snapshot entry.

        Raises:
            DownloadError: If the download or the write fails.
            DecompressionError: If the dump is not valid bzip2 data.
        """

        url = self.url_for(locale)
        destination = (
            Path(storage_root) / locale / snapshot_file_name(locale, timestamp_ms)
        )

        try:
            self._execute_atomic_download(url, destination)
        except httpx.HTTPError as e:
            raise DownloadError(f"Failed to download {url}: {e}") from e
        except OSError as e:
            raise DownloadError(f"Failed to write {destination}: {e}") from e

        return destination
