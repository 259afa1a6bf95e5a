"""
Infrastructure adapters for decompressing dump archives.
"""

import bz2
from typing import Iterable, Iterator

from ..application.domain import StreamDecoder
from ..application.exceptions import DecompressionError


class Bz2StreamDecoder(StreamDecoder):
    """
    An adapter that implements the StreamDecoder port for bzip2 data.

    Input is decoded chunk by chunk, so archives of any size pass through
    without being held in memory. Concatenated bzip2 streams are decoded
    one after another, like bzip2 itself does.
    """

    def _decompress_chunks(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        """Feeds chunks through bz2 decompressors and yields the output."""
        decompressor = bz2.BZ2Decompressor()

        for chunk in chunks:
            while chunk:
                if decompressor.eof:
                    decompressor = bz2.BZ2Decompressor()
                data = decompressor.decompress(chunk)
                if data:
                    yield data
                chunk = decompressor.unused_data if decompressor.eof else b""

        if not decompressor.eof:
            raise DecompressionError(
                "Compressed stream is empty or ended before its "
                "end-of-stream marker."
            )

    def decode(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        """
        Lazily decodes a bzip2 byte stream.

        This public method fulfills the StreamDecoder port contract.

        Args:
            chunks: The compressed input, in chunks of any size.

        Yields:
            Decompressed byte chunks.

        Raises:
            DecompressionError: If the input is corrupt or truncated.
        """
        try:
            yield from self._decompress_chunks(chunks)
        except (OSError, ValueError) as e:
            raise DecompressionError(f"Invalid bzip2 data: {e}") from e
