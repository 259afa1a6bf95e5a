"""HTTP implementation of the FreshnessProbe port."""

import httpx
from pydantic import ValidationError

from ..application.domain import FreshnessProbe, RemoteMetadata
from ..application.exceptions import ProbeError

from .base_client import BaseClient
from .decorators import retry_on_network_error
from .http_models import DumpHeaders


class HttpFreshnessProbe(BaseClient, FreshnessProbe):
    """Reads the Last-Modified time of a dump with a HEAD request."""

    @retry_on_network_error
    def _execute_head(self, url: str) -> httpx.Headers:
        """Executes the raw HTTP HEAD request."""
        response = self.client.head(
            url, timeout=self.timeout, follow_redirects=True
        )
        response.raise_for_status()
        return response.headers

    def _read_metadata(self, locale: str) -> RemoteMetadata:
        """Fetches and validates the dump headers, raising ProbeError."""
        url = self.url_for(locale)

        try:
            headers = self._execute_head(url)
        except httpx.HTTPError as e:
            raise ProbeError(f"Request to {url} failed: {e}") from e

        try:
            validated = DumpHeaders.model_validate(dict(headers))
        except ValidationError as e:
            raise ProbeError(
                f"Unusable Last-Modified header from {url}: "
                f"{headers.get('last-modified')!r}"
            ) from e

        return RemoteMetadata(
            locale=locale,
            last_modified_ms=validated.last_modified_ms,
        )

    def probe(self, locale: str) -> RemoteMetadata:
        """
        Reports when the remote dump of a locale was last modified.

        This method fulfills the FreshnessProbe port contract. Any failure
        is logged and reported as a failed probe with a zero timestamp, so
        the caller keeps working with what is stored locally.

        Args:
            locale: The language code of the dump.

        Returns:
            The remote metadata, possibly marked as probe_failed.
        """

        self.logger.info(f"Checking remote '{locale}' dump...")

        try:
            metadata = self._read_metadata(locale)
        except ProbeError as e:
            self.logger.error(str(e))
            return RemoteMetadata.failed(locale)

        self.logger.info(
            f"Remote '{locale}' dump last modified at "
            f"{metadata.last_modified_ms} ms."
        )
        return metadata
