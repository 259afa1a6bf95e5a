"""Base class for HTTP clients talking to the dump server."""

import logging
import httpx

from ..application.exceptions import ConfigurationError


class BaseClient:
    """A base client that handles an HTTP client and the dump URL template."""

    def __init__(self, client: httpx.Client, dump_url: str, timeout: int):
        """
        Initializes the base client.

        Args:
            client: An instance of httpx.Client.
            dump_url: URL template of the dump, with a '{locale}' field.
            timeout: Timeout in seconds applied to every request.

        Raises:
            ConfigurationError: If the URL template has no '{locale}' field.
        """

        if not dump_url or "{locale}" not in dump_url:
            raise ConfigurationError(
                f"Dump URL for {self.__class__.__name__} is missing or has "
                f"no '{{locale}}' field. Please check your config files."
            )

        self.client = client
        self.dump_url = dump_url
        self.timeout = timeout
        self.logger = logging.getLogger(self.__class__.__name__)

    def url_for(self, locale: str) -> str:
        """Returns the dump URL of a language code."""
        return self.dump_url.format(locale=locale)
