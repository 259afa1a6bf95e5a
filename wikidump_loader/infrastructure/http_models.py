"""
Pydantic models for validating the response headers of the dump server.

These models serve as a strict contract for the metadata the loader relies
on, so a malformed header is caught at the infrastructure layer before any
timestamp reaches the application core.
"""

from datetime import timezone
from email.utils import parsedate_to_datetime

from pydantic import BaseModel, Field, field_validator


def parse_last_modified(value: str) -> int:
    """
    Parses an RFC 1123 Last-Modified header into milliseconds since the
    epoch, e.g. 'Sat, 02 Mar 2024 10:15:00 GMT'.

    Raises:
        ValueError: If the value is not an HTTP date.
    """
    try:
        parsed = parsedate_to_datetime(value.strip())
    except (TypeError, ValueError) as e:
        raise ValueError(f"Not an HTTP date: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


class DumpHeaders(BaseModel):
    """
    The subset of response headers describing a dump archive.

    Header names are matched through their lower-case aliases, which is how
    httpx exposes them.
    """

    last_modified_ms: int = Field(alias="last-modified")

    @field_validator("last_modified_ms", mode="before")
    @classmethod
    def parse_http_date(cls, value):
        if isinstance(value, str):
            return parse_last_modified(value)
        return value
