"""
Core business exceptions for the wikidump loader.

This module defines a hierarchy of custom exceptions to allow for granular
error handling and clear separation of failure domains.
"""


class WikidumpLoaderError(Exception):
    """Base exception for all component-specific errors."""
    pass


# --- Configuration Errors ---

class ConfigurationError(WikidumpLoaderError):
    """Raised for errors related to application configuration."""
    pass


# --- Infrastructure Errors ---

class InfrastructureError(WikidumpLoaderError):
    """Base class for errors related to external systems (network, storage)."""
    pass


class ProbeError(InfrastructureError):
    """
    Raised when the remote dump metadata cannot be read or parsed.

    Never leaves the probe adapter: it is logged there and turned into a
    failed RemoteMetadata result.
    """
    pass


class DownloadError(InfrastructureError):
    """Raised when a dump download or the write of its entry fails."""
    pass


# --- Domain/Business Logic Errors ---

class DomainError(WikidumpLoaderError):
    """Base class for errors related to business logic failures."""
    pass


class DecompressionError(DomainError):
    """Raised when the compressed dump stream is corrupt or truncated."""
    pass


class NoSnapshotAvailableError(DomainError):
    """Raised when no local snapshot exists and remote checks are disabled."""
    pass
