"""
Dependency Injection container for the wikidump loader.

This container uses the `dependency-injector` library to wire together all
the components of the application, such as services and infrastructure adapters,
based on the application's configuration.
"""

from dependency_injector import containers, providers
import httpx

from ..application.domain import *
from ..application.inventory import LocalInventoryScanner
from ..application.service import SnapshotService
from ..settings import settings

from .downloader import HttpSnapshotFetcher
from .job_inputs import ManifestJobInputs
from .probe import HttpFreshnessProbe
from .processing import Bz2StreamDecoder
from .storage import LocalStorage


def _init_http_client():
    """Opens the shared HTTP client and closes it on shutdown."""
    with httpx.Client() as client:
        yield client


def _prefer_cli(cli_value, configured_value):
    """Returns the command-line value unless it was left unset."""
    return configured_value if cli_value is None else cli_value


class Container(containers.DeclarativeContainer):
    """DI container for wiring the application components."""

    cli_args = providers.Configuration()

    config = providers.Object(settings)

    http_client = providers.Resource(_init_http_client)

    storage: providers.Singleton[Storage] = providers.Singleton(LocalStorage)

    decoder: providers.Factory[StreamDecoder] = providers.Factory(
        Bz2StreamDecoder
    )

    probe: providers.Factory[FreshnessProbe] = providers.Factory(
        HttpFreshnessProbe,
        client=http_client,
        dump_url=config.provided.loader.dump_url,
        timeout=config.provided.loader.timeout,
    )

    fetcher: providers.Factory[SnapshotFetcher] = providers.Factory(
        HttpSnapshotFetcher,
        client=http_client,
        dump_url=config.provided.loader.dump_url,
        timeout=config.provided.loader.timeout,
        storage=storage,
        decoder=decoder,
        chunk_size=config.provided.loader.downloader.chunk_size,
        show_progress=config.provided.loader.downloader.show_progress,
    )

    scanner = providers.Factory(LocalInventoryScanner, storage=storage)

    snapshot_service = providers.Factory(
        SnapshotService,
        scanner=scanner,
        probe=probe,
        fetcher=fetcher,
        check_new=providers.Callable(
            _prefer_cli, cli_args.check_new, config.provided.loader.check_new
        ),
    )

    job_inputs: providers.Factory[JobInputs] = providers.Factory(
        ManifestJobInputs,
        manifest_path=providers.Callable(
            _prefer_cli, cli_args.manifest, config.provided.paths.manifest
        ),
    )

    locale = providers.Callable(
        _prefer_cli, cli_args.locale, config.provided.loader.locale
    )

    storage_root = providers.Callable(
        _prefer_cli, cli_args.storage_root, config.provided.paths.storage_root
    )
