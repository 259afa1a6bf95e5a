"""
Entry point for the wikidump loader.
"""

import argparse
import logging
import sys

from .application.exceptions import WikidumpLoaderError
from .infrastructure.containers import Container

logger = logging.getLogger(__name__)


def setup_logging(level: str):
    """Applies basic logging configuration."""
    logging.basicConfig(level=level)


def run_application(args: argparse.Namespace):
    """Wires and runs the application using the DI container."""

    container = Container()
    container.cli_args.from_dict(vars(args))
    setup_logging(level=container.config().logging.level)

    container.init_resources()
    try:
        snapshot_service = container.snapshot_service()
        path = snapshot_service.add_wikidump(
            container.job_inputs(),
            container.storage_root(),
            container.locale(),
        )
    except WikidumpLoaderError as e:
        logger.error(f"An application error occurred: {e}")
        sys.exit(1)
    finally:
        container.shutdown_resources()

    print(path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wikipedia Dump Loader")

    parser.add_argument(
        "--locale",
        help="Language of the dump, e.g. de or de_DE (default from settings).",
    )

    parser.add_argument(
        "--storage-root",
        help="Directory holding one subdirectory of snapshots per language.",
    )

    parser.add_argument(
        "--no-check-new",
        dest="check_new",
        action="store_const",
        const=False,
        default=None,
        help="Use the newest stored snapshot without contacting the server.",
    )

    parser.add_argument(
        "--manifest",
        help="Job manifest file the chosen snapshot path is appended to.",
    )

    return parser


if __name__ == "__main__":
    run_application(build_parser().parse_args())
