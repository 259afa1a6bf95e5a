"""Plain-text manifest implementation of the JobInputs port."""

import logging
from pathlib import Path

from ..application.domain import JobInputs


class ManifestJobInputs(JobInputs):
    """
    Registers job inputs by appending them to a manifest file.

    The manifest holds one input path per line, which batch runners can
    read as their list of input sources.
    """

    def __init__(self, manifest_path: Path):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.manifest_path = Path(manifest_path)

    def add_input_path(self, path: Path):
        self.manifest_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.manifest_path, "a", encoding="utf-8") as f:
            f.write(f"{path}\n")
        self.logger.info(f"Added {path} to {self.manifest_path.name}")

