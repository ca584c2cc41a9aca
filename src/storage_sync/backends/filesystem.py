"""Local filesystem destination."""

import logging
import os
import shutil
from pathlib import Path

from ..exceptions import ConfigurationError
from ..sync.walker import walk_source_files
from .base import StorageBackend

logger = logging.getLogger(__name__)

class LocalBackend(StorageBackend):
    """Mirror the source tree into a directory on the local filesystem.

    A file counts as up to date when the copy at the destination has a
    modification time equal to or later than the source's.
    """

    def initialize(self) -> None:
        """Create the target directory if it does not exist."""
        if not self.target_prefix:
            raise ConfigurationError("Target directory is required for the filesystem backend")
        Path(self.target_prefix).mkdir(parents=True, exist_ok=True)
        logger.info(f"Target directory ready: {self.target_prefix}")

    def copy_file(self, source_path: str, target_path: str) -> None:
        """Stream one file to ``target_path``, creating or truncating it."""
        with open(source_path, 'rb') as src, open(target_path, 'wb') as dst:
            shutil.copyfileobj(src, dst)
        logger.debug(f"Copied {source_path} to {target_path}")

    def full_copy(self) -> None:
        """Copy every file under the source prefix, overwriting existing files."""
        Path(self.target_prefix).mkdir(parents=True, exist_ok=True)

        def on_file(path: str) -> None:
            self.copy_file(path, self.target_path_for(path))

        walk_source_files(self.source_prefix, on_file, self._make_target_dir)

    def incremental_copy(self) -> None:
        """Copy only files that are missing at the target or have a newer source mtime."""
        def on_file(path: str) -> None:
            target_path = self.target_path_for(path)
            if self.is_up_to_date(path, target_path):
                logger.debug(f"Skipping (up to date): {path}")
                return
            self.copy_file(path, target_path)

        walk_source_files(self.source_prefix, on_file, self._make_target_dir)

    @staticmethod
    def is_up_to_date(source_path: str, target_path: str) -> bool:
        """True when ``target_path`` exists and the source is not strictly newer."""
        source_mtime = os.stat(source_path).st_mtime_ns
        try:
            target_mtime = os.stat(target_path).st_mtime_ns
        except FileNotFoundError:
            return False
        return source_mtime <= target_mtime

    def _make_target_dir(self, path: str) -> None:
        if path == self.source_prefix:
            return
        Path(self.target_path_for(path)).mkdir(parents=True, exist_ok=True)
