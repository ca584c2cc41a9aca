"""Storage backend contract shared by the filesystem and object-store variants."""

from abc import ABC, abstractmethod

from ..config.settings import BackendConfig
from ..utils.file_utils import FileHelper


class StorageBackend(ABC):
    """Destination for a source tree.

    Subclasses prepare their destination in ``initialize`` and implement the
    two copy strategies on top of ``copy_file``. Every method raises on
    failure; nothing is retried.
    """

    def __init__(self, config: BackendConfig):
        """Initialize the backend.

        Args:
            config: Immutable source/target configuration
        """
        self.config = config

    @property
    def source_prefix(self) -> str:
        return self.config.source_prefix

    @property
    def target_prefix(self) -> str:
        return self.config.target_prefix

    def relative_path(self, path: str) -> str:
        """Path of ``path`` relative to the source prefix, without a leading separator."""
        return FileHelper.relative_to_prefix(path, self.source_prefix).lstrip("/")

    def target_path_for(self, path: str) -> str:
        """Destination path (or key) for a source path."""
        return FileHelper.join_prefix(self.target_prefix, self.relative_path(path))

    @abstractmethod
    def initialize(self) -> None:
        """Prepare the destination for writing. Safe to call more than once."""

    @abstractmethod
    def copy_file(self, source_path: str, target_path: str) -> None:
        """Copy one file's full contents to ``target_path``, overwriting it."""

    @abstractmethod
    def full_copy(self) -> None:
        """Copy every source file, overwriting whatever is at the destination."""

    @abstractmethod
    def incremental_copy(self) -> None:
        """Copy only the source files that are new or changed at the destination."""
