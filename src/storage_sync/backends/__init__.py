"""Storage destinations."""

from .base import StorageBackend
from .filesystem import LocalBackend
from .object_store import ObjectStoreBackend

__all__ = ["StorageBackend", "LocalBackend", "ObjectStoreBackend"]
