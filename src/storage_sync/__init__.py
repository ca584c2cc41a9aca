"""
Storage Sync

Mirrors a source directory tree into a local directory or an S3-compatible
bucket, either as a full overwrite copy (distcp) or as an incremental sync
repeated on an interval.
"""

__version__ = "1.0.0"
__author__ = "Storage Sync"
__description__ = "Mirror directory trees to local or object storage"

from .backends import LocalBackend, ObjectStoreBackend, StorageBackend
from .config.settings import BackendConfig, SyncJobConfig
from .sync.engine import SyncEngine, init_backend_with_engine

__all__ = [
    "BackendConfig",
    "SyncJobConfig",
    "StorageBackend",
    "LocalBackend",
    "ObjectStoreBackend",
    "SyncEngine",
    "init_backend_with_engine",
]
