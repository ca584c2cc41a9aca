"""Sync engine for mirroring a source tree."""

from .engine import SyncEngine, init_backend_with_engine
from .walker import walk_source_files

__all__ = ["SyncEngine", "init_backend_with_engine", "walk_source_files"]
