"""Configuration management for the storage sync application."""

from .settings import (
    BackendConfig,
    BackendType,
    ObjectStoreCredentials,
    SyncJobConfig,
    SyncMode,
)

__all__ = ["BackendConfig", "BackendType", "ObjectStoreCredentials", "SyncJobConfig", "SyncMode"]
