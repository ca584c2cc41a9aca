"""
Exceptions for sync operations.
"""


class SyncError(Exception):
    """Base exception for sync operations."""

    pass


class ConfigurationError(SyncError, ValueError):
    """Required configuration (credentials, paths, bucket) is missing or invalid."""

    pass


class BackendNotInitializedError(SyncError):
    """A copy was attempted before the backend was initialized."""

    pass
