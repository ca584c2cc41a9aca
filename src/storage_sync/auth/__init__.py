"""Authentication modules for object storage."""

from .cloud_auth import ObjectStoreAuth

__all__ = ["ObjectStoreAuth"]
