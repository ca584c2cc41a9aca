"""Object storage authentication handling."""

import logging
from typing import Optional

import boto3
from botocore.config import Config

from ..config.settings import ObjectStoreCredentials

logger = logging.getLogger(__name__)

class ObjectStoreAuth:
    """Handle S3-compatible (MinIO, AWS S3) authentication and client creation."""

    def __init__(self, credentials: ObjectStoreCredentials):
        """Initialize object store authentication.

        Args:
            credentials: Endpoint, keys and transport settings
        """
        self.credentials = credentials
        self._s3_client = None

    def get_s3_client(self):
        """Get authenticated S3 client.

        Raises:
            ConfigurationError: If any required credential is missing

        Returns:
            boto3 S3 client
        """
        if self._s3_client is None:
            self.credentials.require_complete()
            self._s3_client = boto3.client(
                's3',
                endpoint_url=self.credentials.endpoint_url,
                aws_access_key_id=self.credentials.access_key,
                aws_secret_access_key=self.credentials.secret_key,
                region_name=self.credentials.region,
                config=Config(s3={'addressing_style': 'path'}),
            )
            logger.info(f"Created object store client for {self.credentials.endpoint_url}")

        return self._s3_client

    @classmethod
    def from_env(cls, credentials: Optional[ObjectStoreCredentials] = None) -> "ObjectStoreAuth":
        """Create object store auth from environment variables.

        Args:
            credentials: Pre-loaded credentials, read from the environment when omitted

        Returns:
            ObjectStoreAuth instance
        """
        return cls(credentials or ObjectStoreCredentials.from_env())
