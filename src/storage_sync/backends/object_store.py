"""S3-compatible object storage destination (MinIO, AWS S3)."""

import logging
import os
from typing import Optional, Set

from botocore.exceptions import BotoCoreError, ClientError

from ..auth.cloud_auth import ObjectStoreAuth
from ..config.settings import BackendConfig
from ..exceptions import BackendNotInitializedError, ConfigurationError
from ..sync.walker import walk_source_files
from ..utils.file_utils import FileHelper
from .base import StorageBackend

logger = logging.getLogger(__name__)

BUCKET_ALREADY_OWNED = "BucketAlreadyOwnedByYou"


class ObjectStoreBackend(StorageBackend):
    """Upload the source tree into a bucket under a key prefix.

    Incremental runs decide what to upload purely by key existence: an object
    already present under the same relative key is treated as current, even
    if its size or content differ from the source file. A changed file is
    therefore only re-uploaded by a full copy.
    """

    def __init__(self, config: BackendConfig, auth: Optional[ObjectStoreAuth] = None):
        """Initialize the object store backend.

        Args:
            config: Immutable source/target configuration, with the target bucket
            auth: Object store authentication; read from the environment when omitted
        """
        super().__init__(config)
        self.auth = auth or ObjectStoreAuth.from_env()
        self.client = None

    @property
    def bucket(self) -> str:
        return self.config.target_bucket

    def target_path_for(self, path: str) -> str:
        return FileHelper.object_key(super().target_path_for(path))

    def initialize(self) -> None:
        """Connect to the object store and make sure the target bucket exists.

        Raises:
            ConfigurationError: If the bucket name or any credential is missing
            ClientError: If the bucket cannot be created for any reason other
                than it already being owned by the caller
        """
        if not self.bucket:
            raise ConfigurationError("Target bucket is required for the object store backend")
        if self.client is not None:
            return

        client = self.auth.get_s3_client()
        logger.info("Successfully connected to object store")
        self._create_bucket(client)
        self.client = client

    def _create_bucket(self, client) -> None:
        """Create the target bucket, treating an already-owned bucket as success."""
        try:
            client.create_bucket(Bucket=self.bucket)
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') == BUCKET_ALREADY_OWNED:
                logger.info(f"Bucket {self.bucket} already exists")
                return
            raise
        logger.info(f"Bucket {self.bucket} created successfully")

    def copy_file(self, source_path: str, target_path: str) -> None:
        """Upload one file to ``target_path`` in the target bucket."""
        client = self._require_client()
        key = FileHelper.object_key(target_path)

        with open(source_path, 'rb') as f:
            size = os.fstat(f.fileno()).st_size
            client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=f,
                ContentLength=size,
            )

        logger.info(
            f"Uploaded {source_path} to bucket {self.bucket} as {key} "
            f"({FileHelper.format_file_size(size)})"
        )

    def full_copy(self) -> None:
        """Upload every file under the source prefix, overwriting existing objects."""
        def on_file(path: str) -> None:
            self.copy_file(path, self.target_path_for(path))

        walk_source_files(self.source_prefix, on_file, _no_directories)

    def incremental_copy(self) -> None:
        """Upload only files whose relative key is not yet present in the bucket."""
        existing = self.list_existing_keys()
        logger.info(f"Found {len(existing)} existing objects under '{self.target_prefix}'")

        def on_file(path: str) -> None:
            if self.relative_path(path) in existing:
                logger.debug(f"Skipping (already uploaded): {path}")
                return
            self.copy_file(path, self.target_path_for(path))

        walk_source_files(self.source_prefix, on_file, _no_directories)

    def list_existing_keys(self) -> Set[str]:
        """Relative keys of every object under the target prefix.

        Listing is lenient: objects without a key are ignored, and a listing
        failure ends the scan with whatever was collected so far. Missing
        entries only cause those files to be uploaded again.
        """
        client = self._require_client()
        existing: Set[str] = set()
        key_prefix = FileHelper.key_prefix(self.target_prefix)

        paginator = client.get_paginator('list_objects_v2')
        try:
            for page in paginator.paginate(Bucket=self.bucket, Prefix=key_prefix):
                for obj in page.get('Contents', []):
                    key = obj.get('Key')
                    if not key:
                        continue
                    relative = FileHelper.relative_to_prefix(key, key_prefix)
                    existing.add(FileHelper.object_key(relative))
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Error listing objects in bucket {self.bucket}: {e}")

        return existing

    def _require_client(self):
        if self.client is None:
            raise BackendNotInitializedError("Object store client not initialized")
        return self.client


def _no_directories(path: str) -> None:
    # Object stores have no directory entities
    return None
