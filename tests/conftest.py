"""Shared fixtures for the storage sync tests."""

import sys
from pathlib import Path

import pytest
from botocore.exceptions import ClientError

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from storage_sync.auth.cloud_auth import ObjectStoreAuth
from storage_sync.config.settings import BackendConfig, ObjectStoreCredentials


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({'Error': {'Code': code, 'Message': code}}, operation)


class FakePaginator:
    """list_objects_v2 paginator over a FakeS3Client, two keys per page."""

    def __init__(self, client: "FakeS3Client"):
        self.client = client

    def paginate(self, Bucket, Prefix=""):
        keys = sorted(k for k in self.client.objects if k.startswith(Prefix))
        for i in range(0, len(keys), 2):
            if self.client.list_error_after_pages is not None and i // 2 >= self.client.list_error_after_pages:
                raise client_error('InternalError', 'ListObjectsV2')
            yield {'Contents': [{'Key': key, 'Size': len(self.client.objects[key])} for key in keys[i:i + 2]]}
        if not keys and self.client.list_error_after_pages == 0:
            raise client_error('InternalError', 'ListObjectsV2')


class FakeS3Client:
    """In-memory stand-in for the parts of a boto3 S3 client the backend uses."""

    def __init__(self, objects=None, create_bucket_error=None, list_error_after_pages=None):
        self.objects = dict(objects or {})
        self.buckets = set()
        self.create_bucket_error = create_bucket_error
        self.list_error_after_pages = list_error_after_pages
        self.uploads = []

    def create_bucket(self, Bucket):
        if self.create_bucket_error:
            raise client_error(self.create_bucket_error, 'CreateBucket')
        self.buckets.add(Bucket)
        return {}

    def put_object(self, Bucket, Key, Body, ContentLength):
        data = Body.read()
        assert len(data) == ContentLength
        self.objects[Key] = data
        self.uploads.append((Bucket, Key, ContentLength))
        return {'ETag': '"fake"'}

    def get_paginator(self, name):
        assert name == 'list_objects_v2'
        return FakePaginator(self)


class StubAuth(ObjectStoreAuth):
    """Auth that hands out a prebuilt client instead of connecting."""

    def __init__(self, client):
        super().__init__(ObjectStoreCredentials())
        self._s3_client = client


@pytest.fixture
def source_tree(tmp_path):
    """Source tree {a.txt: "x", dir/b.txt: "y"}."""
    src = tmp_path / "src"
    (src / "dir").mkdir(parents=True)
    (src / "a.txt").write_text("x")
    (src / "dir" / "b.txt").write_text("y")
    return src


@pytest.fixture
def fake_s3():
    return FakeS3Client()


@pytest.fixture
def object_store_config(source_tree):
    return BackendConfig(source_prefix=str(source_tree), target_prefix="out/", target_bucket="sync-bucket")
