"""Configuration settings and models for the sync application."""

import os
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ..exceptions import ConfigurationError

# Environment variables read for the object-store backend
ENV_ENDPOINT = "MINIO_ENDPOINT"
ENV_ACCESS_KEY = "MINIO_ACCESS_KEY"
ENV_SECRET_KEY = "MINIO_SECRET_KEY"
ENV_USE_SSL = "MINIO_USE_SSL"
ENV_REGION = "MINIO_REGION"

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


class BackendType(str, Enum):
    """Supported storage backends."""
    FILESYSTEM = "fs"
    MINIO = "minio"


class SyncMode(str, Enum):
    """Copy strategies."""
    SYNC = "sync"
    DISTCP = "distcp"


def parse_bool(value: Optional[str]) -> Optional[bool]:
    """Parse a boolean environment value.

    Returns None when the value is absent. Raises ConfigurationError when the
    value is present but not a recognised boolean literal.
    """
    if value is None or value == "":
        return None
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid value for {ENV_USE_SSL}: {value!r}")


class BackendConfig(BaseModel):
    """Immutable source/target description handed to a backend."""
    model_config = ConfigDict(frozen=True)

    source_prefix: str
    target_prefix: str = ""
    target_bucket: str = ""  # empty for the filesystem backend


class ObjectStoreCredentials(BaseModel):
    """Connection settings for an S3-compatible object store."""
    endpoint: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    use_ssl: Optional[bool] = None
    region: str = "us-east-1"

    @classmethod
    def from_env(cls) -> "ObjectStoreCredentials":
        """Load credentials from environment variables."""
        return cls(
            endpoint=os.getenv(ENV_ENDPOINT) or None,
            access_key=os.getenv(ENV_ACCESS_KEY) or None,
            secret_key=os.getenv(ENV_SECRET_KEY) or None,
            use_ssl=parse_bool(os.getenv(ENV_USE_SSL)),
            region=os.getenv(ENV_REGION) or "us-east-1",
        )

    def missing(self) -> List[str]:
        """Names of the required environment variables that are not set."""
        missing = []
        if not self.endpoint:
            missing.append(ENV_ENDPOINT)
        if not self.access_key:
            missing.append(ENV_ACCESS_KEY)
        if not self.secret_key:
            missing.append(ENV_SECRET_KEY)
        if self.use_ssl is None:
            missing.append(ENV_USE_SSL)
        return missing

    def require_complete(self) -> None:
        """Raise ConfigurationError if any required setting is absent."""
        missing = self.missing()
        if missing:
            raise ConfigurationError(
                f"Required object store environment variables are not set: {', '.join(missing)}"
            )

    @property
    def endpoint_url(self) -> str:
        """Endpoint as a URL, adding the scheme implied by use_ssl."""
        if self.endpoint and "://" in self.endpoint:
            return self.endpoint
        scheme = "https" if self.use_ssl else "http"
        return f"{scheme}://{self.endpoint}"


class SyncJobConfig(BaseModel):
    """A single sync job as selected on the command line or in a YAML file."""
    backend: BackendType = BackendType.FILESYSTEM
    mode: SyncMode = SyncMode.SYNC
    source: str
    target: str = ""
    bucket: str = ""
    interval: int = 0  # seconds, 0 for a single run

    @field_validator('source')
    @classmethod
    def validate_source(cls, v):
        if not v:
            raise ValueError('source is required')
        return v

    @field_validator('interval')
    @classmethod
    def validate_interval(cls, v):
        if v < 0:
            raise ValueError('interval must be zero or positive')
        return v

    @model_validator(mode='after')
    def validate_backend_fields(self):
        if self.backend == BackendType.MINIO and not self.bucket:
            raise ValueError('bucket is required for the minio backend')
        if self.backend == BackendType.FILESYSTEM and not self.target:
            raise ValueError('target is required for the fs backend')
        return self

    def to_backend_config(self) -> BackendConfig:
        """Build the immutable backend configuration for this job."""
        return BackendConfig(
            source_prefix=self.source,
            target_prefix=self.target,
            target_bucket=self.bucket if self.backend == BackendType.MINIO else "",
        )

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path], **overrides) -> "SyncJobConfig":
        """Load a job from a YAML file.

        Args:
            config_path: Path to the YAML job file
            overrides: Field values replacing those in the file; None values are ignored
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        config_data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**config_data)

    def to_yaml(self, config_path: Union[str, Path]) -> None:
        """Save the job to a YAML file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self.model_dump(mode='json'), f, default_flow_style=False, indent=2)
