from pathlib import Path

import boto3

from dermascan.config.settings import Settings
from dermascan.storage.base import BaseObjectStorage
from dermascan.storage.local_adapter import LocalObjectStorage
from dermascan.storage.s3_adapter import S3ObjectStorage


class StorageFactory:
    """Creates the configured object storage adapter."""

    ENGINES = ("local", "s3")

    @classmethod
    def create(cls, settings: Settings) -> BaseObjectStorage:
        engine = settings.storage_engine.lower()
        if engine == "local":
            return LocalObjectStorage(
                files_root=Path(settings.files_root),
                public_base_url=settings.storage_public_base_url,
            )
        if engine == "s3":
            s3_client = boto3.client(
                "s3",
                region_name=settings.s3_region,
                endpoint_url=settings.s3_endpoint_url,
            )
            return S3ObjectStorage(
                s3_client=s3_client,
                bucket=settings.s3_bucket,
                region=settings.s3_region,
                public_base_url=settings.storage_public_base_url,
            )
        raise ValueError(
            f"Unknown storage engine '{engine}'. Choose from: {list(cls.ENGINES)}"
        )
