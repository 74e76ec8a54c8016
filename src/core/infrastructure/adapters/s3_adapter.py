"""Bucket-bound wrapper around the boto3 S3 client."""

from collections.abc import Mapping
import os
from typing import Any, BinaryIO, Protocol

import boto3

from core.utils.constants import (
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_IMAGE_S3_BUCKET_NAME,
    S3_OBJECT_ACL,
)


class _Boto3S3Client(Protocol):
    """The two boto3 client calls the adapter relies on."""

    def upload_fileobj(
        self,
        Fileobj: BinaryIO,
        Bucket: str,
        Key: str,
        ExtraArgs: Mapping[str, Any] | None = None,
    ) -> None: ...

    def get_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Mapping[str, Any]: ...


class S3AdapterProtocol(Protocol):
    """What S3ImageStorage needs from an adapter; tests substitute doubles."""

    def upload_fileobj(
        self,
        *,
        key: str,
        fileobj: BinaryIO,
        content_type: str,
    ) -> None: ...

    def get_object(self, *, key: str) -> Mapping[str, Any]: ...


class S3Adapter:
    """S3 calls scoped to a single bucket.

    botocore exceptions propagate unchanged; S3ImageStorage decides what
    they mean. One instance is shared across requests.
    """

    def __init__(self, bucket_name: str | None = None) -> None:
        bucket_name = bucket_name or os.getenv(ENV_IMAGE_S3_BUCKET_NAME)
        if not bucket_name:
            raise RuntimeError(f"{ENV_IMAGE_S3_BUCKET_NAME} environment variable is not set")

        self._bucket = bucket_name
        # AWS_ENDPOINT_URL points at LocalStack or moto server when set
        self._client: _Boto3S3Client = boto3.client(
            "s3",
            endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=os.getenv(ENV_AWS_REGION),
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def upload_fileobj(
        self,
        *,
        key: str,
        fileobj: BinaryIO,
        content_type: str,
    ) -> None:
        """Stream ``fileobj`` to ``key`` as a private object (multipart when large)."""
        self._client.upload_fileobj(
            Fileobj=fileobj,
            Bucket=self._bucket,
            Key=key,
            ExtraArgs={
                "ContentType": content_type,
                "ACL": S3_OBJECT_ACL,
            },
        )

    def get_object(self, *, key: str) -> Mapping[str, Any]:
        return self._client.get_object(Bucket=self._bucket, Key=key)
