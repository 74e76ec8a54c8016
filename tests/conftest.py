"""
Pytest configuration and fixtures for picture storage tests.
Provides AWS mocking, S3 fixtures with cleanup, storage backends and
sample pictures in every supported format.
"""

import os
from collections.abc import Callable
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("IMAGE_S3_BUCKET_NAME", "picture-storage-test")
os.environ.setdefault("IMAGE_S3_PREFIX", "pictures")
os.environ.setdefault("IMAGE_CDN_BASE_URL", "https://cdn.example.com")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "PictureStorage")
os.environ.pop("AWS_ENDPOINT_URL", None)

from core.infrastructure.aws.s3_image_storage import S3ImageStorage  # noqa: E402
from core.infrastructure.local.local_image_storage import LocalImageStorage  # noqa: E402
from core.infrastructure.storage_factory import get_image_storage  # noqa: E402

from tests.samples import PLAIN_TEXT, make_image_bytes  # noqa: E402


@pytest.fixture
def image_bytes() -> Callable[..., bytes]:
    """
    Factory for sample pictures.

    Usage:
        data = image_bytes("image/png", width=2, height=2)
    """
    return make_image_bytes


@pytest.fixture
def png_bytes() -> bytes:
    """2x2 PNG picture."""
    return make_image_bytes("image/png", width=2, height=2)


@pytest.fixture
def text_bytes() -> bytes:
    return PLAIN_TEXT


@pytest.fixture(autouse=True)
def reset_storage_singleton():
    get_image_storage.cache_clear()
    yield
    get_image_storage.cache_clear()


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


def _cleanup_s3_objects(s3_client, bucket_name):
    """Helper to delete all objects from S3 bucket efficiently."""
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name):
            objects = page.get("Contents", [])
            if objects:
                delete_keys = [{"Key": obj["Key"]} for obj in objects]
                s3_client.delete_objects(
                    Bucket=bucket_name, Delete={"Objects": delete_keys}
                )
    except ClientError as e:
        if e.response["Error"]["Code"] != "NoSuchBucket":
            raise


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create and manage S3 bucket for testing.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")

    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except ClientError:
        s3_client.create_bucket(Bucket=bucket_name)

    yield s3_client

    _cleanup_s3_objects(s3_client, bucket_name)


@pytest.fixture
def s3_list_keys(s3_client) -> Callable[[], list[str]]:
    """
    Helper to list every object key in the test bucket.

    Usage:
        keys = s3_list_keys()
    """

    def _list() -> list[str]:
        bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")
        response: dict[str, Any] = s3_client.list_objects_v2(Bucket=bucket_name)
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _list


@pytest.fixture
def s3_get_object(s3_client) -> Callable[[str], dict[str, Any]]:
    """
    Helper to get an object from S3.

    Usage:
        response = s3_get_object("pictures/abc.png")
    """

    def _get(key: str) -> dict[str, Any]:
        bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")
        response: dict[str, Any] = s3_client.get_object(Bucket=bucket_name, Key=key)
        return response

    return _get


@pytest.fixture
def local_storage(tmp_path) -> LocalImageStorage:
    return LocalImageStorage(tmp_path / "images")


@pytest.fixture
def s3_storage(s3_bucket) -> S3ImageStorage:
    return S3ImageStorage()


@pytest.fixture(params=["local", "s3"])
def storage(request, tmp_path):
    """Run a test once against each backend."""
    if request.param == "local":
        yield LocalImageStorage(tmp_path / "images")
        return

    with mock_aws():
        client = boto3.client("s3", region_name=os.getenv("AWS_REGION"))
        client.create_bucket(Bucket=os.getenv("IMAGE_S3_BUCKET_NAME"))
        yield S3ImageStorage()
