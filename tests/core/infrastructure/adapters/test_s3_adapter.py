import io

import pytest
from botocore.exceptions import ClientError
from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.utils.constants import ENV_IMAGE_S3_BUCKET_NAME


class TestS3Adapter:
    def test_init_missing_bucket_env(self, monkeypatch):
        monkeypatch.delenv(ENV_IMAGE_S3_BUCKET_NAME, raising=False)

        with pytest.raises(RuntimeError):
            S3Adapter()

    def test_explicit_bucket_overrides_env(self, aws_mock):
        adapter = S3Adapter("other-bucket")

        assert adapter.bucket == "other-bucket"

    def test_upload_and_get_object_success(
        self,
        s3_bucket,
        s3_get_object,
    ):
        adapter = S3Adapter()

        key = "pictures/abc.png"
        data = b"image-bytes"

        adapter.upload_fileobj(
            key=key,
            fileobj=io.BytesIO(data),
            content_type="image/png",
        )

        stored = s3_get_object(key)
        fetched = adapter.get_object(key=key)

        assert stored["Body"].read() == data
        assert stored["ContentType"] == "image/png"
        assert fetched["Body"].read() == data

    def test_uploaded_object_is_private(self, s3_bucket):
        adapter = S3Adapter()

        adapter.upload_fileobj(
            key="pictures/private.png",
            fileobj=io.BytesIO(b"data"),
            content_type="image/png",
        )

        acl = s3_bucket.get_object_acl(Bucket=adapter.bucket, Key="pictures/private.png")
        grants = {grant["Permission"] for grant in acl["Grants"]}

        assert grants == {"FULL_CONTROL"}
        assert all(
            grant["Grantee"].get("Type") == "CanonicalUser" for grant in acl["Grants"]
        )

    def test_get_object_missing_key_raises_client_error(
        self,
        s3_bucket,
    ):
        adapter = S3Adapter()

        with pytest.raises(ClientError) as exc:
            adapter.get_object(key="pictures/missing.jpg")

        assert exc.value.response["Error"]["Code"] == "NoSuchKey"

    def test_upload_bubbles_client_error(self, monkeypatch, s3_bucket):
        adapter = S3Adapter()

        def raise_error(**_):
            raise ClientError(
                {"Error": {"Code": "InternalError"}},
                "PutObject",
            )

        monkeypatch.setattr(adapter._client, "upload_fileobj", raise_error)

        with pytest.raises(ClientError):
            adapter.upload_fileobj(
                key="pictures/x.jpg",
                fileobj=io.BytesIO(b"data"),
                content_type="image/jpeg",
            )
