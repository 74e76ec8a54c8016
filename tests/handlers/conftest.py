import base64
import json
from types import SimpleNamespace
from typing import Any

import pytest

from core.utils.constants import ENV_IMAGE_STORAGE_PATH, ENV_STORAGE_BACKEND

from tests.samples import make_image_bytes


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def local_backend(monkeypatch, tmp_path):
    """Point the shared storage singleton at a temporary directory."""
    root = tmp_path / "images"
    monkeypatch.setenv(ENV_STORAGE_BACKEND, "local")
    monkeypatch.setenv(ENV_IMAGE_STORAGE_PATH, str(root))
    return root


@pytest.fixture
def upload_event():
    def _event(data: bytes, image_name: str = "cat.png") -> dict[str, Any]:
        return {
            "httpMethod": "POST",
            "path": "/images",
            "body": json.dumps(
                {
                    "file": base64.b64encode(data).decode("utf-8"),
                    "image_name": image_name,
                }
            ),
            "headers": {"Content-Type": "application/json"},
        }

    return _event


@pytest.fixture
def upload_image_event(upload_event) -> dict[str, Any]:
    return upload_event(make_image_bytes("image/png", width=2, height=2))


@pytest.fixture
def get_image_event():
    def _event(key: str, *, url: str | None = None) -> dict[str, Any]:
        event: dict[str, Any] = {
            "httpMethod": "GET",
            "path": f"/images/{key}",
            "pathParameters": {"key": key},
            "queryStringParameters": None,
        }
        if url is not None:
            event["queryStringParameters"] = {"url": url}
        return event

    return _event
