from types import SimpleNamespace
from typing import Any

import pytest


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


@pytest.fixture
def handler_env(monkeypatch):
    monkeypatch.setenv("SOURCE_BUCKETS", "source-bucket, secondary-bucket")
    monkeypatch.setenv("PATH_PREFIX", "")
    monkeypatch.setenv("AUTO_WEBP", "No")


@pytest.fixture
def image_event() -> dict[str, Any]:
    return {
        "httpMethod": "GET",
        "path": "/source-bucket/photos/cat.png",
        "queryStringParameters": None,
        "headers": {"Accept": "image/png,image/*"},
    }
