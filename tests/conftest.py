"""
Pytest configuration and fixtures for image handler tests.
Provides AWS mocking, S3 fixtures and edits encoding helpers.
"""

import base64
import json
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
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "image-handler-test")

SOURCE_BUCKET = "source-bucket"
SECONDARY_BUCKET = "secondary-bucket"


@pytest.fixture(scope="function")
def aws_mock(monkeypatch):
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create the source buckets for testing.

    moto discards the buckets when the mock context exits.
    """
    for bucket_name in (SOURCE_BUCKET, SECONDARY_BUCKET):
        try:
            s3_client.create_bucket(Bucket=bucket_name)
        except ClientError as e:
            if e.response["Error"]["Code"] != "BucketAlreadyOwnedByYou":
                raise

    yield s3_client


@pytest.fixture
def s3_put_object(s3_bucket) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to a source bucket.

    Usage:
        s3_put_object("photos/cat.png", image_bytes, ContentType="image/png")
    """

    def _put(
        key: str,
        body: bytes,
        *,
        bucket: str = SOURCE_BUCKET,
        **extra: Any,
    ) -> dict[str, Any]:
        response: dict[str, Any] = s3_bucket.put_object(
            Bucket=bucket,
            Key=key,
            Body=body,
            **extra,
        )
        return response

    return _put


@pytest.fixture
def encode_edits() -> Callable[[Any], str]:
    """
    Helper to build the base64 `edits` query parameter.

    Usage:
        encode_edits({"resize": {"width": 100}})
    """

    def _encode(edits: Any) -> str:
        raw = json.dumps(edits, ensure_ascii=False).encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    return _encode


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)
