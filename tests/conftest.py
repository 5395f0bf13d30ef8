"""
Pytest configuration and fixtures for image-gateway tests.
Provides environment defaults, AWS mocking and S3 fixtures with proper cleanup.
"""

import base64
import io
import os
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws
from PIL import Image

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("IMAGE_S3_BUCKET_NAME", "image-gateway-test")
os.environ.setdefault("UPLOAD_USERNAME", "uploader")
os.environ.setdefault("UPLOAD_PASSWORD", "s3cret")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "image-gateway")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "ImageGateway")


@pytest.fixture(autouse=True)
def clear_response_cache():
    """The response cache lives for the whole process; isolate tests from each other."""
    from core.utils.cache import _shared_cache

    _shared_cache.cache_clear()
    yield
    _shared_cache.cache_clear()


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
def s3_put_object(s3_bucket) -> Callable[[str, bytes, str], dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        response = s3_put_object("2024/01/15/abc123.jpg", image_bytes, "image/jpeg")
    """

    def _put(key: str, body: bytes, content_type: str = "application/octet-stream"):
        bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")
        return s3_bucket.put_object(
            Bucket=bucket_name, Key=key, Body=body, ContentType=content_type
        )

    return _put


@pytest.fixture
def s3_get_object(s3_bucket) -> Callable[[str], dict[str, Any]]:
    """
    Helper to read an object (body bytes and content type) from S3.

    Usage:
        obj = s3_get_object("2024/01/15/abc123.jpg")
        obj["body"], obj["content_type"]
    """

    def _get(key: str) -> dict[str, Any]:
        bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")
        response: dict[str, Any] = s3_bucket.get_object(Bucket=bucket_name, Key=key)
        return {
            "body": response["Body"].read(),
            "content_type": response.get("ContentType"),
        }

    return _get


@pytest.fixture
def s3_list_keys(s3_bucket) -> Callable[[], list[str]]:
    """Helper returning every key currently in the bucket."""

    def _list() -> list[str]:
        bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")
        response = s3_bucket.list_objects_v2(Bucket=bucket_name)
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _list


def _encode_image(mode: str, size: tuple[int, int], color: Any, fmt: str) -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def sample_png_binary() -> bytes:
    """Real 40x20 RGBA PNG."""
    return _encode_image("RGBA", (40, 20), (255, 0, 0, 255), "PNG")


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Real 40x20 RGB JPEG."""
    return _encode_image("RGB", (40, 20), (0, 128, 255), "JPEG")


MULTIPART_BOUNDARY = "----image-gateway-test-boundary"


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
def basic_auth_header() -> Callable[[str, str], str]:
    """Build an Authorization header value for Basic credentials."""

    def _build(username: str, password: str) -> str:
        token = base64.b64encode(f"{username}:{password}".encode()).decode()
        return f"Basic {token}"

    return _build


@pytest.fixture
def valid_auth_header(basic_auth_header) -> str:
    return basic_auth_header(os.environ["UPLOAD_USERNAME"], os.environ["UPLOAD_PASSWORD"])


@pytest.fixture
def multipart_body() -> Callable[..., tuple[bytes, str]]:
    """
    Encode multipart/form-data.

    Usage:
        body, content_type = multipart_body(
            files={"image": ("a.png", png_bytes, "image/png")},
            fields={"width": "100"},
        )
    """

    def _build(
        *,
        files: dict[str, tuple[str, bytes, str | None]] | None = None,
        fields: dict[str, str] | None = None,
    ) -> tuple[bytes, str]:
        chunks: list[bytes] = []

        for name, value in (fields or {}).items():
            chunks.append(
                f"--{MULTIPART_BOUNDARY}\r\n"
                f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
                f"{value}\r\n".encode()
            )

        for name, (filename, data, content_type) in (files or {}).items():
            headers = (
                f"--{MULTIPART_BOUNDARY}\r\n"
                f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
            )
            if content_type:
                headers += f"Content-Type: {content_type}\r\n"
            chunks.append(headers.encode() + b"\r\n" + data + b"\r\n")

        chunks.append(f"--{MULTIPART_BOUNDARY}--\r\n".encode())

        return b"".join(chunks), f"multipart/form-data; boundary={MULTIPART_BOUNDARY}"

    return _build


@pytest.fixture
def upload_event(multipart_body, valid_auth_header) -> Callable[..., dict[str, Any]]:
    """
    Build a `PUT /upload` API Gateway event with a base64 multipart body.

    Usage:
        event = upload_event(image=png_bytes, content_type="image/png")
    """

    def _build(
        *,
        image: bytes | None = None,
        content_type: str | None = "image/png",
        fields: dict[str, str] | None = None,
        authorization: str | None = valid_auth_header,
    ) -> dict[str, Any]:
        files = {"image": ("upload.bin", image, content_type)} if image is not None else None
        body, body_type = multipart_body(files=files, fields=fields)

        headers = {"Content-Type": body_type}
        if authorization is not None:
            headers["Authorization"] = authorization

        return {
            "httpMethod": "PUT",
            "path": "/upload",
            "headers": headers,
            "body": base64.b64encode(body).decode(),
            "isBase64Encoded": True,
        }

    return _build


@pytest.fixture
def get_image_event() -> Callable[..., dict[str, Any]]:
    """
    Build a `GET /{key+}` API Gateway event.

    Usage:
        event = get_image_event("2024/01/15/abc123.png", query={"width": "10"})
    """

    def _build(
        key: str,
        *,
        query: dict[str, str] | None = None,
        accept: str | None = None,
    ) -> dict[str, Any]:
        headers = {"Host": "img.example.com"}
        if accept is not None:
            headers["Accept"] = accept

        return {
            "httpMethod": "GET",
            "path": f"/{key}",
            "pathParameters": {"key": key},
            "queryStringParameters": query,
            "headers": headers,
        }

    return _build
