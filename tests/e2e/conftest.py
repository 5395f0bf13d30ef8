"""
E2E fixtures for a deployed gateway.

Set IMAGE_GATEWAY_ENDPOINT (for example a LocalStack stage URL) together
with UPLOAD_USERNAME and UPLOAD_PASSWORD to run these tests.
"""

import io
import logging
import os

import pytest
from PIL import Image

from e2e_api_client import E2EAPIClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

ENDPOINT_ENV = "IMAGE_GATEWAY_ENDPOINT"


@pytest.fixture(scope="session")
def endpoint():
    """Base URL of the gateway under test"""
    value = os.getenv(ENDPOINT_ENV)
    if not value:
        pytest.skip(f"{ENDPOINT_ENV} is not set")

    logger.info("Running E2E tests against %s", value)
    return value


@pytest.fixture(scope="session")
def upload_auth():
    return (os.environ["UPLOAD_USERNAME"], os.environ["UPLOAD_PASSWORD"])


@pytest.fixture
def api_client(endpoint, upload_auth):
    """HTTP client wrapper for E2E API testing"""
    return E2EAPIClient(endpoint, auth=upload_auth)


@pytest.fixture(scope="session")
def sample_png():
    buffer = io.BytesIO()
    Image.new("RGB", (64, 32), (10, 200, 30)).save(buffer, format="PNG")
    return buffer.getvalue()
