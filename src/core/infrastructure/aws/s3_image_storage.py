"""S3-backed implementation of ObjectStoreRepository."""

from collections.abc import Mapping
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from core.infrastructure.adapters.s3_adapter import S3AdapterProtocol
from core.models.errors import ObjectReadFailedError, ObjectWriteFailedError
from core.models.image import StoredObject
from core.repositories.storage_repository import ObjectStoreRepository
from core.utils.constants import UNTYPED_OBJECT_METADATA_KEY

logger = Logger(UTC=True)

_MISSING_KEY_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


def _content_type(response: Mapping[str, Any]) -> str:
    """Declared content type of a fetched object; empty if none was declared."""
    metadata = response.get("Metadata") or {}
    if metadata.get(UNTYPED_OBJECT_METADATA_KEY) == "true":
        return ""

    return response.get("ContentType") or ""


class S3ImageStorage(ObjectStoreRepository):
    """Image storage implementation backed by Amazon S3."""

    def __init__(self, adapter: S3AdapterProtocol) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3 = adapter

    def put_object(self, *, key: str, body: bytes, content_type: str) -> None:
        """Upload image bytes to S3 under the given key."""
        logger.debug(
            "Uploading object",
            extra={"key": key, "size": len(body), "content_type": content_type},
        )

        try:
            self._s3.put_object(key=key, body=body, content_type=content_type)
        except (ClientError, BotoCoreError) as exc:
            logger.error("S3 upload failed", extra={"key": key})
            raise ObjectWriteFailedError(
                message="Unable to store image at this time",
                details={"key": key},
            ) from exc

        logger.info("Object stored", extra={"key": key})

    def get_object(self, *, key: str) -> StoredObject | None:
        """Download an object from S3, or None when the key is unknown."""
        logger.debug("Fetching object", extra={"key": key})

        try:
            response = self._s3.get_object(key=key)
            body = response["Body"].read()
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _MISSING_KEY_CODES:
                logger.info("Object not found", extra={"key": key})
                return None

            logger.error("S3 download failed", extra={"key": key})
            raise ObjectReadFailedError(
                message="Unable to read image at this time",
                details={"key": key},
            ) from exc
        except BotoCoreError as exc:
            logger.error("S3 download failed", extra={"key": key})
            raise ObjectReadFailedError(
                message="Unable to read image at this time",
                details={"key": key},
            ) from exc

        return StoredObject(
            key=key,
            content_type=_content_type(response),
            body=body,
        )
