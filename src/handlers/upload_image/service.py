"""Business logic for image upload operations.

This module names the uploaded object and writes it to the object store.
"""

from aws_lambda_powertools import Logger

from core.config import GatewayConfig
from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.repositories.storage_repository import ObjectStoreRepository
from core.utils.keys import KeyGenerator

from .models import UploadForm

logger = Logger(UTC=True)


class UploadService:
    """Application service responsible for image uploads.

    This service orchestrates:
    - Deriving a date-partitioned key for the upload
    - Writing bytes and content type to storage
    """

    def __init__(
        self,
        *,
        storage: ObjectStoreRepository,
        key_generator: KeyGenerator | None = None,
    ) -> None:
        self.storage = storage
        self.key_generator = key_generator or KeyGenerator()

    @classmethod
    def from_config(cls, config: GatewayConfig) -> "UploadService":
        """Wire the service to S3 using gateway configuration."""
        return cls(storage=S3ImageStorage(S3Adapter(config)))

    def upload_image(self, form: UploadForm) -> str:
        """Store an uploaded image and return its key.

        Args:
            form: Decoded upload form

        Returns:
            The generated storage key

        Raises:
            ObjectWriteFailedError: If the store write fails
        """
        key = self.key_generator.new_key(
            form.content_type,
            width=form.width,
            height=form.height,
        )

        logger.debug(
            "Storing uploaded image",
            extra={
                "key": key,
                "content_type": form.content_type,
                "size": len(form.image),
                "filename": form.filename,
            },
        )

        self.storage.put_object(
            key=key,
            body=form.image,
            content_type=form.content_type,
        )

        logger.info("Image uploaded successfully", extra={"key": key})
        return key
