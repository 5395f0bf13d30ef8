"""
Business logic for image retrieval.

A GET resolves to one of two outcomes:
 - the stored bytes, unchanged (no query, no transformer bound, or a query
   that does not parse as transform parameters)
 - a variant produced by the transformer in the best format the client
   accepts

Both carry the same long-lived public Cache-Control header.
"""

from collections.abc import Mapping

from aws_lambda_powertools import Logger

from core.config import GatewayConfig
from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.infrastructure.imaging.pillow_transformer import PillowImageTransformer
from core.models.errors import NotFoundError
from core.models.image import ImageResponse, StoredObject
from core.repositories.storage_repository import ObjectStoreRepository
from core.repositories.transform_repository import ImageTransformerRepository
from core.utils.constants import CACHE_CONTROL_PUBLIC
from core.utils.negotiation import pick_format

from .models import TransformRequest, parse_transform_request

logger = Logger(UTC=True)


class RetrievalService:
    """Application service responsible for serving stored images."""

    def __init__(
        self,
        *,
        storage: ObjectStoreRepository,
        transformer: ImageTransformerRepository | None = None,
    ) -> None:
        self.storage = storage
        self.transformer = transformer

    @classmethod
    def from_config(cls, config: GatewayConfig) -> "RetrievalService":
        """Wire the service to S3 and, when enabled, the Pillow transformer."""
        transformer = PillowImageTransformer() if config.transform_enabled else None
        return cls(
            storage=S3ImageStorage(S3Adapter(config)),
            transformer=transformer,
        )

    def retrieve(
        self,
        key: str,
        query_params: Mapping[str, str] | None = None,
        accept_header: str | None = None,
    ) -> ImageResponse:
        """Resolve a GET for a key into the response to send.

        Args:
            key: Exact storage key
            query_params: Query string parameters of the request
            accept_header: Client Accept header

        Returns:
            The raw or transformed image response

        Raises:
            NotFoundError: If nothing is stored under the key
            ObjectReadFailedError: If the store read fails
            TransformError: If the transformer fails
        """
        stored = self.storage.get_object(key=key)
        if stored is None:
            logger.info("Image not found", extra={"key": key})
            raise NotFoundError(message="Image not found", details={"key": key})

        logger.info(
            "Image found",
            extra={"key": key, "size": stored.size, "content_type": stored.content_type},
        )

        if query_params and self.transformer is not None:
            parsed = parse_transform_request(query_params)

            if parsed.success and parsed.value is not None:
                return self._transform(self.transformer, stored, parsed.value, accept_header)

            logger.info(
                "Ignoring unparseable transform parameters",
                extra={"key": key, "errors": parsed.errors},
            )

        return self._passthrough(stored)

    @staticmethod
    def _transform(
        transformer: ImageTransformerRepository,
        stored: StoredObject,
        request: TransformRequest,
        accept_header: str | None,
    ) -> ImageResponse:
        output_format = pick_format(accept_header, stored.content_type)

        logger.debug(
            "Transforming image",
            extra={
                "key": stored.key,
                "output_format": output_format,
                "width": request.width,
                "height": request.height,
                "quality": request.quality,
            },
        )

        result = transformer.transform(
            data=stored.body,
            output_format=output_format,
            width=request.width,
            height=request.height,
            quality=request.quality,
        )

        headers = dict(result.headers)
        headers["Cache-Control"] = CACHE_CONTROL_PUBLIC

        return result.model_copy(update={"headers": headers})

    @staticmethod
    def _passthrough(stored: StoredObject) -> ImageResponse:
        return ImageResponse(
            headers={
                "Content-Type": stored.content_type,
                "Cache-Control": CACHE_CONTROL_PUBLIC,
            },
            body=stored.body,
        )
