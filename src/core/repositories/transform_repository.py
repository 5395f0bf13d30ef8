"""Abstract contract for on-the-fly image transformation."""

from abc import ABC, abstractmethod

from core.models.image import ImageResponse


class ImageTransformerRepository(ABC):
    """Contract for converting an image's format, size and quality."""

    @abstractmethod
    def transform(
        self,
        *,
        data: bytes,
        output_format: str,
        width: float | None = None,
        height: float | None = None,
        quality: float | None = None,
    ) -> ImageResponse:
        """Produce a transformed variant of an image.

        Args:
            data: Source image bytes
            output_format: Target MIME type
            width: Target width in pixels
            height: Target height in pixels
            quality: Encoder quality

        Returns:
            The encoded variant with its status and Content-Type

        Raises:
            TransformError: If the image cannot be decoded or encoded
        """
