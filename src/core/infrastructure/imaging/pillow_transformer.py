"""Pillow-backed implementation of ImageTransformerRepository."""

import io
from http import HTTPStatus

from aws_lambda_powertools import Logger
from PIL import Image, UnidentifiedImageError

from core.models.errors import TransformError
from core.models.image import ImageResponse
from core.repositories.transform_repository import ImageTransformerRepository
from core.utils.constants import MAX_TRANSFORM_DIMENSION

logger = Logger(UTC=True)

MIME_TO_PIL_FORMAT: dict[str, str] = {
    "image/avif": "AVIF",
    "image/webp": "WEBP",
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/gif": "GIF",
}

_QUALITY_FORMATS = frozenset({"AVIF", "WEBP", "JPEG"})
_RGB_ONLY_FORMATS = frozenset({"JPEG"})


class PillowImageTransformer(ImageTransformerRepository):
    """Resizes and re-encodes images in-process with Pillow."""

    def transform(
        self,
        *,
        data: bytes,
        output_format: str,
        width: float | None = None,
        height: float | None = None,
        quality: float | None = None,
    ) -> ImageResponse:
        image = self._open(data)

        target = MIME_TO_PIL_FORMAT.get(output_format) or image.format or "PNG"
        resized = self._resize(image, width=width, height=height)

        logger.debug(
            "Transforming image",
            extra={
                "source_format": image.format,
                "target_format": target,
                "source_size": image.size,
                "target_size": resized.size,
                "quality": quality,
            },
        )

        body = self._encode(resized, target, quality)
        content_type = Image.MIME.get(target, output_format)

        return ImageResponse(
            status=HTTPStatus.OK,
            headers={"Content-Type": content_type},
            body=body,
        )

    @staticmethod
    def _open(data: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            logger.warning("Unable to decode source image")
            raise TransformError(
                message="Source image could not be decoded",
                status=HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
            ) from exc

        return image

    @staticmethod
    def _target_size(
        size: tuple[int, int],
        *,
        width: float | None,
        height: float | None,
    ) -> tuple[int, int] | None:
        """Return the output size, or None when no resize was asked for.

        With both dimensions the image is fitted inside the box; with one
        the other follows the source aspect ratio.

        Raises:
            TransformError: If the output would exceed MAX_TRANSFORM_DIMENSION
        """
        source_width, source_height = size

        try:
            target_width = int(round(width)) if width else 0
            target_height = int(round(height)) if height else 0
        except (OverflowError, ValueError) as exc:
            raise TransformError(
                message="Requested dimensions are not usable",
                status=HTTPStatus.BAD_REQUEST,
                details={"width": width, "height": height},
            ) from exc

        if target_width and target_height:
            if source_width * target_height > source_height * target_width:
                target_height = round(source_height * target_width / source_width)
            else:
                target_width = round(source_width * target_height / source_height)
        elif target_width:
            target_height = round(source_height * target_width / source_width)
        elif target_height:
            target_width = round(source_width * target_height / source_height)
        else:
            return None

        if max(target_width, target_height) > MAX_TRANSFORM_DIMENSION:
            raise TransformError(
                message=f"Transformed image may not exceed {MAX_TRANSFORM_DIMENSION} pixels per side",
                status=HTTPStatus.BAD_REQUEST,
                details={"width": target_width, "height": target_height},
            )

        return max(1, target_width), max(1, target_height)

    @classmethod
    def _resize(
        cls,
        image: Image.Image,
        *,
        width: float | None,
        height: float | None,
    ) -> Image.Image:
        size = cls._target_size(image.size, width=width, height=height)
        if size is None:
            return image

        try:
            return image.resize(size)
        except (MemoryError, OverflowError, OSError, ValueError) as exc:
            logger.exception("Image resize failed", extra={"size": size})
            raise TransformError(
                message="Unable to resize image",
                details={"width": size[0], "height": size[1]},
            ) from exc

    @staticmethod
    def _encode(image: Image.Image, target: str, quality: float | None) -> bytes:
        options: dict[str, int] = {}
        if quality is not None and target in _QUALITY_FORMATS:
            options["quality"] = min(100, max(1, int(round(quality))))

        if target in _RGB_ONLY_FORMATS and image.mode not in ("RGB", "L", "CMYK"):
            image = image.convert("RGB")

        buffer = io.BytesIO()
        try:
            image.save(buffer, format=target, **options)
        except (KeyError, OSError, ValueError) as exc:
            logger.exception("Image encoding failed", extra={"format": target})
            raise TransformError(
                message=f"Unable to encode image as {target}",
                details={"format": target},
            ) from exc

        return buffer.getvalue()
