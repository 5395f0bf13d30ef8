"""Pydantic models for the image upload request."""

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, StrictBytes, field_validator

from core.models.errors import ValidationError
from core.utils.constants import (
    ERROR_CODE_MISSING_IMAGE_FIELD,
    FORM_FIELD_HEIGHT,
    FORM_FIELD_IMAGE,
    FORM_FIELD_WIDTH,
)
from core.utils.multipart import FormPart


class UploadForm(BaseModel):
    """Decoded multipart upload."""

    model_config = ConfigDict(str_strip_whitespace=True)

    image: StrictBytes = Field(..., description="Raw image bytes from the `image` field")
    content_type: str = Field("", description="Declared MIME type of the image part")
    filename: str | None = Field(None, description="Client-side file name, if sent")
    width: str | None = Field(None, description="Optional width supplied by the uploader")
    height: str | None = Field(None, description="Optional height supplied by the uploader")

    @field_validator("width", "height")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        return value or None

    @classmethod
    def from_parts(cls, parts: Mapping[str, FormPart]) -> "UploadForm":
        """Build the form from decoded multipart parts.

        Raises:
            ValidationError: If the `image` field is missing
        """
        image = parts.get(FORM_FIELD_IMAGE)
        if image is None:
            raise ValidationError(
                message="Missing required form field 'image'",
                error_code=ERROR_CODE_MISSING_IMAGE_FIELD,
                details={"field": FORM_FIELD_IMAGE},
            )

        return cls(
            image=image.data,
            content_type=image.content_type or "",
            filename=image.filename,
            width=_text(parts.get(FORM_FIELD_WIDTH)),
            height=_text(parts.get(FORM_FIELD_HEIGHT)),
        )


def _text(part: FormPart | None) -> str | None:
    if part is None:
        return None

    return part.data.decode("utf-8", errors="replace")
