"""Shared image models."""

from http import HTTPStatus

from pydantic import BaseModel, ConfigDict, Field, StrictBytes, StrictStr


class StoredObject(BaseModel):
    """An uploaded image as held by the object store."""

    model_config = ConfigDict(frozen=True)

    key: StrictStr = Field(..., description="Date-partitioned storage key")
    content_type: StrictStr = Field(
        "", description="MIME type recorded at upload time (empty if unknown)"
    )
    body: StrictBytes = Field(..., description="Raw image bytes")

    @property
    def size(self) -> int:
        return len(self.body)


class ImageResponse(BaseModel):
    """Status, headers and body of an image delivered to a client."""

    status: HTTPStatus = Field(HTTPStatus.OK, description="HTTP status code")
    headers: dict[str, str] = Field(default_factory=dict, description="Response headers")
    body: StrictBytes = Field(b"", description="Response payload")

    @property
    def content_type(self) -> str:
        return self.headers.get("Content-Type", "")
