from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from core.utils.validators import ParseResult, validate_request


class TransformRequest(BaseModel):
    """Transform parameters taken from the query string of a GET.

    Unknown query parameters are ignored, so a query made only of unknown
    keys still parses (to an empty request).

    Values must be numbers. An empty value such as `?width=` is not read
    as 0: it fails to parse, so the request is served from the stored
    bytes without negotiation or transform.
    """

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False, frozen=True)

    width: float | None = Field(None, ge=0, description="Target width in pixels")
    height: float | None = Field(None, ge=0, description="Target height in pixels")
    quality: float | None = Field(None, description="Encoder quality")


def parse_transform_request(query: Mapping[str, str]) -> ParseResult[TransformRequest]:
    """Parse query parameters into a TransformRequest without raising."""
    return validate_request(TransformRequest, query)
