"""Runtime configuration.

The configuration is read from the environment once per cold start and
handed to services explicitly; nothing below the handlers reads
``os.environ`` on its own.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.models.errors import ConfigurationError
from core.utils.constants import (
    DEFAULT_RESPONSE_CACHE_MAX_ENTRIES,
    DEFAULT_RESPONSE_CACHE_NAME,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_IMAGE_S3_BUCKET_NAME,
    ENV_IMAGE_TRANSFORM_ENABLED,
    ENV_RESPONSE_CACHE_MAX_ENTRIES,
    ENV_RESPONSE_CACHE_NAME,
    ENV_UPLOAD_PASSWORD,
    ENV_UPLOAD_USERNAME,
)

_FIELD_TO_ENV: dict[str, str] = {
    "bucket_name": ENV_IMAGE_S3_BUCKET_NAME,
    "endpoint_url": ENV_AWS_ENDPOINT_URL,
    "region_name": ENV_AWS_REGION,
    "upload_username": ENV_UPLOAD_USERNAME,
    "upload_password": ENV_UPLOAD_PASSWORD,
    "transform_enabled": ENV_IMAGE_TRANSFORM_ENABLED,
    "response_cache_name": ENV_RESPONSE_CACHE_NAME,
    "response_cache_max_entries": ENV_RESPONSE_CACHE_MAX_ENTRIES,
}


class GatewayConfig(BaseModel):
    """Settings the gateway needs at construction time."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    bucket_name: str = Field(..., min_length=1, description="S3 bucket holding images")
    endpoint_url: str | None = Field(None, description="boto3 endpoint override")
    region_name: str | None = Field(None, description="AWS region for boto3 clients")

    upload_username: str | None = Field(None, description="Basic auth user for uploads")
    upload_password: str | None = Field(None, description="Basic auth password for uploads")

    transform_enabled: bool = Field(True, description="Bind the image transformer")

    response_cache_name: str = Field(DEFAULT_RESPONSE_CACHE_NAME)
    response_cache_max_entries: int = Field(DEFAULT_RESPONSE_CACHE_MAX_ENTRIES, ge=0)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GatewayConfig":
        """Build configuration from environment variables.

        Unset and empty variables fall back to the field defaults.

        Raises:
            ConfigurationError: If a required variable is missing or a
                value cannot be parsed
        """
        env = os.environ if environ is None else environ

        values = {
            field: env[name]
            for field, name in _FIELD_TO_ENV.items()
            if env.get(name, "").strip()
        }

        try:
            return cls(**values)
        except ValidationError as exc:
            fields = sorted(
                {
                    _FIELD_TO_ENV.get(str(err["loc"][0]), str(err["loc"][0]))
                    for err in exc.errors()
                    if err.get("loc")
                }
            )
            raise ConfigurationError(
                message="Invalid gateway configuration",
                details={"variables": fields},
            ) from exc

    def require_upload_credentials(self) -> tuple[str, str]:
        """Return the upload credential pair or fail if it is not configured."""
        if not self.upload_username or not self.upload_password:
            raise ConfigurationError(
                message="Upload credentials are not configured",
                details={"variables": [ENV_UPLOAD_USERNAME, ENV_UPLOAD_PASSWORD]},
            )

        return self.upload_username, self.upload_password
