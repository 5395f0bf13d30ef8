"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_INVALID_MULTIPART = "INVALID_MULTIPART"
ERROR_CODE_MISSING_IMAGE_FIELD = "MISSING_IMAGE_FIELD"

# Authentication Errors
ERROR_CODE_UNAUTHORIZED = "UNAUTHORIZED"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"

# Storage Errors
ERROR_CODE_STORE = "STORE_ERROR"
ERROR_CODE_OBJECT_WRITE_FAILED = "OBJECT_WRITE_FAILED"
ERROR_CODE_OBJECT_READ_FAILED = "OBJECT_READ_FAILED"

# Transform Errors
ERROR_CODE_TRANSFORM_FAILED = "TRANSFORM_FAILED"

# Configuration
ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"


# ============================================================================
# Storage Keys
# ============================================================================

SHORT_ID_ALPHABET: Final[str] = "abcdefghijklmnopqrstuvwxyz0123456789"
SHORT_ID_LENGTH: Final[int] = 6
DATE_PARTITION_FORMAT: Final[str] = "%Y/%m/%d"
DEFAULT_EXTENSION: Final[str] = "png"

# Known MIME types, not only images; anything else is stored as png.
MIME_TYPE_EXTENSION_MAP: Final[dict[str, str]] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/avif": "avif",
    "image/svg+xml": "svg",
    "image/bmp": "bmp",
    "image/tiff": "tiff",
    "image/x-icon": "ico",
    "image/vnd.microsoft.icon": "ico",
    "image/heic": "heic",
    "application/pdf": "pdf",
    "application/json": "json",
    "application/zip": "zip",
    "application/gzip": "gz",
    "application/xml": "xml",
    "text/plain": "txt",
    "text/html": "html",
    "text/css": "css",
    "text/csv": "csv",
    "text/javascript": "js",
    "audio/mpeg": "mp3",
    "video/mp4": "mp4",
    "video/webm": "webm",
}


# ============================================================================
# Delivery
# ============================================================================

# Ordered from most to least preferred.
PREFERRED_OUTPUT_FORMATS: Final[tuple[str, ...]] = ("image/avif", "image/webp")

CACHE_MAX_AGE_SECONDS: Final[int] = 60 * 60 * 24 * 30
CACHE_CONTROL_PUBLIC: Final[str] = f"public, max-age={CACHE_MAX_AGE_SECONDS}"

# Largest edge, in pixels, a transformed image may have.
MAX_TRANSFORM_DIMENSION: Final[int] = 12000

# User metadata flag for objects uploaded without a declared content type.
UNTYPED_OBJECT_METADATA_KEY: Final[str] = "untyped"

DEFAULT_RESPONSE_CACHE_NAME = "cdn-img-fluffy"
DEFAULT_RESPONSE_CACHE_MAX_ENTRIES = 128

# Upload form field names
FORM_FIELD_IMAGE = "image"
FORM_FIELD_WIDTH = "width"
FORM_FIELD_HEIGHT = "height"

BASIC_AUTH_REALM = "Secure Area"

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,PUT,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,Accept"
EXPOSE_HEADERS = "Content-Type,Content-Length,Cache-Control"
DEFAULT_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain; charset=UTF-8"

# ============================================================================
# Metrics
# ============================================================================

METRICS_NAMESPACE = "ImageGateway"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"
ENV_UPLOAD_USERNAME = "UPLOAD_USERNAME"
ENV_UPLOAD_PASSWORD = "UPLOAD_PASSWORD"
ENV_IMAGE_TRANSFORM_ENABLED = "IMAGE_TRANSFORM_ENABLED"
ENV_RESPONSE_CACHE_NAME = "RESPONSE_CACHE_NAME"
ENV_RESPONSE_CACHE_MAX_ENTRIES = "RESPONSE_CACHE_MAX_ENTRIES"
