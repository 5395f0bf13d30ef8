"""
Lambda handler responsible for image upload.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.config import GatewayConfig
from core.models.errors import AuthenticationError, StoreError, ValidationError
from core.utils.auth import BasicAuthenticator
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.multipart import parse_form_data
from core.utils.request import get_body_bytes, get_header
from core.utils.response import ResponseBuilder

from .models import UploadForm
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle `PUT /upload`.

    Credentials are checked before the body is touched. The multipart body
    must carry the file in an `image` field and may carry `width` and
    `height` text fields, which only decorate the generated key.

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        200 text/plain response whose body is the storage key
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received image upload request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
            "function_name": getattr(context, "function_name", None),
        },
    )

    config = GatewayConfig.from_env()
    username, password = config.require_upload_credentials()

    try:
        BasicAuthenticator(username=username, password=password).authenticate(
            get_header(event, "Authorization")
        )
    except AuthenticationError as exc:
        logger.warning("Upload rejected", extra={"reason": exc.message})
        return ResponseBuilder.unauthorized(request_id=request_id)

    try:
        parts = parse_form_data(get_body_bytes(event), get_header(event, "Content-Type"))
        form = UploadForm.from_parts(parts)
    except ValidationError as exc:
        logger.warning(
            "Upload request validation failed",
            extra={"error_code": exc.error_code, "reason": exc.message},
        )
        return ResponseBuilder.bad_request(
            exc.message,
            error=exc.error_code,
            details=exc.details,
            request_id=request_id,
        )

    service = UploadService.from_config(config)

    try:
        key = service.upload_image(form)
    except StoreError as exc:
        logger.exception("Infrastructure error during image upload")
        return ResponseBuilder.internal_error(exc.message, request_id=request_id)

    metrics.add_metric(name="ImagesUploaded", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name="UploadedBytes", unit=MetricUnit.Bytes, value=len(form.image))

    return ResponseBuilder.text(key)
