"""
Lambda handler responsible for serving stored images.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.config import GatewayConfig
from core.models.errors import NotFoundError, StoreError, TransformError
from core.utils.cache import ResponseCache, cached_response, response_cache_for
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.request import get_header, get_query_params
from core.utils.response import ResponseBuilder

from .service import RetrievalService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


def _response_cache() -> ResponseCache | None:
    return response_cache_for(GatewayConfig.from_env())


def _object_key(event: dict[str, Any]) -> str:
    path_params = event.get("pathParameters") or {}
    key = path_params.get("key") or event.get("path") or ""
    return key.lstrip("/")


@api_gateway_handler
@cached_response(_response_cache)
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle `GET /{key+}`.

    Without query parameters the stored bytes are returned as they are.
    With `width`, `height` or `quality` the image is transformed into the
    best format the client's Accept header allows. Query parameters that
    do not parse are ignored and the stored bytes are returned instead.

    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        API Gateway binary response, or a JSON error.
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received image request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_params": event.get("queryStringParameters"),
            "request_id": request_id,
        },
    )

    key = _object_key(event)
    if not key:
        return ResponseBuilder.not_found("Image not found", request_id=request_id)

    service = RetrievalService.from_config(GatewayConfig.from_env())

    try:
        image = service.retrieve(
            key,
            get_query_params(event),
            get_header(event, "Accept"),
        )
    except NotFoundError:
        return ResponseBuilder.not_found(f"Image not found: {key}", request_id=request_id)

    except TransformError as exc:
        logger.exception("Image transform failed", extra={"key": key})
        return ResponseBuilder.error(
            status=exc.status,
            error=exc.error_code,
            message=exc.message,
            request_id=request_id,
        )

    except StoreError as exc:
        logger.exception("Get image failed", extra={"key": key})
        return ResponseBuilder.internal_error(exc.message, request_id=request_id)

    metrics.add_metric(name="ImagesServed", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name="ServedBytes", unit=MetricUnit.Bytes, value=len(image.body))

    return ResponseBuilder.binary_response(
        image.body,
        content_type=image.content_type,
        status=image.status,
        headers=image.headers,
    )
