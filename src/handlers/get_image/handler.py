"""
Lambda handler responsible for picture retrieval.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import GetImageRequest, ImageLocatorResponse
from .service import GetService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle picture read requests.

    - Default: return the stored bytes (base64-encoded for API Gateway)
    - url=true: return the client-resolvable locator instead

    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        API Gateway-compatible response dictionary.
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received picture read request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_params": event.get("queryStringParameters"),
            "request_id": request_id,
        },
    )

    path_params = event.get("pathParameters") or {}
    query_params = event.get("queryStringParameters") or {}

    request = validate_request(
        GetImageRequest,
        {
            "key": path_params.get("key"),
            "url": str(query_params.get("url", "false")).lower() == "true",
        },
    )

    service = GetService()

    if request.url:
        locator = ImageLocatorResponse(
            key=request.key,
            url=service.locate_picture(request.key),
        )
        return ResponseBuilder.ok(locator.model_dump(), request_id=request_id)

    content, content_type = service.fetch_picture(request.key)
    metrics.add_metric(name="PictureFetched", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.binary_response(content, content_type=content_type)
