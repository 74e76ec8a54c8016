"""
Lambda handler responsible for picture upload.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import InvalidFileError, ValidationError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import ImageUploadRequest, ImageUploadResponse
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle picture upload requests.

    Expected API Gateway event structure:
    {
        "body": "{\"file\": \"<base64>\", \"image_name\": \"cat.png\"}"
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        201 response with the stored picture record, or a classified error
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received picture upload request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
        },
    )

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        raise ValidationError(message="Invalid JSON body") from exc

    if not isinstance(body, dict):
        raise ValidationError(message="Request body must be a JSON object")

    request = validate_request(ImageUploadRequest, body)

    service = UploadService()

    try:
        picture, url = service.upload_picture(
            image_name=request.image_name,
            file_data=UploadService.decode_file(request.file),
        )
    except InvalidFileError as exc:
        metrics.add_metric(name="PictureRejected", unit=MetricUnit.Count, value=1)
        logger.warning(
            "Picture upload rejected",
            extra={"image_name": request.image_name, "error_code": exc.error_code},
        )
        raise

    metrics.add_metric(name="PictureSaved", unit=MetricUnit.Count, value=1)

    response = ImageUploadResponse(
        **picture.model_dump(),
        url=url,
        message="Image uploaded successfully",
    )

    return ResponseBuilder.created(response.model_dump(), request_id=request_id)
