"""
Lambda handler responsible for serving transformed images.
"""

import asyncio
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.infrastructure.local.passthrough_processor import PassthroughImageProcessor
from core.models.config import ImageHandlerConfig
from core.models.errors import ImageHandlerError
from core.repositories.processor_repository import ImageProcessor
from core.utils.constants import CORS_ORIGIN
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import ImageHandlerEvent
from .service import ImageRequestService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace="ImageHandler")

processor: ImageProcessor = PassthroughImageProcessor()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle an image request.

    This function:
     - Validates the proxy event
     - Builds the image request (bucket, key, edits, output format)
     - Returns the processed image as a base64 binary response,
       or the error object with its HTTP status
    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        API Gateway-compatible response dictionary.
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

    try:
        request_event = validate_request(ImageHandlerEvent, event)
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors(include_url=False)},
        )
        return ResponseBuilder.validation_error(
            message="Invalid image request",
            details={"errors": sanitize_validation_errors(exc.errors())},
            request_id=request_id,
        )

    service = ImageRequestService(
        config=ImageHandlerConfig.from_env(),
        storage=S3ImageStorage(),
    )

    try:
        image_request = asyncio.run(service.setup(request_event))
    except ImageHandlerError as exc:
        log = logger.exception if exc.status >= 500 else logger.warning
        log(
            "Image request failed",
            extra={
                "path": request_event.path,
                "error_code": exc.error_code,
                "status": exc.status.value,
                "details": exc.details,
            },
        )
        metrics.add_metric(name="ImageRequestFailed", unit=MetricUnit.Count, value=1)
        return ResponseBuilder.from_error(exc, request_id=request_id)

    content, content_type = processor.process(image_request)
    metrics.add_metric(name="ImageRequestSucceeded", unit=MetricUnit.Count, value=1)

    headers = image_request.response_headers()
    headers["Content-Type"] = content_type

    return ResponseBuilder.binary_response(
        content,
        content_type=content_type,
        headers=headers,
        cors_origin=CORS_ORIGIN,
    )
