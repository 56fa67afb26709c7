"""ImageProcessor that returns the original bytes untouched."""

from aws_lambda_powertools import Logger

from core.models.image import ImageRequest
from core.repositories.processor_repository import ImageProcessor

logger = Logger(UTC=True)


class PassthroughImageProcessor(ImageProcessor):
    """Serve the original image; edits and format changes are left to a real engine."""

    def process(self, request: ImageRequest) -> tuple[bytes, str]:
        if request.edits or request.output_format:
            logger.debug(
                "Passing image through without applying edits",
                extra={
                    "key": request.key,
                    "edits": sorted(request.edits),
                    "output_format": request.output_format,
                },
            )
        return request.original_image, request.source_content_type
