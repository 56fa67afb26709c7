"""S3-backed implementation of ImageStorageRepository."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import NotFoundError, StorageError
from core.models.image import OriginalImage
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    DEFAULT_CACHE_CONTROL,
    DEFAULT_IMAGE_CONTENT_TYPE,
    ERROR_CODE_NO_SUCH_KEY,
    ERROR_CODE_STORAGE,
)
from core.utils.time import to_http_date

logger = Logger(UTC=True)


class S3ImageStorage(ImageStorageRepository):
    """Image storage implementation backed by Amazon S3."""

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3 = adapter or S3Adapter()

    def get_original_image(self, *, bucket: str, key: str) -> OriginalImage:
        """Fetch the original image and normalize its response metadata."""
        logger.debug("Fetching original image", extra={"bucket": bucket, "key": key})

        try:
            response = self._s3.get_object(bucket=bucket, key=key)
            body = response["Body"].read()

        except ClientError as exc:
            error = exc.response.get("Error", {})
            code = error.get("Code") or ERROR_CODE_STORAGE
            message = error.get("Message") or str(exc)

            if code == ERROR_CODE_NO_SUCH_KEY:
                logger.warning(
                    "Original image not found",
                    extra={"bucket": bucket, "key": key},
                )
                raise NotFoundError(
                    message=message,
                    error_code=code,
                    details={"bucket": bucket, "key": key},
                ) from exc

            logger.error(
                "S3 fetch failed",
                extra={"bucket": bucket, "key": key, "error_code": code},
            )
            raise StorageError(
                message=message,
                error_code=code,
                details={"bucket": bucket, "key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error fetching original image")
            raise StorageError(
                message=str(exc) or "Unable to fetch image at this time",
                details={"bucket": bucket, "key": key},
            ) from exc

        logger.info(
            "Original image fetched",
            extra={"bucket": bucket, "key": key, "size": len(body)},
        )

        return OriginalImage(
            body=body,
            content_type=response.get("ContentType") or DEFAULT_IMAGE_CONTENT_TYPE,
            cache_control=response.get("CacheControl") or DEFAULT_CACHE_CONTROL,
            last_modified=self._http_date(response, "LastModified"),
            expires=self._http_date(response, "Expires"),
        )

    @staticmethod
    def _http_date(response: Mapping[str, Any], field: str) -> str | None:
        """Render a date field of the S3 response as an HTTP date.

        Unparseable values are dropped so a bad header never fails the image.
        """
        value: datetime | str | None = response.get(field)
        if not value:
            return None

        try:
            return to_http_date(value)
        except ValueError:
            logger.warning(
                "Ignoring unparseable object date",
                extra={"field": field, "value": str(value)},
            )
            return None
