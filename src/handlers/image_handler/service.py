"""
Business logic for interpreting image requests.

This module turns an API Gateway proxy event into a validated ImageRequest:
it classifies the request, resolves and whitelists the source bucket,
extracts the object key, decodes the base64 edits, fetches the original
image and settles the output format.
"""

import asyncio
import base64
import binascii
import json
import re
from typing import Any

from aws_lambda_powertools import Logger

from core.models.config import ImageHandlerConfig
from core.models.errors import (
    AccessDeniedError,
    BucketNotFoundError,
    EditsParseError,
    ImageNotFoundError,
)
from core.models.image import ImageRequest, OriginalImage, RequestType
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    ACCEPT_HEADER,
    EDITS_QUERY_PARAMETER,
    QUALITY_FORMATS,
    WEBP_FORMAT,
    WEBP_MIME_TYPE,
)

from .models import ImageHandlerEvent

Edits = dict[str, Any]

logger = Logger(UTC=True)

DECODE_ERROR_MESSAGE = (
    "The image request you provided could not be decoded. Please check that "
    "your request is base64 encoded properly and refer to the documentation "
    "for additional guidance."
)


def decode_edits(encoded: str) -> Edits:
    """Decode a base64 JSON edits payload.

    Accepts the standard and URL-safe alphabets, with or without padding.
    A space is read as ``+`` since query decoding turns one into the other.
    The bytes are decoded as UTF-8 so non-ASCII text survives.

    Raises:
        EditsParseError: If the payload is not base64 encoded JSON object
    """
    normalized = encoded.strip().replace(" ", "+").replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)

    try:
        raw = base64.b64decode(normalized, validate=True)
        decoded = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise EditsParseError(
            message=DECODE_ERROR_MESSAGE,
            details={"reason": str(exc)},
        ) from exc

    if decoded is None:
        return {}

    if not isinstance(decoded, dict):
        raise EditsParseError(
            message=DECODE_ERROR_MESSAGE,
            details={"reason": f"expected an object, got {type(decoded).__name__}"},
        )

    return decoded


def final_output_format(edits: Edits, negotiated: Any) -> str | None:
    """Apply the ``toFormat`` override on top of the negotiated format.

    Raises:
        EditsParseError: If the winning format is not a string
    """
    output_format = edits.get("toFormat") or negotiated
    if not output_format:
        return None

    if not isinstance(output_format, str):
        raise EditsParseError(
            message="The output format you provided must be a string.",
            details={"output_format": repr(output_format)},
        )

    return output_format


def normalize_quality_edits(
    edits: Edits,
    output_format: str,
    request_type: RequestType,
) -> Edits:
    """Move a codec quality setting onto the key of the output format.

    Only Thumbor and Custom requests carry quality under a codec key.
    The first codec key found is renamed, at most one.
    Returns a new mapping; ``edits`` is left untouched.
    """
    if request_type not in (RequestType.CUSTOM, RequestType.THUMBOR):
        return edits

    if output_format not in QUALITY_FORMATS:
        return edits

    quality_key = next((key for key in edits if key in QUALITY_FORMATS), None)
    if quality_key is None or quality_key == output_format:
        return edits

    normalized = {key: value for key, value in edits.items() if key != quality_key}
    normalized[output_format] = edits[quality_key]

    logger.debug(
        "Quality key remapped",
        extra={"from": quality_key, "to": output_format},
    )

    return normalized


class ImageRequestService:
    """Application service that builds an ImageRequest from a proxy event.

    Each stage is a separate method so it can be exercised on its own;
    ``setup`` chains them and stops at the first failure.
    """

    def __init__(
        self,
        *,
        config: ImageHandlerConfig,
        storage: ImageStorageRepository,
    ) -> None:
        self._config = config
        self._storage = storage

    async def setup(self, event: ImageHandlerEvent) -> ImageRequest:
        """Run the full pipeline for one request.

        Raises:
            ImageHandlerError: The error of the first failing stage
        """
        request_type = self.classify(event)
        bucket = self.resolve_bucket(event, request_type)
        key = self.resolve_key(event, request_type)
        edits = self.resolve_edits(event, request_type)

        original = await self._fetch_original_image(bucket, key)

        # toFormat edit > Accept: image/webp (AUTO_WEBP) > outputFormat edit
        output_format = final_output_format(
            edits,
            self.resolve_output_format(event, edits, request_type),
        )

        content_type = original.content_type
        if output_format:
            content_type = f"image/{output_format}"
            edits = normalize_quality_edits(edits, output_format, request_type)

        logger.info(
            "Image request resolved",
            extra={
                "request_type": request_type.value,
                "bucket": bucket,
                "key": key,
                "output_format": output_format,
            },
        )

        return ImageRequest(
            request_type=request_type,
            bucket=bucket,
            key=key,
            edits=edits,
            original_image=original.body,
            source_content_type=original.content_type,
            content_type=content_type,
            cache_control=original.cache_control,
            last_modified=original.last_modified,
            expires=original.expires,
            output_format=output_format,
        )

    def classify(self, event: ImageHandlerEvent) -> RequestType:
        """Determine how the request path encodes the image request.

        Only the default scheme exists; Thumbor and Custom paths are
        reserved and would raise UnrecognizedRequestTypeError when unmatched.
        """
        return RequestType.DEFAULT

    def resolve_bucket(self, event: ImageHandlerEvent, request_type: RequestType) -> str:
        """Return the whitelisted source bucket named by the path.

        Raises:
            BucketNotFoundError: For request types without a bucket segment
            ConfigurationError: If SOURCE_BUCKETS is not configured
            AccessDeniedError: If the bucket is not whitelisted
        """
        if request_type is not RequestType.DEFAULT:
            raise BucketNotFoundError(
                message=(
                    "The bucket you specified could not be found. Please check "
                    "the spelling of the bucket name in your request."
                ),
                details={"request_type": request_type.value},
            )

        bucket = self._clean_path(event.path).split("/")[0]
        source_buckets = self._config.allowed_source_buckets()

        if not bucket:
            return source_buckets[0]

        if bucket in source_buckets or self._matches_pattern(source_buckets[0], bucket):
            return bucket

        raise AccessDeniedError(
            message=(
                "The bucket you specified could not be accessed. Please check "
                "that the bucket is specified in your SOURCE_BUCKETS."
            ),
            details={"bucket": bucket},
        )

    def resolve_key(self, event: ImageHandlerEvent, request_type: RequestType) -> str:
        """Return the object key: every path segment after the bucket.

        Raises:
            ImageNotFoundError: If the path names no object
        """
        key = ""
        if request_type is RequestType.DEFAULT:
            key = "/".join(self._clean_path(event.path).split("/")[1:])

        if not key:
            raise ImageNotFoundError(
                message=(
                    "The image you specified could not be found. Please check "
                    "your request syntax as well as the bucket you specified "
                    "to ensure it exists."
                ),
                details={"path": event.path},
            )

        return key

    def resolve_edits(self, event: ImageHandlerEvent, request_type: RequestType) -> Edits:
        """Decode the ``edits`` query parameter; absent means no edits.

        Raises:
            EditsParseError: If the payload is malformed or the request
                type does not carry edits in the query string
        """
        if request_type is not RequestType.DEFAULT:
            raise EditsParseError(
                message=(
                    "The edits you provided could not be parsed. Please check "
                    "the syntax of your request and refer to the documentation "
                    "for additional guidance."
                ),
                error_code="ImageEdits::CannotParseEdits",
                details={"request_type": request_type.value},
            )

        encoded = (event.query_string_parameters or {}).get(EDITS_QUERY_PARAMETER)
        if encoded is None:
            return {}

        return decode_edits(encoded)

    def resolve_output_format(
        self,
        event: ImageHandlerEvent,
        edits: Edits,
        request_type: RequestType,
    ) -> Any:
        """Negotiate the output format from the Accept header and edits.

        ``toFormat`` is not considered here, see ``final_output_format``.
        """
        accept = (event.headers or {}).get(ACCEPT_HEADER)

        if self._config.auto_webp and accept and WEBP_MIME_TYPE in accept:
            return WEBP_FORMAT

        if request_type is RequestType.DEFAULT:
            return edits.get("outputFormat")

        return None

    async def _fetch_original_image(self, bucket: str, key: str) -> OriginalImage:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            lambda: self._storage.get_original_image(bucket=bucket, key=key),
        )

    def _clean_path(self, path: str) -> str:
        """Strip the prefix, fragment, query and leading slashes from a path."""
        prefix = self._config.path_prefix
        if prefix and path.startswith(prefix):
            path = path[len(prefix):]

        path = path.split("#")[0].split("?")[0]
        return path.lstrip("/")

    @staticmethod
    def _matches_pattern(pattern: str, bucket: str) -> bool:
        # The first whitelist entry doubles as an anchored pattern
        try:
            return re.fullmatch(pattern, bucket) is not None
        except re.error:
            logger.warning(
                "First source bucket is not a valid pattern",
                extra={"pattern": pattern},
            )
            return False
