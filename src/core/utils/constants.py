"""Global constants used throughout the application.

This module centralizes error codes, defaults, environment variable names and
API Gateway settings used across modules.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Configuration Errors
ERROR_CODE_NO_SOURCE_BUCKETS = "GetAllowedSourceBuckets::NoSourceBuckets"

# Request Errors
ERROR_CODE_UNRECOGNIZED_REQUEST_TYPE = "RequestType::Unrecognized"
ERROR_CODE_CANNOT_ACCESS_BUCKET = "ImageBucket::CannotAccessBucket"
ERROR_CODE_CANNOT_FIND_BUCKET = "ImageBucket::CannotFindBucket"
ERROR_CODE_CANNOT_FIND_IMAGE = "ImageEdits::CannotFindImage"
ERROR_CODE_CANNOT_DECODE_REQUEST = "DecodeRequest::CannotDecodeRequest"

# Storage Errors
ERROR_CODE_NO_SUCH_KEY = "NoSuchKey"
ERROR_CODE_STORAGE = "StorageError"

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"


# ============================================================================
# Image Request Defaults
# ============================================================================

EDITS_QUERY_PARAMETER: Final[str] = "edits"
ACCEPT_HEADER: Final[str] = "Accept"
WEBP_MIME_TYPE: Final[str] = "image/webp"
WEBP_FORMAT: Final[str] = "webp"

DEFAULT_IMAGE_CONTENT_TYPE: Final[str] = "image"
DEFAULT_CACHE_CONTROL: Final[str] = "max-age=31536000,public"

# Codec names that double as quality keys in edits
QUALITY_FORMATS: Final[tuple[str, ...]] = ("jpeg", "png", "webp", "tiff", "heif")

TRUTHY_FLAG_VALUES: Final[frozenset[str]] = frozenset({"yes", "true", "1", "on"})

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length,Cache-Control,Last-Modified,Expires"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_SOURCE_BUCKETS = "SOURCE_BUCKETS"
ENV_PATH_PREFIX = "PATH_PREFIX"
ENV_AUTO_WEBP = "AUTO_WEBP"
