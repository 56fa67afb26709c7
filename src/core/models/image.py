"""Shared image request models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBytes, StrictStr


class RequestType(str, Enum):
    """How a request path encodes bucket, key and edits."""

    DEFAULT = "Default"
    THUMBOR = "Thumbor"
    CUSTOM = "Custom"


class OriginalImage(BaseModel):
    """Original object fetched from storage, with response defaults applied."""

    model_config = ConfigDict(frozen=True)

    body: StrictBytes = Field(..., description="Raw object bytes")
    content_type: StrictStr = Field(..., description="Stored or default content type")
    cache_control: StrictStr = Field(..., description="Stored or default Cache-Control")
    last_modified: StrictStr | None = Field(None, description="HTTP date, if stored")
    expires: StrictStr | None = Field(None, description="HTTP date, if stored")


class ImageRequest(BaseModel):
    """Validated descriptor of a single image request."""

    model_config = ConfigDict(frozen=True)

    request_type: RequestType
    bucket: StrictStr = Field(..., min_length=1)
    key: StrictStr = Field(..., min_length=1)
    edits: dict[str, Any] = Field(default_factory=dict)

    original_image: StrictBytes
    source_content_type: StrictStr = Field(..., description="Content type of original_image")
    content_type: StrictStr
    cache_control: StrictStr
    last_modified: StrictStr | None = None
    expires: StrictStr | None = None

    output_format: StrictStr | None = None

    def response_headers(self) -> dict[str, str]:
        """HTTP headers describing the image response."""
        headers = {
            "Content-Type": self.content_type,
            "Cache-Control": self.cache_control,
        }

        if self.last_modified:
            headers["Last-Modified"] = self.last_modified

        if self.expires:
            headers["Expires"] = self.expires

        return headers
