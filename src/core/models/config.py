"""Runtime configuration for the image handler."""

import os

from pydantic import BaseModel, ConfigDict, Field

from core.models.errors import ConfigurationError
from core.utils.constants import (
    ENV_AUTO_WEBP,
    ENV_PATH_PREFIX,
    ENV_SOURCE_BUCKETS,
    TRUTHY_FLAG_VALUES,
)


class ImageHandlerConfig(BaseModel):
    """Process-wide settings, read once per invocation by the entry point."""

    model_config = ConfigDict(frozen=True)

    source_buckets: str | None = Field(
        None,
        description="Comma separated whitelist of source buckets",
    )
    path_prefix: str = Field(
        "",
        description="Literal prefix stripped from request paths",
    )
    auto_webp: bool = Field(
        False,
        description="Serve webp when the client accepts it",
    )

    @classmethod
    def from_env(cls) -> "ImageHandlerConfig":
        auto_webp = os.getenv(ENV_AUTO_WEBP, "").strip().lower()

        return cls(
            source_buckets=os.getenv(ENV_SOURCE_BUCKETS),
            path_prefix=os.getenv(ENV_PATH_PREFIX, ""),
            auto_webp=auto_webp in TRUTHY_FLAG_VALUES,
        )

    def allowed_source_buckets(self) -> list[str]:
        """Return the whitelist entries, first entry being the default bucket.

        Raises:
            ConfigurationError: If no bucket is configured
        """
        buckets = [
            bucket.strip()
            for bucket in (self.source_buckets or "").split(",")
            if bucket.strip()
        ]

        if not buckets:
            raise ConfigurationError(
                message=(
                    "The SOURCE_BUCKETS variable could not be read. Please check "
                    "that it is not empty and contains at least one source bucket, "
                    "or multiple buckets separated by commas."
                ),
                details={"source_buckets": self.source_buckets},
            )

        return buckets
