from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ImageHandlerEvent(BaseModel):
    """Validation model for the API Gateway proxy event of an image request."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    path: StrictStr = Field(
        ...,
        description="Request path, including the configured prefix",
    )

    query_string_parameters: dict[str, StrictStr] | None = Field(
        default=None,
        alias="queryStringParameters",
        description="Query parameters; `edits` carries the base64 edits payload",
    )

    headers: dict[str, StrictStr] | None = Field(
        default=None,
        description="Request headers, keys as sent by the client",
    )

    http_method: StrictStr | None = Field(
        default=None,
        alias="httpMethod",
    )
