"""Image Request Handler Package."""

__version__ = "1.0.0"
__description__ = (
    "Serverless image request handler using AWS Lambda and S3"
)

__all__ = ["handlers", "core"]
