"""Abstract contract for the image transformation engine."""

from abc import ABC, abstractmethod

from core.models.image import ImageRequest


class ImageProcessor(ABC):
    """Contract for applying an image request's edits.

    The entry point hands the finished ImageRequest to an implementation
    and serves the bytes it produces under the content type it reports.
    """

    @abstractmethod
    def process(self, request: ImageRequest) -> tuple[bytes, str]:
        """Return the image bytes for ``request`` and their content type.

        The content type must describe the returned bytes, which is
        ``request.content_type`` only when the output format was applied.
        """
