"""Abstract contract for original image storage."""

from abc import ABC, abstractmethod

from core.models.image import OriginalImage


class ImageStorageRepository(ABC):
    """Contract for fetching original images.

    Implementations could be S3, GCS, local disk, etc.
    The request service depends on this interface, not the implementation.
    """

    @abstractmethod
    def get_original_image(self, *, bucket: str, key: str) -> OriginalImage:
        """Fetch an original image and its response metadata.

        Args:
            bucket: Whitelisted source bucket
            key: Object key within the bucket

        Returns:
            OriginalImage with content type and cache control defaults applied

        Raises:
            NotFoundError: If the object does not exist
            StorageError: If the fetch fails for any other reason
        """
