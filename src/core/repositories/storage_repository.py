"""Abstract contract for image object storage."""

from abc import ABC, abstractmethod

from core.models.image import StoredObject


class ObjectStoreRepository(ABC):
    """Contract for storing and retrieving image objects by key.

    Implementations could be S3, GCS, local disk, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def put_object(self, *, key: str, body: bytes, content_type: str) -> None:
        """Store an object under a key, replacing any existing one.

        Args:
            key: Storage key
            body: Binary image content
            content_type: MIME type recorded with the object (may be empty)

        Raises:
            ObjectWriteFailedError: If the write fails
        """

    @abstractmethod
    def get_object(self, *, key: str) -> StoredObject | None:
        """Fetch an object by exact key.

        Args:
            key: Storage key returned by an upload

        Returns:
            The stored object, or None if nothing is stored under the key

        Raises:
            ObjectReadFailedError: If the read fails
        """
