# tenant_console/storage/storage_interfaces.py
from abc import ABC, abstractmethod
from typing import Optional


class AbstractBlobStore(ABC):
    """
    Abstract base class for a durable key-value blob store.

    Each key holds one opaque text value. Implementations must make put()
    all-or-nothing: after a failed put the previous value is still readable.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the backend for operations."""
        pass

    @abstractmethod
    async def teardown(self) -> None:
        """Release backend resources."""
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under key.

        Returns:
            The stored text, or None if the key has never been written
        """
        pass

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Overwrite the value stored under key."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if a value was removed, False if the key did not exist
        """
        pass
