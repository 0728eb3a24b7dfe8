# tenant_console/tenants/storage_interfaces.py
from abc import ABC, abstractmethod
from typing import List
from .models import TenantRecord


class AbstractTenantPersistence(ABC):
    """
    Abstract base class for loading and saving the whole tenant collection.

    The collection is always read and written as a unit; there are no
    per-record operations at this level.
    """

    @abstractmethod
    async def load(self) -> List[TenantRecord]:
        """
        Return the previously saved collection.

        Returns:
            The saved tenants in insertion order, or the seed collection when
            nothing usable has been saved
        """
        pass

    @abstractmethod
    async def save(self, collection: List[TenantRecord]) -> None:
        """
        Persist the entire collection, replacing whatever was stored before.

        Raises:
            PersistenceError: If serialization or the write fails. The
                previously stored collection must remain intact in that case.
        """
        pass
