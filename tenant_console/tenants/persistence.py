# tenant_console/tenants/persistence.py
import json
import logging
from typing import List

from pydantic import TypeAdapter, ValidationError

from .errors import PersistenceError
from .models import TenantRecord, seed_collection
from .storage_interfaces import AbstractTenantPersistence
from ..storage.storage_interfaces import AbstractBlobStore

logger = logging.getLogger(__name__)

_collection_adapter = TypeAdapter(List[TenantRecord])


class BlobTenantPersistence(AbstractTenantPersistence):
    """Stores the tenant collection as one JSON array under a single blob key."""

    def __init__(self, blob_store: AbstractBlobStore, storage_key: str):
        self.blob_store = blob_store
        self.storage_key = storage_key

    async def load(self) -> List[TenantRecord]:
        """
        Read and decode the stored collection.

        A missing blob yields the seed collection. So does a blob that is not
        valid JSON or does not match the tenant schema; that case is logged as
        a warning instead of raising. Records repeating an earlier id are
        dropped with a warning.

        Raises:
            PersistenceError: If the blob store itself cannot be read
        """
        try:
            raw = await self.blob_store.get(self.storage_key)
        except Exception as e:
            logger.error(f"Could not read tenant blob '{self.storage_key}': {e}", exc_info=True)
            raise PersistenceError(f"Tenant collection could not be read: {e}") from e

        if raw is None:
            logger.info(f"No saved tenants under '{self.storage_key}'. Using seed collection.")
            return seed_collection()

        try:
            collection = _collection_adapter.validate_python(json.loads(raw))
        except (json.JSONDecodeError, RecursionError, ValidationError) as e:
            logger.warning(
                f"Saved tenant blob '{self.storage_key}' is corrupt ({type(e).__name__}: {e}). "
                "Falling back to seed collection."
            )
            return seed_collection()

        return _drop_duplicate_ids(collection, self.storage_key)

    async def save(self, collection: List[TenantRecord]) -> None:
        """
        Serialize the full collection, then write it with a single blob put.

        Serialization happens before storage is touched, so a serialization
        fault never leaves a partial blob behind.
        """
        try:
            payload = json.dumps(
                [tenant.model_dump(mode="json", by_alias=True) for tenant in collection]
            )
        except (TypeError, ValueError) as e:
            logger.error(f"Could not serialize tenant collection: {e}", exc_info=True)
            raise PersistenceError(f"Tenant collection could not be serialized: {e}") from e

        try:
            await self.blob_store.put(self.storage_key, payload)
        except Exception as e:
            logger.error(f"Could not write tenant blob '{self.storage_key}': {e}", exc_info=True)
            raise PersistenceError(f"Tenant collection could not be written: {e}") from e

        logger.debug(f"Persisted {len(collection)} tenant(s) under '{self.storage_key}'.")


def _drop_duplicate_ids(collection: List[TenantRecord], storage_key: str) -> List[TenantRecord]:
    """Keep the first record for each id; later records with a repeated id are dropped."""
    seen = set()
    unique = []
    for tenant in collection:
        if tenant.id in seen:
            logger.warning(
                f"Saved tenant blob '{storage_key}' repeats id '{tenant.id}'. Dropping the later record."
            )
            continue
        seen.add(tenant.id)
        unique.append(tenant)
    return unique
