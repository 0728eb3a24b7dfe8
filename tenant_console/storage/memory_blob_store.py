# tenant_console/storage/memory_blob_store.py
import logging
from typing import Dict, Optional

from .storage_interfaces import AbstractBlobStore

logger = logging.getLogger(__name__)


class InMemoryBlobStore(AbstractBlobStore):
    """Dict-backed blob store. Contents live only as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._blobs: Dict[str, str] = dict(initial or {})

    async def initialize(self) -> None:
        logger.info("InMemoryBlobStore initialized.")

    async def teardown(self) -> None:
        self._blobs.clear()

    async def get(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    async def put(self, key: str, value: str) -> None:
        self._blobs[key] = value

    async def delete(self, key: str) -> bool:
        return self._blobs.pop(key, None) is not None
