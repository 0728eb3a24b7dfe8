# tenant_console/dependencies.py
import logging
from typing import Annotated, Optional

import httpx
from fastapi import Depends

from .settings import settings
from .activity.log import ActivityLog
from .generation.client import ContentGenerationClient
from .generation.service import ContentDraftingService
from .storage.storage_interfaces import AbstractBlobStore
from .storage.memory_blob_store import InMemoryBlobStore
from .storage.sqlite_blob_store import get_sqlite_blob_store
from .tenants.persistence import BlobTenantPersistence
from .tenants.service import TenantStore

logger = logging.getLogger(__name__)

# Global instances, created on first use or during application startup
_activity_log_instance: Optional[ActivityLog] = None
_blob_store_instance: Optional[AbstractBlobStore] = None
_tenant_store_instance: Optional[TenantStore] = None
_http_client_instance: Optional[httpx.AsyncClient] = None
_generation_client_instance: Optional[ContentGenerationClient] = None


async def get_blob_store() -> AbstractBlobStore:
    """Return the blob store selected by settings.storage_backend."""
    global _blob_store_instance
    if _blob_store_instance is None:
        if settings.storage_backend == "sqlite":
            _blob_store_instance = await get_sqlite_blob_store()
        elif settings.storage_backend == "memory":
            _blob_store_instance = InMemoryBlobStore()
            await _blob_store_instance.initialize()
        else:
            raise ValueError(f"Unsupported storage_backend: {settings.storage_backend}")
        logger.info(f"Blob store for backend '{settings.storage_backend}' ready.")
    return _blob_store_instance


async def get_activity_log() -> ActivityLog:
    global _activity_log_instance
    if _activity_log_instance is None:
        _activity_log_instance = ActivityLog(max_entries=settings.activity_log_max_entries)
    return _activity_log_instance


async def get_tenant_store(
    activity_log: Annotated[ActivityLog, Depends(get_activity_log)],
) -> TenantStore:
    """Get or create the singleton TenantStore, loading the collection on first use."""
    global _tenant_store_instance
    if _tenant_store_instance is None:
        blob_store = await get_blob_store()
        persistence = BlobTenantPersistence(blob_store, settings.tenant_storage_key)
        store = TenantStore(persistence, activity_log, capacity=settings.tenant_capacity)
        await store.initialize()
        _tenant_store_instance = store
    return _tenant_store_instance


async def get_generation_client() -> ContentGenerationClient:
    global _http_client_instance, _generation_client_instance
    if _generation_client_instance is None:
        if _http_client_instance is None:
            _http_client_instance = httpx.AsyncClient(timeout=settings.generation_timeout_seconds)
        _generation_client_instance = ContentGenerationClient(
            client=_http_client_instance,
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            api_base_url=settings.gemini_api_base_url,
            timeout_seconds=settings.generation_timeout_seconds,
        )
    return _generation_client_instance


async def get_drafting_service(
    tenant_store: Annotated[TenantStore, Depends(get_tenant_store)],
    generation_client: Annotated[ContentGenerationClient, Depends(get_generation_client)],
    activity_log: Annotated[ActivityLog, Depends(get_activity_log)],
) -> ContentDraftingService:
    """Factory function to create the drafting service with injected dependencies."""
    return ContentDraftingService(tenant_store, generation_client, activity_log)


async def close_dependencies() -> None:
    """Release the HTTP client and blob store. Called during application shutdown."""
    global _activity_log_instance, _blob_store_instance, _tenant_store_instance
    global _http_client_instance, _generation_client_instance

    if _http_client_instance is not None:
        await _http_client_instance.aclose()
        logger.info("Shared httpx.AsyncClient closed.")
    if _blob_store_instance is not None:
        await _blob_store_instance.teardown()

    _activity_log_instance = None
    _blob_store_instance = None
    _tenant_store_instance = None
    _http_client_instance = None
    _generation_client_instance = None
