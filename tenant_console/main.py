# tenant_console/main.py
from fastapi import Depends, FastAPI
from contextlib import asynccontextmanager
import logging
from typing import Annotated, Any, Dict
from dotenv import load_dotenv
load_dotenv()

from .settings import settings
from .activity.endpoints import activity_router
from .activity.log import ActivityLog
from .generation.endpoints import generation_router
from .generation.service import ContentDraftingService
from .tenants.endpoints import tenants_router
from .tenants.service import TenantStore
from .storage.sqlite_base import close_sqlite_db_connection
from .dependencies import (
    close_dependencies,
    get_activity_log,
    get_drafting_service,
    get_generation_client,
    get_tenant_store,
)

# Configure logging based on debug mode setting
if not logging.getLogger().hasHandlers():
    logging.basicConfig(
        level="DEBUG" if settings.debug_mode else settings.log_level.upper(),
        format='%(asctime)s - %(name)s [%(levelname)s] - %(message)s'
    )

logger = logging.getLogger(__name__)
logger.setLevel(logging.DEBUG if settings.debug_mode else settings.log_level.upper())


@asynccontextmanager
async def console_app_lifespan(app_instance: FastAPI):
    """
    Application lifespan manager.

    Loads the tenant collection once at startup and releases the HTTP client
    and storage connection at shutdown.
    """
    logger.info("Application startup initiated.")
    activity_log = await get_activity_log()
    activity_log.info("Booting tenant console...")
    activity_log.info(f"Loading Tenant Store from {settings.storage_backend} storage...")

    try:
        tenant_store = await get_tenant_store(activity_log)
        logger.info(f"Tenant store ready with {len(tenant_store.list_tenants())} tenant(s).")
    except Exception as e:
        logger.error(f"Error during tenant store initialization: {e}", exc_info=True)
        raise

    generation_client = await get_generation_client()
    if not generation_client.credential_provisioned:
        activity_log.warn("Content generation credential not provisioned. Drafting is disabled.")

    try:
        yield
    finally:
        logger.info("Application shutdown initiated.")
        await close_dependencies()
        await close_sqlite_db_connection()
        logger.info("Application shutdown complete.")


app = FastAPI(
    title=settings.app_name,
    lifespan=console_app_lifespan,
)

app.include_router(tenants_router)
app.include_router(generation_router)
app.include_router(activity_router)


@app.get("/health")
async def health_endpoint(
    store: Annotated[TenantStore, Depends(get_tenant_store)],
    drafting: Annotated[ContentDraftingService, Depends(get_drafting_service)],
    activity_log: Annotated[ActivityLog, Depends(get_activity_log)],
) -> Dict[str, Any]:
    """Deployment health check: storage state, slot usage and generation credential status."""
    usage = store.slot_usage()
    return {
        "status": "degraded" if store.is_dirty else "operational",
        "storage_backend": settings.storage_backend,
        "pending_writes": store.is_dirty,
        "tenants": usage.model_dump(),
        "generation_credential": drafting.credential_status(),
        "activity_entries": len(activity_log),
    }
