# tenant_console/tenants/endpoints.py
import logging
from fastapi import APIRouter, Depends, Path, Query, status
from typing import List, Annotated

from .errors import DeleteNotConfirmedError, TenantNotFoundError
from .models import SlotUsage, TenantRecord, TenantSelection, TenantUpdateRequest
from .service import TenantStore
from ..dependencies import get_tenant_store

logger = logging.getLogger(__name__)

tenants_router = APIRouter(prefix="/tenants", tags=["Tenants"])


@tenants_router.get("/", response_model=List[TenantRecord])
@tenants_router.get("", response_model=List[TenantRecord], include_in_schema=False)
async def list_tenants_endpoint(
    store: Annotated[TenantStore, Depends(get_tenant_store)]
):
    """List all tenants in insertion order. Handles both trailing slash variants."""
    return store.list_tenants()


@tenants_router.post("/", response_model=TenantRecord, status_code=status.HTTP_201_CREATED)
async def create_tenant_endpoint(
    store: Annotated[TenantStore, Depends(get_tenant_store)]
):
    """Create a tenant with default settings and select it. Returns 409 when every slot is taken."""
    logger.info("API: Received request to create tenant.")
    return await store.create()


@tenants_router.get("/slots", response_model=SlotUsage)
async def get_slot_usage_endpoint(
    store: Annotated[TenantStore, Depends(get_tenant_store)]
):
    """Report used, total and remaining tenant slots."""
    return store.slot_usage()


@tenants_router.get("/selection", response_model=TenantSelection)
async def get_selection_endpoint(
    store: Annotated[TenantStore, Depends(get_tenant_store)]
):
    return TenantSelection(tenant_id=store.selected_id)


@tenants_router.put("/selection", response_model=TenantSelection)
async def set_selection_endpoint(
    selection: TenantSelection,
    store: Annotated[TenantStore, Depends(get_tenant_store)]
):
    """Focus a tenant, or clear the focus with a null tenant_id."""
    store.select(selection.tenant_id)
    return TenantSelection(tenant_id=store.selected_id)


@tenants_router.get("/{tenant_id}", response_model=TenantRecord)
async def get_tenant_endpoint(
    tenant_id: Annotated[str, Path(description="The tenant ID.")],
    store: Annotated[TenantStore, Depends(get_tenant_store)]
):
    tenant = store.get_tenant(tenant_id)
    if tenant is None:
        raise TenantNotFoundError(tenant_id)
    return tenant


@tenants_router.put("/{tenant_id}", response_model=TenantRecord)
async def update_tenant_endpoint(
    tenant_id: Annotated[str, Path(description="The tenant ID.")],
    tenant_update: TenantUpdateRequest,
    store: Annotated[TenantStore, Depends(get_tenant_store)]
):
    """Replace every field of an existing tenant. Returns 404 if the tenant does not exist."""
    updated = await store.update(tenant_update.to_record(tenant_id))
    if updated is None:
        logger.warning(f"API: Update for unknown tenant '{tenant_id}'.")
        raise TenantNotFoundError(tenant_id)
    return updated


@tenants_router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tenant_endpoint(
    tenant_id: Annotated[str, Path(description="The tenant ID.")],
    store: Annotated[TenantStore, Depends(get_tenant_store)],
    confirmed: Annotated[bool, Query(description="Must be true to delete the tenant.")] = False
):
    """Delete a tenant. Requires confirmed=true; returns 404 if the tenant does not exist."""
    if not confirmed:
        raise DeleteNotConfirmedError()
    deleted = await store.delete(tenant_id)
    if not deleted:
        raise TenantNotFoundError(tenant_id)
    return None
