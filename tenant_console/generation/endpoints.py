# tenant_console/generation/endpoints.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Path
from typing import Annotated

from .models import GenerationFailure
from .service import ContentDraftingService
from ..dependencies import get_drafting_service
from ..tenants.errors import TenantNotFoundError
from ..tenants.models import TenantRecord

logger = logging.getLogger(__name__)

generation_router = APIRouter(prefix="/tenants", tags=["Content Generation"])


@generation_router.post("/{tenant_id}/generate-content", response_model=TenantRecord)
async def generate_content_endpoint(
    tenant_id: Annotated[str, Path(description="The tenant to draft landing page copy for.")],
    service: Annotated[ContentDraftingService, Depends(get_drafting_service)]
):
    """
    Draft landing page copy for a tenant and apply it.

    Returns the updated tenant. A missing credential maps to 503, a failed
    provider call to 502, and a tenant without name or description to 422.
    """
    outcome = await service.draft(tenant_id)
    if outcome is None:
        raise TenantNotFoundError(tenant_id)

    result, updated = outcome
    if isinstance(result, GenerationFailure):
        error = result.error
        logger.warning(f"API: Content generation for '{tenant_id}' failed with {error.code}.")
        raise HTTPException(
            status_code=error.status_code,
            detail={"code": error.code, "message": error.detail}
        )
    if updated is None:
        # Tenant was deleted while the provider call was in flight
        raise TenantNotFoundError(tenant_id)
    return updated
