# tenant_console/generation/service.py
import logging
from typing import Optional

from .client import ContentGenerationClient
from .errors import MissingInputError
from .models import GenerationFailure, GenerationResult, GenerationSuccess
from ..activity.log import ActivityLog
from ..tenants.models import TenantRecord
from ..tenants.service import TenantStore

logger = logging.getLogger(__name__)


class ContentDraftingService:
    """
    Drafts copy for a stored tenant and merges a successful result into it.

    Failures are logged to the activity log and leave the tenant untouched.
    """

    def __init__(
        self,
        tenant_store: TenantStore,
        generation_client: ContentGenerationClient,
        activity_log: ActivityLog,
    ):
        self.tenant_store = tenant_store
        self.generation_client = generation_client
        self.activity_log = activity_log

    def credential_status(self) -> str:
        """'authorized' when the provider credential is usable, otherwise 'action_required'."""
        return "authorized" if self.generation_client.credential_provisioned else "action_required"

    async def draft(self, tenant_id: str) -> Optional[tuple[GenerationResult, Optional[TenantRecord]]]:
        """
        Generate and apply content for one tenant.

        Returns:
            None if the tenant does not exist. Otherwise the generation result
            together with the updated tenant (None when generation failed).
        """
        tenant = self.tenant_store.get_tenant(tenant_id)
        if tenant is None:
            logger.info(f"Service: Drafting requested for unknown tenant {tenant_id}")
            return None

        if not tenant.name.strip() or not tenant.description.strip():
            failure = GenerationFailure(MissingInputError())
            self.activity_log.warn(f"Content generation skipped for {tenant.name or tenant_id}: {failure.error.detail}")
            return failure, None

        self.activity_log.info(f"Requesting generated content for {tenant.name}")
        result = await self.generation_client.generate(tenant.description, tenant.name)

        match result:
            case GenerationSuccess(content=generated):
                updated = await self.tenant_store.apply_generated_content(
                    tenant_id, generated.suggested_color, generated.to_tenant_content()
                )
                if updated is not None:
                    self.activity_log.info(f"Applied generated content to {updated.name}")
                return result, updated
            case GenerationFailure(error=error):
                self.activity_log.error(f"[{error.code}] Content generation failed for {tenant.name}: {error.detail}")
                return result, None
