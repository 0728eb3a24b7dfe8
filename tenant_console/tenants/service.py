# tenant_console/tenants/service.py
import asyncio
import logging
from typing import List, Optional, Set

from .errors import CapacityExceededError, PersistenceError
from .models import SlotUsage, TenantContent, TenantRecord
from .storage_interfaces import AbstractTenantPersistence
from ..activity.log import ActivityLog

logger = logging.getLogger(__name__)

DEFAULT_TENANT_CAPACITY = 4


class TenantStore:
    """
    Owner of the tenant collection and the current selection.

    Every mutation is applied in memory, then the whole collection is saved
    through the persistence adapter before the call returns. Callers only
    ever receive copies of the stored records.
    """

    def __init__(
        self,
        persistence: AbstractTenantPersistence,
        activity_log: ActivityLog,
        capacity: int = DEFAULT_TENANT_CAPACITY,
    ):
        self.persistence = persistence
        self.activity_log = activity_log
        self.capacity = capacity
        self._tenants: List[TenantRecord] = []
        self._issued_ids: Set[str] = set()
        self._selected_id: Optional[str] = None
        self._dirty = False
        self._lock = asyncio.Lock()
        self._loaded = False

    async def initialize(self) -> None:
        """Load the collection once. Later calls are no-ops."""
        if self._loaded:
            return
        self._tenants = await self.persistence.load()
        self._issued_ids.update(t.id for t in self._tenants)
        self._loaded = True
        logger.info(f"TenantStore loaded {len(self._tenants)} tenant(s).")
        if len(self._tenants) > self.capacity:
            self.activity_log.warn(
                f"Loaded {len(self._tenants)} tenants, over the license limit of {self.capacity}. "
                "New tenants are blocked until some are deleted."
            )

    @property
    def is_dirty(self) -> bool:
        """True while an in-memory change has not reached durable storage."""
        return self._dirty

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    def list_tenants(self) -> List[TenantRecord]:
        return [t.model_copy(deep=True) for t in self._tenants]

    def get_tenant(self, tenant_id: str) -> Optional[TenantRecord]:
        index = self._index_of(tenant_id)
        return None if index is None else self._tenants[index].model_copy(deep=True)

    def slot_usage(self) -> SlotUsage:
        used = len(self._tenants)
        return SlotUsage(used=used, capacity=self.capacity, remaining=max(self.capacity - used, 0))

    def select(self, tenant_id: Optional[str]) -> None:
        """Focus a tenant, or clear the focus with None. Ids are not validated."""
        self._selected_id = tenant_id

    def selected_tenant(self) -> Optional[TenantRecord]:
        if self._selected_id is None:
            return None
        return self.get_tenant(self._selected_id)

    async def create(self) -> TenantRecord:
        """
        Append a default tenant and select it.

        Raises:
            CapacityExceededError: If every slot is taken. Nothing changes.
            PersistenceError: If the save fails. The tenant is still created in memory.
        """
        async with self._lock:
            if len(self._tenants) >= self.capacity:
                self.activity_log.warn(
                    f"License Limit Reached: attempted to create tenant {len(self._tenants) + 1} "
                    f"of {self.capacity}."
                )
                raise CapacityExceededError(self.capacity)

            tenant = TenantRecord.new_default(self._tenants, issued_ids=self._issued_ids)
            self._tenants.append(tenant)
            self._issued_ids.add(tenant.id)
            self._selected_id = tenant.id
            await self._persist()
            self.activity_log.info(f"Created new tenant instance: {tenant.id}")
            return tenant.model_copy(deep=True)

    async def update(self, record: TenantRecord) -> Optional[TenantRecord]:
        """
        Replace the stored tenant with the same id by record, field for field.

        Returns:
            The stored record, or None if no tenant has that id (nothing is saved)
        """
        async with self._lock:
            index = self._index_of(record.id)
            if index is None:
                self.activity_log.warn(f"Update dropped: tenant {record.id} not found.")
                return None

            clash = next(
                (t for t in self._tenants if t.id != record.id and t.subdomain == record.subdomain),
                None
            )
            if clash is not None:
                self.activity_log.warn(
                    f"Subdomain '{record.subdomain}' is also used by tenant {clash.id}."
                )

            stored = record.model_copy(deep=True)
            self._tenants[index] = stored
            await self._persist()
            self.activity_log.info(f"Updated configuration for {stored.name}")
            return stored.model_copy(deep=True)

    async def delete(self, tenant_id: str) -> bool:
        """
        Remove a tenant and clear the selection if it pointed at it.

        Confirmation is the caller's responsibility.

        Returns:
            True if a tenant was removed, False if the id was unknown
        """
        async with self._lock:
            index = self._index_of(tenant_id)
            if index is None:
                self.activity_log.warn(f"Delete ignored: tenant {tenant_id} not found.")
                return False

            del self._tenants[index]
            if self._selected_id == tenant_id:
                self._selected_id = None
            await self._persist()
            self.activity_log.warn(f"Tenant {tenant_id} purged from system storage.")
            return True

    async def apply_generated_content(
        self,
        tenant_id: str,
        suggested_color: Optional[str],
        content: TenantContent,
    ) -> Optional[TenantRecord]:
        """
        Merge generated copy into a tenant and store it through update().

        Blank generated values keep the tenant's current value.
        """
        current = self.get_tenant(tenant_id)
        if current is None:
            self.activity_log.warn(f"Generated content discarded: tenant {tenant_id} not found.")
            return None
        merged = merge_generated_content(current, suggested_color, content)
        return await self.update(merged)

    async def flush(self) -> None:
        """Retry saving after an earlier persistence failure."""
        async with self._lock:
            if self._dirty:
                await self._persist()
                self.activity_log.info("Pending tenant changes written to storage.")

    async def _persist(self) -> None:
        try:
            await self.persistence.save(self._tenants)
        except PersistenceError as e:
            self._dirty = True
            self.activity_log.error(f"Storage write failed, changes kept in memory: {e.detail}")
            raise
        self._dirty = False

    def _index_of(self, tenant_id: str) -> Optional[int]:
        for index, tenant in enumerate(self._tenants):
            if tenant.id == tenant_id:
                return index
        return None


def merge_generated_content(
    tenant: TenantRecord,
    suggested_color: Optional[str],
    content: TenantContent,
) -> TenantRecord:
    """Return a copy of tenant with generated values applied, keeping current values for blanks."""
    current = tenant.content
    return tenant.model_copy(
        deep=True,
        update={
            "primary_color": _prefer(suggested_color, tenant.primary_color),
            "content": TenantContent(
                hero_title=_prefer(content.hero_title, current.hero_title),
                hero_subtitle=_prefer(content.hero_subtitle, current.hero_subtitle),
                about_section=_prefer(content.about_section, current.about_section),
            ),
        },
    )


def _prefer(generated: Optional[str], current: str) -> str:
    return generated if generated and generated.strip() else current
