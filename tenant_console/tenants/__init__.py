# tenant_console/tenants/__init__.py
"""
Tenant management module initialization.

This module provides the tenant record model, the persistence abstraction and
its blob-backed implementation, and the store that owns the collection. The
API routes live in tenants.endpoints and are mounted by main.
"""

from .models import (
    ThemeVariant,
    TenantContent,
    TenantRecord,
    TenantUpdateRequest,
    TenantSelection,
    SlotUsage,
    normalize_subdomain,
    seed_collection,
)
from .errors import (
    TenantStoreError,
    CapacityExceededError,
    TenantNotFoundError,
    DeleteNotConfirmedError,
    PersistenceError,
)
from .storage_interfaces import AbstractTenantPersistence
from .persistence import BlobTenantPersistence
from .service import TenantStore, merge_generated_content

# Export all public components for external use
__all__ = [
    # Data models
    "ThemeVariant",
    "TenantContent",
    "TenantRecord",
    "TenantUpdateRequest",
    "TenantSelection",
    "SlotUsage",
    "normalize_subdomain",
    "seed_collection",
    # Errors
    "TenantStoreError",
    "CapacityExceededError",
    "TenantNotFoundError",
    "DeleteNotConfirmedError",
    "PersistenceError",
    # Persistence layer
    "AbstractTenantPersistence",
    "BlobTenantPersistence",
    # Lifecycle manager
    "TenantStore",
    "merge_generated_content"
]
