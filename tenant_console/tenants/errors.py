# tenant_console/tenants/errors.py
from fastapi import HTTPException, status


class TenantStoreError(HTTPException):
    """Base exception class for tenant store errors.

    Inherits from FastAPI's HTTPException so the HTTP layer can let these
    propagate and still produce a consistent response.
    """

    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class CapacityExceededError(TenantStoreError):
    """Raised when a tenant is created while every slot is already taken.

    The store is left unchanged; the caller should block the action and
    tell the user to free or upgrade a slot.
    """

    def __init__(self, capacity: int, detail: str | None = None):
        self.capacity = capacity
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail or f"License limit reached ({capacity} tenants). Please upgrade for more slots."
        )


class TenantNotFoundError(TenantStoreError):
    """Raised by callers when the store reports that a tenant id does not exist."""

    def __init__(self, tenant_id: str):
        self.tenant_id = tenant_id
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"Tenant '{tenant_id}' not found.")


class DeleteNotConfirmedError(TenantStoreError):
    """Raised when a delete request arrives without explicit confirmation."""

    def __init__(self, detail: str = "Deletion must be explicitly confirmed (confirmed=true)."):
        super().__init__(status_code=status.HTTP_428_PRECONDITION_REQUIRED, detail=detail)


class PersistenceError(TenantStoreError):
    """Raised when the tenant collection cannot be serialized or written.

    The in-memory mutation that triggered the save is kept; the next
    successful save (or an explicit flush) writes it out.
    """

    def __init__(self, detail: str = "Tenant collection could not be persisted."):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
