# tenant_console/tenants/models.py
import re
import time
from enum import Enum
from typing import Iterable, List, Optional, Set
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_PRIMARY_COLOR = "#6366f1"

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_subdomain(value: str) -> str:
    """Lowercase a subdomain and strip every whitespace character from it."""
    return _WHITESPACE_RE.sub("", value).lower()


class ThemeVariant(str, Enum):
    MODERN = "modern"
    ELEGANT = "elegant"
    MINIMAL = "minimal"
    TECH = "tech"


class CamelModel(BaseModel):
    """Base model serialising to the camelCase field names used in the stored JSON."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )


class TenantContent(CamelModel):
    """Landing page copy. Empty strings mean 'not set yet'."""
    hero_title: str = ""
    hero_subtitle: str = ""
    about_section: str = ""


class TenantFields(CamelModel):
    """Every tenant field except the identifier."""
    name: str = ""
    subdomain: str = ""
    primary_color: str = Field(
        default=DEFAULT_PRIMARY_COLOR,
        description="Hex colour code; the format is not validated"
    )
    theme: ThemeVariant = ThemeVariant.MODERN
    description: str = ""
    is_active: bool = True
    content: TenantContent = Field(default_factory=TenantContent)

    @field_validator("content", mode="before")
    @classmethod
    def _content_never_absent(cls, value):
        return TenantContent() if value is None else value


class TenantRecord(TenantFields):
    """A single tenant's site configuration."""
    id: str = Field(description="Opaque identifier assigned at creation, never reused")

    @classmethod
    def new_default(
        cls,
        existing: List["TenantRecord"],
        issued_ids: Optional[Iterable[str]] = None,
        now_ms: Optional[int] = None,
    ) -> "TenantRecord":
        """
        Build the record handed out by the store's create operation.

        Args:
            existing: The live collection, used for the "Project N" name and collision checks
            issued_ids: Every id handed out so far, including deleted ones
            now_ms: Millisecond timestamp the subdomain is derived from (defaults to now)
        """
        taken_ids: Set[str] = {t.id for t in existing}
        taken_ids.update(issued_ids or ())
        tenant_id = _generate_tenant_id(taken_ids)

        if now_ms is None:
            now_ms = int(time.time() * 1000)
        taken_subdomains = {t.subdomain for t in existing}
        base_subdomain = f"site-{str(now_ms)[-4:]}"
        subdomain = base_subdomain
        suffix = 2
        while subdomain in taken_subdomains:
            subdomain = f"{base_subdomain}-{suffix}"
            suffix += 1

        return cls(
            id=tenant_id,
            name=f"Project {len(existing) + 1}",
            subdomain=subdomain,
            primary_color=DEFAULT_PRIMARY_COLOR,
            theme=ThemeVariant.MODERN,
            description="",
            is_active=True,
            content=TenantContent(),
        )


def _generate_tenant_id(taken: Set[str]) -> str:
    while True:
        candidate = f"T-{uuid4().hex[:8].upper()}"
        if candidate not in taken:
            return candidate


class TenantUpdateRequest(TenantFields):
    """
    Full replacement payload for an existing tenant, as submitted by an editor.

    The subdomain is normalized here, before the record reaches the store.
    """

    @field_validator("subdomain")
    @classmethod
    def _normalize_subdomain(cls, value: str) -> str:
        return normalize_subdomain(value)

    def to_record(self, tenant_id: str) -> TenantRecord:
        return TenantRecord(id=tenant_id, **self.model_dump())


class TenantSelection(BaseModel):
    """The currently focused tenant, if any."""
    tenant_id: Optional[str] = None


class SlotUsage(BaseModel):
    used: int
    capacity: int
    remaining: int


def seed_collection() -> List[TenantRecord]:
    """The single example tenant used when nothing has been saved yet."""
    return [
        TenantRecord(
            id="T-001",
            name="Coffee Lab",
            subdomain="coffeelab",
            primary_color="#8B4513",
            theme=ThemeVariant.MODERN,
            description="Artisanal coffee roaster and cafe based in Seattle.",
            is_active=True,
            content=TenantContent(
                hero_title="Better Coffee for Better Mornings",
                hero_subtitle="Freshly roasted beans delivered from our shop to your doorstep.",
                about_section="Founded in 2022, Coffee Lab focuses on sustainable sourcing and perfect extraction.",
            ),
        )
    ]
