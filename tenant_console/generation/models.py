# tenant_console/generation/models.py
from dataclasses import dataclass
from typing import Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .errors import ContentGenerationError
from ..tenants.models import TenantContent


class GeneratedContent(BaseModel):
    """Structured copy returned by the provider. All four fields are required."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    hero_title: str
    hero_subtitle: str
    about_section: str
    suggested_color: str = Field(description="A hex code that fits the brand")

    def to_tenant_content(self) -> TenantContent:
        return TenantContent(
            hero_title=self.hero_title,
            hero_subtitle=self.hero_subtitle,
            about_section=self.about_section,
        )


# JSON schema sent to the provider, in its OpenAPI-subset dialect
RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "heroTitle": {"type": "STRING"},
        "heroSubtitle": {"type": "STRING"},
        "aboutSection": {"type": "STRING"},
        "suggestedColor": {"type": "STRING", "description": "A hex code that fits the brand"},
    },
    "required": ["heroTitle", "heroSubtitle", "aboutSection", "suggestedColor"],
}


@dataclass(frozen=True)
class GenerationSuccess:
    content: GeneratedContent

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class GenerationFailure:
    error: ContentGenerationError

    @property
    def ok(self) -> bool:
        return False


GenerationResult = Union[GenerationSuccess, GenerationFailure]
