# tenant_console/generation/__init__.py
"""
Content generation module initialization.

Wraps the external text-generation provider behind a client that returns
tagged results, plus the service that merges drafted copy into tenants.
"""

from .client import ContentGenerationClient, is_credential_provisioned
from .errors import ContentGenerationError, AuthenticationError, HandshakeError, MissingInputError
from .models import GeneratedContent, GenerationSuccess, GenerationFailure, GenerationResult
from .service import ContentDraftingService

__all__ = [
    "ContentGenerationClient",
    "is_credential_provisioned",
    "ContentGenerationError",
    "AuthenticationError",
    "HandshakeError",
    "MissingInputError",
    "GeneratedContent",
    "GenerationSuccess",
    "GenerationFailure",
    "GenerationResult",
    "ContentDraftingService"
]
