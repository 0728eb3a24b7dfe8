# tenant_console/generation/errors.py
from fastapi import status


class ContentGenerationError(Exception):
    """Base class for content generation failures.

    These are returned inside a GenerationFailure rather than raised to
    callers. Each carries a stable code and the HTTP status the API uses
    when reporting it.
    """

    code: str = "SYS-E00"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Content generation failed."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(f"[{self.code}] {self.detail}")


class AuthenticationError(ContentGenerationError):
    """The provider credential was never provisioned, or is a placeholder.

    No network call is made. Generation stays unavailable until the hosting
    environment injects a real credential; tenant CRUD is unaffected.
    """

    code = "SYS-E01"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "AUTHENTICATION_ERROR: Provider credential is not provisioned. Set GEMINI_API_KEY."


class HandshakeError(ContentGenerationError):
    """The provider call failed, timed out, hit a quota, or returned a malformed payload."""

    code = "SYS-E02"
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "HANDSHAKE_ERROR: External API call failed. Verify usage quotas."


class MissingInputError(ContentGenerationError):
    """The tenant has no name or no description to generate from."""

    code = "SYS-E03"
    status_code = 422
    default_detail = "Please provide a name and description first."
