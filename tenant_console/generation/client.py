# tenant_console/generation/client.py
import asyncio
import json
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from .errors import AuthenticationError, HandshakeError
from .models import (
    RESPONSE_SCHEMA,
    GeneratedContent,
    GenerationFailure,
    GenerationResult,
    GenerationSuccess,
)

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-3-flash-preview"

# Values a build pipeline leaves behind when secret injection did not happen
PLACEHOLDER_CREDENTIALS = frozenset({"undefined", "PLACEHOLDER"})
UNRESOLVED_TEMPLATE_MARKERS = ("process.env", "${")


def is_credential_provisioned(api_key: Optional[str]) -> bool:
    """True if api_key looks like a real credential rather than a missing or placeholder value."""
    if not api_key or not api_key.strip():
        return False
    if api_key in PLACEHOLDER_CREDENTIALS:
        return False
    return not any(marker in api_key for marker in UNRESOLVED_TEMPLATE_MARKERS)


def build_prompt(description: str, name: str) -> str:
    return (
        f'Generate professional landing page content for a company named "{name}". '
        f'The business description is: "{description}".'
    )


class ContentGenerationClient:
    """
    Client for drafting landing page copy with the Gemini generateContent API.

    generate() never raises: every outcome is returned as a GenerationSuccess
    or a GenerationFailure carrying an AuthenticationError or HandshakeError.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout_seconds: float = 30.0,
    ):
        """Initialize the client with a shared HTTP client and the provider credential."""
        self.client = client
        self.api_key = api_key
        self.model = model
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        logger.info(
            f"ContentGenerationClient initialized for model '{model}'. "
            f"Credential: {'provisioned' if self.credential_provisioned else 'missing'}."
        )

    @property
    def credential_provisioned(self) -> bool:
        return is_credential_provisioned(self.api_key)

    def _build_request_body(self, description: str, name: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": build_prompt(description, name)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    async def generate(self, description: str, name: str) -> GenerationResult:
        """
        Ask the provider for hero title, subtitle, about text and a brand colour.

        The credential is checked before any network traffic. The call is
        bounded by timeout_seconds; a timeout is reported as a HandshakeError.
        """
        if not self.credential_provisioned:
            logger.warning("Content generation requested but the provider credential is not provisioned.")
            return GenerationFailure(AuthenticationError())

        try:
            content = await asyncio.wait_for(
                self._request_content(description, name),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error(f"Content generation timed out after {self.timeout_seconds}s for '{name}'.")
            return GenerationFailure(HandshakeError())
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Content generation HTTP error: {e.request.method} {e.request.url} - "
                f"Status {e.response.status_code} - Response Body: {e.response.text[:500]}"
            )
            return GenerationFailure(HandshakeError())
        except httpx.RequestError as e:
            logger.error(f"Content generation RequestError: {e.request.method} {e.request.url} - Error: {e}")
            return GenerationFailure(HandshakeError())
        except (ValueError, KeyError, IndexError, TypeError) as e:
            # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
            logger.error(f"Content generation returned a malformed payload: {e}")
            return GenerationFailure(HandshakeError())
        except Exception as e:
            logger.error(f"Unexpected error during content generation for '{name}': {e}", exc_info=True)
            return GenerationFailure(HandshakeError())

        logger.info(f"Generated landing page content for '{name}'.")
        return GenerationSuccess(content)

    async def _request_content(self, description: str, name: str) -> GeneratedContent:
        url = f"{self.api_base_url}/models/{self.model}:generateContent"
        headers = {"x-goog-api-key": self.api_key or "", "Content-Type": "application/json"}
        body = self._build_request_body(description, name)

        logger.debug(f"Gemini API Request: POST {url} | Prompt length: {len(body['contents'][0]['parts'][0]['text'])}")
        response = await self.client.post(url, json=body, headers=headers)
        response.raise_for_status()

        payload = response.json()
        parts = payload["candidates"][0]["content"]["parts"]
        text = "".join(part.get("text", "") for part in parts).strip()
        if not text:
            raise ValueError("Provider response contained no text.")

        log_body_preview = text if len(text) <= 300 else text[:300] + "..."
        logger.debug(f"Gemini API Response text preview: {log_body_preview}")

        try:
            return GeneratedContent.model_validate(json.loads(text))
        except ValidationError as e:
            raise ValueError(f"Provider response did not match schema: {e}") from e
