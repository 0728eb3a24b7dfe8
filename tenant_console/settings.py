# tenant_console/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from typing import Optional
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# This settings.py file is at <project>/tenant_console/settings.py
# Two .parent calls get to the project root directory
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
DOTENV_PATH = PROJECT_ROOT / ".env"

if DOTENV_PATH.exists():
    logger.info(f"SETTINGS.PY: .env file FOUND at explicit path: {DOTENV_PATH}")
else:
    logger.debug(
        f"SETTINGS.PY: .env file NOT FOUND at explicit path: {DOTENV_PATH}. "
        "Will rely on OS env vars or defaults."
    )


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    app_name: str = "Tenant Console"
    debug_mode: bool = False
    log_level: str = "INFO"

    # Persistence: "sqlite" keeps the collection on disk, "memory" for the process lifetime only
    storage_backend: str = "sqlite"
    sqlite_db_path: str = "./tenant_console_data.sqlite3"
    tenant_storage_key: str = "saas_tenants_v2"

    # Tenant slot policy
    tenant_capacity: int = Field(default=4, ge=1)

    # Activity log ring buffer size
    activity_log_max_entries: int = Field(default=500, ge=1)

    # Content generation provider
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
        description="Credential for the content generation provider. Injected by the hosting environment.",
    )
    gemini_model: str = "gemini-3-flash-preview"
    gemini_api_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    generation_timeout_seconds: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=DOTENV_PATH if DOTENV_PATH.exists() else None,
        extra="ignore",
        env_file_encoding='utf-8',
        populate_by_name=True,
    )


settings = Settings()

logger.info(
    f"SETTINGS.PY: storage_backend='{settings.storage_backend}', "
    f"tenant_capacity={settings.tenant_capacity}, gemini_model='{settings.gemini_model}'"
)
logger.info(
    f"SETTINGS.PY: gemini_api_key: "
    f"{'********' if settings.gemini_api_key else 'None'}"
)
