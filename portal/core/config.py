"""
Application settings.

Values are read from the process environment (and an optional .env file).
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the intake portal."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Application
    app_name: str = "Store Operations Intake Portal"
    app_version: str = "1.0.0"
    ENVIRONMENT: str = "development"
    debug: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS
    cors_origins: List[str] = ["*"]
    cors_allow_credentials: bool = False

    # Device-scoped local storage
    DATABASE_URL: str = "sqlite:///./portal_local_storage.db"
    DEVICE_COOKIE_NAME: str = "portal_device_id"
    DEVICE_COOKIE_MAX_AGE: int = 60 * 60 * 24 * 365 * 5

    # Workflow automation flow URLs
    POWER_AUTOMATE_DESIGN_REQUEST_URL: Optional[str] = None
    POWER_AUTOMATE_LSM_REQUEST_URL: Optional[str] = None
    POWER_AUTOMATE_PRICE_CHANGE_URL: Optional[str] = None
    POWER_AUTOMATE_STORE_HOURS_URL: Optional[str] = None
    WEBHOOK_TIMEOUT: Optional[float] = None

    # Evergreen order form (embedded external form)
    JOTFORM_URL: Optional[str] = None

    # Home store shown in the header and prefilled on design requests
    STORE_NUMBER: str = "1234"
    STORE_NAME: str = "Yogurtland - Downtown LA"


settings = Settings()
