# /lab_allocation/core/config.py

"""
Central application settings.

Values come from the process environment (optionally seeded from a local
`.env` file). Credentials and signing keys are never hardcoded here; they
must be supplied by the deployment.
"""

from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Application settings."""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- API metadata ---
    API_TITLE: str = "Lab Allocation API"
    API_DESCRIPTION: str = "Admin backend for allocating students to lab computers."
    API_VERSION: str = "1.0.0"

    # --- Database ---
    DATABASE_URL: str = "sqlite:///./lab_allocation.db"

    # --- Admin credentials (externally configured) ---
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: Optional[str] = None

    # --- Session tokens ---
    JWT_SECRET_KEY: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # --- Misc ---
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
