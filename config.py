"""
Application settings.

Values come from environment variables; a ``.env`` file in the working
directory is loaded first so local development does not need exported
variables. Defaults point at a local MongoDB instance.
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _split_origins(value: str) -> List[str]:
    origins = [origin.strip() for origin in value.split(",") if origin.strip()]
    return origins or ["*"]


@dataclass
class Settings:
    """Settings read from the environment at instantiation time."""

    project_name: str = os.getenv("PROJECT_NAME", "Coffee Shop API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    database_url: str = os.getenv("DATABASE_URL", "mongodb://localhost:27017")
    database_name: str = os.getenv("DATABASE_NAME", "coffee_shops")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    port: int = int(os.getenv("PORT", "5000"))
    allowed_origins: List[str] = field(
        default_factory=lambda: _split_origins(os.getenv("ALLOWED_ORIGINS", "*"))
    )


settings = Settings()
