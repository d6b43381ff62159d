"""
MindCare Assessment Service - Configuration
============================================
Centralised settings. Values come from the environment (prefix
``MINDCARE_``) and from the project-level ``.env`` file.
"""
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# ── Paths ───────────────────────────────────────────────────────────────
PACKAGE_DIR = Path(__file__).resolve().parent                  # mindcare/
PROJECT_ROOT = PACKAGE_DIR.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")


class Settings(BaseSettings):
    """Runtime settings for the assessment service."""

    model_config = SettingsConfigDict(env_prefix="MINDCARE_", extra="ignore")

    app_name: str = "MindCare Assessment API"
    app_version: str = "1.0.0"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_color: bool = True

    # HTTP
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = ["*"]


settings = Settings()
