# grow_app/config/settings.py

import logging
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class AppSettings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Includes feature flags; every member of core.feature_flags.Feature
    must have a matching FEATURE_ENABLE_* attribute here.
    """
    # --- Application ---
    APP_ENV: str = "development"
    APP_TITLE: str = "UncompliGrow API"
    APP_VERSION: str = "1.0.0"

    # --- Store ---
    # Data lives only in process memory; this only controls the demo content
    SEED_DEMO_DATA: bool = True

    # --- Front end ---
    BACKEND_URL: str = "http://localhost:8000"

    # --- Logging / monitoring ---
    LOG_LEVEL: str = "INFO"
    ERROR_LOG_PATH: str = "error.log"
    SENTRY_DSN: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    CORS_ALLOW_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    # --- Feature Flags ---
    # Override via environment variables or .env file.
    FEATURE_ENABLE_TREE_VISUALIZATION: bool = True
    FEATURE_ENABLE_DAILY_CHALLENGES: bool = True
    FEATURE_ENABLE_GOAL_GRAPH: bool = True   # graphviz goal hierarchy on the Goals page

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )


settings = AppSettings()

logger.debug(">>> DEBUG SETTINGS: loaded <<<")
for key, value in settings.model_dump().items():
    if "DSN" in key:
        logger.debug(f">>> DEBUG SETTINGS: {key}: {'Loaded' if value else 'Missing/Empty'}")
    else:
        logger.debug(f">>> DEBUG SETTINGS: {key}: {value}")
