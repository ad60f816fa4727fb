"""
Site configuration.

Settings are read from ``BROKERSITE_*`` environment variables (or a local
``.env``) with defaults suitable for running the site locally.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BROKERSITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- App --
    APP_NAME: str = "Mortgage Application & Calculators"
    LOG_LEVEL: str = "INFO"

    # -- Submission --
    SUBMISSION_DELAY_SECONDS: float = Field(
        default=2.0,
        ge=0,
        description="Acknowledgment delay standing in for the submission round-trip.",
    )

    # -- Broker contact --
    BROKER_NAME: str = "Your Mortgage Broker"
    BROKER_EMAIL: str = ""
    BROKER_PHONE: str = ""


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
