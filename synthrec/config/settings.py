"""Application configuration."""

import os
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from synthrec.core.llm_client import DEFAULT_API_VERSION, DEFAULT_MAX_OUTPUT_TOKENS, AzureOpenAIConfig
from synthrec.services.cache.cache_store import (
    DEFAULT_CACHE_DIRECTORY,
    DEFAULT_CACHE_TTL_MS,
    CacheConfig,
)
from synthrec.utils.logging import get_logger

LOGGER = get_logger(__name__)


def find_env_file() -> Optional[Path]:
    """Find .env file in the working directory or the project root."""
    current_dir = os.path.dirname(os.path.abspath(__file__))

    possible_paths = [
        os.path.join(os.getcwd(), ".env"),
        os.path.join(os.path.dirname(os.path.dirname(current_dir)), ".env"),
    ]

    for path_str in possible_paths:
        if os.path.exists(path_str):
            path = Path(path_str)
            LOGGER.debug(f"Found .env file at: {path}")
            return path

    return None


ENV_FILE = find_env_file()

_BASE_CONFIG = dict(
    env_file=str(ENV_FILE) if ENV_FILE else None,
    env_file_encoding="utf-8",
    case_sensitive=False,
    extra="ignore",
    populate_by_name=True,
)


class LLMSettings(BaseSettings):
    """Azure OpenAI endpoint and retry settings."""

    endpoint: str = Field(default="", validation_alias="AZURE_OPENAI_ENDPOINT")
    api_key: str = Field(default="", validation_alias="AZURE_OPENAI_API_KEY")
    deployment_name: str = Field(default="", validation_alias="AZURE_OPENAI_DEPLOYMENT_NAME")
    api_version: str = Field(default=DEFAULT_API_VERSION, validation_alias="AZURE_OPENAI_API_VERSION")

    max_attempts: int = Field(default=3, ge=1, validation_alias="LLM_MAX_ATTEMPTS")
    retry_base_delay: float = Field(default=1.0, ge=0, validation_alias="LLM_RETRY_BASE_DELAY")
    timeout: float = Field(default=120.0, gt=0, validation_alias="LLM_TIMEOUT")
    max_output_tokens: int = Field(
        default=DEFAULT_MAX_OUTPUT_TOKENS, ge=1, validation_alias="LLM_MAX_OUTPUT_TOKENS"
    )

    model_config = SettingsConfigDict(**_BASE_CONFIG)

    def to_azure_config(self) -> AzureOpenAIConfig:
        return AzureOpenAIConfig(
            endpoint=self.endpoint,
            api_key=self.api_key,
            deployment_name=self.deployment_name,
            api_version=self.api_version,
        )


class CacheSettings(BaseSettings):
    """Generation cache settings."""

    enabled: bool = Field(default=True, validation_alias="CACHE_ENABLED")
    directory: Path = Field(default=DEFAULT_CACHE_DIRECTORY, validation_alias="CACHE_DIRECTORY")
    ttl_ms: int = Field(default=DEFAULT_CACHE_TTL_MS, ge=0, validation_alias="CACHE_TTL_MS")

    model_config = SettingsConfigDict(**_BASE_CONFIG)

    def to_cache_config(self) -> CacheConfig:
        return CacheConfig(enabled=self.enabled, directory=self.directory, ttl_ms=self.ttl_ms)


class Settings(BaseSettings):
    """Unified application settings with nested models."""

    # Application Settings
    app_name: str = Field(default="Synthrec - Synthetic Record Generator", validation_alias="APP_NAME")
    app_version: str = "0.1.0"
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    debug: bool = Field(default=False, validation_alias="DEBUG")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # API Settings
    api_v1_prefix: str = "/api/v1"
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")

    # Nested Settings
    llm: LLMSettings = Field(default_factory=lambda: LLMSettings())
    cache: CacheSettings = Field(default_factory=lambda: CacheSettings())

    model_config = SettingsConfigDict(**_BASE_CONFIG)


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings: Application settings loaded from environment
    """
    return Settings()


# Global settings instance
settings = get_settings()

LOGGER.debug(
    f"Settings initialized with environment: {settings.environment}",
    extra={
        "deployment": settings.llm.deployment_name,
        "api_key_present": bool(settings.llm.api_key),
        "cache_enabled": settings.cache.enabled,
    },
)
