"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Persistence
    storage_file: Path = Field(
        default=Path("./data/rfp_storage.json"),
        description="JSON file backing the key/value namespace",
    )
    storage_key: str = Field(default="rfp_data", description="Key of the active RFP collection")
    share_storage_key: str = Field(
        default="rfp_share",
        description="Key of the last shared payload, used when a link would be too long",
    )

    # Sharing
    share_query_param: str = Field(default="data")
    share_base_url: str = Field(default="http://localhost:8000/browse.html")
    max_share_url_length: int = Field(default=2000, ge=64)

    # Export
    export_version: str = Field(default="1.0")
    export_file_name: str = Field(default="rfp_data.json")

    # Attachments
    handle_directory: Path | None = Field(
        default=None,
        description="Directory for resolved attachment files (system temp dir if unset)",
    )

    # Application Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    json_logs: bool = Field(default=False)
    environment: Literal["development", "staging", "production", "test"] = Field(
        default="development"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
