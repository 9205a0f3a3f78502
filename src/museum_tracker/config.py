"""
Configuration management for the museum tracker.

Loads settings from environment variables and config file, with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MUSEUM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base_url: str = Field(
        default="https://api.hypixel.net", description="Hypixel API base URL"
    )
    api_timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")
    user_agent: str = Field(default="MuseumTracker/1.0", description="Outbound User-Agent")
    data_dir: Path = Field(
        default_factory=lambda: Path("data"),
        description="Directory holding catalog snapshots and request logs",
    )
    cache_dir: Path = Field(
        default_factory=lambda: Path(".cache/museum"),
        description="Cache storage directory",
    )
    log_requests: bool = Field(
        default=True, description="Write raw museum payloads to data_dir/logs"
    )
    log_level: str = Field(default="INFO", description="Logging level")
    host: str = Field(default="127.0.0.1", description="HTTP bind address")
    port: int = Field(default=3000, description="HTTP port")

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    global _settings
    _settings = Settings()
    return _settings
