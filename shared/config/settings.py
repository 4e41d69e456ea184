"""
Settings Module
===============

Pydantic-based configuration with environment variable loading.

Version: 0.1.0
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DatabaseSettings(BaseSettings):
    """Relational database configuration."""

    model_config = SettingsConfigDict(env_prefix="DATABASE_")

    url: str = "sqlite+aiosqlite:///./database/regulations.db"
    echo: bool = False
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured backend is SQLite."""
        return self.url.startswith("sqlite")

    @property
    def sqlite_path(self) -> Path | None:
        """Filesystem path of a file-backed SQLite database."""
        if not self.is_sqlite or ":memory:" in self.url:
            return None
        return Path(self.url.split("///", 1)[-1])


class ImportSettings(BaseSettings):
    """Data import pipeline configuration."""

    model_config = SettingsConfigDict(env_prefix="IMPORT_")

    use_live_source: bool = True
    max_parts_per_title: int = 3
    title_delay_seconds: float = 0.2
    part_delay_seconds: float = 0.3

    # Synthetic generator
    sample_seed: int | None = None

    # Federal Register / eCFR
    federal_register_url: str = "https://api.federalregister.gov/v1"
    probe_urls: str = (
        "https://www.ecfr.gov/api/versioner/v1,"
        "https://ecfr.federalregister.gov/api/versioner/v1,"
        "https://api.federalregister.gov/v1"
    )
    cfr_title: int = 21
    page_size: int = 20
    probe_timeout_seconds: float = 10.0
    request_timeout_seconds: float = 30.0
    requests_per_minute: int = 60
    max_retries: int = 3
    user_agent: str = "Federal-Regulations-Analyzer/1.0"

    @property
    def probe_urls_list(self) -> list[str]:
        """Parse probe URL string into list."""
        return [u.strip() for u in self.probe_urls.split(",") if u.strip()]


class AnalysisSettings(BaseSettings):
    """Metrics and scoring configuration."""

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_")

    recent_update_days: int = 365
    deregulation_min_words: int = 150
    top_agencies_limit: int = 10
    top_candidates_limit: int = 15


class CORSSettings(BaseSettings):
    """CORS configuration."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    origins: str = "http://localhost:3000,http://localhost:5173"
    allow_credentials: bool = True

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into list."""
        return [o.strip() for o in self.origins.split(",") if o.strip()]


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables with sensible defaults.
    Use the global `settings` singleton or call `get_settings()`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: LogLevel = LogLevel.INFO
    port: int = 3001

    # Project paths
    project_root: Path = Field(default_factory=lambda: Path(__file__).parent.parent.parent)

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    importer: ImportSettings = Field(default_factory=ImportSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings singleton.
    """
    return Settings()
