"""Application settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


@dataclass(frozen=True)
class CosmosConfig:
    endpoint: str = field(default_factory=lambda: _env("COSMOS_ENDPOINT"))
    key: str = field(default_factory=lambda: _env("COSMOS_KEY"))
    database_prefix: str = field(
        default_factory=lambda: _env("COSMOS_DATABASE_PREFIX", "twiglet-")
    )

    def database_name(self, tenant: str) -> str:
        """Return the per-tenant database name."""
        return f"{self.database_prefix}{tenant}"


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("APP_ENV", "development"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    secret_key: str = field(default_factory=lambda: _env("SECRET_KEY"))
    default_tenant: str = field(default_factory=lambda: _env("DEFAULT_TENANT", "default"))

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class MonitorConfig:
    connection_string: str = field(
        default_factory=lambda: _env("APPLICATIONINSIGHTS_CONNECTION_STRING")
    )


@dataclass(frozen=True)
class Settings:
    cosmos: CosmosConfig = field(default_factory=CosmosConfig)
    app: AppConfig = field(default_factory=AppConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)


def load_settings() -> Settings:
    """Load ``.env`` (if present) and build the settings tree."""
    load_dotenv()
    return Settings()
