"""Configuration management for the resource and capacity API.

Provides:
- Config: base class with dict/JSON round-tripping
- AppConfig: application settings loaded from environment variables
"""

import json
import os as _os
from pathlib import Path
from typing import Any, Dict


class Config:
    """Base configuration class for organizing application settings."""

    def to_dict(self) -> Dict[str, Any]:
        """Return all public config attributes as a dictionary."""
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create a config instance, overriding attributes from *data*."""
        config = cls()
        for key, value in data.items():
            setattr(config, key, value)
        return config

    def save_json(self, path: Path) -> None:
        """Save configuration to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

    @classmethod
    def load_json(cls, path: Path) -> "Config":
        """Load configuration from a JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file is not valid JSON
        """
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)


def _env_int(name: str, default: int) -> int:
    raw = _os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


class AppConfig(Config):
    """Application-level configuration loaded from environment variables.

    All env vars have sensible defaults so the application works out of the
    box against a local MongoDB.

    Environment variables:
        MONGODB_URI: MongoDB connection string (default: mongodb://localhost:27017)
        DB_NAME: Database name (default: ResourceManagementAPP_DB)
        MONGODB_TIMEOUT_MS: Server selection timeout in ms (default: 5000)
        APP_PORT: API server port (default: 8000)
        APP_HOST: API server bind address (default: 127.0.0.1)
        APP_LOG_FORMAT: Logging format, "text" or "json" (default: text)
        APP_LOG_LEVEL: Root log level (default: INFO)
        APP_CORS_ORIGINS: Comma-separated allowed origins (default: *)
        CAPACITY_WINDOW_MONTHS: Default capacity summary window (default: 6)
    """

    def __init__(self) -> None:
        super().__init__()
        self.mongodb_uri = _os.getenv("MONGODB_URI", "mongodb://localhost:27017")
        self.db_name = _os.getenv("DB_NAME", "ResourceManagementAPP_DB")
        self.mongodb_timeout_ms = _env_int("MONGODB_TIMEOUT_MS", 5000)
        self.api_port = _env_int("APP_PORT", 8000)
        self.api_host = _os.getenv("APP_HOST", "127.0.0.1")
        self.log_format = _os.getenv("APP_LOG_FORMAT", "text")
        self.log_level = _os.getenv("APP_LOG_LEVEL", "INFO").upper()
        raw_origins = _os.getenv("APP_CORS_ORIGINS", "*")
        self.cors_origins: list[str] = (
            ["*"] if raw_origins == "*"
            else [o.strip() for o in raw_origins.split(",") if o.strip()]
        )
        self.capacity_window = _env_int("CAPACITY_WINDOW_MONTHS", 6)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()
