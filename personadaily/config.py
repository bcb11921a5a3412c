"""Configuration loading for Persona Daily.

Settings live in a TOML file (``~/.config/personadaily/config.toml`` by
default). A missing or unreadable file falls back to defaults.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "personadaily"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "personadaily.db"
DEFAULT_EXPORT_DIR = Path.home() / "Documents"

DEFAULT_MODEL = "gemini-2.5-flash-preview-09-2025"


class GeminiSettings(BaseModel):
    """Generative AI endpoint settings."""

    api_key: str = Field(default="", description="API key (falls back to GEMINI_API_KEY)")
    model: str = Field(default=DEFAULT_MODEL, description="Model name")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")


class EstimatorSettings(BaseModel):
    """Retry policy for the gain estimator."""

    max_retries: int = Field(default=5, ge=0, description="Retries on rate limiting")
    initial_delay_ms: int = Field(default=1000, ge=0, description="First backoff delay")


class StorageSettings(BaseModel):
    """Database and export locations."""

    db_path: Path = Field(default=DEFAULT_DB_PATH, description="SQLite database file")
    export_dir: Path = Field(default=DEFAULT_EXPORT_DIR, description="Export directory")


class Settings(BaseModel):
    """All Persona Daily settings."""

    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    estimator: EstimatorSettings = Field(default_factory=EstimatorSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    def resolved_api_key(self) -> str:
        """API key from config, or from the GEMINI_API_KEY env var."""
        return self.gemini.api_key or os.environ.get("GEMINI_API_KEY", "")


def get_config_path() -> Path:
    """Config path, honouring the PERSONADAILY_CONFIG env var."""
    override = os.environ.get("PERSONADAILY_CONFIG")
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def load_config(config_path: Optional[Path] = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        config_path: Optional path override.

    Returns:
        Parsed settings, or defaults if the file is missing or invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        return Settings()

    try:
        data = toml.load(path)
        settings = Settings.model_validate(data)
    except (toml.TomlDecodeError, ValidationError, OSError) as e:
        logger.warning("Ignoring invalid config %s: %s", path, e)
        return Settings()

    storage = settings.storage
    return settings.model_copy(
        update={
            "storage": StorageSettings(
                db_path=storage.db_path.expanduser(),
                export_dir=storage.export_dir.expanduser(),
            )
        }
    )


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write a template configuration file.

    Args:
        config_path: Optional path override.

    Returns:
        Path of the written file.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    template = {
        "gemini": {
            "api_key": "",  # Leave empty to use GEMINI_API_KEY env var
            "model": DEFAULT_MODEL,
            "timeout": 30.0,
        },
        "estimator": {
            "max_retries": 5,
            "initial_delay_ms": 1000,
        },
        "storage": {
            "db_path": str(DEFAULT_DB_PATH),
            "export_dir": str(DEFAULT_EXPORT_DIR),
        },
    }

    with open(path, "w") as f:
        toml.dump(template, f)

    return path
