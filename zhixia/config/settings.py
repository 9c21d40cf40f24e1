"""Configuration management using Pydantic."""
from pathlib import Path
from functools import lru_cache
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

from .constants import (
    STORAGE_KEY,
    DEFAULT_DATA_FILE,
    DEFAULT_DATA_DIR,
    DEFAULT_MODEL,
    DEFAULT_ASSIST_DELAY,
    LOG_LEVELS
)


class Settings(BaseSettings):
    """Application settings loaded from environment and config files."""

    model_config = SettingsConfigDict(
        env_prefix="ZHIXIA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True
    )

    # Storage
    data_file: Path = Field(
        default=DEFAULT_DATA_FILE,
        description="JSON file backing the key-value store"
    )
    storage_key: str = Field(
        default=STORAGE_KEY,
        description="Namespace key holding the serialized project list"
    )

    # AI assist
    default_model: str = Field(
        default=DEFAULT_MODEL,
        description="Model used by the assist panels when none is given"
    )
    assist_delay: float = Field(
        default=DEFAULT_ASSIST_DELAY,
        ge=0,
        description="Seconds the assist stub waits before answering"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    @field_validator('data_file')
    @classmethod
    def expand_data_file(cls, v: Path) -> Path:
        """Expand ~ in the storage path."""
        return Path(v).expanduser()

    @field_validator('storage_key')
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        """Storage key must not be blank."""
        if not v.strip():
            raise ValueError("Storage key must not be empty")
        return v

    @field_validator('default_model')
    @classmethod
    def validate_default_model(cls, v: str) -> str:
        """Validate that the model is one the assist panels know."""
        from ..assist.templates import WRITING_MODELS
        known = [m.id for m in WRITING_MODELS]
        if v not in known:
            raise ValueError(f"Unknown model '{v}', must be one of: {', '.join(known)}")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {', '.join(LOG_LEVELS)}")
        return v

    def load_config_file(self, config_path: Path) -> None:
        """
        Load additional settings from a YAML config file.

        Values go through the same validators as the environment.

        Raises:
            ValidationError: If a value in the file is invalid
        """
        if config_path.exists():
            with open(config_path, encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}

            for key, value in config_data.items():
                if hasattr(self, key):
                    setattr(self, key, value)

    def save_config_file(self, config_path: Path) -> None:
        """Save current settings to a YAML config file."""
        config_data = {
            'data_file': str(self.data_file),
            'storage_key': self.storage_key,
            'default_model': self.default_model,
            'assist_delay': self.assist_delay,
            'log_level': self.log_level
        }

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config_data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()

    # Load user config if it exists
    user_config = DEFAULT_DATA_DIR / 'config.yaml'
    if user_config.exists():
        settings.load_config_file(user_config)

    # Load project config if it exists
    project_config = Path('config.yaml')
    if project_config.exists():
        settings.load_config_file(project_config)

    return settings
