"""
Configuration management for MedScribe application.

This module provides centralized configuration using Pydantic Settings
for environment-based configuration management. Service credentials entered
by the clinician are not configuration: they live in the persisted API
settings document (see domain.entities.api_settings).
"""

from typing import List, Optional

import os
from pathlib import Path

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Document storage configuration settings."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    backend: str = Field(default="file", description="Document store backend (file, mongo, memory)")
    path: str = Field(default="./storage", description="Directory for the file backend")

    @validator("backend")
    def validate_backend(cls, v: str) -> str:
        """Validate storage backend."""
        valid_backends = ["file", "mongo", "memory"]
        if v.lower() not in valid_backends:
            raise ValueError(f"Storage backend must be one of: {valid_backends}")
        return v.lower()


class DatabaseSettings(BaseSettings):
    """MongoDB configuration settings (used by the mongo storage backend)."""

    model_config = SettingsConfigDict(env_prefix="MONGO_")

    uri: str = Field(default="", description="MongoDB connection URI")
    db_name: str = Field(default="medscribe", description="MongoDB database name")

    @validator("uri")
    def validate_mongo_uri(cls, v: str) -> str:
        """Validate MongoDB URI format."""
        if v and not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(
                "MongoDB URI must start with 'mongodb://' or 'mongodb+srv://'"
            )
        return v


class SpeechSettings(BaseSettings):
    """Speech recognition configuration settings."""

    model_config = SettingsConfigDict(env_prefix="SPEECH_")

    recognition_language: str = Field(default="en-US", description="Recognition language")
    default_region: str = Field(default="eastus", description="Region preselected in the settings form")
    supported_regions: List[str] = Field(
        default=["eastus", "westus2", "centralus", "westeurope"],
        description="Regions offered by the settings form",
    )
    microphone_enabled: bool = Field(default=True, description="Allow recording from the default microphone")

    @validator("default_region")
    def validate_region(cls, v: str) -> str:
        """Validate Azure region format."""
        if v and not v.replace("-", "").replace("_", "").isalnum():
            raise ValueError("Invalid Azure region format")
        return v


class CompletionSettings(BaseSettings):
    """Chat-completion request configuration settings."""

    model_config = SettingsConfigDict(env_prefix="COMPLETION_")

    max_tokens: int = Field(default=1500, description="Maximum tokens for generated notes")
    temperature: float = Field(default=0.3, description="Sampling temperature for generated notes")
    default_deployment: str = Field(default="gpt-4.1", description="Deployment preselected in the settings form")
    default_api_version: str = Field(default="2024-08-01-preview", description="API version preselected in the settings form")
    request_timeout: float = Field(default=120.0, description="Request timeout in seconds")

    @validator("temperature")
    def validate_temperature(cls, v: float) -> float:
        """Validate temperature."""
        if not 0.0 <= v <= 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")
        return v

    @validator("max_tokens")
    def validate_max_tokens(cls, v: int) -> int:
        """Validate max tokens."""
        if v <= 0:
            raise ValueError("max_tokens must be positive")
        return v


class NotesSettings(BaseSettings):
    """Patient history digest configuration settings."""

    model_config = SettingsConfigDict(env_prefix="NOTES_")

    history_visits: int = Field(default=3, description="Recent visits included in the prompt")
    history_note_chars: int = Field(default=200, description="Characters of each visit's notes included in the prompt")
    recent_visit_chars: int = Field(default=150, description="Characters of each visit's notes shown in the recent visits view")


class CORSSettings(BaseSettings):
    """CORS configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    allowed_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins",
    )
    allowed_methods: List[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        description="Allowed HTTP methods",
    )
    allowed_headers: List[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )
    allow_credentials: bool = Field(
        default=False, description="Allow credentials in CORS"
    )

    @validator("allowed_origins", pre=True)
    def parse_allowed_origins(cls, v):
        """Parse allowed origins from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string format
            if v.startswith("[") and v.endswith("]"):
                import json

                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    return [v.strip()]
            return [v.strip()]
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(default="json", description="Log format (json or text)")
    file_path: Optional[str] = Field(default=None, description="Log file path")

    @validator("level")
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @validator("format")
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        if v.lower() not in ["json", "text"]:
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="MedScribe", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    app_env: str = Field(default="development", description="Application environment")
    debug: bool = Field(default=False, description="Debug mode")
    port: int = Field(default=8000, description="Application port")
    host: str = Field(default="127.0.0.1", description="Application host")

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    speech: SpeechSettings = Field(default_factory=SpeechSettings)
    completion: CompletionSettings = Field(default_factory=CompletionSettings)
    notes: NotesSettings = Field(default_factory=NotesSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Override sub-settings with environment variables
        self.storage = StorageSettings()
        self.database = DatabaseSettings()
        self.speech = SpeechSettings()
        self.completion = CompletionSettings()
        self.notes = NotesSettings()
        self.cors = CORSSettings()
        self.logging = LoggingSettings()

    @validator("app_env")
    def validate_app_env(cls, v: str) -> str:
        """Validate application environment."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"App environment must be one of: {valid_envs}")
        return v.lower()

    @validator("port")
    def validate_port(cls, v: int) -> int:
        """Validate port number."""
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"


# Global settings instance (loaded after attempting to read .env)
_settings: Optional[Settings] = None


def _load_env_file_if_available() -> None:
    """Best-effort load of .env by searching current and parent directories.

    This helps in environments where the working directory isn't the project
    root and pydantic's env_file doesn't get resolved as expected.
    """
    from dotenv import load_dotenv

    cwd = Path(os.getcwd()).resolve()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / ".env"
        if candidate.exists():
            # Do not override already-set environment variables
            load_dotenv(dotenv_path=str(candidate), override=False)
            break


def get_settings() -> Settings:
    """Get application settings instance (lazy-init with .env discovery)."""
    global _settings
    if _settings is None:
        _load_env_file_if_available()
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
