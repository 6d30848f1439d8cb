"""
Configuration management for the chess server client.

This module provides a typed interface to client configuration,
loading from the [tool.chess_client] table of pyproject.toml and
from CHESS_CLIENT_* environment variables.
"""

import os
import tomllib
from typing import Optional
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv


DEFAULT_BASE_URL = "http://localhost:3030"
ENV_PREFIX = "CHESS_CLIENT_"


class ClientConfiguration(BaseSettings):
    """
    Typed configuration object for the chess client.

    Values come from (highest priority first) environment variables,
    the TOML table passed in by from_toml(), and the field defaults.
    The object is immutable once built.
    """

    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Origin of the chess server"
    )
    timeout_seconds: float = Field(
        default=30.0, description="Per-request timeout in seconds"
    )
    log_level: str = Field(default="INFO", description="Logging level name")
    json_log_file: Optional[str] = Field(
        default=None, description="Optional path for JSON-formatted log output"
    )

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=None,  # .env is loaded explicitly by from_toml()
        case_sensitive=False,
        extra="forbid",  # Catch typos in config early
        frozen=True,
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url must not be empty")
        return value

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_toml(cls, config_file: Optional[Path] = None) -> "ClientConfiguration":
        """
        Create a ClientConfiguration from pyproject.toml.

        A missing file or a missing [tool.chess_client] table yields the
        defaults. Environment variables override values read from TOML.

        Args:
            config_file: Path to TOML file (defaults to pyproject.toml)

        Returns:
            ClientConfiguration instance
        """
        # Load .env file if it exists to populate environment variables
        load_dotenv()

        config_file = config_file or Path("pyproject.toml")

        toml_config = {}
        if config_file.exists():
            with open(config_file, "rb") as f:
                toml_data = tomllib.load(f)
            toml_config = toml_data.get("tool", {}).get("chess_client", {})

        # Init kwargs outrank env vars in pydantic-settings, so drop any
        # TOML value the environment already provides.
        env_names = {name.upper() for name in os.environ}
        config_dict = {
            key: value
            for key, value in toml_config.items()
            if f"{ENV_PREFIX}{key}".upper() not in env_names
        }

        return cls(**config_dict)
