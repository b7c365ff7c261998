"""Process settings: defaults, then a YAML file, then environment variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

ENV_PREFIX = "CLOUDMCP_"
CONFIG_ENV_VAR = f"{ENV_PREFIX}CONFIG"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Runtime configuration shared by the CLI and the MCP server (``CLOUDMCP_*``)."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    log_level: str = Field(default="WARNING", description="Diagnostic log level")
    loader_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Upper bound for a single suggestion loader"
    )
    inventory_path: Path | None = Field(
        default=None, description="YAML inventory answering service requests offline"
    )
    server_name: str = Field(default="cloudmcp", description="MCP server name")
    hidden_groups: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["tools", "server"],
        description="Name segments whose commands are not offered as tools",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Constructor values carry the config file, so the environment wins over them.
        return env_settings, init_settings

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("hidden_groups", mode="before")
    @classmethod
    def _split_groups(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path) as f:
        payload = yaml.safe_load(f) or {}
    if not isinstance(payload, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return payload


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Resolve settings; later sources override earlier ones."""
    path = config_path or os.environ.get(CONFIG_ENV_VAR)
    values = _read_config_file(Path(path)) if path else {}
    return Settings(**values)
