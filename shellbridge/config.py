"""Configuration loading and validation using Pydantic."""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from shellbridge.infrastructure.config import YAMLConfigLoader

DEFAULT_CONFIG_PATH = "shellbridge.yaml"
CLAUDE_DIR = Path.home() / ".claude"

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "SHELLBRIDGE_TERMINAL_URL": ("terminal", "url"),
    "SHELLBRIDGE_TERMINAL_MODE": ("terminal", "mode"),
    "SHELLBRIDGE_PROJECT": ("terminal", "default_project"),
    "SHELLBRIDGE_KNOWLEDGE_URL": ("knowledge", "url"),
    "SHELLBRIDGE_HISTORY_FILE": ("watcher", "history_file"),
    "SHELLBRIDGE_LOG_DIR": ("watcher", "log_dir"),
}


class TerminalConfig(BaseModel):
    """Remote terminal configuration."""

    url: str = "ws://localhost:5400/ws"
    mode: str = "mcp"
    default_project: str = Field(default_factory=os.getcwd)
    connect_timeout_ms: int = Field(default=10_000, ge=100)
    default_wait_ms: int = Field(default=5000, ge=0)
    max_buffer_chars: int = Field(default=50_000, ge=2)
    truncate_to_chars: int = Field(default=30_000, ge=1)

    @model_validator(mode="after")
    def validate_truncation(self) -> "TerminalConfig":
        """Truncation target must sit below the buffer ceiling."""
        if self.truncate_to_chars >= self.max_buffer_chars:
            raise ValueError("truncate_to_chars must be smaller than max_buffer_chars")
        return self


class KnowledgeConfig(BaseModel):
    """Knowledge-store API configuration."""

    url: str = "http://localhost:5403"
    timeout: float = Field(default=30.0, gt=0)


class WatcherConfig(BaseModel):
    """Transcript watcher configuration."""

    checkpoint_interval: float = Field(default=1800.0, gt=0)
    poll_interval: float = Field(default=5.0, gt=0)
    history_file: Path = CLAUDE_DIR / "history.jsonl"
    log_dir: Path = CLAUDE_DIR / "shellbridge-logs"
    max_entry_chars: int = Field(default=2000, ge=1)


class Config(BaseModel):
    """Application configuration."""

    terminal: TerminalConfig = Field(default_factory=TerminalConfig)
    knowledge: KnowledgeConfig = Field(default_factory=KnowledgeConfig)
    watcher: WatcherConfig = Field(default_factory=WatcherConfig)


def apply_env_overrides(data: dict, environ: Mapping[str, str]) -> dict:
    """Overlay environment variables onto raw config data."""
    for var, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(var)
        if value:
            section_data = data.get(section) or {}
            section_data[key] = value
            data[section] = section_data
    return data


def load_config(
    config_path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load configuration from YAML, then apply environment overrides."""
    environ = os.environ if environ is None else environ
    path = config_path or environ.get("SHELLBRIDGE_CONFIG_PATH", DEFAULT_CONFIG_PATH)

    data = YAMLConfigLoader(path).load()
    data = apply_env_overrides(data, environ)

    return Config.model_validate(data)
