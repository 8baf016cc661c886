"""
Automaton configuration management.

Provides centralized configuration with validation using Pydantic.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from automaton.core.models import SyncMode

# src/automaton/core/config.py -> repository checkout
DEFAULT_SOURCE_ROOT = Path(__file__).resolve().parents[3]


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_enabled: bool = True
    console_enabled: bool = False
    json_format: bool = False
    log_directory: Path = Field(default_factory=lambda: Path.home() / ".automaton" / "logs")

    @field_validator("log_directory", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()


class SyncOptions(BaseModel):
    """Options for a single sync run, built once from the command line."""

    model_config = ConfigDict(frozen=True)

    mode: SyncMode = SyncMode.LINK
    force: bool = False
    no_pull: bool = False
    skills_only: bool = False
    commands_only: bool = False
    agents: tuple[str, ...] = ()
    target_root: Path

    @field_validator("target_root", mode="before")
    @classmethod
    def expand_target(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator("agents", mode="before")
    @classmethod
    def dedupe_agents(cls, v: object) -> tuple[str, ...]:
        if isinstance(v, str):
            v = [v]
        return tuple(dict.fromkeys(v))  # type: ignore[arg-type]

    @field_validator("target_root")
    @classmethod
    def require_directory(cls, v: Path) -> Path:
        if not v.is_dir():
            raise ValueError(f"target directory does not exist: {v}")
        return v


class AutomatonConfig(BaseModel):
    """Main automaton configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    source_root: Path = DEFAULT_SOURCE_ROOT
    home_directory: Path = Field(default_factory=Path.home)

    @field_validator("source_root", "home_directory", mode="before")
    @classmethod
    def expand_dir(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()

    @property
    def commands_source(self) -> Path:
        return self.source_root / ".agents" / "commands"

    @property
    def skills_source(self) -> Path:
        return self.source_root / ".agents" / "skills"

    @classmethod
    def load(cls, config_path: Path | None = None) -> AutomatonConfig:
        """Load configuration from file or create default."""
        if config_path is None:
            config_path = Path.home() / ".automaton" / "config.json"

        if config_path.exists():
            with open(config_path) as f:
                data = json.load(f)
            return cls.model_validate(data)

        return cls()

    def save(self, config_path: Path | None = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = Path.home() / ".automaton" / "config.json"

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, default=str)

    def ensure_directories(self) -> None:
        """Create all required directories."""
        if self.logging.file_enabled:
            self.logging.log_directory.mkdir(parents=True, exist_ok=True)


def get_default_config() -> AutomatonConfig:
    """Get the default configuration."""
    return AutomatonConfig()


def load_config(config_path: Path | None = None) -> AutomatonConfig:
    """Load or create configuration."""
    config = AutomatonConfig.load(config_path)
    config.ensure_directories()
    return config
