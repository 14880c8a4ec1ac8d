"""
Configuration loader — reads config.yml into a Settings model.

Everything has a default, so the file is optional. It reads YAML,
validates against the Pydantic schema, and returns typed settings.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "config.yml"
CONFIG_ENV_VAR = "LINMAINT_CONFIG"


class ConfigError(Exception):
    """Raised when configuration is invalid or an explicit file is missing."""


class Settings(BaseModel):
    """Tunables for the maintenance tasks and the external collaborators."""

    model_config = ConfigDict(extra="forbid")

    log_file: str = "/tmp/linmaint.log"

    # External collaborators
    menu_tool: str = "rofi"
    notify_tool: str = "notify-send"
    privilege_tool: str = "sudo"
    fsck_path: str = "/sbin/fsck"

    # Optimize Performance
    swappiness: int = Field(default=10, ge=0, le=200)
    sysctl_conf: str = "/etc/sysctl.d/99-swappiness.conf"
    disabled_services: list[str] = Field(
        default_factory=lambda: ["bluetooth.service", "cups.service"]
    )

    # Clean Journal Logs
    journal_retention: str = "2weeks"

    # Update Mirrors (Arch)
    mirror_count: int = Field(default=20, ge=1)
    mirrorlist: str = "/etc/pacman.d/mirrorlist"

    # Critical "finished with errors" notices instead of plain "done"
    report_failures: bool = False

    @field_validator("journal_retention")
    @classmethod
    def _retention_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("journal_retention must not be empty")
        return v.strip()


def default_config_path() -> Path:
    """``$XDG_CONFIG_HOME/linmaint/config.yml`` (or ``~/.config``)."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "linmaint" / CONFIG_FILE


def find_config_file(explicit: Path | None = None) -> tuple[Path | None, bool]:
    """Resolve which config file to read.

    Precedence: explicit path > LINMAINT_CONFIG env var > XDG default.

    Returns:
        (path, required). ``required`` is True when the user named the
        file, in which case its absence is an error. The XDG default may
        simply not exist.
    """
    if explicit is not None:
        return explicit, True

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True

    default = default_config_path()
    return (default if default.is_file() else None), False


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit path to a config file. If None, uses the env var
            or the XDG default, falling back to built-in defaults.

    Returns:
        Validated Settings model.

    Raises:
        ConfigError: If an explicitly requested file is missing or any
            file is invalid.
    """
    resolved, required = find_config_file(path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return Settings()

    if not resolved.is_file():
        if required:
            raise ConfigError(f"Config file not found: {resolved}")
        return Settings()

    logger.debug("Loading settings from %s", resolved)

    try:
        raw = resolved.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {resolved}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {resolved}: {e}") from e

    # An empty file is as good as no file
    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {resolved}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.info("Loaded settings from %s", resolved)
    return settings
