"""
Configuration for the rirekisho layout command line.

Values are resolved in this order (later wins):
1. Defaults on LayoutConfig
2. YAML config file (rirekisho.yaml at the project root, or --config)
3. Environment variables (LOG_LEVEL, RIREKISHO_PAPER_SIZE, RIREKISHO_HIDE_MOTIVATION),
   including those loaded from a .env file
4. Command line flags (applied by the caller through LayoutConfig.merged)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rirekisho_layout.dimensions import PaperSize
from rirekisho_layout.errors import ConfigError
from rirekisho_layout.logger import get_logger
from rirekisho_layout.paths import DEFAULT_CONFIG_PATH

logger = get_logger("config")

ENV_OVERRIDES: Dict[str, str] = {
    "LOG_LEVEL": "log_level",
    "RIREKISHO_PAPER_SIZE": "paper_size",
    "RIREKISHO_HIDE_MOTIVATION": "hide_motivation",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LayoutConfig(BaseModel):
    """Resolved settings for one layout run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    paper_size: PaperSize = Field(default=PaperSize.A4, description="Paper size (a3, a4, b4, b5, letter)")
    hide_motivation: bool = Field(default=False, description="Omit the motivation box")
    chronological_order: Literal["asc", "desc"] = Field(default="asc", description="History row order")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("paper_size", mode="before")
    @classmethod
    def parse_paper_size(cls, v: Any) -> Any:
        return PaperSize.parse(v)

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v!r}")
        return level

    def merged(self, **overrides: Any) -> "LayoutConfig":
        """Return a copy with every non-None override applied and re-validated."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return LayoutConfig(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration override: {e}") from e


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def _env_values() -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for env_name, field_name in ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw:
            values[field_name] = raw
    return values


def load_config(path: Optional[Path] = None, use_env: bool = True) -> LayoutConfig:
    """
    Load layout configuration.

    Args:
        path: Explicit config file; must exist. When None, rirekisho.yaml at the
            project root is used if present.
        use_env: Whether environment variables (and .env) override the file

    Returns:
        Validated LayoutConfig

    Raises:
        ConfigError: If the file is missing, unreadable or has invalid values
    """
    values: Dict[str, Any] = {}

    if path is not None:
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        values.update(_read_config_file(path))
        logger.info(f"Loaded config from {path}")
    elif DEFAULT_CONFIG_PATH.exists():
        values.update(_read_config_file(DEFAULT_CONFIG_PATH))
        logger.info(f"Loaded config from {DEFAULT_CONFIG_PATH}")

    if use_env:
        load_dotenv()
        values.update(_env_values())

    try:
        return LayoutConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
