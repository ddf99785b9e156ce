"""Configuration management for ghostcal.

Settings live in ``~/.ghostcal.json`` (or the path in ``GHOSTCAL_CONFIG``).
Command-line flags override anything set there.
"""

import json
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ghostcal.core.classify import IntensityThresholds
from ghostcal.utils.log import get_logger


logger = get_logger()

CONFIG_ENV_VAR = "GHOSTCAL_CONFIG"


def default_loader_commands() -> List[List[str]]:
    """Loader commands tried in order until one returns activity."""
    home = Path.home()
    return [
        [str(home / "bin" / "cc-agent-load"), "--json"],
        ["node", str(home / "projects" / "cc-loop" / "cc-agent-load" / "cli.mjs"), "--json"],
    ]


class ThresholdConfig(BaseModel):
    """Hour boundaries between intensity levels."""

    floor: float = Field(default=0.0, ge=0)
    moderate: float = 1.0
    heavy: float = 4.0

    @model_validator(mode="after")
    def _check_order(self) -> "ThresholdConfig":
        if not self.floor < self.moderate < self.heavy:
            raise ValueError("thresholds must satisfy floor < moderate < heavy")
        return self

    def to_thresholds(self) -> IntensityThresholds:
        return IntensityThresholds(floor=self.floor, moderate=self.moderate, heavy=self.heavy)


class GhostcalConfig(BaseModel):
    """User configuration stored in ~/.ghostcal.json"""

    window_weeks: int = Field(default=26, ge=1)
    theme: str = "dark"
    loader_commands: List[List[str]] = Field(default_factory=default_loader_commands)
    loader_timeout: float = Field(default=30.0, gt=0)
    thresholds: ThresholdConfig = Field(default_factory=ThresholdConfig)

    @field_validator("loader_commands")
    @classmethod
    def _drop_empty_commands(cls, value: List[List[str]]) -> List[List[str]]:
        return [command for command in value if command]

    @field_validator("theme")
    @classmethod
    def _normalize_theme(cls, value: str) -> str:
        return value.strip().lower()


def config_path_from_env() -> Path:
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".ghostcal.json"


class ConfigManager:
    """Loads, caches and saves the user configuration."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self.config_path = config_path or config_path_from_env()
        self._config: Optional[GhostcalConfig] = None

    def get_config(self) -> GhostcalConfig:
        """Load and return the configuration."""
        if self._config is None:
            if self.config_path.exists():
                try:
                    data = json.loads(self.config_path.read_text(encoding="utf-8"))
                    self._config = GhostcalConfig(**data)
                    logger.debug(
                        "[config] Loaded configuration",
                        extra={"path": str(self.config_path)},
                    )
                except (
                    json.JSONDecodeError,
                    OSError,
                    UnicodeDecodeError,
                    ValueError,
                    TypeError,
                ) as e:
                    logger.warning(
                        "Error loading config: %s: %s",
                        type(e).__name__,
                        e,
                        extra={"error": str(e), "path": str(self.config_path)},
                    )
                    self._config = GhostcalConfig()
            else:
                self._config = GhostcalConfig()
                logger.debug(
                    "[config] Config not found; using defaults",
                    extra={"path": str(self.config_path)},
                )
        return self._config

    def save_config(self, config: GhostcalConfig) -> None:
        """Save the configuration."""
        self._config = config
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(config.model_dump_json(indent=2), encoding="utf-8")
        logger.debug(
            "[config] Saved configuration",
            extra={"path": str(self.config_path)},
        )


__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigManager",
    "GhostcalConfig",
    "ThresholdConfig",
    "config_path_from_env",
    "default_loader_commands",
]
