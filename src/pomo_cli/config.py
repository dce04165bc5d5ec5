"""Configuration for pomo-cli.

Settings are read from ``config.json`` in the platform config directory when
it exists. The file is never written by the program.
"""

import json
import logging
from pathlib import Path
from typing import Literal, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class TimerConfig(BaseModel):
    """Defaults for blank fields in the setup form."""

    model_config = ConfigDict(populate_by_name=True)

    work: str = Field(default="25m")
    break_: str = Field(default="5m", alias="break")
    sessions: int = Field(default=4, ge=1)


class NotificationConfig(BaseModel):
    """Desktop notification configuration."""

    enabled: bool = Field(default=True)
    sound: bool = Field(default=True)
    timeout_ms: int = Field(default=5000, ge=0)
    sound_file: str = Field(default="/usr/share/sounds/alsa/Front_Left.wav")
    mac_sound_file: str = Field(default="/System/Library/Sounds/Glass.aiff")


class LoggingConfig(BaseModel):
    """Log file configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")


class AppConfig(BaseModel):
    """Main configuration."""

    timer: TimerConfig = Field(default_factory=TimerConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """Loads pomo-cli configuration."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path(user_config_dir("pomo_cli"))
        self.config_file = self.config_dir / "config.json"
        self._config: Optional[AppConfig] = None

    @property
    def config(self) -> AppConfig:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from file, falling back to defaults."""
        if not self.config_file.exists():
            return AppConfig()

        try:
            with open(self.config_file, encoding="utf-8") as f:
                data = json.load(f)
            return AppConfig.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Ignoring invalid config %s: %s", self.config_file, e)
            return AppConfig()


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
