"""Configuration management for the cmdkit console script.

Loads YAML settings (settings.yaml) and environment variables (.env)
into a Config object. Property getters provide safe access with
defaults; validate() checks the raw settings against a pydantic model.

The interpreter core (Cmd, HandlerRegistry) never reads configuration.
Only the composition root in main.py does.

Key classes:
    Config: Configuration manager.
    SettingsModel: pydantic schema for settings.yaml.

Key functions:
    get_config: Accessor for the global Config instance.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .logging_config import get_logger

logger = get_logger("cmdkit")

DEFAULT_PROMPT = "(cmd) "
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingSettingsModel(BaseModel):
    """The ``logging:`` section of settings.yaml."""

    level: str = "WARNING"
    subsystem_levels: Dict[str, str] = Field(default_factory=dict)
    max_file_size_mb: int = Field(default=10, ge=1)
    backup_count: int = Field(default=5, ge=0)

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        if value.upper() not in _LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(_LOG_LEVELS)}")
        return value

    @field_validator("subsystem_levels")
    @classmethod
    def _check_subsystem_levels(cls, value: Dict[str, str]) -> Dict[str, str]:
        for subsystem, level in value.items():
            if str(level).upper() not in _LOG_LEVELS:
                raise ValueError(f"invalid level {level!r} for {subsystem}")
        return value


class SettingsModel(BaseModel):
    """Schema for settings.yaml."""

    prompt: str = DEFAULT_PROMPT
    quit_commands: List[str] = Field(default_factory=lambda: ["quit"])
    touch_base_dir: Optional[str] = None
    log_dir: Optional[str] = None
    logging: LoggingSettingsModel = Field(default_factory=LoggingSettingsModel)

    @field_validator("quit_commands")
    @classmethod
    def _check_quit_commands(cls, value: List[str]) -> List[str]:
        for name in value:
            if not name or name.split() != [name]:
                raise ValueError(f"invalid command name {name!r}")
        return value


class Config:
    """Configuration manager for the cmdkit console script.

    Loads settings.yaml and .env from the config directory.

    Args:
        config_dir: Path to the config directory. Defaults to
            ``$CMDKIT_CONFIG_DIR`` or ``./config``.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = Path(os.environ.get("CMDKIT_CONFIG_DIR", "config"))
        self.config_dir = Path(config_dir)

        env_file = self.config_dir / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        self.settings = self._load_yaml("settings.yaml")

    def _load_yaml(self, filename: str) -> dict:
        """Load a YAML configuration file."""
        filepath = self.config_dir / filename
        if filepath.exists():
            try:
                with open(filepath, "r") as f:
                    data = yaml.safe_load(f) or {}
            except (yaml.YAMLError, OSError) as e:
                raise ConfigurationError(
                    f"Cannot load settings file: {e}",
                    file=str(filepath),
                ) from e
            if not isinstance(data, dict):
                raise ConfigurationError(
                    "Top level of settings file must be a mapping",
                    file=str(filepath),
                )
            return data
        return {}

    def _errors(self) -> List[dict]:
        try:
            SettingsModel.model_validate(self.settings)
        except ValidationError as e:
            return e.errors()
        return []

    def validate(self) -> bool:
        """Validate settings at startup.

        Logs one error per invalid value but does not raise; property
        getters fall back to defaults for anything unusable.
        """
        errors = self._errors()
        for err in errors:
            logger.error(
                "config_invalid_value",
                key=".".join(str(part) for part in err["loc"]),
                error=err["msg"],
            )
        return not errors

    def require_valid(self) -> None:
        """Raise ConfigurationError on the first invalid setting."""
        errors = self._errors()
        if errors:
            first = errors[0]
            key = ".".join(str(part) for part in first["loc"])
            raise ConfigurationError(
                f"Invalid setting {key}: {first['msg']}",
                setting_name=key,
            )

    @property
    def prompt(self) -> str:
        """Prompt text. Env var CMDKIT_PROMPT takes precedence."""
        env_prompt = os.environ.get("CMDKIT_PROMPT")
        if env_prompt is not None:
            return env_prompt
        prompt = self.settings.get("prompt", DEFAULT_PROMPT)
        if not isinstance(prompt, str):
            return DEFAULT_PROMPT
        return prompt

    @property
    def quit_commands(self) -> List[str]:
        """Names registered to the Quit handler (default ["quit"])."""
        names = self.settings.get("quit_commands", ["quit"])
        if not isinstance(names, list):
            logger.error("quit_commands_invalid_type", type=type(names).__name__)
            return ["quit"]
        return names

    @property
    def touch_base_dir(self) -> Path:
        """Directory the demo touch command creates files in."""
        configured = self.settings.get("touch_base_dir")
        if configured:
            return Path(configured).expanduser()
        return Path.cwd()

    @property
    def log_dir(self) -> Optional[Path]:
        """Log directory path. None disables file logging."""
        configured = self.settings.get("log_dir")
        if configured:
            return Path(configured).expanduser()
        return None

    @property
    def logging_level(self) -> str:
        """Console and combined-file log level (default WARNING)."""
        log_config = self.settings.get("logging") or {}
        return log_config.get("level", "WARNING")

    @property
    def logging_subsystem_levels(self) -> dict:
        """Per-subsystem log level overrides. E.g. {"loop": "DEBUG"}."""
        log_config = self.settings.get("logging") or {}
        return log_config.get("subsystem_levels") or {}

    @property
    def logging_max_file_size_mb(self) -> int:
        """Max size per log file in MB before rotation (default 10)."""
        log_config = self.settings.get("logging") or {}
        return log_config.get("max_file_size_mb", 10)

    @property
    def logging_backup_count(self) -> int:
        """Number of rotated log files to keep (default 5)."""
        log_config = self.settings.get("logging") or {}
        return log_config.get("backup_count", 5)


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the global config instance so the next get_config() reloads."""
    global _config
    _config = None
