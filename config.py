"""Configuration module for the journal tool.

This module provides configuration settings using Pydantic Settings.
Values come from a YAML file and can be overridden with environment variables
prefixed JOURNAL__, using "__" to reach nested keys.
Example: export JOURNAL__PULL_REQUESTS__AUTH__PERSONAL_ACCESS_TOKEN="ghp_..."
"""

import os
from pathlib import Path
from typing import Optional

import pydantic
import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict, YamlConfigSettingsSource

from exceptions import ConfigError
from pull_requests import PullRequestConfig

CONFIG_ENV_VAR = "JOURNAL__CONFIG"

DEFAULT_NOTES_TEMPLATE = """## Notes

> This is where your notes will go!
"""


def config_path() -> Path:
    """Path of the YAML configuration: $JOURNAL__CONFIG or ~/.journal.yaml."""
    configured = os.environ.get(CONFIG_ENV_VAR)
    if configured:
        return Path(configured)
    return Path.home() / ".journal.yaml"


class ReminderConfig(BaseModel):
    """Reminder commands only run when this section is present and enabled."""
    enabled: bool = True


class NotesConfig(BaseModel):
    enabled: bool = True
    template: str = DEFAULT_NOTES_TEMPLATE


class TodoConfig(BaseModel):
    enabled: bool = True
    template: Optional[str] = None
    """Custom section template; receives {todos}"""


class Settings(BaseSettings):
    """Application settings for the journal tool.

    All settings can be overridden via environment variables.
    Example: export JOURNAL__DIR="~/journal"
    """

    model_config = SettingsConfigDict(
        env_prefix="JOURNAL__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    dir: Path
    """Directory holding the daily pages and the reminder store"""

    reminders: Optional[ReminderConfig] = None
    pull_requests: Optional[PullRequestConfig] = None
    notes: NotesConfig = NotesConfig()
    todo: TodoConfig = TodoConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment wins over the YAML file
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=config_path()),
        )

    @property
    def journal_dir(self) -> Path:
        return self.dir.expanduser()

    @property
    def reminders_enabled(self) -> bool:
        return self.reminders is not None and self.reminders.enabled

    def to_yaml(self) -> str:
        """Effective configuration as YAML, with secrets masked."""
        return yaml.safe_dump(self.model_dump(mode="json"), sort_keys=False)


def load_settings() -> Settings:
    """Load settings from the YAML file and environment.

    Raises:
        ConfigError: If the file is missing or the configuration is invalid
    """
    path = config_path()
    if not path.exists():
        raise ConfigError(
            f"{path} does not exist. We need a configuration file to work.\n"
            f"You can either use a '.journal.yaml' file in your HOME directory "
            f"or configure it with the {CONFIG_ENV_VAR} environment variable"
        )

    try:
        return Settings()
    except pydantic.ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}:\n{e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"{path} is not valid YAML: {e}") from e
