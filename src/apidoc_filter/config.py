"""Settings for the filter engine and the UI redirect helper.

Settings come from a YAML file passed explicitly, or named by the
APIDOC_FILTER_CONFIG environment variable. Anything missing falls back
to the defaults below.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from apidoc_filter.errors import ConfigError

CONFIG_ENV_VAR = "APIDOC_FILTER_CONFIG"


class FilterConfig(BaseModel):
    """Markers recognised by the access filter."""

    update_marker: str = "update"  # operation extension key, bare or x- prefixed
    request_hidden_marker: str = "RequestHidden"  # substring of Parameter.access
    update_suffix: str = "Update"
    read_only_threshold: int = 3


class UiConfig(BaseModel):
    """Options for redirecting documentation requests to the UI."""

    flag_param: str = "api-docs"
    ui_path: str = "/swagger-ui.html"
    doc_expansion: str = "list"
    has_default_models_expand_depth: bool = True


class Settings(BaseModel):
    filter: FilterConfig = Field(default_factory=FilterConfig)
    ui: UiConfig = Field(default_factory=UiConfig)


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from *path*, the environment, or defaults."""
    if path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        if not env_path:
            return Settings()
        path = Path(env_path)

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in settings file {path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e
