"""Presentation settings.

Settings live in a small YAML file:

    group_digits: true
    show_row_index: false

Neither flag changes how lines evaluate; they only affect rendering.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError


class ConfigError(Exception):
    pass


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    group_digits: bool = True  # thousands separators in results
    show_row_index: bool = False  # leading row-number column


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from a YAML file. No path means defaults."""
    if path is None:
        return Settings()

    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ConfigError(f"cannot read settings {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping, got {type(data).__name__}")

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"{path}: {e}") from e
