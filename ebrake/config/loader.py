import yaml
from pathlib import Path
from typing import Optional
from pydantic import ValidationError
from ebrake.domain.errors import ConfigError
from .models import EbrakeConfig

DEFAULT_CONFIG_NAME = ".ebrake.yaml"


def default_config_path() -> Path:
    return Path.home() / DEFAULT_CONFIG_NAME


def load_config(config_path: Optional[Path] = None) -> EbrakeConfig:
    """Loads the YAML config and parses it into an EbrakeConfig model.

    An explicit ``config_path`` must exist. Without one, ``~/.ebrake.yaml`` is
    read when present and built-in defaults are used otherwise.
    """
    required = config_path is not None
    if config_path is None:
        try:
            config_path = default_config_path()
        except RuntimeError as exc:
            raise ConfigError(f"Unable to find home directory: {exc}") from exc

    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as exc:
        if required:
            raise ConfigError(f"Unable to read config file: {config_path} (not found)") from exc
        return EbrakeConfig()
    except OSError as exc:
        raise ConfigError(f"Unable to read config file: {config_path} ({exc})") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed config file: {config_path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Malformed config file: {config_path}: expected a mapping at top level")

    try:
        return EbrakeConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file: {config_path}: {exc}") from exc
