"""Configuration file loader."""

import os
import re
from pathlib import Path
from typing import Optional
import yaml
from dotenv import load_dotenv

from lowlevel_skills.errors import ConfigError

from .settings import Settings

CONFIG_ENV_VAR = "LOWLEVEL_SKILLS_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/config.yaml")

# ${VAR} or ${VAR:-default}
_ENV_PATTERN = re.compile(r"^\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-(.*))?\}$")


def _expand_env_vars(obj):
    """Recursively expand ${VAR} and ${VAR:-default} strings."""
    if isinstance(obj, str):
        match = _ENV_PATTERN.match(obj)
        if match:
            var_name, default = match.groups()
            return os.environ.get(var_name) or (default or "")
        return obj
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    return obj


def resolve_config_path(config_path: Optional[Path] = None) -> Path:
    """Pick the config file: explicit path, then $LOWLEVEL_SKILLS_CONFIG, then default."""
    if config_path is not None:
        return Path(config_path)
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    return DEFAULT_CONFIG_PATH


def _read_config_file(path: Path) -> dict:
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}", str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config root must be a mapping, got {type(data).__name__}", str(path)
        )
    return data


def load_config(
    config_path: Optional[Path] = None,
    env_path: Optional[Path] = None,
) -> Settings:
    """Load configuration from YAML file and environment.

    The ``.env`` file is read first, so it can also supply
    ``LOWLEVEL_SKILLS_CONFIG`` and any ``${VAR}`` used by the YAML.

    Args:
        config_path: Path to config.yaml (default: $LOWLEVEL_SKILLS_CONFIG,
            then config/config.yaml). A missing file means defaults.
        env_path: Path to .env file (default: .env)

    Returns:
        Loaded Settings instance

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
        pydantic.ValidationError: If the file holds invalid values.
    """
    if env_path is None:
        env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path)

    config_data = {}
    config_path = resolve_config_path(config_path)
    if config_path.exists():
        config_data = _read_config_file(config_path)

    return Settings(**_expand_env_vars(config_data))
