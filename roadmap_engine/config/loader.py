# roadmap_engine/config/loader.py
"""
Reads roadmap-engine settings from config.yaml.

The file lives in the platformdirs user config directory. A missing file
is seeded with the defaults so users have something to edit; a file that
does not validate is reported as an input error naming the file.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from platformdirs import user_config_path
from pydantic import ValidationError

from roadmap_engine.errors import InvalidInputError

from .schema import RoadmapEngineConfig

logger = logging.getLogger(__name__)

APP_NAME = "roadmap-engine"
CONFIG_FILENAME = "config.yaml"


def get_config_path() -> Path:
    """Per-user config file location (the directory is created if needed)."""
    return user_config_path(APP_NAME, ensure_exists=True) / CONFIG_FILENAME


def _seed_defaults(path: Path) -> RoadmapEngineConfig:
    defaults = RoadmapEngineConfig()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(defaults.model_dump(mode="json"), default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )
    logger.info(f"Wrote default settings to {path}")
    return defaults


def _read_settings(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise InvalidInputError(f"Config {path} is not valid YAML: {e}", field="config") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInputError(
            f"Config {path} must be a mapping of sections, got {type(data).__name__}",
            field="config",
        )
    return data


def load_config(config_path: Path | None = None) -> RoadmapEngineConfig:
    """
    Load engine settings.

    Args:
        config_path: File to read (defaults to the per-user config file)

    Returns:
        Validated RoadmapEngineConfig; defaults when the file was absent

    Raises:
        InvalidInputError: The file is not YAML, not a mapping, or has
            out-of-range values
    """
    path = config_path or get_config_path()
    if not path.exists():
        return _seed_defaults(path)

    try:
        config = RoadmapEngineConfig.model_validate(_read_settings(path))
    except ValidationError as e:
        raise InvalidInputError(f"Invalid settings in {path}: {e}", field="config") from e

    logger.debug(f"Loaded settings from {path}")
    return config
