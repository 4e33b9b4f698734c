from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from hashjoin.exceptions import ConfigValidationError

from .env_substitution import substitute_env_vars
from .settings import EngineSettings

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HASHJOIN_CONFIG"
CONFIG_SECTION = "hashjoin"


def _read_yaml(path: str) -> Dict[str, Any]:
    logger.debug("Loading config from %s", path)

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigValidationError(f"Config file not found: {path}", config_path=path)

    try:
        with open(path, "r", encoding="utf-8") as handle:
            cfg = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in config file: {exc}", config_path=path) from exc
    except OSError as exc:
        raise ConfigValidationError(f"Cannot read config file: {exc}", config_path=path) from exc

    if not isinstance(cfg, dict):
        raise ConfigValidationError("Config must be a YAML dictionary/object", config_path=path)

    return cfg


def _first_error_key(exc: ValidationError) -> Optional[str]:
    errors = exc.errors()
    if not errors:
        return None
    return ".".join(str(part) for part in errors[0].get("loc", ())) or None


def load_settings(path: Optional[Union[str, Path]] = None) -> EngineSettings:
    """Load engine settings from a YAML file.

    The file location comes from ``path`` or, when omitted, the
    ``HASHJOIN_CONFIG`` environment variable. Without either, defaults apply.

    Args:
        path: Path to config YAML file

    Returns:
        Validated settings

    Raises:
        ConfigValidationError: If the file is missing, malformed or invalid
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return EngineSettings()

    path_str = str(path)
    raw = _read_yaml(path_str)
    if CONFIG_SECTION not in raw:
        raise ConfigValidationError(
            f"Config must include a '{CONFIG_SECTION}' section", config_path=path_str
        )
    section = raw[CONFIG_SECTION] or {}
    if not isinstance(section, dict):
        raise ConfigValidationError(
            f"'{CONFIG_SECTION}' section must be a mapping",
            config_path=path_str,
            key=CONFIG_SECTION,
        )

    section = substitute_env_vars(section, key_path=CONFIG_SECTION, config_path=path_str)
    try:
        settings = EngineSettings.model_validate(section)
    except ValidationError as exc:
        key = _first_error_key(exc)
        raise ConfigValidationError(
            f"Invalid configuration: {exc.errors()[0]['msg']}",
            config_path=path_str,
            key=f"{CONFIG_SECTION}.{key}" if key else CONFIG_SECTION,
        ) from exc

    logger.debug(
        "Settings loaded from %s (default_strategy=%s, default_output=%s)",
        path_str,
        settings.default_strategy,
        settings.default_output,
    )
    return settings
