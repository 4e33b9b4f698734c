"""Environment variable substitution for configuration values.

Supports ${VAR_NAME} and ${VAR_NAME:default_value} syntax.
"""

from __future__ import annotations

import os
import re
from typing import Any, Optional

from hashjoin.exceptions import ConfigValidationError

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


def substitute_env_vars(value: Any, *, key_path: str = "", config_path: Optional[str] = None) -> Any:
    """Recursively substitute environment variables in config values.

    Supports:
    - ${VAR_NAME} - fails if VAR_NAME not set
    - ${VAR_NAME:default} - uses default if VAR_NAME not set

    Args:
        value: Config value (str, dict, list, or primitive)
        key_path: Dotted location of ``value``, used in error messages
        config_path: Config file the value came from, used in error messages

    Returns:
        Value with environment variables substituted

    Raises:
        ConfigValidationError: If a required environment variable is not set
    """
    if isinstance(value, str):

        def replacer(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2)

            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            if default_value is not None:
                return default_value
            raise ConfigValidationError(
                f"Environment variable '{var_name}' is not set and no default provided",
                config_path=config_path,
                key=key_path or None,
            )

        return _ENV_VAR_PATTERN.sub(replacer, value)

    if isinstance(value, dict):
        return {
            k: substitute_env_vars(
                v, key_path=f"{key_path}.{k}" if key_path else str(k), config_path=config_path
            )
            for k, v in value.items()
        }

    if isinstance(value, list):
        return [
            substitute_env_vars(item, key_path=f"{key_path}[{i}]", config_path=config_path)
            for i, item in enumerate(value)
        ]

    return value
