"""Configuration loading for csv-hashjoin."""

from .env_substitution import substitute_env_vars
from .loader import CONFIG_ENV_VAR, load_settings
from .settings import DEFAULT_OUTPUT_FILE, DEFAULT_STRATEGY, EngineSettings, LoggingSettings

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_OUTPUT_FILE",
    "DEFAULT_STRATEGY",
    "EngineSettings",
    "LoggingSettings",
    "load_settings",
    "substitute_env_vars",
]
