"""Application settings, overridable from the environment."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_TITLE = "Python GUI Calculator"
DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 600
DEFAULT_LOG_LEVEL = "INFO"

ENV_PREFIX = "CALCULATOR_"


@dataclass
class AppConfig:
    """Window and logging settings."""

    title: str = DEFAULT_TITLE
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def _positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {value}")
    return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Build an AppConfig from CALCULATOR_* environment variables.

    Args:
        environ: Mapping to read instead of os.environ (used by tests).
    """
    env = os.environ if environ is None else environ
    config = AppConfig()

    if env.get(f"{ENV_PREFIX}TITLE"):
        config.title = env[f"{ENV_PREFIX}TITLE"]
    if env.get(f"{ENV_PREFIX}WIDTH"):
        config.width = _positive_int("WIDTH", env[f"{ENV_PREFIX}WIDTH"])
    if env.get(f"{ENV_PREFIX}HEIGHT"):
        config.height = _positive_int("HEIGHT", env[f"{ENV_PREFIX}HEIGHT"])
    if env.get(f"{ENV_PREFIX}LOG_LEVEL"):
        level = env[f"{ENV_PREFIX}LOG_LEVEL"].upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {level!r}")
        config.log_level = level
    if env.get(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = env[f"{ENV_PREFIX}LOG_FILE"]

    return config
