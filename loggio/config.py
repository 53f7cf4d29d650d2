"""Configuration loading from defaults, an optional YAML file, env vars, and CLI args."""

import logging
import os
from dataclasses import dataclass

import yaml

from loggio.errors import ConfigError
from loggio.parser import APACHE_COMBINED

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json")


@dataclass(frozen=True)
class Config:
    format: str = APACHE_COMBINED
    encoding: str = "utf-8"
    top: int = 3
    output: str = "text"


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path or file missing."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(cli_args=None, yaml_data: dict | None = None) -> Config:
    """Build Config; CLI args override env vars, which override YAML, which override defaults.

    Raises ConfigError for a non-integer ``top`` or an unknown ``output``.
    """
    defaults = Config()
    yaml_data = yaml_data or {}

    def pick(name: str, env_var: str | None, default):
        cli_value = getattr(cli_args, name, None) if cli_args is not None else None
        if cli_value is not None:
            return cli_value
        if env_var and env_var in os.environ:
            return os.environ[env_var]
        return yaml_data.get(name, default)

    top = pick("top", "LOGGIO_TOP", defaults.top)
    try:
        top = int(top)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid 'top' value: {top!r} (expected an integer)") from None

    output = str(pick("output", None, defaults.output))
    if output not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid 'output' value: {output!r} (choose from {', '.join(OUTPUT_FORMATS)})"
        )

    return Config(
        format=str(pick("format", "LOGGIO_FORMAT", defaults.format)),
        encoding=str(pick("encoding", "LOGGIO_ENCODING", defaults.encoding)),
        top=top,
        output=output,
    )
