"""Webhook options loader."""

import os
from pathlib import Path  # noqa: TC003
from typing import Any

import yaml

from hubhook.models.config import WebhookOptions
from hubhook.utils.logging import get_logger

logger = get_logger("utils.config_loader")

DEFAULT_PATH = "/webhook"

# Environment variables overriding the config file, by option name
ENV_OVERRIDES = {
    "path": "GITHUB_WEBHOOK_PATH",
    "secret": "GITHUB_WEBHOOK_SECRET",
    "algorithm": "GITHUB_WEBHOOK_ALGORITHM",
}


class ConfigLoaderError(Exception):
    """Error raised when configuration loading fails."""

    pass


def load_options(config_file: Path | None = None) -> WebhookOptions:
    """Load webhook options from an optional YAML file and the environment.

    Environment variables win over values from the file. The path defaults
    to ``/webhook``.

    Args:
        config_file: Optional YAML file with ``path``, ``secret`` and ``algorithm``.

    Returns:
        WebhookOptions instance.

    Raises:
        ConfigLoaderError: If the config file cannot be read or parsed.
        ConfigurationError: If the resulting options are incomplete.
    """
    raw: dict[str, Any] = {"path": DEFAULT_PATH}

    if config_file is not None:
        raw.update(_load_yaml_file(config_file))

    for option, env_var in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            raw[option] = value

    options = WebhookOptions.from_mapping(raw)
    logger.info(
        "Loaded webhook options",
        extra={"path": options.path, "algorithm": options.algorithm},
    )
    return options


def _load_yaml_file(filepath: Path) -> dict[str, Any]:
    """Load a YAML mapping, treating an empty file as no settings.

    Args:
        filepath: Path to the YAML file.

    Returns:
        Parsed mapping.

    Raises:
        ConfigLoaderError: If the file is unreadable, invalid YAML or not a mapping.
    """
    try:
        content = filepath.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigLoaderError(f"Failed to read config file {filepath}: {e}") from e

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoaderError(f"Failed to parse config file {filepath}: {e}") from e

    if result is None:
        logger.debug("Config file is empty", extra={"file": str(filepath)})
        return {}

    if not isinstance(result, dict):
        raise ConfigLoaderError(f"Config file {filepath} must contain a mapping")

    return result
