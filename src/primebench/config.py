import os
import yaml

from .counting import EXECUTORS
from .error import ConfigurationError
from .system import cpu_count


import logging
logger = logging.getLogger(__name__)


KEYS = ('threads', 'executor', 'repeat', 'output', 'history')


def parse_thread_count(text) -> int:
    """Parses a requested thread count.

    Integers are clamped to at least 1. Missing or unparseable values fall
    back to the number of available processing units.

    Args:
        text (str | int | None): Requested thread count.

    Returns:
        Thread count (>= 1).
    """
    if text is None:
        return cpu_count()

    try:
        value = int(str(text).strip())

    except ValueError:
        logger.debug(f"Invalid thread count {text!r}, using processor count.")
        return cpu_count()

    return max(1, value)


def load_config(path: str) -> dict:
    """Loads benchmark settings from a YAML file.

    Args:
        path (str): Path of the YAML file.

    Returns:
        Dictionary of recognized settings.

    Raises:
        ConfigurationError: if the file cannot be read or has invalid content.
    """
    logger.debug(f"Loading configuration from {path}.")
    try:
        with open(path, 'r', encoding='utf-8') as file:
            data = yaml.safe_load(file)

    except (OSError, yaml.YAMLError) as err:
        raise ConfigurationError(f"Cannot load {path}: {err}") from err

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid configuration in {path}, a mapping is expected.")

    for key in data:
        if key not in KEYS:
            logger.warning(f"Ignoring unknown configuration key '{key}'.")

    config = {key: data[key] for key in KEYS if data.get(key) is not None}

    if 'executor' in config and config['executor'] not in EXECUTORS:
        raise ConfigurationError(f"Invalid executor {config['executor']!r}.")

    if 'repeat' in config:
        if isinstance(config['repeat'], bool) or not isinstance(config['repeat'], int) or config['repeat'] < 1:
            raise ConfigurationError(f"Invalid number of repeats {config['repeat']!r}.")

    # Relative paths are relative to the configuration file
    basedir = os.path.dirname(os.path.abspath(path))
    for key in ('output', 'history'):
        if key in config:
            value = str(config[key])
            if not os.path.isabs(value):
                value = os.path.join(basedir, value)
            config[key] = value

    return config
