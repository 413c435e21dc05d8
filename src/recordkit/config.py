"""Catalog configuration.

A configuration holds the settings below. It is read from a dict, or from the
nearest `.recordkit.toml`, `recordkit.toml` or `pyproject.toml`
(`[tool.recordkit]` table)::

    sanitize_strings = true     # String/Text fields created by `declare()`
    accessors = true            # Generate accessors for `declare()`d records

    [describe]
    labels = "humanized"        # or "raw"
    missing = "<not set>"       # Shown for unset values

    [staging]                   # Applied when RECORDKIT_ENV=staging
    describe.missing = "-"

`${VAR}` and `${VAR|default}` placeholders in strings are filled in from the
environment. Settings are checked once loaded, so a catalog never starts with
a value that records would reject later on.
"""

import logging
import os
import re
import tomllib
from pathlib import Path

from recordkit.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILES = (".recordkit.toml", "recordkit.toml", "pyproject.toml")
ENVIRONMENT_ENV_VAR = "RECORDKIT_ENV"
LABEL_STYLES = ("humanized", "raw")

# The starting directory, and two of its parents
SEARCH_DEPTH = 3

PLACEHOLDER_PATTERN = re.compile(r"\$\{(?P<name>[^}|]+)(?:\|(?P<default>[^}]*))?\}")


def _default_config():
    """Return a fresh copy of the default settings"""
    return {
        "sanitize_strings": True,
        "accessors": True,
        "describe": {
            "labels": "humanized",
            "missing": "<not set>",
        },
    }


def merge(base: dict, overrides: dict) -> dict:
    """Return a copy of `base` updated with `overrides`, table by table"""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand(value):
    """Fill in `${VAR}` and `${VAR|default}` placeholders, in tables and lists too"""
    if isinstance(value, dict):
        return {key: expand(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand(item) for item in value]
    if not isinstance(value, str):
        return value

    def substitute(match):
        name = match.group("name")
        resolved = os.environ.get(name, match.group("default"))
        if resolved is None:
            raise ConfigurationError(f"Environment variable {name} is not set")
        return resolved

    return PLACEHOLDER_PATTERN.sub(substitute, value)


def find_config_file(path) -> Path:
    """Return the first configuration file in the directory of `path` or above"""
    directory = Path(path).resolve()
    if not directory.is_dir():
        directory = directory.parent

    for candidate in [directory, *directory.parents][:SEARCH_DEPTH]:
        for file_name in CONFIG_FILES:
            if (candidate / file_name).is_file():
                return candidate / file_name

    return None


def _as_bool(key, value):
    # Placeholders always expand to strings
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    if not isinstance(value, bool):
        raise ConfigurationError(f"`{key}` must be true or false, got `{value!r}`")
    return value


class ConfigAttribute:
    """Makes an attribute forward to the config"""

    def __init__(self, name):
        self.__name__ = name

    def __get__(self, obj, type=None):
        return obj.config[self.__name__]

    def __set__(self, obj, value):
        obj.config[self.__name__] = value


class Config(dict):
    """Validated catalog settings"""

    @classmethod
    def load_from_dict(cls, config: dict = None):
        """Load configuration from a dictionary, over the defaults"""
        return cls(cls._finalize(config or {}))

    @classmethod
    def load_from_path(cls, path):
        """Load configuration from the configuration file nearest to `path`"""
        config_file = find_config_file(path)
        if config_file is None:
            raise ConfigurationError(f"No configuration file found in {path}")

        logger.debug(f"Loading configuration from {config_file}")

        try:
            with config_file.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Invalid configuration in {config_file}: {exc}")

        if config_file.name == "pyproject.toml":
            data = data.get("tool", {}).get("recordkit", {})

        return cls(cls._finalize(data))

    @classmethod
    def _finalize(cls, data: dict) -> dict:
        known = _default_config().keys()
        config = merge(_default_config(), cls._known(data))

        environment = os.environ.get(ENVIRONMENT_ENV_VAR)
        if environment and isinstance(data.get(environment), dict):
            config = merge(config, cls._known(data[environment]))

        unknown = [key for key, value in data.items() if key not in known]
        # Tables may be environment sections
        unknown = [key for key in unknown if not isinstance(data[key], dict)]
        if unknown:
            logger.warning(f"Ignoring unknown setting(s) {unknown}")

        return cls._checked(expand(config))

    @staticmethod
    def _known(table: dict) -> dict:
        known = _default_config().keys()
        return {key: value for key, value in table.items() if key in known}

    @staticmethod
    def _checked(config: dict) -> dict:
        config["sanitize_strings"] = _as_bool(
            "sanitize_strings", config["sanitize_strings"]
        )
        config["accessors"] = _as_bool("accessors", config["accessors"])

        describe = config["describe"]
        if not isinstance(describe, dict):
            raise ConfigurationError("`describe` must be a table")
        if describe["labels"] not in LABEL_STYLES:
            raise ConfigurationError(
                f"`describe.labels` must be one of {list(LABEL_STYLES)}, "
                f"got `{describe['labels']}`"
            )
        if not isinstance(describe["missing"], str):
            raise ConfigurationError("`describe.missing` must be a string")

        return config
