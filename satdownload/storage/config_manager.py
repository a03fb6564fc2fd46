"""
Manages loading and validation of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from satdownload.exceptions import ConfigurationError
from satdownload.models.config import RetrievalConfig
from satdownload.utils.formatting import strip_quotes

log = logging.getLogger(__name__)

BOOLEAN_KEYS = (
    "verify_ssl",
    "consecutive_mode",
    "persist_progress",
    "persist_after_download",
)
INTEGER_KEYS = ("port", "file_num_padding")


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> RetrievalConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated RetrievalConfig object.

        Raises:
            ConfigurationError: If the config file is missing, invalid, or validation
            fails.
        """
        if not self.config_file_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found at '{self.config_file_path}'. "
                "Create it or pass --config=PATH."
            )

        try:
            self._parser.read(self.config_file_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"Error parsing configuration file: {e}") from e

        config_from_file = self._get_config_as_dict()

        if cli_options:
            config_from_file.update(cli_options)

        try:
            config = RetrievalConfig(**config_from_file)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

        log.debug(f"Loaded configuration from '{self.config_file_path}': {config!r}")
        return config

    def _get_config_as_dict(self) -> dict[str, Any]:
        """
        Reads the 'DEFAULT' section of the INI file into a dictionary.

        Only keys present in the file are returned so that model defaults apply
        to everything else.
        """
        section = self._parser["DEFAULT"]
        known_keys = RetrievalConfig.get_ini_keys()
        values: dict[str, Any] = {}

        for key in section:
            if key not in known_keys:
                log.warning(f"[yellow]Ignoring unknown configuration key '{key}'.[/yellow]")
                continue

            raw = strip_quotes(section.get(key, ""))
            try:
                if key in BOOLEAN_KEYS:
                    values[key] = self._parser.BOOLEAN_STATES[raw.strip().lower()]
                elif key in INTEGER_KEYS:
                    values[key] = int(raw)
                else:
                    values[key] = raw
            except (KeyError, ValueError) as e:
                raise ConfigurationError(
                    f"Invalid value for '{key}' in configuration file: {raw!r}"
                ) from e

        return values
