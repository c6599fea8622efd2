"""
Configuration Manager for TableFilter

This module provides the configuration layer that:
1. Loads a JSON configuration file over the schema defaults
2. Provides type-safe access to configuration values
3. Validates every value against the schema
4. Saves the configuration back to JSON

Usage:
    from tablefilter.config import ConfigManager

    # Initialize (path argument, TABLEFILTER_CONFIG, or pure defaults)
    config = ConfigManager("/path/to/tablefilter.json")

    # Get values
    ignore_case = config.get('PARSER', 'IGNORE_CASE')

    # Change values (validated)
    config.set('CHOICES', 'MAX_CHOICES', 50)
"""

import copy
import json
import logging
import os
from typing import Any, Dict, List, Optional

from ..core.domain.exceptions import ConfigurationError
from .config_schema import (
    CONFIG_SCHEMA,
    get_default_config,
    get_schema_entry,
    validate_config_value,
)

logger = logging.getLogger('TableFilter.Config')

CONFIG_ENV_VAR = 'TABLEFILTER_CONFIG'
SCHEMA_VERSION = "1.0.0"


class ConfigManager:
    """
    Configuration manager for TableFilter.

    Provides validated access to configuration values. Values read from a
    file that fail validation are logged and replaced by their default.
    """

    def __init__(self, config_path: Optional[str] = None, auto_load: bool = True):
        """
        Initialize the configuration manager.

        Args:
            config_path: JSON file to load; defaults to the TABLEFILTER_CONFIG
                environment variable, or to no file at all
            auto_load: Whether to automatically load configuration
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR) or None
        self.config_path = config_path
        self._data: Dict[str, Any] = get_default_config()
        self._schema = CONFIG_SCHEMA

        if auto_load and self.config_path:
            self.load()

    # =========================================================================
    # Loading and Saving
    # =========================================================================

    def load(self) -> bool:
        """
        Load configuration from file, on top of the defaults.

        Returns:
            bool: True if loaded successfully
        """
        self._data = get_default_config()
        if not self.config_path:
            return True
        if not os.path.exists(self.config_path):
            logger.info(f"Configuration file {self.config_path} not found, using defaults")
            return True

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                file_data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration {self.config_path}: {e}")
            return False

        if not isinstance(file_data, dict):
            logger.error(f"Configuration {self.config_path} must contain a JSON object")
            return False

        self._merge(file_data)
        logger.debug(f"Loaded configuration from {self.config_path}")
        return True

    def _merge(self, file_data: Dict[str, Any]) -> None:
        for section, values in file_data.items():
            if section.startswith('_'):
                continue
            if section not in self._data or not isinstance(values, dict):
                logger.warning(f"Ignoring unknown configuration section {section!r}")
                continue
            for key, value in values.items():
                entry = get_schema_entry(section, key)
                if not entry:
                    logger.warning(f"Ignoring unknown setting {section}.{key}")
                    continue
                is_valid, error = validate_config_value(entry, value)
                if not is_valid:
                    logger.warning(f"Invalid value for {section}.{key}: {error} (default kept)")
                    continue
                self._data[section][key] = value

    def save(self, path: Optional[str] = None) -> bool:
        """
        Save configuration to file.

        Args:
            path: Target file, defaults to the loaded file

        Returns:
            bool: True if saved successfully
        """
        target = path or self.config_path
        if not target:
            logger.error("No configuration path to save to")
            return False
        try:
            save_data = {"_schema_version": SCHEMA_VERSION, **self._data}
            with open(target, 'w', encoding='utf-8') as f:
                json.dump(save_data, f, indent=4)
        except OSError as e:
            logger.error(f"Error saving configuration {target}: {e}")
            return False
        self.config_path = target
        return True

    def reset_to_defaults(self) -> None:
        """Drop every customized value."""
        self._data = get_default_config()

    # =========================================================================
    # Value Access
    # =========================================================================

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            section: Section name (e.g., 'PARSER')
            key: Setting name (e.g., 'IGNORE_CASE')
            default: Value returned for unknown settings

        Returns:
            The configuration value or default

        Example:
            max_choices = config.get('CHOICES', 'MAX_CHOICES')
        """
        return self._data.get(section, {}).get(key, default)

    def set(self, section: str, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Raises:
            ConfigurationError: Unknown setting or invalid value
        """
        entry = get_schema_entry(section, key)
        if not entry:
            raise ConfigurationError(f"Unknown setting {section}.{key}")
        is_valid, error = validate_config_value(entry, value)
        if not is_valid:
            raise ConfigurationError(f"Invalid value for {section}.{key}: {error}")
        self._data[section][key] = value

    def get_choices(self, section: str, key: str) -> List[str]:
        """
        Get available choices for a setting.

        Returns:
            List of choices or empty list
        """
        return list(get_schema_entry(section, key).get('choices', []))

    @property
    def data(self) -> Dict[str, Any]:
        """Copy of the configuration data."""
        return copy.deepcopy(self._data)


# =============================================================================
# Utility Functions
# =============================================================================

def create_config_manager(config_path: Optional[str] = None) -> ConfigManager:
    """
    Factory function to create a ConfigManager instance.

    Args:
        config_path: Optional JSON configuration file

    Returns:
        ConfigManager instance
    """
    return ConfigManager(config_path)
