"""
TableFilter Configuration Package

Modules:
    - config_schema: Schema definitions and validation
    - config_manager: Configuration manager

Usage:
    from tablefilter.config import ConfigManager
    config = ConfigManager()  # defaults, or the TABLEFILTER_CONFIG file

    # Get settings
    ignore_case = config.get('PARSER', 'IGNORE_CASE')
"""

from .config_manager import ConfigManager, create_config_manager, CONFIG_ENV_VAR
from .config_schema import (
    CONFIG_SCHEMA,
    LOG_LEVELS,
    get_default_config,
    get_schema_entry,
    validate_config_value,
)

__all__ = [
    'ConfigManager',
    'create_config_manager',
    'CONFIG_ENV_VAR',
    'CONFIG_SCHEMA',
    'LOG_LEVELS',
    'get_default_config',
    'get_schema_entry',
    'validate_config_value',
]
