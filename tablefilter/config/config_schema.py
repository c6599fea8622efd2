"""
Configuration Schema for TableFilter

Every setting is declared once here, with its type, default value and a
description; ConfigManager validates values against these entries and
``get_default_config`` derives the defaults from them.

Sections:
- PARSER: Expression parsing (case sensitivity, date/time formats)
- FILTER: TableFilter behaviour (auto selection)
- CHOICES: Choice extraction for choice editors
- EDITORS: Editor kinds created by the FiltersHandler
- LOGGING: Log level and optional log file
"""

from typing import Any, Dict, Tuple


# =============================================================================
# Configuration Schema Definition
# =============================================================================

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

CONFIG_SCHEMA = {
    # -------------------------------------------------------------------------
    # PARSER SETTINGS
    # -------------------------------------------------------------------------
    "PARSER": {
        "_section_meta": {
            "title": "Expression Parser",
            "description": "How filter expressions are read and compared"
        },
        "IGNORE_CASE": {
            "type": "boolean",
            "default": False,
            "description": "Case-insensitive string comparisons, wildcards and regular expressions"
        },
        "DATE_FORMAT": {
            "type": "string",
            "default": "%Y-%m-%d",
            "description": "strftime pattern used to read and display dates"
        },
        "DATETIME_FORMAT": {
            "type": "string",
            "default": "%Y-%m-%d %H:%M:%S",
            "description": "strftime pattern used to read and display timestamps"
        },
        "TIME_FORMAT": {
            "type": "string",
            "default": "%H:%M:%S",
            "description": "strftime pattern used to read and display times of day"
        }
    },

    # -------------------------------------------------------------------------
    # FILTER SETTINGS
    # -------------------------------------------------------------------------
    "FILTER": {
        "_section_meta": {
            "title": "Filtering",
            "description": "TableFilter behaviour"
        },
        "AUTO_SELECTION": {
            "type": "boolean",
            "default": False,
            "description": "Select the row automatically when a filter leaves exactly one visible"
        }
    },

    # -------------------------------------------------------------------------
    # CHOICES SETTINGS
    # -------------------------------------------------------------------------
    "CHOICES": {
        "_section_meta": {
            "title": "Choices",
            "description": "Distinct values offered by choice editors"
        },
        "MAX_CHOICES": {
            "type": "range",
            "min": 0,
            "max": 100000,
            "default": 0,
            "description": "Keep only the N most frequent values (0 keeps every value)"
        },
        "OTHER_BUCKET": {
            "type": "boolean",
            "default": True,
            "description": "Offer an 'other' choice matching the values dropped by MAX_CHOICES"
        },
        "INCLUDE_EMPTY": {
            "type": "boolean",
            "default": True,
            "description": "Offer an 'empty' choice when the column has null or blank values"
        },
        "ADAPTIVE": {
            "type": "boolean",
            "default": False,
            "description": "Only offer the values of the rows left visible by the other filters"
        }
    },

    # -------------------------------------------------------------------------
    # EDITORS SETTINGS
    # -------------------------------------------------------------------------
    "EDITORS": {
        "_section_meta": {
            "title": "Editors",
            "description": "Editors created for each column"
        },
        "DEFAULT_KIND": {
            "type": "choices",
            "choices": ["text", "choice"],
            "default": "text",
            "description": "Editor kind used for columns without an explicit kind"
        },
        "MAX_HISTORY": {
            "type": "range",
            "min": 0,
            "max": 100,
            "default": 10,
            "description": "Expressions remembered by each text editor (0 disables the history)"
        }
    },

    # -------------------------------------------------------------------------
    # LOGGING SETTINGS
    # -------------------------------------------------------------------------
    "LOGGING": {
        "_section_meta": {
            "title": "Logging",
            "description": "Diagnostics output"
        },
        "LEVEL": {
            "type": "choices",
            "choices": LOG_LEVELS,
            "default": "WARNING",
            "description": "Level of the TableFilter logger"
        },
        "LOG_FILE": {
            "type": "filepath",
            "default": "",
            "description": "Rotating log file (leave empty to log to stderr only)"
        }
    }
}


# =============================================================================
# Helper Functions
# =============================================================================

def get_default_config() -> Dict[str, Any]:
    """
    Generate a default configuration dictionary from the schema.

    Returns:
        dict: Configuration with all default values
    """
    config = {}

    def extract_defaults(schema: Dict, target: Dict):
        for key, value in schema.items():
            if key.startswith('_'):
                continue
            if isinstance(value, dict):
                if 'type' in value and 'default' in value:
                    # This is a leaf setting
                    target[key] = value['default']
                else:
                    # This is a nested section
                    target[key] = {}
                    extract_defaults(value, target[key])

    extract_defaults(CONFIG_SCHEMA, config)
    return config


def get_schema_entry(section: str, key: str) -> Dict[str, Any]:
    """
    Get the schema definition of a setting.

    Returns:
        dict: Schema entry, empty if the setting is unknown
    """
    entry = CONFIG_SCHEMA.get(section, {}).get(key)
    if key.startswith('_') or not isinstance(entry, dict):
        return {}
    return entry


def validate_config_value(schema_entry: Dict, value: Any) -> Tuple[bool, str]:
    """
    Validate a configuration value against its schema.

    Args:
        schema_entry: Schema definition for the setting
        value: Value to validate

    Returns:
        tuple: (is_valid, error_message)
    """
    if 'type' not in schema_entry:
        return True, ""

    value_type = schema_entry['type']

    if value_type == 'boolean':
        if not isinstance(value, bool):
            return False, f"Expected boolean, got {type(value).__name__}"

    elif value_type == 'string':
        if not isinstance(value, str):
            return False, f"Expected string, got {type(value).__name__}"

    elif value_type == 'choices':
        choices = schema_entry.get('choices', [])
        if value not in choices:
            return False, f"Value must be one of: {choices}"

    elif value_type == 'range':
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False, f"Expected number, got {type(value).__name__}"
        min_val = schema_entry.get('min', float('-inf'))
        max_val = schema_entry.get('max', float('inf'))
        if value < min_val or value > max_val:
            return False, f"Value must be between {min_val} and {max_val}"

    elif value_type == 'filepath':
        if not isinstance(value, str):
            return False, f"Expected string path, got {type(value).__name__}"

    return True, ""
