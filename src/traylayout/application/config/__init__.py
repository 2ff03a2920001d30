"""Layout request schema and loading.

This package provides JSON-based layout request loading and validation. It
includes Pydantic models for schema validation, a loader with detailed
error reporting, adapters to domain objects, and advisory checks.

Public API:
    - TrayLayoutConfiguration: Root request model
    - TrayConfig, CableConfig, CategoryLayoutSchema, LayoutSchema,
      CanvasConfig, FreeSpaceConfig: Section models
    - load_config: Load a request from a JSON file
    - load_config_from_dict: Load a request from a dictionary
    - ConfigError: Exception for request errors
    - ValidationResult, ValidationError, ValidationWarning: Advisory results
    - validate_config: Run the advisory checks
    - config_to_tray, config_to_cables, config_to_layout_configuration:
      Convert a request to domain objects

Example:
    >>> from pathlib import Path
    >>> from traylayout.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("tray-t1.json"))
    ...     print(f"Tray {config.tray.name}: {len(config.cables)} cables")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from traylayout.application.config.adapter import (
    config_to_cables,
    config_to_layout_configuration,
    config_to_tray,
)
from traylayout.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from traylayout.application.config.schema import (
    SUPPORTED_VERSIONS,
    CableConfig,
    CanvasConfig,
    CategoryLayoutSchema,
    FreeSpaceConfig,
    LayoutSchema,
    TrayConfig,
    TrayLayoutConfiguration,
)
from traylayout.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "CableConfig",
    "CanvasConfig",
    "CategoryLayoutSchema",
    "ConfigError",
    "FreeSpaceConfig",
    "LayoutSchema",
    "TrayConfig",
    "TrayLayoutConfiguration",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "config_to_cables",
    "config_to_layout_configuration",
    "config_to_tray",
    "load_config",
    "load_config_from_dict",
    "validate_config",
]
