"""Scene configuration: schemas, loading, conversion and validation."""

from configurator.application.config.adapter import (
    cabinet_from_config,
    cabinet_to_config,
    product_from_config,
    product_to_config,
    wall_from_config,
)
from configurator.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
    save_config,
)
from configurator.application.config.schemas import SceneConfiguration
from configurator.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "ConfigError",
    "SceneConfiguration",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "cabinet_from_config",
    "cabinet_to_config",
    "load_config",
    "load_config_from_dict",
    "product_from_config",
    "product_to_config",
    "save_config",
    "validate_config",
    "wall_from_config",
]
