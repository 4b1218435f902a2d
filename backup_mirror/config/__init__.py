"""Configuration management for backup mirror."""

from .config_manager import ConfigManager
from .config_validator import ConfigValidator, RootValidationError, RootNestingError

__all__ = ["ConfigManager", "ConfigValidator", "RootValidationError", "RootNestingError"]
