"""Configuration management for tile-search.

This module provides Hydra-based configuration management with runtime
override capabilities.
"""

from .config_manager import ConfigManager, load_config, get_config, get_parameter, default_config_dir
from .validators import validate_config, ConfigValidationError

__all__ = [
    'ConfigManager',
    'load_config',
    'get_config',
    'get_parameter',
    'default_config_dir',
    'validate_config',
    'ConfigValidationError'
]
