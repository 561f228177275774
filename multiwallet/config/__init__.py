from .config_manager import ConfigManager, init_config
from .config_schema import validate_config

__all__ = [
    'ConfigManager',
    'init_config',
    'validate_config'
]
