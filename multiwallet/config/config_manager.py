# config/config_manager.py - Configuration management

import json
import logging
import yaml
import toml
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional
from pathlib import Path
from dataclasses import dataclass, asdict, field

from multiwallet.config.config_schema import validate_config
from multiwallet.core.config import ConfigSnapshot
from multiwallet.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

class ConfigFormat(Enum):
    YAML = "yaml"
    JSON = "json"
    TOML = "toml"

class ConfigSource(Enum):
    FILE = "file"
    DEFAULT = "default"

@dataclass
class WalletConfig:
    wallets: Optional[List[str]] = None
    walletdir: Optional[str] = None
    disablewallet: Optional[bool] = None
    salvagewallet: Optional[bool] = None
    zapwallettxes: Optional[int] = None
    rescan: Optional[bool] = None
    upgradewallet: Optional[bool] = None
    walletbroadcast: Optional[bool] = None
    flushwallet: Optional[bool] = None

@dataclass
class NodeConfig:
    datadir: Optional[str] = None
    legacydatadir: Optional[str] = None
    blocksonly: Optional[bool] = None
    sysperms: Optional[bool] = None
    persistmempool: Optional[bool] = None
    prune: Optional[int] = None
    minrelaytxfee: Optional[Decimal] = None

@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None
    max_size: int = 10485760  # 10MB
    backup_count: int = 5

@dataclass
class Config:
    wallet: WalletConfig = field(default_factory=WalletConfig)
    node: NodeConfig = field(default_factory=NodeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

_FORMATS = {
    '.yaml': ConfigFormat.YAML,
    '.yml': ConfigFormat.YAML,
    '.json': ConfigFormat.JSON,
    '.toml': ConfigFormat.TOML,
}

def _plain(value: Any) -> Any:
    """Make a value safe for every file format"""
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value

class ConfigManager:
    """Node configuration store backed by a YAML, JSON or TOML file.

    File values and command line values both count as explicitly set;
    command line values win. ``snapshot()`` hands the merged result to the
    wallet layer as an immutable ConfigSnapshot.
    """

    def __init__(self, config_path: Optional[str] = None, create_if_missing: bool = False):
        self.config_path = config_path
        self.create_if_missing = create_if_missing
        self.config = Config()
        self.config_format = ConfigFormat.YAML
        self.config_source = ConfigSource.DEFAULT
        self.cli_options: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self):
        """Load configuration from file or use defaults"""
        if not self.config_path:
            return

        config_file = Path(self.config_path)
        self.config_format = _FORMATS.get(config_file.suffix.lower(), ConfigFormat.YAML)

        if not config_file.exists():
            if self.create_if_missing:
                self._save_config()
            return

        try:
            with open(config_file, 'r') as f:
                if self.config_format == ConfigFormat.YAML:
                    config_data = yaml.safe_load(f)
                elif self.config_format == ConfigFormat.JSON:
                    config_data = json.load(f)
                else:
                    config_data = toml.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Error loading config file {config_file}: {e}")
            raise ConfigurationError(f"Cannot read config file {config_file}: {e}") from e

        self._update_config_from_dict(validate_config(config_data or {}))
        self.config_source = ConfigSource.FILE
        logger.debug(f"Loaded configuration from {config_file}")

    def _update_config_from_dict(self, config_data: Dict[str, Any]):
        """Update config from a validated dictionary"""
        for section_name in ('wallet', 'node', 'logging'):
            section = getattr(self.config, section_name)
            for key, value in (config_data.get(section_name) or {}).items():
                if isinstance(value, Enum):
                    value = value.value
                if hasattr(section, key):
                    setattr(section, key, value)

    def _save_config(self):
        """Save current configuration to file"""
        if not self.config_path:
            return

        config_file = Path(self.config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_dict = _plain(self.to_dict())

        try:
            with open(config_file, 'w') as f:
                if self.config_format == ConfigFormat.YAML:
                    yaml.safe_dump(config_dict, f, default_flow_style=False)
                elif self.config_format == ConfigFormat.JSON:
                    json.dump(config_dict, f, indent=2)
                else:
                    toml.dump(config_dict, f)
        except OSError as e:
            logger.error(f"Error saving config file {config_file}: {e}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary"""
        return {
            'wallet': asdict(self.config.wallet),
            'node': asdict(self.config.node),
            'logging': asdict(self.config.logging)
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation"""
        obj = self.config
        for part in key.split('.'):
            if not hasattr(obj, part):
                return default
            obj = getattr(obj, part)
        return default if obj is None else obj

    def set(self, key: str, value: Any) -> bool:
        """Set configuration value using dot notation"""
        parts = key.split('.')
        obj = self.config
        for part in parts[:-1]:
            if not hasattr(obj, part):
                return False
            obj = getattr(obj, part)

        if not hasattr(obj, parts[-1]):
            return False
        setattr(obj, parts[-1], value)
        return True

    def apply_cli_options(self, options: Dict[str, Any]):
        """Overlay options given on the command line"""
        self.cli_options.update({k: v for k, v in options.items() if v is not None})

    def snapshot(self) -> ConfigSnapshot:
        """Merged user options, file first then command line"""
        options: Dict[str, Any] = {}
        wallet_section = asdict(self.config.wallet)
        wallets = wallet_section.pop('wallets')
        if wallets is not None:
            options['wallet'] = wallets
        options.update({k: v for k, v in wallet_section.items() if v is not None})
        options.update({k: v for k, v in asdict(self.config.node).items() if v is not None})

        for key, value in self.cli_options.items():
            # Repeated -wallet on the command line replaces the file's list
            options[key] = value
        return ConfigSnapshot.from_user(options)

def init_config(config_path: Optional[str] = None, create_if_missing: bool = False) -> ConfigManager:
    """Initialize configuration manager"""
    return ConfigManager(config_path, create_if_missing)
