# config/config_schema.py - Configuration schema validation

from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from enum import Enum

from multiwallet.core.exceptions import ConfigurationError

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

class WalletConfigSchema(BaseModel):
    model_config = ConfigDict(extra='forbid')

    wallets: Optional[List[str]] = Field(default=None)
    walletdir: Optional[str] = Field(default=None)
    disablewallet: Optional[bool] = Field(default=None)
    salvagewallet: Optional[bool] = Field(default=None)
    zapwallettxes: Optional[int] = Field(default=None, ge=0, le=2)
    rescan: Optional[bool] = Field(default=None)
    upgradewallet: Optional[bool] = Field(default=None)
    walletbroadcast: Optional[bool] = Field(default=None)
    flushwallet: Optional[bool] = Field(default=None)

    @field_validator('wallets', mode='before')
    @classmethod
    def single_wallet_as_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

class NodeConfigSchema(BaseModel):
    model_config = ConfigDict(extra='forbid')

    datadir: Optional[str] = Field(default=None)
    legacydatadir: Optional[str] = Field(default=None)
    blocksonly: Optional[bool] = Field(default=None)
    sysperms: Optional[bool] = Field(default=None)
    persistmempool: Optional[bool] = Field(default=None)
    prune: Optional[int] = Field(default=None, ge=0)
    minrelaytxfee: Optional[Decimal] = Field(default=None, ge=0)

class LoggingConfigSchema(BaseModel):
    level: LogLevel = Field(default=LogLevel.INFO)
    file: Optional[str] = Field(default=None)
    max_size: int = Field(default=10485760, ge=0)  # 10MB
    backup_count: int = Field(default=5, ge=0)

    @field_validator('level', mode='before')
    @classmethod
    def upper_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value

class ConfigSchema(BaseModel):
    model_config = ConfigDict(extra='forbid')

    wallet: WalletConfigSchema = Field(default_factory=WalletConfigSchema)
    node: NodeConfigSchema = Field(default_factory=NodeConfigSchema)
    logging: LoggingConfigSchema = Field(default_factory=LoggingConfigSchema)

def validate_config(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Validate configuration dictionary against schema"""
    if config_dict is not None and not isinstance(config_dict, dict):
        raise ConfigurationError("Configuration validation error: top level must be a mapping")
    try:
        validated_config = ConfigSchema(**(config_dict or {}))
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation error: {e}") from e
    return validated_config.model_dump(mode='python')
