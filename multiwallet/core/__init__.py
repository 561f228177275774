from .config import ConfigSnapshot, OptionOrigin, OptionValue
from .wallet_types import LifecycleState, WalletLocation, VerifyResult, ValidationResult, VerificationReport
from .interfaces import WalletCapability, WalletHandle, Scheduler
from .exceptions import (
    WalletInitError, ConfigurationError, WalletDirError, DuplicateWalletError,
    WalletClosedError, LifecycleStateError
)

__all__ = [
    'ConfigSnapshot',
    'OptionOrigin',
    'OptionValue',
    'LifecycleState',
    'WalletLocation',
    'VerifyResult',
    'ValidationResult',
    'VerificationReport',
    'WalletCapability',
    'WalletHandle',
    'Scheduler',
    'WalletInitError',
    'ConfigurationError',
    'WalletDirError',
    'DuplicateWalletError',
    'WalletClosedError',
    'LifecycleStateError'
]
