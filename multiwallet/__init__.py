from multiwallet.core.config import ConfigSnapshot
from multiwallet.core.interfaces import WalletCapability, WalletHandle, Scheduler
from multiwallet.core.wallet_types import LifecycleState, WalletLocation
from multiwallet.init.lifecycle import WalletLifecycle
from multiwallet.init.registry import WalletRegistry
from multiwallet.tasks.scheduler import ThreadScheduler

__version__ = "1.0.0"
__all__ = [
    'ConfigSnapshot',
    'WalletCapability',
    'WalletHandle',
    'Scheduler',
    'LifecycleState',
    'WalletLocation',
    'WalletLifecycle',
    'WalletRegistry',
    'ThreadScheduler'
]
