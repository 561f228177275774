from multiwallet.init.parameter_interaction import ConfigValidator, validate
from multiwallet.init.path_resolver import get_wallet_dir, prepare_wallet_dir, resolve, resolve_all
from multiwallet.init.legacy_migration import MigrationOutcome, maybe_migrate, copy_file_exclusive
from multiwallet.init.registry import WalletRegistry
from multiwallet.init.lifecycle import WalletLifecycle
from multiwallet.init.options import add_wallet_options, options_from_args

__all__ = [
    'ConfigValidator',
    'validate',
    'get_wallet_dir',
    'prepare_wallet_dir',
    'resolve',
    'resolve_all',
    'MigrationOutcome',
    'maybe_migrate',
    'copy_file_exclusive',
    'WalletRegistry',
    'WalletLifecycle',
    'add_wallet_options',
    'options_from_args'
]
