# multiwallet/init/legacy_migration.py
import shutil
import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from multiwallet.core.config import DEFAULT_WALLET_FILENAME, PEERS_SENTINEL_FILENAME

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

class MigrationOutcome(Enum):
    NOT_FIRST_RUN = "not_first_run"
    DEFAULT_EXISTS = "default_exists"
    NO_LEGACY_WALLET = "no_legacy_wallet"
    COPIED = "copied"
    FAILED = "failed"

def is_first_run(data_dir: PathLike) -> bool:
    """No peer address cache yet means the node has never run here"""
    return not (Path(data_dir) / PEERS_SENTINEL_FILENAME).exists()

def copy_file_exclusive(source: PathLike, destination: PathLike) -> None:
    """Copy ``source`` to ``destination``, raising FileExistsError if it exists.

    A copy that fails after the destination was created removes it again,
    so a truncated file is never mistaken for a wallet on the next start.
    """
    with open(source, 'rb') as src:
        with open(destination, 'xb') as dst:
            try:
                shutil.copyfileobj(src, dst)
            except BaseException:
                dst.close()
                Path(destination).unlink()
                raise
    try:
        shutil.copystat(source, destination)
    except OSError:
        Path(destination).unlink()
        raise

def maybe_migrate(data_dir: PathLike,
                  wallet_dir: PathLike,
                  legacy_data_dir: Optional[PathLike]) -> MigrationOutcome:
    """Copy the previous-generation wallet into the new layout on first run.

    Never raises: a failed copy only means startup continues without the
    legacy wallet.
    """
    if not is_first_run(data_dir):
        return MigrationOutcome.NOT_FIRST_RUN

    default_root = Path(data_dir) / DEFAULT_WALLET_FILENAME
    default_walletdir = Path(wallet_dir) / DEFAULT_WALLET_FILENAME
    if default_root.exists() or default_walletdir.exists():
        return MigrationOutcome.DEFAULT_EXISTS

    if legacy_data_dir is None:
        return MigrationOutcome.NO_LEGACY_WALLET
    legacy_wallet = Path(legacy_data_dir).expanduser() / DEFAULT_WALLET_FILENAME
    if not legacy_wallet.exists():
        return MigrationOutcome.NO_LEGACY_WALLET

    logger.info(f"Copying legacy wallet file [{legacy_wallet}] to {default_walletdir}")
    try:
        copy_file_exclusive(legacy_wallet, default_walletdir)
    except OSError as e:
        logger.error(f"Failed to copy legacy wallet file: {e}")
        return MigrationOutcome.FAILED

    return MigrationOutcome.COPIED
