# multiwallet/init/path_resolver.py
import os
import logging
from pathlib import Path
from typing import Iterable, List, Set, Union

from multiwallet.core.config import ConfigSnapshot
from multiwallet.core.exceptions import DuplicateWalletError, WalletDirError
from multiwallet.core.wallet_types import WalletLocation

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = "./multiwallet_data"
WALLETS_SUBDIR = "wallets"


def get_data_dir(config: ConfigSnapshot) -> Path:
    return Path(config.get("datadir") or DEFAULT_DATA_DIR).expanduser()


def get_wallet_dir(config: ConfigSnapshot) -> Path:
    """Explicit -walletdir, else <datadir>/wallets if it exists, else <datadir>"""
    wallet_dir = config.get("walletdir")
    if wallet_dir:
        return Path(wallet_dir)

    data_dir = get_data_dir(config)
    wallets = data_dir / WALLETS_SUBDIR
    if wallets.is_dir():
        return wallets
    return data_dir


def prepare_wallet_dir(config: ConfigSnapshot) -> ConfigSnapshot:
    """Check an explicit -walletdir and pin it to its canonical form.

    Raises WalletDirError when the directory is missing, is not a
    directory, or was given as a relative path.
    """
    if not config.is_set("walletdir"):
        return config

    raw = str(config.get("walletdir") or "")
    wallet_dir = Path(raw)
    try:
        if not raw:
            raise FileNotFoundError(raw)
        # Canonical form keeps two spellings of one directory from looking like two
        canonical = wallet_dir.resolve(strict=True)
    except (OSError, RuntimeError):
        raise WalletDirError(f'Specified -walletdir "{raw}" does not exist')

    if not wallet_dir.is_dir():
        raise WalletDirError(f'Specified -walletdir "{raw}" is not a directory')
    # resolve() makes relative paths absolute, so check what the user typed
    if not wallet_dir.is_absolute():
        raise WalletDirError(f'Specified -walletdir "{raw}" is a relative path')

    return config.force_set("walletdir", str(canonical), config.origin("walletdir"))


def resolve(identifier: str, base_dir: Union[str, Path]) -> WalletLocation:
    """Map a -wallet identifier to an absolute location under ``base_dir``"""
    if identifier and Path(identifier).is_absolute():
        path = Path(identifier)
    elif identifier:
        path = Path(base_dir) / identifier
    else:
        path = Path(base_dir)

    if path.exists():
        path = path.resolve(strict=True)
    else:
        # Not created yet; only normalize lexically
        path = Path(os.path.abspath(path))
    return WalletLocation(path=path, name=identifier)


def resolve_all(identifiers: Iterable[str], base_dir: Union[str, Path]) -> List[WalletLocation]:
    """Resolve every identifier, rejecting any two that land on one path"""
    seen: Set[Path] = set()
    locations: List[WalletLocation] = []
    for identifier in identifiers:
        location = resolve(identifier, base_dir)
        if location.path in seen:
            raise DuplicateWalletError(identifier)
        seen.add(location.path)
        locations.append(location)
        logger.debug(f"Resolved wallet {location.display_name} to {location.path}")
    return locations
