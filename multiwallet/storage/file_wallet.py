#multiwallet/storage/file_wallet.py

import os
import json
import time
import tempfile
import threading
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from multiwallet.core.config import DEFAULT_WALLET_FILENAME
from multiwallet.core.exceptions import WalletClosedError
from multiwallet.core.interfaces import WalletCapability, WalletHandle
from multiwallet.core.wallet_types import VerifyResult, WalletLocation

logger = logging.getLogger(__name__)

WALLET_FORMAT_VERSION = 1

def wallet_data_file(path: Path) -> Path:
    """A legacy flat file is its own data file; otherwise wallet.dat inside the directory"""
    if path.is_file():
        return path
    return path / DEFAULT_WALLET_FILENAME

def _empty_document(name: str) -> Dict[str, Any]:
    return {
        'version': WALLET_FORMAT_VERSION,
        'name': name,
        'created': int(time.time()),
        'records': {}
    }

def _read_document(data_file: Path) -> Dict[str, Any]:
    with open(data_file, 'r') as f:
        document = json.load(f)
    if not isinstance(document, dict) or not isinstance(document.get('records'), dict):
        raise ValueError("missing wallet records")
    return document

def _write_document(data_file: Path, document: Dict[str, Any]):
    """Write via a temporary file so a crash never leaves half a wallet"""
    fd, tmp_path = tempfile.mkstemp(dir=str(data_file.parent), prefix='.wallet-', suffix='.tmp')
    try:
        with os.fdopen(fd, 'w') as f:
            json.dump(document, f, indent=2, sort_keys=True)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, data_file)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise

class FileWallet(WalletHandle):
    """Wallet stored as a single JSON document"""

    def __init__(self, location: WalletLocation, data_file: Path, document: Dict[str, Any]):
        self._location = location
        self.data_file = data_file
        self.document = document
        self.dirty = False
        self.live = False
        self.closed = False
        self.flush_count = 0
        self._lock = threading.RLock()

    @property
    def location(self) -> WalletLocation:
        return self._location

    def post_init(self):
        self.live = True
        logger.debug(f"Wallet {self.location.display_name} is live")

    def set_record(self, key: str, value: Any):
        with self._lock:
            if self.closed:
                raise WalletClosedError(f"Wallet {self.location.display_name} is closed")
            self.document['records'][key] = value
            self.dirty = True

    def get_record(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self.document['records'].get(key, default)

    def flush(self, hard: bool = False):
        with self._lock:
            if self.closed:
                return
            if self.dirty or hard:
                _write_document(self.data_file, self.document)
                self.dirty = False
                self.flush_count += 1
            if hard:
                self.closed = True
                self.live = False

    def maintain(self):
        with self._lock:
            if self.dirty:
                self.flush(False)

class FileWalletCapability(WalletCapability):
    """Opens wallets stored by FileWallet"""

    def verify(self, location: WalletLocation, salvage: bool) -> VerifyResult:
        path = location.path
        if path.exists() and not (path.is_dir() or path.is_file()):
            return VerifyResult(
                ok=False,
                error=(f"Invalid -wallet path '{location.name}'. -wallet path should point to a "
                       f"directory where wallet.dat can be stored, a location where such a directory "
                       f"could be created, or the name of an existing data file")
            )

        data_file = wallet_data_file(path)
        if not data_file.exists():
            return VerifyResult(ok=True)
        if not data_file.is_file():
            return VerifyResult(ok=False, error=f"Error loading wallet {location.display_name}. "
                                                f"{data_file.name} must be a regular file.")

        try:
            _read_document(data_file)
            return VerifyResult(ok=True)
        except (OSError, ValueError) as e:
            if not salvage:
                return VerifyResult(
                    ok=False,
                    error=(f"{location.display_name} corrupt ({e}). Try restoring a backup "
                           f"or starting with -salvagewallet.")
                )
            return self._salvage(location, data_file)

    def _salvage(self, location: WalletLocation, data_file: Path) -> VerifyResult:
        """Move the unreadable file aside and start from an empty document"""
        backup = data_file.with_name(f"{data_file.name}.{int(time.time())}.bak")
        try:
            os.replace(data_file, backup)
            _write_document(data_file, _empty_document(location.name))
        except OSError as e:
            return VerifyResult(ok=False, error=f"Salvage of wallet {location.display_name} failed: {e}")

        return VerifyResult(
            ok=True,
            warning=(f"Warning: Wallet file corrupt, data salvaged! Original {data_file.name} saved "
                     f"as {backup.name} in {backup.parent}; if your balance or transactions are "
                     f"incorrect you should restore from a backup.")
        )

    def create_from_file(self, location: WalletLocation) -> Optional[FileWallet]:
        path = location.path
        try:
            if not path.exists():
                path.mkdir(parents=True)
            data_file = wallet_data_file(path)
            if not data_file.exists():
                _write_document(data_file, _empty_document(location.name))
                logger.info(f"Created new wallet {location.display_name} at {data_file}")
            document = _read_document(data_file)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to open wallet {location.display_name}: {e}")
            return None

        return FileWallet(location, data_file, document)

    def unload(self, handle: WalletHandle):
        # Releasing an already hard-flushed wallet is a no-op
        handle.flush(True)
        logger.debug(f"Released wallet {handle.location.display_name}")
