# multiwallet/init/registry.py
import threading
import logging
from pathlib import Path
from typing import List, Optional, Union

from multiwallet.core.exceptions import DuplicateWalletError
from multiwallet.core.interfaces import WalletHandle

logger = logging.getLogger(__name__)

class WalletRegistry:
    """Insertion-ordered set of loaded wallets.

    The lock guards membership only. Callers iterate over ``snapshot()``
    and do their per-wallet work without holding it; each wallet is
    responsible for its own internal locking.
    """

    def __init__(self):
        self._wallets: List[WalletHandle] = []
        self._lock = threading.RLock()

    def add(self, wallet: WalletHandle) -> None:
        with self._lock:
            for existing in self._wallets:
                if existing is wallet or existing.location == wallet.location:
                    raise DuplicateWalletError(wallet.name)
            self._wallets.append(wallet)
        logger.debug(f"Registered wallet {wallet.location.display_name}")

    def remove(self, wallet: WalletHandle) -> bool:
        with self._lock:
            for index, existing in enumerate(self._wallets):
                if existing is wallet:
                    del self._wallets[index]
                    return True
        return False

    def pop(self) -> Optional[WalletHandle]:
        """Remove and return the most recently added wallet"""
        with self._lock:
            if not self._wallets:
                return None
            return self._wallets.pop()

    def get(self, name: str) -> Optional[WalletHandle]:
        with self._lock:
            for wallet in self._wallets:
                if wallet.name == name:
                    return wallet
        return None

    def find(self, path: Union[str, Path]) -> Optional[WalletHandle]:
        target = Path(path)
        with self._lock:
            for wallet in self._wallets:
                if wallet.location.path == target:
                    return wallet
        return None

    def snapshot(self) -> List[WalletHandle]:
        with self._lock:
            return list(self._wallets)

    def __len__(self) -> int:
        with self._lock:
            return len(self._wallets)

    def __contains__(self, wallet: object) -> bool:
        with self._lock:
            return any(existing is wallet for existing in self._wallets)
