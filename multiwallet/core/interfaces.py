from abc import ABC, abstractmethod
from typing import Callable, Optional

from multiwallet.core.wallet_types import VerifyResult, WalletLocation

class WalletHandle(ABC):
    """Abstract base class for a live wallet owned by the registry"""

    @property
    @abstractmethod
    def location(self) -> WalletLocation:
        """Location this wallet was loaded from"""
        pass

    @property
    def name(self) -> str:
        return self.location.name

    @abstractmethod
    def post_init(self) -> None:
        """Called once the node is ready, before the wallet goes live"""
        pass

    @abstractmethod
    def flush(self, hard: bool = False) -> None:
        """Persist pending state; ``hard`` also releases storage resources"""
        pass

    def maintain(self) -> None:
        """Bounded periodic housekeeping"""
        self.flush(False)

class WalletCapability(ABC):
    """Abstract base class for the wallet implementation injected into the node"""

    @abstractmethod
    def verify(self, location: WalletLocation, salvage: bool) -> VerifyResult:
        """Check that a location holds (or can hold) a usable wallet"""
        pass

    @abstractmethod
    def create_from_file(self, location: WalletLocation) -> Optional[WalletHandle]:
        """Open or create the wallet at ``location``; None on failure"""
        pass

    @abstractmethod
    def unload(self, handle: WalletHandle) -> None:
        """Release a wallet that is no longer registered"""
        pass

class Scheduler(ABC):
    """Abstract base class for the node's recurring task scheduler"""

    @abstractmethod
    def schedule_every(self, task: Callable[[], None], interval_ms: int) -> None:
        """Run ``task`` every ``interval_ms`` milliseconds until shutdown"""
        pass
