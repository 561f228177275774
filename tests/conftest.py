import sys
from pathlib import Path
from typing import Dict, List, Optional, Set

import pytest

# Add project root so `import multiwallet` works without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from multiwallet.core.config import ConfigSnapshot
from multiwallet.core.interfaces import Scheduler, WalletCapability, WalletHandle
from multiwallet.core.wallet_types import VerifyResult, WalletLocation


class FakeWallet(WalletHandle):
    """In-memory wallet that records every call made on it."""

    def __init__(self, location: WalletLocation, fail_on: Optional[Set[str]] = None):
        self._location = location
        self.fail_on = fail_on or set()
        self.post_init_calls = 0
        self.flushes: List[bool] = []
        self.maintain_calls = 0

    @property
    def location(self) -> WalletLocation:
        return self._location

    def post_init(self):
        if 'post_init' in self.fail_on:
            raise RuntimeError("post_init boom")
        self.post_init_calls += 1

    def flush(self, hard: bool = False):
        if 'flush' in self.fail_on:
            raise RuntimeError("flush boom")
        self.flushes.append(hard)

    def maintain(self):
        if 'maintain' in self.fail_on:
            raise RuntimeError("maintain boom")
        self.maintain_calls += 1


class FakeCapability(WalletCapability):
    """Wallet capability double with scripted failures."""

    def __init__(self, registry=None):
        self.registry = registry
        self.verify_results: Dict[str, VerifyResult] = {}
        self.fail_create: Set[str] = set()
        self.raise_create: Set[str] = set()
        self.fail_unload: Set[str] = set()
        self.wallet_failures: Dict[str, Set[str]] = {}
        self.verified: List[tuple] = []
        self.created: List[FakeWallet] = []
        self.create_attempts: List[str] = []
        self.unloaded: List[FakeWallet] = []
        self.registered_at_release: List[bool] = []

    def verify(self, location: WalletLocation, salvage: bool) -> VerifyResult:
        self.verified.append((location.name, salvage))
        return self.verify_results.get(location.name, VerifyResult(ok=True))

    def create_from_file(self, location: WalletLocation) -> Optional[FakeWallet]:
        self.create_attempts.append(location.name)
        if location.name in self.raise_create:
            raise OSError("disk on fire")
        if location.name in self.fail_create:
            return None
        wallet = FakeWallet(location, self.wallet_failures.get(location.name))
        self.created.append(wallet)
        return wallet

    def unload(self, handle: WalletHandle):
        if self.registry is not None:
            self.registered_at_release.append(handle in self.registry)
        if handle.name in self.fail_unload:
            raise RuntimeError("unload boom")
        self.unloaded.append(handle)


class FakeScheduler(Scheduler):
    def __init__(self):
        self.scheduled: List[tuple] = []

    def schedule_every(self, task, interval_ms: int):
        self.scheduled.append((task, interval_ms))


@pytest.fixture
def data_dir(tmp_path) -> Path:
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def make_config(data_dir):
    """Build a user snapshot rooted at the temporary data directory."""
    def _make(**options) -> ConfigSnapshot:
        options.setdefault('datadir', str(data_dir))
        return ConfigSnapshot.from_user(options)
    return _make


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()
