# multiwallet/init/lifecycle.py - Wallet set lifecycle

import logging
from typing import Callable, Dict, FrozenSet, List, Optional

from multiwallet.core.config import ConfigSnapshot
from multiwallet.core.exceptions import DuplicateWalletError, LifecycleStateError, WalletDirError
from multiwallet.core.interfaces import Scheduler, WalletCapability, WalletHandle
from multiwallet.core.wallet_types import (
    LifecycleState, ValidationResult, VerificationReport, VerifyResult, WalletLocation
)
from multiwallet.init.legacy_migration import maybe_migrate
from multiwallet.init.parameter_interaction import validate
from multiwallet.init.path_resolver import get_data_dir, get_wallet_dir, prepare_wallet_dir, resolve_all
from multiwallet.init.registry import WalletRegistry
from multiwallet.tasks.maintenance_task import MAINTENANCE_INTERVAL_MS, PeriodicMaintenanceTask

logger = logging.getLogger("multiwallet.lifecycle")

_ANY_STATE = frozenset(LifecycleState)

# States each step may be entered from
_ALLOWED_FROM: Dict[str, FrozenSet[LifecycleState]] = {
    'verify': frozenset({LifecycleState.UNVALIDATED}),
    'load': frozenset({LifecycleState.VERIFIED}),
    'start': frozenset({LifecycleState.LOADED}),
    'flush': frozenset({LifecycleState.RUNNING, LifecycleState.FLUSHING}),
    'stop': frozenset({LifecycleState.VERIFIED, LifecycleState.LOADED,
                       LifecycleState.RUNNING, LifecycleState.FLUSHING}),
    'unload': _ANY_STATE,
}

class WalletLifecycle:
    """Drives verify, load, start, flush, stop and unload over all wallets.

    Load is strict: the first wallet that cannot be constructed ends the
    batch, and wallets loaded before it stay registered until ``unload()``.
    Start, flush, stop and unload are best effort: a failing wallet is
    logged and the remaining wallets are still processed.
    """

    def __init__(self, config: ConfigSnapshot, capability: WalletCapability,
                 registry: Optional[WalletRegistry] = None):
        self.config = config
        self.capability = capability
        self.registry = registry if registry is not None else WalletRegistry()
        self.state = LifecycleState.UNVALIDATED
        self.locations: List[WalletLocation] = []
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self.maintenance_task: Optional[PeriodicMaintenanceTask] = None

    @property
    def enabled(self) -> bool:
        return not self.config.get_bool("disablewallet")

    def _require(self, step: str):
        if self.state not in _ALLOWED_FROM[step]:
            raise LifecycleStateError(f"Cannot {step} wallets in state {self.state.name}")

    def _init_error(self, message: str):
        logger.error(message)
        self.errors.append(message)

    def _init_warning(self, message: str):
        logger.warning(message)
        self.warnings.append(message)

    def validate(self) -> ValidationResult:
        """Parameter interaction; adopts the adjusted configuration on success"""
        self._require('verify')
        result = validate(self.config)
        for info in result.infos:
            logger.info(info)
        for warning in result.warnings:
            self._init_warning(warning)
        for error in result.errors:
            self._init_error(error)
        if result.ok:
            self.config = result.config
        return result

    def construct(self) -> bool:
        """Settle the wallet directory, migrate a legacy wallet, default the wallet list"""
        self._require('verify')
        if not self.enabled:
            logger.info("Wallet disabled!")
            return True

        try:
            self.config = prepare_wallet_dir(self.config)
        except WalletDirError as e:
            self._init_error(str(e))
            return False

        wallet_dir = get_wallet_dir(self.config)
        logger.info(f"Using wallet directory {wallet_dir}")

        outcome = maybe_migrate(get_data_dir(self.config), wallet_dir, self.config.get("legacydatadir"))
        logger.debug(f"Legacy wallet migration: {outcome.value}")

        # No -wallet at all means the default wallet in the wallet directory root
        self.config, _ = self.config.soft_set("wallet", ("",))
        return True

    def verify(self) -> VerificationReport:
        self._require('verify')
        if not self.enabled:
            self.state = LifecycleState.VERIFIED
            return VerificationReport(ok=True)

        identifiers = self.config.get_list("wallet")
        logger.info("Verifying wallet(s)...")

        try:
            locations = resolve_all(identifiers, get_wallet_dir(self.config))
        except DuplicateWalletError as e:
            self._init_error(str(e))
            return VerificationReport(ok=False, errors=[str(e)])

        # Parameter interaction already rejects salvage with several wallets
        salvage = self.config.get_bool("salvagewallet") and len(identifiers) <= 1

        report = VerificationReport(ok=True, locations=locations)
        for location in locations:
            try:
                result = self.capability.verify(location, salvage)
            except Exception as e:
                result = VerifyResult(ok=False, error=f"Error verifying wallet {location.display_name}: {e}")

            if result.error:
                self._init_error(result.error)
                report.errors.append(result.error)
            if result.warning:
                self._init_warning(result.warning)
                report.warnings.append(result.warning)
            if not result.ok:
                report.ok = False

        self.locations = locations
        self.state = LifecycleState.VERIFIED
        return report

    def load(self) -> bool:
        """Construct every verified wallet in order, stopping at the first failure"""
        self._require('load')

        for location in self.locations:
            try:
                wallet = self.capability.create_from_file(location)
            except Exception as e:
                self._init_error(f"Error loading wallet {location.display_name}: {e}")
                return False

            if wallet is None:
                self._init_error(f"Error loading wallet {location.display_name}")
                return False

            try:
                self.registry.add(wallet)
            except DuplicateWalletError as e:
                self._init_error(str(e))
                self.capability.unload(wallet)
                return False
            logger.info(f"Loaded wallet {location.display_name} from {location.path}")

        self.state = LifecycleState.LOADED
        return True

    def _best_effort_foreach(self, action: Callable[[WalletHandle], None], label: str) -> int:
        """Apply ``action`` to every registered wallet, returning the failure count"""
        failures = 0
        for wallet in self.registry.snapshot():
            try:
                action(wallet)
            except Exception as e:
                failures += 1
                logger.error(f"Wallet {wallet.location.display_name} {label} failed: {e}")
        return failures

    def start(self, scheduler: Scheduler):
        self._require('start')
        if self.enabled:
            self._best_effort_foreach(lambda wallet: wallet.post_init(), "post-init")

            self.maintenance_task = PeriodicMaintenanceTask(
                self.registry, enabled=self.config.get_bool("flushwallet")
            )
            scheduler.schedule_every(self.maintenance_task.run, MAINTENANCE_INTERVAL_MS)

        self.state = LifecycleState.RUNNING

    def flush(self) -> int:
        """Soft flush: persist pending state, keep resources open"""
        self._require('flush')
        failures = self._best_effort_foreach(lambda wallet: wallet.flush(False), "flush")
        self.state = LifecycleState.FLUSHING
        return failures

    def stop(self) -> int:
        """Hard flush: persist and release storage resources"""
        self._require('stop')
        failures = self._best_effort_foreach(lambda wallet: wallet.flush(True), "shutdown flush")
        self.state = LifecycleState.STOPPED
        return failures

    def unload(self) -> int:
        """Drain the registry, deregistering each wallet before releasing it"""
        self._require('unload')
        failures = 0
        while True:
            wallet = self.registry.pop()
            if wallet is None:
                break
            try:
                self.capability.unload(wallet)
            except Exception as e:
                failures += 1
                logger.error(f"Failed to unload wallet {wallet.location.display_name}: {e}")

        self.state = LifecycleState.UNLOADED
        return failures

    def initialize(self, scheduler: Scheduler) -> bool:
        """Run the whole startup sequence; a failed load is unwound"""
        if not self.validate().ok:
            return False
        if not self.construct():
            return False
        if not self.verify().ok:
            return False
        if not self.load():
            logger.info(f"Unloading {len(self.registry)} wallet(s) after failed load")
            self.unload()
            return False
        self.start(scheduler)
        return True

    def shutdown(self):
        """Flush, stop and unload whatever is currently registered"""
        if self.state == LifecycleState.UNLOADED:
            return
        if self.state in _ALLOWED_FROM['flush']:
            self.flush()
        if self.state in _ALLOWED_FROM['stop']:
            self.stop()
        self.unload()
        logger.info("Wallets shut down")
