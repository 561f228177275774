# tasks/maintenance_task.py - Periodic wallet maintenance

import threading
from typing import TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from multiwallet.init.registry import WalletRegistry

logger = logging.getLogger("multiwallet.maintenance")

MAINTENANCE_INTERVAL_MS = 500

class PeriodicMaintenanceTask:
    """Runs each registered wallet's bounded maintenance step"""
    
    def __init__(self, registry: 'WalletRegistry', enabled: bool = True):
        self.registry = registry
        self.enabled = enabled
        self.runs_completed = 0
        self._in_progress = threading.Lock()
    
    def run(self):
        """One maintenance pass over a snapshot of the registry"""
        if not self.enabled:
            return
        
        # A pass still running from the previous tick owns the wallets
        if not self._in_progress.acquire(blocking=False):
            logger.debug("Previous maintenance pass still running, skipping")
            return
        
        try:
            for wallet in self.registry.snapshot():
                try:
                    wallet.maintain()
                except Exception as e:
                    logger.error(f"Maintenance failed for wallet {wallet.location.display_name}: {e}")
            self.runs_completed += 1
        finally:
            self._in_progress.release()
