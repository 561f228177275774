from multiwallet.tasks.maintenance_task import PeriodicMaintenanceTask, MAINTENANCE_INTERVAL_MS
from multiwallet.tasks.scheduler import ThreadScheduler

__all__ = [
    'PeriodicMaintenanceTask',
    'MAINTENANCE_INTERVAL_MS',
    'ThreadScheduler'
]
