# tasks/scheduler.py - Recurring task scheduler

import heapq
import itertools
import threading
import time
import logging
from typing import Callable, List, Optional, Tuple

from multiwallet.core.interfaces import Scheduler

logger = logging.getLogger("multiwallet.scheduler")

class ThreadScheduler(Scheduler):
    """Runs recurring tasks on a single background thread"""
    
    def __init__(self, name: str = "multiwallet-scheduler"):
        self.name = name
        self._queue: List[Tuple[float, int, float, Callable[[], None]]] = []
        self._sequence = itertools.count()
        self._condition = threading.Condition()
        self._thread: Optional[threading.Thread] = None
        self._stopping = False
    
    def schedule_every(self, task: Callable[[], None], interval_ms: int) -> None:
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive, got {interval_ms}")
        
        interval = interval_ms / 1000.0
        with self._condition:
            heapq.heappush(self._queue, (time.monotonic() + interval, next(self._sequence), interval, task))
            self._condition.notify()
    
    @property
    def pending(self) -> int:
        with self._condition:
            return len(self._queue)
    
    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
    
    def start(self):
        """Start the service thread"""
        with self._condition:
            if self.running:
                return
            self._stopping = False
            self._thread = threading.Thread(target=self._service_queue, name=self.name, daemon=True)
            self._thread.start()
        logger.debug("Scheduler thread started")
    
    def stop(self, timeout: float = 5.0):
        """Stop the service thread; queued tasks are dropped"""
        with self._condition:
            self._stopping = True
            self._queue.clear()
            self._condition.notify_all()
        
        if self._thread:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Scheduler thread did not stop within timeout")
            self._thread = None
    
    def _service_queue(self):
        while True:
            with self._condition:
                while not self._stopping and (not self._queue or self._queue[0][0] > time.monotonic()):
                    timeout = self._queue[0][0] - time.monotonic() if self._queue else None
                    self._condition.wait(timeout)
                if self._stopping:
                    return
                due, sequence, interval, task = heapq.heappop(self._queue)
            
            try:
                task()
            except Exception as e:
                logger.error(f"Scheduled task {getattr(task, '__qualname__', task)} failed: {e}")
            
            with self._condition:
                if not self._stopping:
                    next_run = max(due + interval, time.monotonic())
                    heapq.heappush(self._queue, (next_run, sequence, interval, task))
