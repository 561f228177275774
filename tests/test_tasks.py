"""
Tests for the periodic maintenance task and the threaded scheduler.
"""
import threading
import time
from pathlib import Path

import pytest

from multiwallet.core.wallet_types import WalletLocation
from multiwallet.init.registry import WalletRegistry
from multiwallet.tasks.maintenance_task import PeriodicMaintenanceTask
from multiwallet.tasks.scheduler import ThreadScheduler

from conftest import FakeWallet


def wallet(name: str, fail_on=None) -> FakeWallet:
    return FakeWallet(WalletLocation(path=Path("/wallets") / name, name=name), fail_on)


class TestPeriodicMaintenanceTask:

    def setup_method(self):
        self.registry = WalletRegistry()

    def test_maintains_every_wallet(self):
        wallets = [wallet("a"), wallet("b")]
        for w in wallets:
            self.registry.add(w)
        task = PeriodicMaintenanceTask(self.registry)

        task.run()
        task.run()

        assert [w.maintain_calls for w in wallets] == [2, 2]
        assert task.runs_completed == 2

    def test_failing_wallet_does_not_stop_siblings(self):
        bad, good = wallet("bad", {"maintain"}), wallet("good")
        self.registry.add(bad)
        self.registry.add(good)

        PeriodicMaintenanceTask(self.registry).run()

        assert good.maintain_calls == 1

    def test_disabled_task_does_nothing(self):
        w = wallet("a")
        self.registry.add(w)
        task = PeriodicMaintenanceTask(self.registry, enabled=False)
        task.run()
        assert w.maintain_calls == 0
        assert task.runs_completed == 0

    def test_overlapping_run_is_skipped(self):
        entered = threading.Event()
        release = threading.Event()

        class SlowWallet(FakeWallet):
            def maintain(self):
                entered.set()
                release.wait(5)
                super().maintain()

        slow = SlowWallet(WalletLocation(path=Path("/wallets/slow"), name="slow"))
        self.registry.add(slow)
        task = PeriodicMaintenanceTask(self.registry)

        worker = threading.Thread(target=task.run)
        worker.start()
        assert entered.wait(5)
        task.run()
        release.set()
        worker.join(5)

        assert slow.maintain_calls == 1
        assert task.runs_completed == 1

    def test_wallet_added_during_run_is_picked_up_next_time(self):
        first = wallet("first")
        self.registry.add(first)
        task = PeriodicMaintenanceTask(self.registry)
        task.run()
        late = wallet("late")
        self.registry.add(late)
        task.run()
        assert (first.maintain_calls, late.maintain_calls) == (2, 1)


class TestThreadScheduler:

    def setup_method(self):
        self.scheduler = ThreadScheduler()

    def teardown_method(self):
        self.scheduler.stop()

    def test_runs_task_repeatedly(self):
        calls = []
        done = threading.Event()

        def task():
            calls.append(time.monotonic())
            if len(calls) >= 3:
                done.set()

        self.scheduler.schedule_every(task, 10)
        self.scheduler.start()

        assert done.wait(5)

    def test_failing_task_keeps_its_schedule(self):
        calls = []
        done = threading.Event()

        def task():
            calls.append(1)
            if len(calls) >= 2:
                done.set()
            raise RuntimeError("boom")

        self.scheduler.schedule_every(task, 10)
        self.scheduler.start()

        assert done.wait(5)

    def test_stop_drops_pending_tasks(self):
        self.scheduler.schedule_every(lambda: None, 60000)
        self.scheduler.start()
        assert self.scheduler.running
        self.scheduler.stop()
        assert not self.scheduler.running
        assert self.scheduler.pending == 0

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            self.scheduler.schedule_every(lambda: None, 0)
