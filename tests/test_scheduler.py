"""Tests for multiclock.scheduler: tick jobs and scheduler lifecycle."""
from __future__ import annotations

import threading
import time
from datetime import datetime

import pytest

from multiclock import scheduler
from multiclock.config import MAX_TIMERS
from multiclock.entries import EntryStore
from multiclock.player import NotificationPlayer
from multiclock.renderer import DisplayRenderer


class CountingPlayer:
    def __init__(self) -> None:
        self.triggers = 0

    def trigger(self) -> bool:
        self.triggers += 1
        return True


class TestJobs:
    def test_countdown_triggers_on_expiry(self) -> None:
        store = EntryStore()
        store.add_timer(0, 0, 2)
        player = CountingPlayer()
        scheduler._countdown_tick(store, player)
        assert player.triggers == 0
        scheduler._countdown_tick(store, player)
        assert player.triggers == 1
        scheduler._countdown_tick(store, player)
        assert player.triggers == 1

    def test_alarm_check_triggers_on_match(self, monkeypatch) -> None:
        store = EntryStore()
        now = datetime.now()
        store.add_alarm(now.hour, now.minute, now.second)
        store.add_alarm(now.hour, now.minute, now.second)
        player = CountingPlayer()
        monkeypatch.setattr(
            store, "scan_alarms",
            lambda: EntryStore.scan_alarms(store, wall=now),
        )
        scheduler._alarm_check(store, player)
        assert player.triggers == 1
        assert all(a.done for a in store.alarms()[:2])

    def test_simultaneous_expiry_plays_once(self) -> None:
        calls = []
        started = threading.Event()
        release = threading.Event()

        def sound() -> bool:
            calls.append(1)
            started.set()
            release.wait(2.0)
            return True

        player = NotificationPlayer(sound)
        store = EntryStore()
        store.add_timer(0, 0, 1)
        store.add_timer(0, 0, 1)
        now = datetime.now()
        store.add_alarm(now.hour, now.minute, now.second)

        scheduler._countdown_tick(store, player)
        assert started.wait(2.0)
        assert len(store.scan_alarms(wall=now)) == 1
        assert player.trigger() is False
        release.set()
        for _ in range(200):
            if not player.is_playing:
                break
            time.sleep(0.01)
        assert calls == [1]


class TestLifecycle:
    @pytest.fixture(autouse=True)
    def _cleanup(self):
        yield
        scheduler.stop_scheduler()

    def test_start_registers_jobs(self, display) -> None:
        store = EntryStore()
        renderer = DisplayRenderer(store, display, threading.Event())
        scheduler.start_scheduler(store, CountingPlayer(), renderer)
        sched = scheduler.get_scheduler()
        assert sched.running
        ids = {job.id for job in sched.get_jobs()}
        assert ids == {
            scheduler.COUNTDOWN_JOB_ID,
            scheduler.ALARM_CHECK_JOB_ID,
            scheduler.RENDER_JOB_ID,
        }

    def test_stop_resets_instance(self, display) -> None:
        store = EntryStore()
        renderer = DisplayRenderer(store, display, threading.Event())
        scheduler.start_scheduler(store, CountingPlayer(), renderer)
        first = scheduler.get_scheduler()
        scheduler.stop_scheduler()
        assert not first.running
        assert scheduler.get_scheduler() is not first

    def test_jobs_run_on_scheduler_threads(self, display) -> None:
        store = EntryStore()
        store.add_timer(0, 0, 2)
        player = CountingPlayer()
        renderer = DisplayRenderer(store, display, threading.Event())
        scheduler.start_scheduler(store, player, renderer)
        time.sleep(3.5)
        scheduler.stop_scheduler()

        timer = store.timers()[0]
        assert timer.active and timer.done
        assert timer.done_time is not None
        assert player.triggers == 1
        assert display.frames
        assert all(f[0].startswith("Current Time: ") for f in display.frames)


class TestConcurrentAccess:
    def _check_slots(self, entries) -> None:
        for entry in entries:
            if entry.done:
                assert entry.active
                assert entry.done_time is not None

    def test_slots_stay_consistent(self) -> None:
        class NullSink:
            def render(self, lines) -> bool:
                return True

        sink = NullSink()
        store = EntryStore()
        stop = threading.Event()
        added = []
        errors = []

        def loop(step):
            try:
                while not stop.is_set():
                    step()
                    time.sleep(0)
            except Exception as e:  # surfaced by the assertion below
                errors.append(e)

        def tick() -> None:
            store.countdown_tick()

        def scan() -> None:
            store.scan_alarms()

        def render() -> None:
            store.render_to(sink)
            self._check_slots(store.timers())
            self._check_slots(store.alarms())

        def add(i: int) -> None:
            # Long timers and impossible alarms never expire during the test
            added.append(store.add_timer(100_000 + i, 0, 0))
            store.add_alarm(99, 0, i)

        workers = [threading.Thread(target=loop, args=(f,)) for f in (tick, scan, render)]
        for w in workers:
            w.start()
        adders = [threading.Thread(target=add, args=(i,)) for i in range(12)]
        for a in adders:
            a.start()
        for a in adders:
            a.join()
        time.sleep(0.2)
        stop.set()
        for w in workers:
            w.join(5.0)

        assert errors == []
        assert added.count(True) == MAX_TIMERS
        timers = store.timers()
        alarms = store.alarms()
        assert all(t.active and not t.done for t in timers)
        assert all(a.active and not a.done for a in alarms)
        self._check_slots(timers)
        self._check_slots(alarms)
