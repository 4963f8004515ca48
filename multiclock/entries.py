"""Fixed-capacity timer and alarm slots shared by all clock activities."""

import copy
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from .config import GRACE_PERIOD, MAX_ALARMS, MAX_TIMERS


@dataclass
class _Entry:
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    active: bool = False
    done: bool = False
    done_time: Optional[float] = None  # time.monotonic() at expiry

    @property
    def is_zero(self) -> bool:
        return self.hours == 0 and self.minutes == 0 and self.seconds == 0

    def clock(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"

    def mark_done(self, now: float):
        self.done = True
        self.done_time = now

    def free(self):
        self.active = False
        self.done = False
        self.done_time = None

    def grace_elapsed(self, now: float) -> bool:
        return self.done and now - self.done_time >= GRACE_PERIOD


@dataclass
class Timer(_Entry):
    """Countdown entry: hours/minutes/seconds hold the remaining duration."""

    def tick(self):
        """Decrement by one second, borrowing from minutes then hours."""
        if self.seconds > 0:
            self.seconds -= 1
        elif self.minutes > 0:
            self.minutes -= 1
            self.seconds = 59
        elif self.hours > 0:
            self.hours -= 1
            self.minutes = 59
            self.seconds = 59


@dataclass
class Alarm(_Entry):
    """Clock-time entry: hours/minutes/seconds hold the target time of day."""

    def matches(self, wall: datetime) -> bool:
        return (
            self.hours == wall.hour
            and self.minutes == wall.minute
            and self.seconds == wall.second
        )


class EntryStore:
    """
    Owns the timer and alarm slots.

    A single lock guards both collections, since every periodic pass
    touches both. Callers never see the slot lists themselves, only copies.
    """

    def __init__(self, max_timers: int = MAX_TIMERS, max_alarms: int = MAX_ALARMS):
        self._lock = threading.Lock()
        self._timers = [Timer() for _ in range(max_timers)]
        self._alarms = [Alarm() for _ in range(max_alarms)]

    @staticmethod
    def _install(slots: list, entry: _Entry) -> bool:
        for index, slot in enumerate(slots):
            if not slot.active:
                slots[index] = entry
                return True
        return False

    def add_timer(self, hours: int, minutes: int, seconds: int) -> bool:
        """
        Put a new timer in the first free slot.

        Returns False (store untouched) when all timer slots are in use.
        """
        timer = Timer(hours, minutes, seconds, active=True)
        with self._lock:
            return self._install(self._timers, timer)

    def add_alarm(self, hours: int, minutes: int, seconds: int) -> bool:
        """Put a new alarm in the first free slot. Returns False when full."""
        alarm = Alarm(hours, minutes, seconds, active=True)
        with self._lock:
            return self._install(self._alarms, alarm)

    def _release_expired(self, now: float) -> int:
        released = 0
        for entry in self._timers + self._alarms:
            if entry.active and entry.grace_elapsed(now):
                entry.free()
                released += 1
        return released

    def release_expired(self, now: Optional[float] = None) -> int:
        """Free every done entry whose grace window has run out."""
        if now is None:
            now = time.monotonic()
        with self._lock:
            return self._release_expired(now)

    def countdown_tick(self, now: Optional[float] = None) -> List[Timer]:
        """
        Advance all running timers by one second.

        Returns copies of the timers that finished on this tick.
        """
        if now is None:
            now = time.monotonic()
        finished = []

        with self._lock:
            self._release_expired(now)
            for timer in self._timers:
                if not timer.active or timer.done:
                    continue
                if not timer.is_zero:
                    timer.tick()
                if timer.is_zero:
                    timer.mark_done(now)
                    finished.append(copy.copy(timer))

        return finished

    def scan_alarms(
        self, wall: Optional[datetime] = None, now: Optional[float] = None
    ) -> List[Alarm]:
        """
        Fire alarms whose time equals the wall clock to the second.

        A second that is never scanned is never caught up on.
        """
        if wall is None:
            wall = datetime.now()
        if now is None:
            now = time.monotonic()
        fired = []

        with self._lock:
            self._release_expired(now)
            for alarm in self._alarms:
                if alarm.active and not alarm.done and alarm.matches(wall):
                    alarm.mark_done(now)
                    fired.append(copy.copy(alarm))

        return fired

    def _frame_lines(self, wall: datetime, now: float) -> List[str]:
        lines = [f"Current Time: {wall.strftime('%H:%M:%S')}"]

        for timer in self._timers:
            if not timer.active:
                continue
            if timer.done:
                if timer.grace_elapsed(now):
                    timer.free()
                else:
                    lines.append("TIMER DONE")
            else:
                lines.append(f"Timer: {timer.clock()}")

        for alarm in self._alarms:
            if not alarm.active:
                continue
            if alarm.done:
                if alarm.grace_elapsed(now):
                    alarm.free()
                else:
                    lines.append("ALARM DONE")
            else:
                lines.append(f"Alarm set for {alarm.clock()}")

        return lines

    def compose_frame(
        self, wall: Optional[datetime] = None, now: Optional[float] = None
    ) -> List[str]:
        """Build one display frame: clock line, then timers, then alarms."""
        if wall is None:
            wall = datetime.now()
        if now is None:
            now = time.monotonic()
        with self._lock:
            return self._frame_lines(wall, now)

    def render_to(self, sink, wall: Optional[datetime] = None,
                  now: Optional[float] = None) -> bool:
        """Compose a frame and push it to ``sink`` without dropping the lock."""
        if wall is None:
            wall = datetime.now()
        if now is None:
            now = time.monotonic()
        with self._lock:
            return sink.render(self._frame_lines(wall, now))

    def timers(self) -> List[Timer]:
        with self._lock:
            return [copy.copy(t) for t in self._timers]

    def alarms(self) -> List[Alarm]:
        with self._lock:
            return [copy.copy(a) for a in self._alarms]
