"""Keyboard commands for creating timers and alarms."""

import logging
import threading

from .entries import EntryStore
from .parsing import parse_alarm_time, parse_duration

_LOGGER = logging.getLogger(__name__)

TIMER_KEY = "t"
ALARM_KEY = "a"

TIMER_PROMPT = "Set timer (e.g., 60s, 1m30s, 2h10s): "
ALARM_PROMPT = "Set alarm (hhmmss): "


class InputController:
    """Reads single-key commands and prompts for new entries."""

    def __init__(self, store: EntryStore, display, editing: threading.Event):
        self._store = store
        self._display = display
        self._editing = editing
        self._running = False

    def create_timer(self) -> bool:
        """Prompt for a duration and add a timer. Returns False if it was dropped."""
        self._editing.set()
        try:
            text = self._display.request_line(TIMER_PROMPT)
            hours, minutes, seconds = parse_duration(text)
            added = self._store.add_timer(hours, minutes, seconds)
        finally:
            self._editing.clear()

        if added:
            _LOGGER.info("Timer set: %r -> %02d:%02d:%02d", text, hours, minutes, seconds)
        else:
            _LOGGER.debug("All timer slots in use, dropped %r", text)
        return added

    def create_alarm(self) -> bool:
        """Prompt for an hhmmss time and add an alarm. Returns False if it was dropped."""
        self._editing.set()
        try:
            text = self._display.request_line(ALARM_PROMPT)
            hours, minutes, seconds = parse_alarm_time(text)
            added = self._store.add_alarm(hours, minutes, seconds)
        finally:
            self._editing.clear()

        if added:
            _LOGGER.info("Alarm set: %r -> %02d:%02d:%02d", text, hours, minutes, seconds)
        else:
            _LOGGER.debug("All alarm slots in use, dropped %r", text)
        return added

    def handle_key(self, key) -> bool:
        """Dispatch one key press. Returns True if it was a command."""
        if key == TIMER_KEY:
            self.create_timer()
            return True
        if key == ALARM_KEY:
            self.create_alarm()
            return True
        return False

    def run(self):
        """Read keys until stop() is called."""
        self._running = True
        while self._running:
            key = self._display.get_key()
            if key is not None:
                self.handle_key(key)

    def stop(self):
        self._running = False
