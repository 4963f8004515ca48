"""Periodic redraw of the clock, timers and alarms."""

import threading

from .entries import EntryStore


class DisplayRenderer:
    """Pushes one frame per tick to the display, unless an entry is being typed."""

    def __init__(self, store: EntryStore, display, editing: threading.Event):
        self._store = store
        self._display = display
        self._editing = editing

    def refresh(self) -> bool:
        """
        Draw the current state.

        Returns False when the pass was skipped for editing or the display
        dropped the frame.
        """
        # Read without the store lock; one frame too many or too few at the
        # edit boundary is fine
        if self._editing.is_set():
            return False
        return bool(self._store.render_to(self._display))
