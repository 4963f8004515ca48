"""Terminal output and keyboard input using curses."""

import curses
import threading
from typing import Optional, Sequence

from .config import KEY_POLL_TIMEOUT, RENDER_LOCK_TIMEOUT

HELP_LINE = "[t] new timer   [a] new alarm   [Ctrl+C] quit"
MAX_INPUT = 20


class CursesDisplay:
    """
    Display sink on a curses screen.

    curses is not thread safe, so every screen call goes through one lock.
    The render job only waits briefly for it, so a long prompt drops frames
    instead of stalling the job.
    """

    def __init__(self, stdscr):
        self._screen = stdscr
        self._lock = threading.Lock()
        self._closed = False

        curses.noecho()
        curses.cbreak()
        try:
            curses.curs_set(0)  # Hide the cursor
        except curses.error:
            pass  # Terminal can't hide it
        self._screen.timeout(KEY_POLL_TIMEOUT)

    def _draw(self, row: int, text: str):
        height, width = self._screen.getmaxyx()
        if row >= height:
            return
        try:
            self._screen.addnstr(row, 0, text, width - 1)
        except curses.error:
            pass  # Writing to the bottom-right cell raises after the write

    def render(self, lines: Sequence[str]) -> bool:
        """Replace the screen with ``lines``. Returns False if the frame was dropped."""
        if not self._lock.acquire(timeout=RENDER_LOCK_TIMEOUT):
            return False
        try:
            if self._closed:
                return False
            self._screen.erase()
            for row, line in enumerate(lines):
                self._draw(row, line)
            height, _ = self._screen.getmaxyx()
            if height > len(lines) + 1:
                self._draw(height - 1, HELP_LINE)
            self._screen.refresh()
        finally:
            self._lock.release()
        return True

    def request_line(self, prompt: str) -> str:
        """Show ``prompt`` on a cleared screen and block until Enter."""
        with self._lock:
            self._screen.erase()
            self._draw(0, prompt)
            self._screen.refresh()

            curses.echo()
            try:
                curses.curs_set(1)
            except curses.error:
                pass
            self._screen.timeout(-1)
            try:
                raw = self._screen.getstr(0, min(len(prompt), self._screen.getmaxyx()[1] - 1), MAX_INPUT)
            finally:
                self._screen.timeout(KEY_POLL_TIMEOUT)
                curses.noecho()
                try:
                    curses.curs_set(0)
                except curses.error:
                    pass
            self._screen.erase()
            self._screen.refresh()

        return raw.decode("utf-8", errors="replace")

    def close(self):
        """Stop drawing; frames pushed after this are dropped."""
        with self._lock:
            self._closed = True

    def get_key(self) -> Optional[str]:
        """Wait up to one poll interval for a key press."""
        with self._lock:
            code = self._screen.getch()
        if code < 0 or code > 255:
            return None  # Timeout or special key
        return chr(code)
