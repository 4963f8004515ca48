"""Main entry point for the multi-timer clock."""

import curses
import logging
import signal
import threading

from .config import DEBUG, LOG_FILE, MAX_ALARMS, MAX_TIMERS, JINGLE_FILE
from .controller import InputController
from .display import CursesDisplay
from .entries import EntryStore
from .player import NotificationPlayer
from .renderer import DisplayRenderer
from .scheduler import start_scheduler, stop_scheduler

_LOGGER = logging.getLogger(__name__)

# Global controller reference for signal handler
_controller: InputController = None


def signal_handler(signum, frame):
    """Handle shutdown signals."""
    _LOGGER.info("Received signal %d, shutting down", signum)
    if _controller is not None:
        _controller.stop()


def _setup_logging():
    logging.basicConfig(
        filename=str(LOG_FILE),
        level=logging.DEBUG if DEBUG else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )


def _run(stdscr):
    """Body of the curses session."""
    global _controller

    display = CursesDisplay(stdscr)
    store = EntryStore()
    editing = threading.Event()
    player = NotificationPlayer()
    renderer = DisplayRenderer(store, display, editing)
    _controller = InputController(store, display, editing)

    start_scheduler(store, player, renderer)
    try:
        _controller.run()
    finally:
        stop_scheduler()
        display.close()


def main():
    """Main entry point."""
    _setup_logging()

    # Set up signal handlers
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    print("=" * 50)
    print("Multiclock")
    print("=" * 50)
    print(f"Timers: {MAX_TIMERS}, alarms: {MAX_ALARMS}")
    print(f"Jingle: {JINGLE_FILE}")
    print(f"Log: {LOG_FILE}")

    _LOGGER.info("Starting")
    curses.wrapper(_run)

    print("\n[Multiclock] Shutting down...")


if __name__ == "__main__":
    main()
