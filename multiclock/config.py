"""Configuration for the multi-timer clock."""

import os
from pathlib import Path

from . import PROJECT_DIR, SOUNDS_DIR

# Slot capacity, fixed at process start
MAX_TIMERS = 5
MAX_ALARMS = 5

# Seconds a finished timer/alarm stays on screen before its slot is freed
GRACE_PERIOD = 7

# Period of the countdown, alarm and render jobs (seconds)
TICK_INTERVAL = 1

# Notification sound - must be a WAV file (read with the stdlib wave module)
JINGLE_FILE = Path(os.environ.get("MULTICLOCK_JINGLE", SOUNDS_DIR / "jingle.wav"))
JINGLE_DURATION = 8  # seconds, the jingle is cut off after this

# Speaker - set to None for default, or specify device index
# Use `python -c "import sounddevice; print(sounddevice.query_devices())"` to list
AUDIO_OUTPUT_DEVICE = os.environ.get("AUDIO_DEVICE", None)  # None = default playback device
if AUDIO_OUTPUT_DEVICE is not None:
    AUDIO_OUTPUT_DEVICE = int(AUDIO_OUTPUT_DEVICE)

# Curses owns the terminal, so diagnostics go to a file
LOG_FILE = Path(os.environ.get("MULTICLOCK_LOG", PROJECT_DIR / "multiclock.log"))

# Terminal settings
RENDER_LOCK_TIMEOUT = 0.5  # give up on a frame if the screen is busy this long
KEY_POLL_TIMEOUT = 100  # milliseconds per getch() poll

# Debug settings
DEBUG = os.environ.get("MULTICLOCK_DEBUG", "0") == "1"
