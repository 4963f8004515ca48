"""Notification jingle playback using sounddevice."""

import logging
import threading
import wave
from pathlib import Path
from typing import Callable, Optional

import numpy as np

from .config import AUDIO_OUTPUT_DEVICE, JINGLE_DURATION, JINGLE_FILE

_LOGGER = logging.getLogger(__name__)

# numpy dtype for each WAV sample width (bytes)
SAMPLE_DTYPES = {1: np.uint8, 2: np.int16, 4: np.int32}


def load_wav(path: Path):
    """
    Read a WAV file into a float32 array shaped (frames, channels).

    Returns (samples, sample_rate).
    """
    with wave.open(str(path), "rb") as wav:
        width = wav.getsampwidth()
        channels = wav.getnchannels()
        sample_rate = wav.getframerate()
        raw = wav.readframes(wav.getnframes())

    dtype = SAMPLE_DTYPES.get(width)
    if dtype is None:
        raise ValueError(f"Unsupported sample width: {width * 8} bits")

    samples = np.frombuffer(raw, dtype=dtype).astype(np.float32)
    if dtype is np.uint8:
        samples = (samples - 128.0) / 128.0
    else:
        samples /= float(np.iinfo(dtype).max)

    return samples.reshape(-1, channels), sample_rate


def play_jingle(path: Optional[Path] = None, duration: float = JINGLE_DURATION) -> bool:
    """
    Play the jingle on the default output device, blocking for ``duration``.

    Returns True if the sound was played, False if the device or the file
    could not be used.
    """
    path = Path(path or JINGLE_FILE)

    try:
        samples, sample_rate = load_wav(path)
    except FileNotFoundError:
        _LOGGER.error("Jingle not found: %s", path)
        return False
    except (wave.Error, ValueError, EOFError) as e:
        _LOGGER.error("Failed to load jingle %s: %s", path, e)
        return False

    try:
        # PortAudio is loaded on import, so a missing library is a device failure
        import sounddevice as sd
    except (ImportError, OSError) as e:
        _LOGGER.error("Audio output not available: %s", e)
        return False

    try:
        sd.play(samples, sample_rate, device=AUDIO_OUTPUT_DEVICE)
        sd.sleep(int(duration * 1000))
        sd.stop()
    except Exception as e:
        _LOGGER.error("Error playing jingle: %s", e)
        return False

    return True


class NotificationPlayer:
    """
    Plays the notification sound, at most once at a time.

    ``trigger()`` never blocks: playback happens on a detached thread and
    requests made while it runs are dropped, not queued.
    """

    def __init__(self, play_sound: Callable[[], bool] = play_jingle):
        """
        Args:
            play_sound: Blocking callable that plays the sound once and
                returns True on success
        """
        self._play_sound = play_sound
        self._lock = threading.Lock()
        self._playing = False

    @property
    def is_playing(self) -> bool:
        with self._lock:
            return self._playing

    def trigger(self) -> bool:
        """
        Start playback unless it is already underway.

        Returns True if a new playback was started.
        """
        with self._lock:
            if self._playing:
                return False
            self._playing = True

        thread = threading.Thread(target=self._run, name="jingle", daemon=True)
        try:
            thread.start()
        except RuntimeError as e:
            _LOGGER.error("Could not start playback thread: %s", e)
            with self._lock:
                self._playing = False
            return False
        return True

    def _run(self):
        """Playback thread body; always clears the playing flag."""
        try:
            _LOGGER.info("Playing notification")
            if not self._play_sound():
                _LOGGER.warning("Notification skipped")
        except Exception:
            _LOGGER.exception("Notification playback failed")
        finally:
            with self._lock:
                self._playing = False
