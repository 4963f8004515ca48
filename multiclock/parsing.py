"""Parsing of user-entered timer durations and alarm times."""

from typing import Tuple

DURATION_UNITS = {"h": 0, "m": 1, "s": 2}


def parse_duration(text: str) -> Tuple[int, int, int]:
    """
    Parse a duration such as ``2h30m15s`` into (hours, minutes, seconds).

    Components are optional and may appear in any order; each run of digits
    is bound to the character that follows it. Unknown unit characters are
    skipped along with their value, and digits with no unit after them are
    ignored. Nothing here raises: bad input just gives zeros.
    """
    fields = [0, 0, 0]
    i = 0
    length = len(text)

    while i < length:
        value = 0
        while i < length and "0" <= text[i] <= "9":
            value = value * 10 + int(text[i])
            i += 1
        if i < length:
            index = DURATION_UNITS.get(text[i])
            if index is not None:
                fields[index] = value
            i += 1

    return fields[0], fields[1], fields[2]


def _digit(text: str, index: int) -> int:
    # No validation: a non-digit yields whatever its offset from '0' is
    if index >= len(text):
        return 0
    return ord(text[index]) - ord("0")


def parse_alarm_time(text: str) -> Tuple[int, int, int]:
    """
    Parse a six character ``hhmmss`` string into (hours, minutes, seconds).

    Input is not validated. Non-digits produce out-of-range values and a
    short string is padded with zeros; such an alarm simply never matches
    the wall clock.
    """
    hours = _digit(text, 0) * 10 + _digit(text, 1)
    minutes = _digit(text, 2) * 10 + _digit(text, 3)
    seconds = _digit(text, 4) * 10 + _digit(text, 5)
    return hours, minutes, seconds
