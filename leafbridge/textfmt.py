"""Helpers for building structured event messages."""

from __future__ import annotations

from datetime import timedelta

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000
_ROUNDING_NS = 10 * _NS_PER_MS


class StructBuilder:
    """Builds a message from primary fields, standard text and notes.

    The result has the form "primary: primary: standard (note) (label: note)".
    """

    def __init__(self) -> None:
        self._primary: list[str] = []
        self._standard: list[str] = []
        self._notes: list[str] = []

    def write_primary(self, value: str) -> None:
        """Add a primary field."""
        self._primary.append(str(value))

    def write_standard(self, value: str) -> None:
        """Add standard text."""
        self._standard.append(str(value))

    def write_note(self, value: str, label: str | None = None) -> None:
        """Add a parenthesized note, optionally labeled."""
        self._notes.append(f"{label}: {value}" if label else str(value))

    def __str__(self) -> str:
        head = ": ".join(self._primary)
        standard = " ".join(self._standard)
        if head and standard:
            text = f"{head}: {standard}"
        else:
            text = head or standard
        for note in self._notes:
            text = f"{text} ({note})" if text else f"({note})"
        return text


def plural(value: int, singular: str, plural_form: str) -> str:
    """Return singular when value is exactly one, otherwise plural_form."""
    return singular if value == 1 else plural_form


def bitrate(transferred: int, duration: timedelta) -> str:
    """Return the transfer rate in mebibits per second with two decimals."""
    seconds = duration.total_seconds()
    if transferred == 0 or seconds == 0:
        return "0"
    mebibit = 1048576.0
    bytes_per_second = transferred / seconds
    return f"{bytes_per_second * 8 / mebibit:.2f}"


def _round_ns(ns: int, multiple: int) -> int:
    magnitude = abs(ns)
    remainder = magnitude % multiple
    if remainder + remainder < multiple:
        magnitude -= remainder
    else:
        magnitude += multiple - remainder
    return -magnitude if ns < 0 else magnitude


def _fraction(value: int, precision: int) -> tuple[int, str]:
    whole, frac = divmod(value, 10**precision)
    digits = f"{frac:0{precision}d}".rstrip("0")
    return whole, f".{digits}" if digits else ""


def format_duration(duration: timedelta) -> str:
    """Format a duration rounded to the nearest 10 ms, as in "1m2.5s" or "150ms"."""
    ns = _round_ns((duration // timedelta(microseconds=1)) * _NS_PER_US, _ROUNDING_NS)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    u = abs(ns)

    if u < _NS_PER_US:
        return f"{sign}{u}ns"
    if u < _NS_PER_MS:
        whole, frac = _fraction(u, 3)
        return f"{sign}{whole}{frac}µs"
    if u < _NS_PER_S:
        whole, frac = _fraction(u, 6)
        return f"{sign}{whole}{frac}ms"

    total_seconds, frac = _fraction(u, 9)
    minutes, seconds = divmod(total_seconds, 60)
    text = f"{seconds}{frac}s"
    if minutes:
        hours, minutes = divmod(minutes, 60)
        text = f"{minutes}m{text}"
        if hours:
            text = f"{hours}h{text}"
    return sign + text