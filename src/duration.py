"""Parser for human-readable duration strings such as `25m` or `1h30m`."""

from __future__ import annotations

_UNIT_MINUTES = {
    "h": 60.0,
    "m": 1.0,
    "s": 1.0 / 60.0,
}

_UNIT_NAMES = {
    "h": "hour",
    "m": "minute",
    "s": "second",
}


class DurationParseError(ValueError):
    """Raised when a duration string does not follow the `<number><unit>` grammar."""


def parse_duration_minutes(text: str) -> float:
    """Convert a duration string into minutes.

    Digits and a decimal point accumulate into a pending number; each of the
    unit characters `h`, `m` and `s` flushes the pending number into the total.
    Any other characters are ignored.
    """
    normalized = text.strip().lower()
    total_minutes = 0.0
    pending = ""

    for char in normalized:
        if char.isdigit() or char == ".":
            pending += char
            continue
        factor = _UNIT_MINUTES.get(char)
        if factor is None:
            continue
        try:
            value = float(pending)
        except ValueError as error:
            raise DurationParseError(f"Invalid {_UNIT_NAMES[char]} format") from error
        total_minutes += value * factor
        pending = ""

    if total_minutes > 0.0:
        return total_minutes
    raise DurationParseError(
        "Invalid duration format. Use: 25m, 1h30m, 90m, 1.5h, 0.5m"
    )
