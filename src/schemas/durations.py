"""Human readable duration strings ("30m", "1h30m") exchanged at the API boundary.

Accepts the grammar used by Go's ``time.ParseDuration``: an optional sign
followed by one or more ``<number><unit>`` components, where unit is one of
``ns``, ``us`` (or ``µs``), ``ms``, ``s``, ``m``, ``h``. The bare string ``"0"``
is also accepted. Sub-microsecond precision is truncated.
"""

import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

# Microseconds per unit
_UNITS: dict[str, Decimal] = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),
    "μs": Decimal(1),
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

_MICROS_PER_SECOND = 1_000_000
_MICROS_PER_MINUTE = 60 * _MICROS_PER_SECOND
_MICROS_PER_HOUR = 60 * _MICROS_PER_MINUTE


def parse_duration(text: str) -> timedelta:
    """Parse a duration string into a timedelta.

    Raises:
        ValueError: If the string is not a valid duration.
    """
    if not isinstance(text, str):
        raise ValueError(f"invalid duration {text!r}")

    body = text
    negative = False
    if body and body[0] in "+-":
        negative = body[0] == "-"
        body = body[1:]

    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration {text!r}")

    total = Decimal(0)
    pos = 0
    while pos < len(body):
        match = _COMPONENT.match(body, pos)
        if not match:
            raise ValueError(f"invalid duration {text!r}")
        try:
            total += Decimal(match.group(1)) * _UNITS[match.group(2)]
        except InvalidOperation as e:
            raise ValueError(f"invalid duration {text!r}") from e
        pos = match.end()

    try:
        micros = int(total)
        return timedelta(microseconds=-micros if negative else micros)
    except OverflowError as e:
        raise ValueError(f"duration {text!r} out of range") from e


def format_duration(value: timedelta) -> str:
    """Format a timedelta compactly, e.g. ``1h30m``, ``45s``, ``250ms``."""
    total = value // timedelta(microseconds=1)
    if total == 0:
        return "0s"

    sign = "-" if total < 0 else ""
    total = abs(total)

    if total < _MICROS_PER_SECOND:
        if total % 1_000 == 0:
            return f"{sign}{total // 1_000}ms"
        return f"{sign}{total}us"

    hours, rest = divmod(total, _MICROS_PER_HOUR)
    minutes, rest = divmod(rest, _MICROS_PER_MINUTE)
    seconds, micros = divmod(rest, _MICROS_PER_SECOND)

    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if micros:
        parts.append(f"{seconds}.{micros:06d}".rstrip("0") + "s")
    elif seconds:
        parts.append(f"{seconds}s")
    return sign + "".join(parts)


def _coerce_duration(value: Any) -> Any:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, str):
        return parse_duration(value)
    raise ValueError("duration must be a string such as '30m' or '1h'")


Duration = Annotated[
    timedelta,
    BeforeValidator(_coerce_duration),
    PlainSerializer(format_duration, return_type=str, when_used="json"),
]
