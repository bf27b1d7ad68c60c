"""Go-style duration strings (``500ms``, ``1m30s``) used by the ``-t`` option."""
from __future__ import annotations

import re
from typing import Any, Optional, Union

import click

_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(text: str) -> float:
    """Parse a duration into seconds.

    Accepts Go syntax (a sequence of decimal numbers each followed by a unit,
    e.g. ``1h2m3.5s``) and, for convenience, a bare number of seconds.
    """

    raw = text.strip()
    if not raw:
        raise ValueError("empty duration")
    sign = 1.0
    body = raw
    if body[0] in "+-":
        sign = -1.0 if body[0] == "-" else 1.0
        body = body[1:]
    if _NUMBER.fullmatch(body):
        return sign * float(body)
    total = 0.0
    pos = 0
    while pos < len(body):
        match = _COMPONENT.match(body, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        total += float(match.group(1)) * _UNITS[match.group(2)]
        pos = match.end()
    if pos == 0:
        raise ValueError(f"invalid duration {text!r}")
    return sign * total


def format_duration(seconds: float, *, precision: float = 1e-3) -> str:
    """Render seconds the way Go prints a ``time.Duration``.

    ``precision`` is the rounding step in seconds (milliseconds by default).
    """

    nanos = int(round(seconds * 1e9))
    step = int(round(precision * 1e9))
    if step > 1:
        nanos = ((abs(nanos) + step // 2) // step) * step * (1 if nanos >= 0 else -1)
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)
    if nanos < 1_000:
        return f"{sign}{nanos}ns"
    if nanos < 1_000_000:
        return f"{sign}{_trim(nanos, 1_000)}µs"
    if nanos < 1_000_000_000:
        return f"{sign}{_trim(nanos, 1_000_000)}ms"
    hours, rest = divmod(nanos, 3_600_000_000_000)
    minutes, rest = divmod(rest, 60_000_000_000)
    text = f"{_trim(rest, 1_000_000_000)}s"
    if hours:
        text = f"{hours}h{minutes}m{text}"
    elif minutes:
        text = f"{minutes}m{text}"
    return sign + text


def _trim(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


class DurationType(click.ParamType):
    """Click parameter type converting duration strings to float seconds."""

    name = "duration"

    def convert(
        self,
        value: Union[str, float, int],
        param: Optional[click.Parameter],
        ctx: Optional[click.Context],
    ) -> float:
        if isinstance(value, (int, float)):
            seconds = float(value)
        else:
            try:
                seconds = parse_duration(value)
            except ValueError as exc:
                self.fail(str(exc), param, ctx)
        if seconds < 0:
            self.fail(f"duration must not be negative: {value!r}", param, ctx)
        return seconds


def coerce_duration(value: Any) -> float:
    """Convert a config value (number of seconds or duration string) to seconds."""

    if isinstance(value, bool):
        raise ValueError(f"invalid duration {value!r}")
    if isinstance(value, (int, float)):
        seconds = float(value)
    elif isinstance(value, str):
        seconds = parse_duration(value)
    else:
        raise ValueError(f"invalid duration {value!r}")
    if seconds < 0:
        raise ValueError(f"duration must not be negative: {value!r}")
    return seconds


DURATION = DurationType()
