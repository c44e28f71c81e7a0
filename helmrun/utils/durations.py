"""
Duration helpers for helm's Go-style duration strings ("5m0s", "1h30m").

helm parses --timeout with Go's time.ParseDuration, so timedeltas are
rendered the way Go's Duration.String() renders them.
"""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation

from ..core.exceptions import DurationFormatError

_NS_PER_UNIT: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC Greek small letter mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION = re.compile(rf"(?:{_COMPONENT.pattern})+")


def _fmt_frac(value: int, prec: int) -> str:
    """Render value / 10**prec, dropping trailing zeros and a bare point."""
    whole, frac = divmod(value, 10**prec)
    digits = f"{frac:0{prec}d}".rstrip("0") if prec else ""
    return f"{whole}.{digits}" if digits else str(whole)


def format_duration(duration: timedelta) -> str:
    """
    Format a timedelta like Go's time.Duration.String().

    Examples:
        >>> format_duration(timedelta(minutes=5))
        '5m0s'
        >>> format_duration(timedelta(milliseconds=1500))
        '1.5s'
        >>> format_duration(timedelta(0))
        '0s'
    """
    ns = (duration // timedelta(microseconds=1)) * 1_000
    sign = "-" if ns < 0 else ""
    u = abs(ns)

    if u < 1_000_000_000:
        if u == 0:
            return "0s"
        if u < 1_000:
            return f"{sign}{u}ns"
        if u < 1_000_000:
            return f"{sign}{_fmt_frac(u, 3)}µs"
        return f"{sign}{_fmt_frac(u, 6)}ms"

    total_seconds, frac_ns = divmod(u, 1_000_000_000)
    minutes, seconds = divmod(total_seconds, 60)
    out = _fmt_frac(seconds * 1_000_000_000 + frac_ns, 9) + "s"
    if minutes > 0:
        hours, minutes = divmod(minutes, 60)
        out = f"{minutes}m{out}"
        if hours > 0:
            out = f"{hours}h{out}"
    return sign + out


def parse_duration(value: str) -> timedelta:
    """
    Parse a Go-style duration string into a timedelta.

    Accepts an optional sign followed by one or more decimal numbers with
    a unit (ns, us/µs, ms, s, m, h), e.g. "300ms", "-1.5h", "2h45m".
    A bare "0" is also accepted. Precision finer than a microsecond is
    truncated.

    Raises:
        DurationFormatError: If the string is not a valid duration
    """
    text = value.strip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text or not _DURATION.fullmatch(text):
        raise DurationFormatError(value)

    total_ns = Decimal(0)
    try:
        for number, unit in _COMPONENT.findall(text):
            total_ns += Decimal(number) * _NS_PER_UNIT[unit]
    except InvalidOperation as e:
        raise DurationFormatError(value) from e

    try:
        return timedelta(microseconds=sign * int(total_ns / 1_000))
    except OverflowError as e:
        raise DurationFormatError(value) from e
