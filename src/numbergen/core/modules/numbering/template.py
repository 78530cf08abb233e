"""Rendering of number format templates.

A template mixes literal text with placeholders:

    {YEAR}       4-digit year            {YY}     last two digits of the year
    {MONTH}      01-12                   {DAY}    01-31
    {COUNTER}    counter padded to the configured padding
    {COUNTER:N}  counter padded to N digits (never truncated)
    {PREFIX}     always empty, kept so older templates still render
    {SUFFIX}     always empty, kept so older templates still render

Anything else, including unknown or malformed placeholders and counter widths
above MAX_WIDTH, is copied through verbatim. User-entered templates therefore
never make rendering fail.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from numbergen.utils import now as utc_now

MAX_WIDTH = 32

PLACEHOLDER_RE = re.compile(r"\{(?P<name>[A-Z]+)(?::(?P<arg>\d+))?\}")


@dataclass(frozen=True)
class RenderContext:
    counter: int
    padding: int
    now: datetime


def _pad(value: int, width: int) -> str:
    return str(value).zfill(width)


def _counter(ctx: RenderContext, arg: str | None) -> str | None:
    if arg is not None and len(arg) > len(str(MAX_WIDTH)):
        return None
    width = int(arg) if arg is not None else ctx.padding
    if width > MAX_WIDTH:
        return None
    return _pad(ctx.counter, width)


# (name, takes_width, render_fn); only COUNTER accepts a ":N" width.
# A render_fn returning None leaves the placeholder as literal text.
TOKENS: list[tuple[str, bool, Callable[[RenderContext, str | None], str | None]]] = [
    ("YEAR", False, lambda ctx, _: f"{ctx.now.year:04d}"),
    ("YY", False, lambda ctx, _: f"{ctx.now.year % 100:02d}"),
    ("MONTH", False, lambda ctx, _: f"{ctx.now.month:02d}"),
    ("DAY", False, lambda ctx, _: f"{ctx.now.day:02d}"),
    ("COUNTER", True, _counter),
    ("PREFIX", False, lambda ctx, _: ""),
    ("SUFFIX", False, lambda ctx, _: ""),
]

_TOKEN_TABLE = {name: (takes_width, fn) for name, takes_width, fn in TOKENS}


def render(format: str, counter: int, padding: int, now: datetime | None = None) -> str:
    """Render `format` for the given counter. Pure: reads no state, never raises."""
    ctx = RenderContext(counter=counter, padding=padding, now=now or utc_now())

    def replace(match: re.Match[str]) -> str:
        token = _TOKEN_TABLE.get(match["name"])
        if token is None:
            return match[0]
        takes_width, fn = token
        if match["arg"] is not None and not takes_width:
            return match[0]
        rendered = fn(ctx, match["arg"])
        return match[0] if rendered is None else rendered

    return PLACEHOLDER_RE.sub(replace, format)
