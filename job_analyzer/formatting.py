"""Display formatting helpers."""

from __future__ import annotations

import math
from datetime import datetime

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_duration(minutes: float) -> str:
    """Render minutes as ``"<h>h <m>m"``."""

    hours = math.floor(minutes / 60)
    mins = round(minutes % 60)
    if mins == 60:
        hours, mins = hours + 1, 0
    return f"{hours}h {mins}m"


def format_timestamp(value: datetime | None, fmt: str = "%d/%m/%Y %H:%M:%S") -> str:
    if value is None:
        return ""
    return value.strftime(fmt)


def format_file_size(size: int) -> str:
    if size <= 0:
        return "0 Bytes"
    exponent = 0
    while size >= 1024 ** (exponent + 1) and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    value = round(size / 1024**exponent, 2)
    return f"{value:g} {_SIZE_UNITS[exponent]}"
