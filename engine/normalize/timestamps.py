"""
Strict RFC3339 timestamp parsing into timezone-aware UTC datetimes.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

_RFC3339 = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt ](?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC3339 string and return it converted to UTC.

    Raises ``ValueError`` with a short description when the value is not a
    complete RFC3339 date-time (an explicit offset is mandatory). Fractional
    seconds beyond microsecond precision are truncated.
    """
    match = _RFC3339.match((value or "").strip())
    if match is None:
        raise ValueError(f"{value!r} is not of the form YYYY-MM-DDTHH:MM:SS[.frac](Z|+HH:MM)")

    frac = match.group("frac")
    offset = match.group("offset")
    text = f"{match.group('date')}T{match.group('time')}"
    if frac:
        text += "." + frac[:6].ljust(6, "0")
    text += "+00:00" if offset in ("Z", "z") else offset

    try:
        return datetime.fromisoformat(text).astimezone(timezone.utc)
    except OverflowError as exc:
        # in range locally but not once shifted to UTC
        raise ValueError(f"{value!r} is out of range: {exc}") from exc
