"""Month key manipulation utilities"""

import re
from datetime import date
from typing import List, Tuple

from orbit_ledger.domain.exceptions import InvalidMonthKeyError

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


def month_key(day: date) -> str:
    """Canonical zero-padded YYYY-MM key; sorts lexically in chronological order"""
    return f"{day.year:04d}-{day.month:02d}"


def parse_month_key(key: str) -> Tuple[int, int]:
    """Split a YYYY-MM key into (year, month)"""
    match = _MONTH_KEY_RE.match(key)
    if not match:
        raise InvalidMonthKeyError(f"Invalid month key: {key!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidMonthKeyError(f"Invalid month in key: {key!r}")
    return year, month


def shift_month(day: date, offset: int) -> date:
    """First day of the month `offset` months away from `day` (handles year rollover)"""
    index = day.year * 12 + (day.month - 1) + offset
    return date(index // 12, index % 12 + 1, 1)


def month_window(reference: date, before: int = 3, after: int = 2) -> List[str]:
    """Month keys from `before` months ago through `after` months ahead (inclusive)"""
    return [month_key(shift_month(reference, i)) for i in range(-before, after + 1)]
