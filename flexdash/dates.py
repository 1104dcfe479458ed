"""Date normalization for mixed-format date columns.

Every date string is reduced to a calendar date (canonical form
``YYYY-MM-DD``) using deterministic day/month disambiguation:

- ``YYYY-MM-DD`` (time suffix ignored) and ``YYYY/MM/DD`` are read as-is
- ``a/b/y``: ``a > 12`` means ``DD/MM/YYYY``, otherwise ``MM/DD/YYYY``
- all-digit ``d-m-y`` with a one or two character first segment is ``DD-MM-YYYY``
- anything carrying an English month name and a 4-digit year goes to pandas

Two-digit years use a single pivot rule: below the pivot (default 50) they
land in the 2000s, otherwise in the 1900s.
"""
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Optional, Tuple
import re

import pandas as pd

from .config import DEFAULT_CONFIG

DEFAULT_PIVOT = DEFAULT_CONFIG['dates']['two_digit_year_pivot']

iso_re = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ].*)?$")
digits_re = re.compile(r"^\d+$")

MONTH_NAMES = [
    'january', 'february', 'march', 'april', 'may', 'june',
    'july', 'august', 'september', 'october', 'november', 'december',
]
MONTH_INDEX = {}
for _i, _name in enumerate(MONTH_NAMES, start=1):
    MONTH_INDEX[_name] = _i
    MONTH_INDEX[_name[:3]] = _i
MONTH_INDEX['sept'] = 9

month_name_re = re.compile(r"\b(" + "|".join(sorted(MONTH_INDEX, key=len, reverse=True)) + r")\b", flags=re.I)
year4_re = re.compile(r"\b\d{4}\b")


def expand_year(year: str, pivot: int = DEFAULT_PIVOT) -> Optional[int]:
    if not digits_re.match(year):
        return None
    if len(year) == 4:
        return int(year)
    if len(year) == 2:
        yy = int(year)
        return 2000 + yy if yy < pivot else 1900 + yy
    return None


def _make_date(year: Optional[int], month: str, day: str) -> Optional[date]:
    if year is None or not digits_re.match(month) or not digits_re.match(day):
        return None
    try:
        return date(year, int(month), int(day))
    except ValueError:
        return None


def _parse_slash(parts: List[str], pivot: int) -> Optional[date]:
    first, second, third = parts
    if len(first) == 4:
        return _make_date(expand_year(first, pivot), second, third)
    if not digits_re.match(first):
        return None
    if int(first) > 12:
        day, month, year = first, second, third
    else:
        month, day, year = first, second, third
    return _make_date(expand_year(year, pivot), month, day)


def _parse_month_name(s: str) -> Optional[date]:
    if not (month_name_re.search(s) and year4_re.search(s)):
        return None
    parsed = pd.to_datetime(s, errors='coerce')
    if pd.isna(parsed):
        return None
    return parsed.date()


def normalize_date(raw: Any, pivot: int = DEFAULT_PIVOT) -> Optional[date]:
    """Return the calendar date for raw, or None when it cannot be read."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        return None

    s = raw.strip()
    if not s:
        return None

    m = iso_re.match(s)
    if m:
        return _make_date(int(m.group(1)), m.group(2), m.group(3))

    if '/' in s:
        parts = [p.strip() for p in s.split('/')]
        if len(parts) == 3:
            return _parse_slash(parts, pivot)
        return None

    if '-' in s and len(s.split('-')[0]) <= 2:
        parts = [p.strip() for p in s.split('-')]
        if len(parts) == 3 and all(p.isdigit() for p in parts):
            day, month, year = parts
            return _make_date(expand_year(year, pivot), month, day)

    return _parse_month_name(s)


def to_iso(raw: Any, pivot: int = DEFAULT_PIVOT) -> Optional[str]:
    d = normalize_date(raw, pivot)
    return d.isoformat() if d else None


def week_start(d: date) -> date:
    # python weekday: Monday=0 .. Sunday=6
    return d - timedelta(days=(d.weekday() + 1) % 7)


def month_index(label: Any) -> Optional[int]:
    if label is None:
        return None
    return MONTH_INDEX.get(str(label).strip().lower())


def sort_month_labels(labels: Iterable[str]) -> List[str]:
    """Calendar order for month names; unrecognised labels go last, alphabetically."""
    return sorted(labels, key=lambda l: (month_index(l) or 13, str(l)))


def month_year_sort_key(label: str, pivot: int = DEFAULT_PIVOT) -> Tuple[int, int]:
    """Sort key for ``Mon-YY`` / ``Mon-YYYY`` labels such as ``Jan-24``."""
    parts = str(label).strip().split('-')
    if len(parts) != 2:
        return (0, 0)
    month, year = parts
    full_year = expand_year(year.strip(), pivot) or 0
    return (full_year, month_index(month) or 0)


def period_sort_key(period: str) -> Tuple[int, int, int]:
    """Chronological key for bucket keys (``YYYY-MM-DD``, ``YYYY-MM`` or a month name)."""
    s = str(period)
    m = re.match(r"^(\d{4})-(\d{1,2})(?:-(\d{1,2}))?$", s)
    if m:
        return (int(m.group(1)), int(m.group(2)), int(m.group(3) or 0))
    idx = month_index(s)
    if idx:
        return (0, idx, 0)
    return (9999, 13, 0)
