"""Filter engine: date range, column values and drill-down selections.

Layers are applied in that order and each returns a new list; the input rows
are never modified. An empty FilterState is the identity.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union
import logging

from .dates import DEFAULT_PIVOT, normalize_date
from .schema import find_date_column
from .utils import to_label

log = logging.getLogger("flexdash.filters")

DateLike = Union[str, date, None]


@dataclass
class FilterState:
    start: DateLike = None
    end: DateLike = None
    selected_values: Dict[str, List[str]] = field(default_factory=dict)
    drill_down: Dict[str, Any] = field(default_factory=dict)

    def has_date_range(self) -> bool:
        return bool(self.start) or bool(self.end)

    def is_empty(self) -> bool:
        return (not self.has_date_range()
                and not any(self.selected_values.values())
                and not self.drill_down)


def filter_by_date_range(rows: Sequence[Dict[str, Any]], start: DateLike = None, end: DateLike = None,
                         pivot: int = DEFAULT_PIVOT) -> List[Dict[str, Any]]:
    if not start and not end:
        return list(rows)
    date_col = find_date_column(rows)
    if not date_col:
        log.debug("date range filter skipped: no date column")
        return list(rows)

    lo = normalize_date(start, pivot) if start else None
    hi = normalize_date(end, pivot) if end else None
    if start and lo is None:
        log.warning(f"ignoring unreadable range start {start!r}")
    if end and hi is None:
        log.warning(f"ignoring unreadable range end {end!r}")

    out = []
    for row in rows:
        d = normalize_date(row.get(date_col), pivot)
        if d is None:
            continue
        if lo is not None and d < lo:
            continue
        if hi is not None and d > hi:
            continue
        out.append(row)
    return out


def filter_by_column_values(rows: Sequence[Dict[str, Any]], selected_values: Dict[str, List[str]]) -> List[Dict[str, Any]]:
    out = list(rows)
    for column, values in (selected_values or {}).items():
        if not values:
            continue
        wanted = {str(v).strip().lower() for v in values}
        out = [row for row in out if to_label(row.get(column)).lower() in wanted]
    return out


def filter_by_drill_down(rows: Sequence[Dict[str, Any]], drill_down: Dict[str, Any]) -> List[Dict[str, Any]]:
    if not drill_down:
        return list(rows)
    wanted = {k: to_label(v) for k, v in drill_down.items()}
    return [row for row in rows if all(to_label(row.get(k)) == v for k, v in wanted.items())]


def apply_filters(rows: Sequence[Dict[str, Any]], state: Optional[FilterState], pivot: int = DEFAULT_PIVOT) -> List[Dict[str, Any]]:
    if state is None or state.is_empty():
        return list(rows)
    out = filter_by_date_range(rows, state.start, state.end, pivot)
    out = filter_by_column_values(out, state.selected_values)
    out = filter_by_drill_down(out, state.drill_down)
    return out
