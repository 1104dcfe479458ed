"""Category and time-period aggregation over schema-less rows.

All functions are pure: they take rows, read the columns they need through
the classifier, and return plain records. Unparseable numbers count as 0;
rows whose date cannot be normalized are left out of time-based results only.
"""
from typing import Dict, Any, List, Optional, Sequence, Tuple
import logging

import pandas as pd

from .base import CategoryAggregate, ColumnTotal, FactoryAggregate, PlantAggregate, TimeSeriesPoint
from .config import DEFAULT_CONFIG
from .dates import DEFAULT_PIVOT, month_index, normalize_date, period_sort_key, week_start
from .schema import (
    DEFAULT_SAMPLE_SIZE,
    TIME_SERIES_VALUE_RULES,
    find_column_by_keywords,
    find_date_column,
    find_numeric_columns,
    pick_column,
)
from .utils import parse_number, safe_float, to_label

log = logging.getLogger("flexdash.aggregation")

GRANULARITIES = ('day', 'week', 'month')
UNKNOWN_CATEGORY = 'Unknown'
UNKNOWN_PLANT = 'Unknown Plant'
UNKNOWN_FACTORY = 'Unknown Factory'

PLANT_KEYWORDS = ('plant', 'facility', 'location')
FACTORY_KEYWORDS = ('factory', 'plant', 'facility', 'location')
REVENUE_KEYWORDS = ('revenue', 'price', 'amount', 'value')

# per-row value keywords for aggregate_by_column
ROW_VALUE_KEYWORDS = ('price', 'revenue', 'amount', 'value', 'quantity', 'units', 'count')


def _grouped(keys: List[str], values: List[float]) -> pd.DataFrame:
    frame = pd.DataFrame({'key': keys, 'value': values})
    return frame.groupby('key', sort=False)['value'].agg(['sum', 'count'])


def aggregate_by_category(rows: Sequence[Dict[str, Any]], category_column: str, value_column: str) -> List[CategoryAggregate]:
    if not rows:
        return []
    keys = [to_label(row.get(category_column), UNKNOWN_CATEGORY) for row in rows]
    values = [safe_float(row.get(value_column)) for row in rows]
    grouped = _grouped(keys, values)
    grouped = grouped.sort_values('sum', ascending=False, kind='stable')

    out = []
    for name, r in grouped.iterrows():
        total = float(r['sum'])
        count = int(r['count'])
        out.append(CategoryAggregate(name=str(name), total=total, count=count, average=total / count if count else 0.0))
    return out


def top_n(items: Sequence[Any], n: Optional[int]) -> List[Any]:
    items = list(items)
    if n is None or n < 0:
        return items
    return items[:n]


def _row_value(row: Dict[str, Any]) -> float:
    for c, v in row.items():
        lc = str(c).lower()
        if any(k in lc for k in ROW_VALUE_KEYWORDS):
            f = parse_number(v)
            if f is not None:
                return f or 1.0
    return 1.0


def aggregate_by_column(rows: Sequence[Dict[str, Any]], column: str, limit: int = DEFAULT_CONFIG['aggregation']['top_column_values']) -> List[ColumnTotal]:
    """Sum a per-row value by the labels of ``column``.

    Each row contributes its first keyword-matched numeric cell, or 1 when it
    has none, so the result degrades to a row count on datasets without values.
    """
    if not rows:
        return []
    keys = [to_label(row.get(column), UNKNOWN_CATEGORY) for row in rows]
    values = [_row_value(row) for row in rows]
    grouped = _grouped(keys, values).sort_values('sum', ascending=False, kind='stable')
    out = [ColumnTotal(name=str(name), value=float(r['sum'])) for name, r in grouped.iterrows()]
    return top_n(out, limit)


def _revenue_column(rows: Sequence[Dict[str, Any]], sample_size: int) -> Optional[str]:
    found = find_column_by_keywords(rows, REVENUE_KEYWORDS)
    if found:
        return found
    numeric = find_numeric_columns(rows, sample_size)
    return numeric[0] if numeric else None


def aggregate_by_plant(rows: Sequence[Dict[str, Any]], sample_size: int = DEFAULT_SAMPLE_SIZE) -> List[PlantAggregate]:
    """Revenue per plant/facility/location, highest first."""
    if not rows:
        return []
    plant_col = find_column_by_keywords(rows, PLANT_KEYWORDS)
    revenue_col = _revenue_column(rows, sample_size)

    keys = [to_label(row.get(plant_col), UNKNOWN_PLANT) for row in rows]
    values = [safe_float(row.get(revenue_col)) for row in rows]
    grouped = _grouped(keys, values).sort_values('sum', ascending=False, kind='stable')
    return [
        PlantAggregate(name=str(name), total_revenue=float(r['sum']), total_units=int(r['count']), count=int(r['count']))
        for name, r in grouped.iterrows()
    ]


def aggregate_by_factory(rows: Sequence[Dict[str, Any]], sample_size: int = DEFAULT_SAMPLE_SIZE) -> List[FactoryAggregate]:
    """Revenue per factory, carrying the coordinates of each factory's first row."""
    if not rows:
        return []
    factory_col = find_column_by_keywords(rows, FACTORY_KEYWORDS)
    revenue_col = _revenue_column(rows, sample_size)
    lat_col = find_column_by_keywords(rows, ('latitude', 'lat'))
    lng_col = find_column_by_keywords(rows, ('longitude', 'lng', 'lon'))

    frame = pd.DataFrame({
        'key': [to_label(row.get(factory_col), UNKNOWN_FACTORY) for row in rows],
        'value': [safe_float(row.get(revenue_col)) for row in rows],
        'lat': [safe_float(row.get(lat_col)) for row in rows],
        'lng': [safe_float(row.get(lng_col)) for row in rows],
    })
    grouped = frame.groupby('key', sort=False).agg(
        total=('value', 'sum'),
        count=('value', 'count'),
        latitude=('lat', 'first'),
        longitude=('lng', 'first'),
    ).sort_values('total', ascending=False, kind='stable')
    return [
        FactoryAggregate(
            name=str(name),
            total_revenue=float(r['total']),
            total_units=int(r['count']),
            latitude=float(r['latitude']),
            longitude=float(r['longitude']),
            products=int(r['count']),
        )
        for name, r in grouped.iterrows()
    ]


def _period_key(d, granularity: str) -> str:
    if granularity == 'day':
        return d.isoformat()
    if granularity == 'week':
        return week_start(d).isoformat()
    return d.isoformat()[:7]


def get_time_series(rows: Sequence[Dict[str, Any]], granularity: str = DEFAULT_CONFIG['aggregation']['default_granularity'],
                    sample_size: int = DEFAULT_SAMPLE_SIZE, pivot: int = DEFAULT_PIVOT) -> List[TimeSeriesPoint]:
    if not rows:
        return []
    if granularity not in GRANULARITIES:
        log.debug(f"unknown granularity {granularity!r}, using month")
        granularity = 'month'

    date_col = find_date_column(rows)
    if not date_col:
        return []
    value_col = pick_column(find_numeric_columns(rows, sample_size), TIME_SERIES_VALUE_RULES)
    if not value_col:
        return []

    keys = []
    values = []
    skipped = 0
    for row in rows:
        d = normalize_date(row.get(date_col), pivot)
        if d is None:
            skipped += 1
            continue
        keys.append(_period_key(d, granularity))
        values.append(safe_float(row.get(value_col)))
    if skipped:
        log.debug(f"time series skipped {skipped} rows with unreadable '{date_col}'")
    if not keys:
        return []

    grouped = _grouped(keys, values)
    points = [TimeSeriesPoint(period=str(k), value=float(r['sum']), count=int(r['count'])) for k, r in grouped.iterrows()]
    return sorted(points, key=lambda p: period_sort_key(p.period))


def aggregate_by_month_name(rows: Sequence[Dict[str, Any]], month_column: str, value_column: str) -> List[TimeSeriesPoint]:
    """Totals per month-name label (``January`` .. ``December``) in calendar order."""
    pairs = [(to_label(row.get(month_column)), safe_float(row.get(value_column))) for row in rows]
    pairs = [p for p in pairs if p[0]]
    if not pairs:
        return []
    grouped = _grouped([p[0] for p in pairs], [p[1] for p in pairs])
    points = [TimeSeriesPoint(period=str(k), value=float(r['sum']), count=int(r['count'])) for k, r in grouped.iterrows()]
    return sorted(points, key=lambda p: (month_index(p.period) or 13, p.period))


def get_unique_values(rows: Sequence[Dict[str, Any]], column: str) -> List[str]:
    return sorted({to_label(row.get(column)) for row in rows} - {''})


def get_date_range(rows: Sequence[Dict[str, Any]], pivot: int = DEFAULT_PIVOT) -> Tuple[Optional[str], Optional[str]]:
    date_col = find_date_column(rows)
    if not date_col:
        return None, None
    dates = [d for d in (normalize_date(row.get(date_col), pivot) for row in rows) if d is not None]
    if not dates:
        return None, None
    return min(dates).isoformat(), max(dates).isoformat()
