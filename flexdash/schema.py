"""Column role inference for schema-less row sets.

Roles are recomputed from a small sample each time they are needed; nothing
about a column is stored. The first row's keys are the canonical schema.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Iterable, List, Optional, Sequence
import logging
import re

from .config import DEFAULT_CONFIG
from .utils import is_empty, parse_number

log = logging.getLogger("flexdash.schema")

DEFAULT_SAMPLE_SIZE = DEFAULT_CONFIG['schema']['sample_size']

date_name_re = re.compile(r"date", flags=re.I)
address_name_re = re.compile(r"ad{1,2}ress", flags=re.I)


class Role(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    DATE = "date"
    TEXT = "text"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ColumnRule:
    keyword: str
    priority: int

    def matches(self, column: str) -> bool:
        return self.keyword in str(column).lower()


def _rules(*keywords: str) -> List[ColumnRule]:
    return [ColumnRule(k, i) for i, k in enumerate(keywords)]


TIME_SERIES_VALUE_RULES = _rules('price', 'revenue', 'amount', 'quantity', 'value')
KPI_VALUE_RULES = _rules('price', 'revenue', 'amount', 'quantity')
KPI_CATEGORY_RULES = _rules('name', 'product', 'category')


def pick_column(candidates: Sequence[str], rules: Iterable[ColumnRule]) -> Optional[str]:
    """First candidate matched by the highest-priority rule, else the first candidate."""
    candidates = list(candidates)
    for rule in sorted(rules, key=lambda r: r.priority):
        for c in candidates:
            if rule.matches(c):
                return c
    return candidates[0] if candidates else None


def get_columns(rows: Sequence[Dict[str, Any]]) -> List[str]:
    if not rows:
        return []
    return list(rows[0].keys())


def find_date_column(rows: Sequence[Dict[str, Any]]) -> Optional[str]:
    for c in get_columns(rows):
        if date_name_re.search(str(c)):
            return c
    return None


def is_address_column(column: str) -> bool:
    return bool(address_name_re.search(str(column)))


def is_numeric_column(rows: Sequence[Dict[str, Any]], column: str, sample_size: int = DEFAULT_SAMPLE_SIZE) -> bool:
    sample = rows[:max(0, sample_size)]
    values = [row.get(column) for row in sample]
    non_empty = [v for v in values if not is_empty(v)]
    if not non_empty:
        return False
    numeric = sum(1 for v in non_empty if parse_number(v) is not None)
    return numeric * 2 > len(non_empty)


def classify(rows: Sequence[Dict[str, Any]], column: str, sample_size: int = DEFAULT_SAMPLE_SIZE) -> Role:
    columns = get_columns(rows)
    if column not in columns:
        return Role.UNKNOWN
    if column == find_date_column(rows):
        return Role.DATE
    if is_numeric_column(rows, column, sample_size):
        return Role.NUMERIC
    if is_address_column(column):
        return Role.TEXT
    return Role.CATEGORICAL


def infer_column_roles(rows: Sequence[Dict[str, Any]], sample_size: int = DEFAULT_SAMPLE_SIZE) -> Dict[str, Role]:
    roles = {c: classify(rows, c, sample_size) for c in get_columns(rows)}
    log.debug(f"column roles: {roles}")
    return roles


def find_numeric_columns(rows: Sequence[Dict[str, Any]], sample_size: int = DEFAULT_SAMPLE_SIZE) -> List[str]:
    return [c for c, r in infer_column_roles(rows, sample_size).items() if r == Role.NUMERIC]


def find_categorical_columns(rows: Sequence[Dict[str, Any]], sample_size: int = DEFAULT_SAMPLE_SIZE) -> List[str]:
    return [c for c, r in infer_column_roles(rows, sample_size).items() if r == Role.CATEGORICAL]


def find_column_by_keywords(rows: Sequence[Dict[str, Any]], keywords: Iterable[str]) -> Optional[str]:
    keys = [k.lower() for k in keywords]
    for c in get_columns(rows):
        lc = str(c).lower()
        if any(k in lc for k in keys):
            return c
    return None


def detect_data_type(columns: Iterable[str]) -> str:
    """Tag a dataset as sales / production / stock / unknown from its column names."""
    cols_str = ' '.join(str(c) for c in columns).lower()

    if 'production' in cols_str and 'sales' in cols_str and 'stock' in cols_str:
        return 'production'
    if 'quantity' in cols_str and 'price' in cols_str and ('name' in cols_str or 'buyer' in cols_str):
        return 'sales'
    if 'stock' in cols_str or 'inventory' in cols_str:
        return 'stock'
    return 'unknown'
