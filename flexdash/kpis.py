from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

import pandas as pd

from .base import KPISummary
from .schema import (
    DEFAULT_SAMPLE_SIZE,
    KPI_CATEGORY_RULES,
    KPI_VALUE_RULES,
    find_categorical_columns,
    find_numeric_columns,
    pick_column,
)
from .utils import parse_number, to_label


@dataclass
class DatasetKPIs:
    dataset_id: str
    dataset_name: str
    color: str
    kpis: KPISummary = field(default_factory=KPISummary)


def calculate_kpis(rows: Sequence[Dict[str, Any]], sample_size: int = DEFAULT_SAMPLE_SIZE) -> KPISummary:
    if not rows:
        return KPISummary()

    value_col = pick_column(find_numeric_columns(rows, sample_size), KPI_VALUE_RULES)
    category_col = pick_column(find_categorical_columns(rows, sample_size), KPI_CATEGORY_RULES)

    total = 0.0
    if value_col:
        values = pd.Series([parse_number(row.get(value_col)) for row in rows], dtype=object)
        total = float(pd.to_numeric(values, errors='coerce').fillna(0).sum())
    unique = 0
    if category_col:
        labels = pd.Series([to_label(row.get(category_col)) for row in rows])
        unique = int(labels[labels != ''].nunique())

    return KPISummary(
        total_records=len(rows),
        total_value=total,
        average_value=total / len(rows),
        unique_categories=unique,
        primary_value_column=value_col,
        primary_category_column=category_col,
    )


def calculate_dataset_kpis(slices: Sequence[Any], sample_size: int = DEFAULT_SAMPLE_SIZE) -> List[DatasetKPIs]:
    """KPIs for each DatasetSlice, one entry per active dataset."""
    return [
        DatasetKPIs(
            dataset_id=s.dataset_id,
            dataset_name=s.dataset_name,
            color=s.color,
            kpis=calculate_kpis(s.rows, sample_size),
        )
        for s in slices
    ]
