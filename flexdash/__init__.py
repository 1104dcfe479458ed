"""flexdash - schema-agnostic analysis engine for uploaded tabular datasets."""

__version__ = "0.1.0"

from flexdash.aggregation import aggregate_by_category, get_time_series
from flexdash.base import CategoryAggregate, EngineConfig, KPISummary, TimeSeriesPoint
from flexdash.colors import ColorRegistry, classify_dataset_type
from flexdash.dates import normalize_date, to_iso
from flexdash.filters import FilterState, apply_filters
from flexdash.kpis import calculate_kpis
from flexdash.pipeline import build_dashboard
from flexdash.schema import Role, classify
from flexdash.session import AnalysisSession

__all__ = [
    "AnalysisSession",
    "CategoryAggregate",
    "ColorRegistry",
    "EngineConfig",
    "FilterState",
    "KPISummary",
    "Role",
    "TimeSeriesPoint",
    "aggregate_by_category",
    "apply_filters",
    "build_dashboard",
    "calculate_kpis",
    "classify",
    "classify_dataset_type",
    "get_time_series",
    "normalize_date",
    "to_iso",
    "__version__",
]
