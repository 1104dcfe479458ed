from dataclasses import dataclass, asdict, field
from typing import Optional, Dict, Any, List
import logging
import time

from .aggregation import aggregate_by_category, get_time_series, get_unique_values, top_n
from .base import CategoryAggregate, EngineConfig, KPISummary, TimeSeriesPoint
from .formatting import currency_fmt, number_fmt
from .kpis import calculate_kpis
from .profiler import profile
from .schema import find_categorical_columns, find_date_column
from .session import AnalysisSession

log = logging.getLogger("flexdash.pipeline")


@dataclass
class DatasetView:
    dataset_id: str
    dataset_name: str
    color: str
    data_type: str
    kpis: KPISummary
    time_series: List[TimeSeriesPoint] = field(default_factory=list)


@dataclass
class DashboardResult:
    kpis: KPISummary
    time_series: List[TimeSeriesPoint]
    top_categories: List[CategoryAggregate]
    datasets: List[DatasetView]
    filter_options: Dict[str, List[str]]
    profile: Dict[str, Any]
    warnings: List[str]
    summary: str
    meta: Dict[str, Any]

    @property
    def has_data(self) -> bool:
        return self.kpis.total_records > 0

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out['has_data'] = self.has_data
        return out


def build_dashboard(session: AnalysisSession, cfg: Optional[EngineConfig] = None) -> DashboardResult:
    cfg = cfg or session.cfg
    start = time.time()
    warnings: List[str] = []
    rows = session.filtered_rows

    kpis = calculate_kpis(rows, cfg.sample_size)

    if not rows:
        warnings.append('No rows after filtering' if session.combined_rows else 'No active data')

    series = get_time_series(rows, cfg.granularity, cfg.sample_size, cfg.two_digit_year_pivot)
    if rows and not find_date_column(rows):
        warnings.append('No date column found; time series unavailable')
    elif rows and not series:
        warnings.append('No numeric column or readable dates for time series')

    categories: List[CategoryAggregate] = []
    if kpis.primary_category_column and kpis.primary_value_column:
        categories = top_n(
            aggregate_by_category(rows, kpis.primary_category_column, kpis.primary_value_column),
            cfg.top_categories,
        )
    elif rows:
        warnings.append('No category/value column pair for category breakdown')

    # filter options come from the unfiltered combined set so selections can be widened again
    combined = session.combined_rows
    filter_options = {
        c: get_unique_values(combined, c)[:cfg.max_filter_options]
        for c in find_categorical_columns(combined, cfg.sample_size)
    }

    views = []
    for s in session.breakdown():
        views.append(DatasetView(
            dataset_id=s.dataset_id,
            dataset_name=s.dataset_name,
            color=s.color,
            data_type=s.data_type,
            kpis=calculate_kpis(s.rows, cfg.sample_size),
            time_series=get_time_series(s.rows, cfg.granularity, cfg.sample_size, cfg.two_digit_year_pivot),
        ))

    parts = [f"{number_fmt(kpis.total_records)} records across {len(views)} active datasets."]
    if kpis.primary_value_column:
        parts.append(f"Total {kpis.primary_value_column} is {currency_fmt(kpis.total_value, cfg.currency)}"
                     f" (average {currency_fmt(kpis.average_value, cfg.currency)}).")
    if kpis.primary_category_column:
        parts.append(f"{kpis.unique_categories} distinct {kpis.primary_category_column} values.")
    if categories:
        parts.append(f"Top {kpis.primary_category_column}: {categories[0].name}.")

    meta = {
        'active_datasets': session.active_dataset_ids,
        'combined_rows': len(combined),
        'filtered_rows': len(rows),
        'granularity': cfg.granularity,
        'elapsed_seconds': time.time() - start,
    }
    log.info(f"dashboard built: {len(rows)}/{len(combined)} rows, {len(warnings)} warnings")

    return DashboardResult(
        kpis=kpis,
        time_series=series,
        top_categories=categories,
        datasets=views,
        filter_options=filter_options,
        profile=profile(rows, cfg.sample_size, pivot=cfg.two_digit_year_pivot),
        warnings=warnings,
        summary=' '.join(parts),
        meta=meta,
    )
