from dataclasses import dataclass
from typing import Dict, Any, Optional

from .config import DEFAULT_CONFIG, get_setting


@dataclass
class CategoryAggregate:
    name: str
    total: float = 0.0
    count: int = 0
    average: float = 0.0


@dataclass
class TimeSeriesPoint:
    period: str
    value: float = 0.0
    count: int = 0


@dataclass
class ColumnTotal:
    name: str
    value: float = 0.0


@dataclass
class KPISummary:
    total_records: int = 0
    total_value: float = 0.0
    average_value: float = 0.0
    unique_categories: int = 0
    primary_value_column: Optional[str] = None
    primary_category_column: Optional[str] = None


@dataclass
class EngineConfig:
    sample_size: int = DEFAULT_CONFIG['schema']['sample_size']
    two_digit_year_pivot: int = DEFAULT_CONFIG['dates']['two_digit_year_pivot']
    granularity: str = DEFAULT_CONFIG['aggregation']['default_granularity']
    top_categories: int = DEFAULT_CONFIG['aggregation']['top_categories']
    max_filter_options: int = DEFAULT_CONFIG['filters']['max_filter_options']
    merged_color: str = DEFAULT_CONFIG['datasets']['merged_color']
    preview_rows: int = DEFAULT_CONFIG['datasets']['preview_rows']
    currency: str = DEFAULT_CONFIG['formatting']['currency']

    @classmethod
    def from_dict(cls, cfg: Optional[Dict[str, Any]]) -> 'EngineConfig':
        return cls(
            sample_size=int(get_setting(cfg, 'schema', 'sample_size')),
            two_digit_year_pivot=int(get_setting(cfg, 'dates', 'two_digit_year_pivot')),
            granularity=get_setting(cfg, 'aggregation', 'default_granularity'),
            top_categories=int(get_setting(cfg, 'aggregation', 'top_categories')),
            max_filter_options=int(get_setting(cfg, 'filters', 'max_filter_options')),
            merged_color=get_setting(cfg, 'datasets', 'merged_color'),
            preview_rows=int(get_setting(cfg, 'datasets', 'preview_rows')),
            currency=get_setting(cfg, 'formatting', 'currency'),
        )


@dataclass
class PlantAggregate:
    name: str
    total_revenue: float = 0.0
    total_units: int = 0
    count: int = 0


@dataclass
class FactoryAggregate:
    name: str
    total_revenue: float = 0.0
    total_units: int = 0
    latitude: float = 0.0
    longitude: float = 0.0
    products: int = 0
