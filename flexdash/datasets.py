"""Dataset records and the multi-dataset combiner.

A Dataset is immutable once created; updating rows means building a new
record with ``dataclasses.replace``. The combined row-set is always derived
from (datasets, active ids) and never cached here.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging
import time
import uuid

from .colors import ColorRegistry
from .config import DEFAULT_CONFIG
from .validator import ValidationResult, validate_rows

log = logging.getLogger("flexdash.datasets")


def _now_id(prefix: str = 'ds') -> str:
    return f"{prefix}_" + time.strftime("%Y%m%d_%H%M%S") + "_" + uuid.uuid4().hex[:8]


@dataclass(frozen=True)
class Dataset:
    id: str
    name: str
    file_name: str
    rows: Tuple[Dict[str, Any], ...]
    color: str
    data_type: str = 'unknown'
    detected_columns: Tuple[str, ...] = ()
    file_size: int = 0
    upload_date: str = field(default_factory=lambda: time.strftime('%Y-%m-%dT%H:%M:%S'))
    status: str = 'valid'
    validation_summary: str = ''
    preview: Tuple[Dict[str, Any], ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass
class DatasetSlice:
    dataset_id: str
    dataset_name: str
    rows: List[Dict[str, Any]]
    color: str
    data_type: str = 'unknown'


def create_dataset(name: str, rows: Sequence[Dict[str, Any]], registry: ColorRegistry,
                   file_name: Optional[str] = None, file_size: int = 0,
                   dataset_id: Optional[str] = None,
                   preview_rows: int = DEFAULT_CONFIG['datasets']['preview_rows']) -> Tuple[Dataset, ValidationResult]:
    validation = validate_rows(rows)
    valid = tuple(validation.valid_rows)
    ds = Dataset(
        id=dataset_id or _now_id(),
        name=name,
        file_name=file_name or name,
        rows=valid,
        color=registry.color_for(name),
        data_type=validation.data_type,
        detected_columns=tuple(validation.detected_columns),
        file_size=int(file_size or 0),
        status=validation.status,
        validation_summary=validation.message,
        preview=valid[:preview_rows],
    )
    log.info(f"created dataset '{name}' ({ds.row_count} rows, type={ds.data_type})")
    return ds, validation


def combine_active_datasets(datasets: Sequence[Dataset], active_ids: Sequence[str]) -> List[Dict[str, Any]]:
    if not active_ids:
        return []
    active = set(active_ids)
    out: List[Dict[str, Any]] = []
    for ds in datasets:
        if ds.id in active:
            out.extend(ds.rows)
    return out


def dataset_breakdown(datasets: Sequence[Dataset], active_ids: Sequence[str]) -> List[DatasetSlice]:
    active = set(active_ids)
    return [
        DatasetSlice(dataset_id=ds.id, dataset_name=ds.name, rows=list(ds.rows), color=ds.color, data_type=ds.data_type)
        for ds in datasets if ds.id in active
    ]


def merge_datasets(primary: Dataset, secondary: Dataset, join_key: str,
                   color: str = DEFAULT_CONFIG['datasets']['merged_color'],
                   preview_rows: int = DEFAULT_CONFIG['datasets']['preview_rows']) -> Dataset:
    """Union of both datasets' rows (primary first).

    ``join_key`` is kept in the summary only; rows are concatenated, not joined.
    """
    rows = tuple(primary.rows) + tuple(secondary.rows)
    columns = list(dict.fromkeys(list(primary.detected_columns) + list(secondary.detected_columns)))
    merged = Dataset(
        id=_now_id('merged'),
        name=f"{primary.name} + {secondary.name}",
        file_name=f"merged-{primary.file_name}-{secondary.file_name}",
        rows=rows,
        color=color,
        data_type=primary.data_type,
        detected_columns=tuple(columns),
        file_size=primary.file_size + secondary.file_size,
        status='valid',
        validation_summary=f"Merged {primary.row_count} + {secondary.row_count} rows (key: {join_key})",
        preview=rows[:preview_rows],
    )
    log.info(f"merged '{primary.name}' and '{secondary.name}' into {merged.row_count} rows")
    return merged
