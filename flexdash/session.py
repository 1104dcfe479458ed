"""Analysis session: the single owner of mutable dashboard state.

Holds the dataset collection, the active dataset ids, the filter state, saved
filter sets and the color registry. Every mutation goes through a method here
and recomputes the combined and filtered row-sets before returning, so the
views read by callers are never stale.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence
import copy
import logging
import time
import uuid

from .base import EngineConfig
from .colors import ColorRegistry
from .datasets import Dataset, DatasetSlice, combine_active_datasets, create_dataset, dataset_breakdown, merge_datasets
from .errors import DatasetNotFoundError, FilterSetNotFoundError
from .filters import DateLike, FilterState, apply_filters
from .validator import ValidationResult, validate_rows

log = logging.getLogger("flexdash.session")


@dataclass
class SavedFilterSet:
    id: str
    name: str
    filters: FilterState
    created_at: str = field(default_factory=lambda: time.strftime('%Y-%m-%dT%H:%M:%S'))


class AnalysisSession:
    def __init__(self, config: Optional[EngineConfig] = None, registry: Optional[ColorRegistry] = None):
        self.cfg = config or EngineConfig()
        self.registry = registry or ColorRegistry()
        self._datasets: List[Dataset] = []
        self._active_ids: List[str] = []
        self._filters = FilterState()
        self._saved: List[SavedFilterSet] = []
        self._combined: List[Dict[str, Any]] = []
        self._filtered: List[Dict[str, Any]] = []

    # -- read-only views

    @property
    def datasets(self) -> List[Dataset]:
        return list(self._datasets)

    @property
    def active_dataset_ids(self) -> List[str]:
        return list(self._active_ids)

    @property
    def filters(self) -> FilterState:
        return copy.deepcopy(self._filters)

    @property
    def saved_filter_sets(self) -> List[SavedFilterSet]:
        return list(self._saved)

    @property
    def combined_rows(self) -> List[Dict[str, Any]]:
        return list(self._combined)

    @property
    def filtered_rows(self) -> List[Dict[str, Any]]:
        return list(self._filtered)

    def breakdown(self) -> List[DatasetSlice]:
        return dataset_breakdown(self._datasets, self._active_ids)

    def get_dataset(self, dataset_id: str) -> Dataset:
        for ds in self._datasets:
            if ds.id == dataset_id:
                return ds
        raise DatasetNotFoundError(dataset_id)

    # -- recomputation

    def _refresh_combined(self) -> None:
        self._combined = combine_active_datasets(self._datasets, self._active_ids)
        self._refresh_filtered()

    def _refresh_filtered(self) -> None:
        self._filtered = apply_filters(self._combined, self._filters, self.cfg.two_digit_year_pivot)

    def _known_ids(self, ids: Iterable[str]) -> List[str]:
        known = {ds.id for ds in self._datasets}
        out = []
        for i in ids:
            if i not in known:
                log.warning(f"ignoring unknown dataset id {i}")
            elif i not in out:
                out.append(i)
        return out

    # -- dataset operations

    def add_dataset(self, dataset: Dataset) -> Dataset:
        # only the very first dataset is activated automatically
        if not self._datasets:
            self._active_ids = [dataset.id]
        self._datasets.append(dataset)
        log.info(f"added dataset '{dataset.name}' ({dataset.row_count} rows)")
        self._refresh_combined()
        return dataset

    def load_rows(self, name: str, rows: Sequence[Dict[str, Any]], file_name: Optional[str] = None,
                  file_size: int = 0) -> ValidationResult:
        """Validate rows handed over by a file reader and add them as a dataset.

        Nothing is added when no row survives validation.
        """
        ds, validation = create_dataset(name, rows, self.registry, file_name=file_name, file_size=file_size,
                                        preview_rows=self.cfg.preview_rows)
        if validation.is_valid:
            self.add_dataset(ds)
        else:
            log.warning(f"dataset '{name}' not loaded: {validation.message}")
        return validation

    def remove_dataset(self, dataset_id: str) -> None:
        self._datasets = [ds for ds in self._datasets if ds.id != dataset_id]
        self._active_ids = [i for i in self._active_ids if i != dataset_id]
        log.info(f"removed dataset {dataset_id}")
        self._refresh_combined()

    def toggle_dataset(self, dataset_id: str) -> bool:
        """Flip membership in the active set; returns the new state."""
        if dataset_id in self._active_ids:
            self._active_ids = [i for i in self._active_ids if i != dataset_id]
            active = False
        elif self._known_ids([dataset_id]):
            self._active_ids = self._active_ids + [dataset_id]
            active = True
        else:
            return False
        self._refresh_combined()
        return active

    def set_active_datasets(self, dataset_ids: Iterable[str]) -> None:
        self._active_ids = self._known_ids(dataset_ids)
        self._refresh_combined()

    def update_dataset_rows(self, dataset_id: str, rows: Sequence[Dict[str, Any]]) -> Dataset:
        old = self.get_dataset(dataset_id)
        validation = validate_rows(rows)
        valid = tuple(validation.valid_rows)
        new = replace(
            old,
            rows=valid,
            preview=valid[:self.cfg.preview_rows],
            data_type=validation.data_type,
            detected_columns=tuple(validation.detected_columns),
            status=validation.status,
            validation_summary=validation.message,
        )
        self._datasets = [new if ds.id == dataset_id else ds for ds in self._datasets]
        self._refresh_combined()
        return new

    def replace_datasets(self, datasets: Sequence[Dataset]) -> None:
        """Swap in a whole collection (e.g. after a sync); the first becomes the only active one."""
        self._datasets = list(datasets)
        self._active_ids = [self._datasets[0].id] if self._datasets else []
        self._refresh_combined()

    def merge_datasets(self, primary_id: str, secondary_id: str, join_key: str) -> Dataset:
        merged = merge_datasets(self.get_dataset(primary_id), self.get_dataset(secondary_id), join_key,
                                color=self.cfg.merged_color, preview_rows=self.cfg.preview_rows)
        return self.add_dataset(merged)

    # -- filter operations

    def set_filters(self, filters: FilterState) -> None:
        self._filters = copy.deepcopy(filters)
        self._refresh_filtered()

    def set_date_range(self, start: DateLike = None, end: DateLike = None) -> None:
        self._filters.start = start
        self._filters.end = end
        self._refresh_filtered()

    def set_column_filter(self, column: str, values: Sequence[str]) -> None:
        if values:
            self._filters.selected_values[column] = list(values)
        else:
            self._filters.selected_values.pop(column, None)
        self._refresh_filtered()

    def add_drill_down(self, key: str, value: Any) -> None:
        self._filters.drill_down[key] = value
        self._refresh_filtered()

    def clear_drill_down(self) -> None:
        self._filters.drill_down = {}
        self._refresh_filtered()

    def clear_global_filters(self) -> None:
        """Drop the date range and column filters; drill-down selections stay."""
        self._filters.start = None
        self._filters.end = None
        self._filters.selected_values = {}
        self._refresh_filtered()

    def save_filter_set(self, name: str) -> SavedFilterSet:
        saved = SavedFilterSet(id=uuid.uuid4().hex[:9], name=name, filters=copy.deepcopy(self._filters))
        self._saved.append(saved)
        return saved

    def load_filter_set(self, filter_set_id: str) -> None:
        for s in self._saved:
            if s.id == filter_set_id:
                self.set_filters(s.filters)
                return
        raise FilterSetNotFoundError(filter_set_id)

    def delete_filter_set(self, filter_set_id: str) -> None:
        self._saved = [s for s in self._saved if s.id != filter_set_id]

    def reset(self) -> None:
        self._datasets = []
        self._active_ids = []
        self._filters = FilterState()
        self._saved = []
        self.registry.reset()
        self._refresh_combined()
