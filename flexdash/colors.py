"""Dataset identity: semantic type from a dataset's name, and a stable color per name."""
from typing import Callable, Dict, List, Optional, Tuple
import logging

log = logging.getLogger("flexdash.colors")

BASE_COLORS = [
    '#3b82f6',  # blue
    '#22c55e',  # green
    '#f97316',  # orange
    '#ef4444',  # red
    '#8b5cf6',  # purple
    '#06b6d4',  # cyan
    '#f59e0b',  # amber
    '#ec4899',  # pink
    '#84cc16',  # lime
    '#14b8a6',  # teal
    '#6366f1',  # indigo
    '#dc2626',
    '#059669',  # emerald
    '#7c3aed',  # violet
    '#0891b2',  # sky
]

DATASET_TYPE_COLORS = {
    'pos_fom': '#3b82f6',
    'pos_lfom': '#22c55e',
    'lfom': '#f59e0b',
    'fom': '#f97316',
    'mda_claim': '#8b5cf6',
    'stock': '#14b8a6',
    'production': '#7ab839',
}

DATASET_DISPLAY_NAMES = {
    'pos_fom': 'POS FOM',
    'pos_lfom': 'POS LFOM',
    'lfom': 'LFOM',
    'fom': 'FOM',
    'mda_claim': 'MDA Claim',
    'stock': 'Stock',
    'production': 'Production',
}

NO_TYPE = 'none'

# most specific first
DATASET_TYPE_RULES: List[Tuple[Callable[[str], bool], str]] = [
    (lambda n: 'pos' in n and 'fom' in n and 'lfom' not in n, 'pos_fom'),
    (lambda n: 'pos' in n and 'lfom' in n, 'pos_lfom'),
    (lambda n: 'lfom' in n, 'lfom'),
    (lambda n: 'fom' in n, 'fom'),
    (lambda n: 'mda' in n and 'claim' in n, 'mda_claim'),
    (lambda n: 'stock' in n or 'inventory' in n, 'stock'),
    (lambda n: 'production' in n, 'production'),
]


def classify_dataset_type(name: str) -> str:
    lowered = str(name or '').lower()
    for predicate, dataset_type in DATASET_TYPE_RULES:
        if predicate(lowered):
            return dataset_type
    return NO_TYPE


def dataset_display_name(name: str) -> str:
    dataset_type = classify_dataset_type(name)
    if dataset_type == 'stock' and 'stock' not in str(name).lower():
        # inventory-only names
        return 'Production' if 'production' in str(name).lower() else 'Stock Data'
    return DATASET_DISPLAY_NAMES.get(dataset_type, name)


def is_mda_claim_dataset(name: str) -> bool:
    lowered = str(name or '').lower()
    return 'mda' in lowered or 'claim' in lowered


def is_stock_dataset(name: str) -> bool:
    lowered = str(name or '').lower()
    return 'stock' in lowered or 'inventory' in lowered


class ColorRegistry:
    """Per-session memo of dataset name -> display color.

    A name keeps its first color for the registry's lifetime. Names with a
    recognised dataset type get that type's color; the rest take the fallback
    palette in order, and the palette index only moves for new names.
    """

    def __init__(self, palette: Optional[List[str]] = None, type_colors: Optional[Dict[str, str]] = None):
        self.palette = list(palette or BASE_COLORS)
        self.type_colors = dict(type_colors or DATASET_TYPE_COLORS)
        self._assigned: Dict[str, str] = {}
        self._index = 0

    @property
    def next_index(self) -> int:
        return self._index

    def color_for(self, name: str) -> str:
        if name in self._assigned:
            return self._assigned[name]

        color = self.type_colors.get(classify_dataset_type(name))
        if color is None:
            color = self.palette[self._index % len(self.palette)]
            self._index += 1
        self._assigned[name] = color
        log.debug(f"assigned color {color} to dataset '{name}'")
        return color

    def assign_all(self, names: List[str]) -> List[str]:
        return [self.color_for(n) for n in names]

    def assigned(self) -> Dict[str, str]:
        return dict(self._assigned)

    def reset(self) -> None:
        self._assigned.clear()
        self._index = 0
