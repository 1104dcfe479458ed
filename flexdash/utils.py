import math
import numbers
import re
from typing import Any, Optional

import numpy as np

_THOUSANDS_RE = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def parse_number(value: Any) -> Optional[float]:
    """Return value as a finite float, or None if it is not numeric.

    Strings are trimmed first; ``1,234.50`` style thousands separators are
    accepted. Booleans are not numbers here.
    """
    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, numbers.Number):
        try:
            f = float(value)
        except (TypeError, ValueError):
            return None
        return f if np.isfinite(f) else None
    s = str(value).strip()
    # float() would accept 1_000
    if not s or '_' in s:
        return None
    if _THOUSANDS_RE.match(s):
        s = s.replace(',', '')
    try:
        f = float(s)
    except ValueError:
        return None
    return f if np.isfinite(f) else None


def safe_float(value: Any, default: float = 0.0) -> float:
    f = parse_number(value)
    return default if f is None else f


def to_label(value: Any, default: str = '') -> str:
    """String form of a cell for grouping and comparison (``5.0`` -> ``'5'``)."""
    if is_empty(value):
        return default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
