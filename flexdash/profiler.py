from typing import Dict, Any, Sequence

import pandas as pd

from .aggregation import get_date_range
from .dates import DEFAULT_PIVOT
from .schema import DEFAULT_SAMPLE_SIZE, Role, find_date_column, infer_column_roles
from .utils import is_empty, parse_number, to_label


def profile(rows: Sequence[Dict[str, Any]], sample_size: int = DEFAULT_SAMPLE_SIZE, top_values: int = 10,
            pivot: int = DEFAULT_PIVOT) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    roles = infer_column_roles(rows, sample_size)
    out['rows'] = len(rows)
    out['cols'] = len(roles)
    out['roles'] = {c: r.value for c, r in roles.items()}
    out['date_column'] = find_date_column(rows)
    start, end = get_date_range(rows, pivot)
    out['date_range'] = {'start': start, 'end': end}

    df = pd.DataFrame(list(rows))
    cols = []
    for c, role in roles.items():
        ser = df[c]
        # blank strings count as missing
        ser = ser.where(~ser.map(is_empty))
        entry = {'column': c, 'role': role.value, 'missing': int(ser.isna().sum())}
        if role == Role.NUMERIC:
            nums = pd.to_numeric(ser.map(parse_number), errors='coerce').dropna()
            if not nums.empty:
                desc = nums.describe()
                entry['min'] = float(desc['min'])
                entry['max'] = float(desc['max'])
                entry['mean'] = float(desc['mean'])
                entry['sum'] = float(nums.sum())
        elif role == Role.CATEGORICAL:
            labels = ser.dropna().map(to_label)
            labels = labels[labels != '']
            entry['unique'] = int(labels.nunique())
            vc = labels.value_counts().head(top_values)
            entry['top_values'] = {str(k): int(v) for k, v in vc.items()}
        cols.append(entry)
    out['columns'] = cols
    return out
