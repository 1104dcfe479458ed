from typing import Any, Dict, Tuple

from .utils import is_empty, parse_number

NUMERIC_NAME_KEYWORDS = (
    'quantity', 'price', 'revenue', 'amount', 'total', 'sum', 'count',
    'production', 'sales', 'stock', 'left', 'units', 'value', 'cost',
    'latitude', 'longitude', 'week', 'year', 'code',
)


def is_numeric_name(column: str) -> bool:
    lc = str(column).lower()
    return any(k in lc for k in NUMERIC_NAME_KEYWORDS)


def looks_like_number(value: Any) -> bool:
    return parse_number(value) is not None


def clean_value(column: str, value: Any) -> Any:
    if is_empty(value):
        return None
    if is_numeric_name(column) or looks_like_number(value):
        num = parse_number(value)
        if num is not None:
            return num
        # numeric-looking header but free text in the cell: keep the text
        return value.strip() if isinstance(value, str) else value
    return str(value).strip()


def clean_row(row: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
    """Return the cleaned row and whether it carries any non-empty value."""
    cleaned = {}
    has_data = False
    for c, v in row.items():
        name = str(c).strip()
        cleaned[name] = clean_value(name, v)
        if cleaned[name] is not None:
            has_data = True
    return cleaned, has_data
