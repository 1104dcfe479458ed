CURRENCY_SYMBOLS = {
    'INR': '₹',
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
    'JPY': '¥',
    'CAD': 'CA$',
}


def _indian_grouping(n: int) -> str:
    s = str(n)
    if len(s) <= 3:
        return s
    head, tail = s[:-3], s[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ','.join(groups) + ',' + tail


def currency_fmt(v, currency='INR'):
    try:
        if v is None:
            return 'N/A'
        symbol = CURRENCY_SYMBOLS.get(currency, currency + ' ')
        n = int(round(abs(v)))
        sign = '-' if v < 0 and n else ''
        body = _indian_grouping(n) if currency == 'INR' else f"{n:,}"
        return f"{sign}{symbol}{body}"
    except (TypeError, ValueError, OverflowError):
        return str(v)


def number_fmt(v):
    try:
        return f"{int(round(v)):,}"
    except (TypeError, ValueError, OverflowError):
        return str(v)


def percentage_fmt(v):
    """``12.345`` -> ``'12.3%'`` (input is already a percentage)."""
    try:
        return f"{float(v):.1f}%"
    except (TypeError, ValueError):
        return str(v)


def file_size_fmt(num_bytes):
    if not num_bytes:
        return '0 Bytes'
    sizes = ['Bytes', 'KB', 'MB', 'GB', 'TB']
    i = 0
    value = float(num_bytes)
    while value >= 1024 and i < len(sizes) - 1:
        value /= 1024
        i += 1
    return f"{round(value, 2):g} {sizes[i]}"
