from flexdash.formatting import currency_fmt, file_size_fmt, number_fmt, percentage_fmt


def test_currency():
    assert currency_fmt(1234567) == '₹12,34,567'
    assert currency_fmt(1234.4, 'USD') == '$1,234'
    assert currency_fmt(-50, 'EUR') == '-€50'
    assert currency_fmt(None) == 'N/A'


def test_numbers_and_percentages():
    assert number_fmt(1234567.6) == '1,234,568'
    assert percentage_fmt(12.34) == '12.3%'


def test_file_sizes():
    assert file_size_fmt(0) == '0 Bytes'
    assert file_size_fmt(500) == '500 Bytes'
    assert file_size_fmt(1536) == '1.5 KB'
    assert file_size_fmt(1024 * 1024) == '1 MB'
