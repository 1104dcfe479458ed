from flexdash.schema import (
    KPI_VALUE_RULES,
    ColumnRule,
    Role,
    classify,
    detect_data_type,
    find_categorical_columns,
    find_column_by_keywords,
    find_date_column,
    find_numeric_columns,
    infer_column_roles,
    pick_column,
)


def test_roles_of_sales_columns(sales_rows):
    roles = infer_column_roles(sales_rows)
    assert roles == {
        'Date': Role.DATE,
        'Name': Role.CATEGORICAL,
        'Address': Role.TEXT,
        'Quantity': Role.NUMERIC,
        'Price': Role.NUMERIC,
        'Buyer Type': Role.CATEGORICAL,
    }
    assert find_numeric_columns(sales_rows) == ['Quantity', 'Price']
    assert find_categorical_columns(sales_rows) == ['Name', 'Buyer Type']


def test_revenue_with_junk_values_is_numeric():
    rows = [{'Revenue': v} for v in ['100', '200', 'abc', '']]
    assert classify(rows, 'Revenue') == Role.NUMERIC


def test_exact_half_is_not_a_majority():
    rows = [{'Code': '1'}, {'Code': 'x'}]
    assert classify(rows, 'Code') == Role.CATEGORICAL


def test_all_empty_column_defaults_to_categorical():
    rows = [{'Notes': None}, {'Notes': '  '}, {'Notes': ''}]
    assert classify(rows, 'Notes') == Role.CATEGORICAL


def test_only_first_sample_window_is_read():
    rows = [{'Mixed': 'text'}] * 10 + [{'Mixed': 5}] * 30
    assert classify(rows, 'Mixed') == Role.CATEGORICAL
    assert classify(rows, 'Mixed', sample_size=40) == Role.NUMERIC


def test_sample_shrinks_to_available_rows():
    assert classify([{'n': '3.5'}], 'n') == Role.NUMERIC


def test_empty_rows_and_missing_column_are_unknown():
    assert classify([], 'anything') == Role.UNKNOWN
    assert classify([{'a': 1}], 'b') == Role.UNKNOWN


def test_only_first_date_column_is_recognised():
    rows = [{'Order Date': '2024-01-01', 'Ship Date': '2024-01-03', 'Qty': 1}]
    assert find_date_column(rows) == 'Order Date'
    assert classify(rows, 'Order Date') == Role.DATE
    assert classify(rows, 'Ship Date') == Role.CATEGORICAL


def test_date_column_wins_over_numeric_values():
    rows = [{'Update Code': 1}, {'Update Code': 2}]
    assert classify(rows, 'Update Code') == Role.DATE


def test_address_spelling_variants_are_text():
    rows = [{'Adress': 'x', 'Customer Address': 'y', 'City': 'z'}]
    assert classify(rows, 'Adress') == Role.TEXT
    assert classify(rows, 'Customer Address') == Role.TEXT
    assert classify(rows, 'City') == Role.CATEGORICAL


def test_pick_column_follows_rule_priority_not_column_order():
    assert pick_column(['Quantity', 'Total Revenue', 'Unit Price'], KPI_VALUE_RULES) == 'Unit Price'
    assert pick_column(['Score', 'Weight'], KPI_VALUE_RULES) == 'Score'
    assert pick_column([], KPI_VALUE_RULES) is None


def test_pick_column_with_custom_rules():
    rules = [ColumnRule('b', 1), ColumnRule('a', 0)]
    assert pick_column(['b_col', 'a_col'], rules) == 'a_col'


def test_find_column_by_keywords(production_rows):
    assert find_column_by_keywords(production_rows, ['plant', 'factory']) == 'Plant'
    assert find_column_by_keywords(production_rows, ['latitude']) is None


def test_detect_data_type():
    assert detect_data_type(['Date', 'RCF Production', 'RCF Sales', 'RCF Stock Left']) == 'production'
    assert detect_data_type(['Name', 'Quantity', 'Price']) == 'sales'
    assert detect_data_type(['Buyer Type', 'Quantity', 'Price']) == 'sales'
    assert detect_data_type(['Item', 'Inventory']) == 'stock'
    assert detect_data_type(['a', 'b']) == 'unknown'


def test_underscore_grouped_values_are_not_numeric():
    rows = [{'Code': v} for v in ['1_000', '2_5', 'A-7']]
    assert classify(rows, 'Code') == Role.CATEGORICAL
