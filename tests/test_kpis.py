import pytest

from flexdash.datasets import dataset_breakdown, create_dataset
from flexdash.kpis import calculate_dataset_kpis, calculate_kpis


def test_empty_rows_give_zero_kpis():
    kpis = calculate_kpis([])
    assert (kpis.total_records, kpis.total_value, kpis.average_value, kpis.unique_categories) == (0, 0, 0, 0)
    assert kpis.primary_value_column is None
    assert kpis.primary_category_column is None


def test_sales_kpis_pick_price_and_name(sales_rows):
    kpis = calculate_kpis(sales_rows)
    assert kpis.total_records == 5
    assert kpis.primary_value_column == 'Price'
    assert kpis.primary_category_column == 'Name'
    assert kpis.total_value == pytest.approx(500.0)
    assert kpis.average_value == pytest.approx(100.0)
    assert kpis.unique_categories == 3


def test_fallback_to_first_numeric_and_categorical():
    rows = [
        {'Team': 'red', 'Score': 3, 'Weight': 1},
        {'Team': 'blue', 'Score': 4, 'Weight': 2},
        {'Team': '', 'Score': 5, 'Weight': 3},
    ]
    kpis = calculate_kpis(rows)
    assert kpis.primary_value_column == 'Score'
    assert kpis.primary_category_column == 'Team'
    assert kpis.total_value == pytest.approx(12.0)
    assert kpis.unique_categories == 2


def test_junk_values_count_as_zero():
    rows = [{'Revenue': v, 'Region': 'N'} for v in ['100', '200', 'abc', '']]
    kpis = calculate_kpis(rows)
    assert kpis.primary_value_column == 'Revenue'
    assert kpis.total_value == pytest.approx(300.0)
    assert kpis.average_value == pytest.approx(75.0)


def test_rows_without_numeric_columns():
    kpis = calculate_kpis([{'City': 'Pune'}, {'City': 'Delhi'}])
    assert kpis.total_records == 2
    assert kpis.total_value == 0
    assert kpis.unique_categories == 2


def test_per_dataset_kpis(sales_rows, production_rows, registry):
    a, _ = create_dataset('Sales Q1', sales_rows, registry, dataset_id='a')
    b, _ = create_dataset('Daily Production', production_rows, registry, dataset_id='b')
    per = calculate_dataset_kpis(dataset_breakdown([a, b], ['a', 'b']))
    assert [p.dataset_name for p in per] == ['Sales Q1', 'Daily Production']
    assert per[0].kpis.total_value == pytest.approx(500.0)
    assert per[1].kpis.primary_value_column == 'RCF Production'
    assert per[1].kpis.total_value == pytest.approx(290.0)
    assert per[1].kpis.primary_category_column == 'Plant'


def test_thousands_separators_in_totals():
    rows = [{'Amount': '1,250', 'Region': 'N'}, {'Amount': 750, 'Region': 'S'}, {'Amount': None, 'Region': 'S'}]
    kpis = calculate_kpis(rows)
    assert kpis.total_value == pytest.approx(2000.0)
    assert kpis.unique_categories == 2
