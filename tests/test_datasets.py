import dataclasses

import pytest

from flexdash.colors import BASE_COLORS, DATASET_TYPE_COLORS
from flexdash.datasets import combine_active_datasets, create_dataset, dataset_breakdown, merge_datasets


@pytest.fixture
def two_datasets(sales_rows, production_rows, registry):
    a, _ = create_dataset('Sales Q1', sales_rows, registry, file_name='sales.csv', dataset_id='a')
    b, _ = create_dataset('Daily Production', production_rows, registry, file_name='prod.xlsx', dataset_id='b')
    return a, b


def test_create_dataset(sales_rows, registry):
    ds, validation = create_dataset('Sales Q1', sales_rows, registry, file_size=2048)
    assert validation.is_valid
    assert ds.row_count == 5
    assert ds.data_type == 'sales'
    assert ds.detected_columns == ('Date', 'Name', 'Address', 'Quantity', 'Price', 'Buyer Type')
    assert ds.color == BASE_COLORS[0]
    assert ds.file_name == 'Sales Q1'
    assert len(ds.preview) == 5
    assert ds.rows[0]['Quantity'] == 10.0


def test_dataset_is_immutable(two_datasets):
    a, _ = two_datasets
    with pytest.raises(dataclasses.FrozenInstanceError):
        a.name = 'other'


def test_combine_follows_dataset_order(two_datasets):
    a, b = two_datasets
    datasets = [a, b]
    assert combine_active_datasets(datasets, []) == []
    assert combine_active_datasets(datasets, ['b']) == list(b.rows)
    assert combine_active_datasets(datasets, ['b', 'a']) == list(a.rows) + list(b.rows)
    assert combine_active_datasets(datasets, ['zzz']) == []


def test_breakdown_keeps_provenance(two_datasets):
    a, b = two_datasets
    slices = dataset_breakdown([a, b], ['a', 'b'])
    assert [(s.dataset_id, s.dataset_name, s.color, len(s.rows)) for s in slices] == [
        ('a', 'Sales Q1', BASE_COLORS[0], 5),
        ('b', 'Daily Production', DATASET_TYPE_COLORS['production'], 3),
    ]
    assert slices[1].data_type == 'production'


def test_merge_is_row_concatenation(two_datasets):
    a, b = two_datasets
    merged = merge_datasets(a, b, join_key='Date')
    assert merged.row_count == a.row_count + b.row_count
    assert list(merged.rows) == list(a.rows) + list(b.rows)
    assert merged.name == 'Sales Q1 + Daily Production'
    assert merged.file_name == 'merged-sales.csv-prod.xlsx'
    assert merged.color == '#6366f1'
    assert merged.data_type == 'sales'
    assert merged.detected_columns[:6] == a.detected_columns
    assert 'RCF Production' in merged.detected_columns
    assert merged.detected_columns.count('Date') == 1
    assert merged.id.startswith('merged_')
