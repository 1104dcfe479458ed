import json

from flexdash.base import EngineConfig
from flexdash.pipeline import build_dashboard


def test_dashboard_for_empty_session(session):
    result = build_dashboard(session)
    assert not result.has_data
    assert result.kpis.total_records == 0
    assert result.time_series == []
    assert result.top_categories == []
    assert 'No active data' in result.warnings


def test_dashboard_for_sales(session, sales_rows):
    session.load_rows('Sales Q1', sales_rows)
    result = build_dashboard(session)

    assert result.has_data
    assert result.kpis.total_value == 500.0
    assert [p.period for p in result.time_series] == ['2024-03', '2024-06']
    assert result.top_categories[0].name == 'DAP'
    assert set(result.filter_options) == {'Name', 'Buyer Type'}
    assert result.filter_options['Name'] == ['DAP', 'Potash', 'Urea']
    assert [d.dataset_name for d in result.datasets] == ['Sales Q1']
    assert result.profile['roles']['Address'] == 'text'
    assert result.meta['filtered_rows'] == 5
    assert 'Top Name: DAP.' in result.summary
    assert result.warnings == []


def test_filter_options_ignore_active_filters(session, sales_rows):
    session.load_rows('Sales Q1', sales_rows)
    session.set_column_filter('Name', ['Urea'])
    result = build_dashboard(session)
    assert result.kpis.total_records == 2
    assert result.filter_options['Name'] == ['DAP', 'Potash', 'Urea']


def test_filters_that_match_nothing(session, sales_rows):
    session.load_rows('Sales Q1', sales_rows)
    session.add_drill_down('Name', 'nothing')
    result = build_dashboard(session)
    assert not result.has_data
    assert result.warnings == ['No rows after filtering']


def test_missing_date_column_is_reported(session):
    session.load_rows('teams', [{'Team': 'a', 'Score': 1}, {'Team': 'b', 'Score': 2}])
    result = build_dashboard(session)
    assert result.time_series == []
    assert any('No date column' in w for w in result.warnings)


def test_weekly_config_and_serialization(session, sales_rows):
    session.load_rows('Sales Q1', sales_rows)
    result = build_dashboard(session, EngineConfig(granularity='week', top_categories=1))
    assert len(result.time_series) == 4
    assert len(result.top_categories) == 1

    out = result.to_dict()
    assert out['has_data'] is True
    assert out['kpis']['primary_value_column'] == 'Price'
    json.dumps(out)
