import pytest

from flexdash.colors import ColorRegistry
from flexdash.session import AnalysisSession


@pytest.fixture
def sales_rows():
    return [
        {'Date': '15/03/2024', 'Name': 'Urea', 'Address': '12 Main St', 'Quantity': 10, 'Price': 100.0, 'Buyer Type': 'Retail'},
        {'Date': '03/04/2024', 'Name': 'DAP', 'Address': '4 Hill Rd', 'Quantity': 5, 'Price': 250.0, 'Buyer Type': 'Dealer'},
        {'Date': '2024-03-20', 'Name': 'Urea', 'Address': '7 Lake Ave', 'Quantity': 3, 'Price': 50.0, 'Buyer Type': 'retail'},
        {'Date': '05-06-24', 'Name': 'Potash', 'Address': '1 Park Ln', 'Quantity': 8, 'Price': 80.0, 'Buyer Type': 'Dealer'},
        {'Date': 'not a date', 'Name': 'DAP', 'Address': '9 Bay St', 'Quantity': 2, 'Price': 20.0, 'Buyer Type': 'Retail'},
    ]


@pytest.fixture
def production_rows():
    return [
        {'Date': '2024-01-05', 'Plant': 'North', 'RCF Production': 120, 'RCF Sales': 100, 'RCF Stock Left': 20},
        {'Date': '2024-01-12', 'Plant': 'South', 'RCF Production': 80, 'RCF Sales': 70, 'RCF Stock Left': 10},
        {'Date': '2024-02-02', 'Plant': 'North', 'RCF Production': 90, 'RCF Sales': 95, 'RCF Stock Left': 5},
    ]


@pytest.fixture
def registry():
    return ColorRegistry()


@pytest.fixture
def session():
    return AnalysisSession()
