"""
Pytest configuration and fixtures for the billing importer test suite.
"""

import csv
import pytest
from pathlib import Path
from unittest.mock import Mock

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from billing_importer.address.models import ValidationOutcome
from billing_importer.address.reference_data import ReferenceDataCache
from billing_importer.address.resolver import AddressResolver
from billing_importer.config import ImportConfig, SonarConfig
from billing_importer.integrations.sonar.client import SonarClient


COUNTRIES = {
    "US": "United States",
    "CA": "Canada",
}

SUBDIVISIONS = {
    "US": {"TX": "Texas", "WI": "Wisconsin", "GU": "Guam"},
    "CA": {"ON": "Ontario"},
}

COUNTIES = {
    "Texas": ["Travis", "Harris"],
    "TX": ["Travis", "Harris"],
    "WI": ["Dane", "Rock"],
    "Wisconsin": ["Dane", "Rock"],
    "GU": [],
}


@pytest.fixture
def sonar_config():
    """Billing API configuration for tests."""
    return SonarConfig(
        uri="https://billing.example.com",
        username="importer",
        password="secret",
        timeout=30,
    )


@pytest.fixture
def import_config(tmp_path):
    """Import configuration writing logs into a temporary directory."""
    return ImportConfig(log_directory=str(tmp_path / "log_output"))


@pytest.fixture
def mock_sonar_client():
    """Create a mock billing API client whose address validator is down."""
    client = Mock(spec=SonarClient)

    client.get_countries = Mock(return_value=dict(COUNTRIES))
    client.get_subdivisions = Mock(side_effect=lambda country: SUBDIVISIONS.get(country, {}))
    client.get_counties = Mock(side_effect=lambda state: COUNTIES.get(state, []))
    client.validate_address = Mock(return_value=ValidationOutcome.unavailable("Connection refused"))
    client.create_account = Mock(return_value={"data": {"id": 1}})
    client.create_tokenized_payment_method = Mock(return_value={"data": {"id": 1}})

    return client


@pytest.fixture
def reference_data(mock_sonar_client):
    return ReferenceDataCache(mock_sonar_client)


@pytest.fixture
def resolver(mock_sonar_client, reference_data):
    return AddressResolver(mock_sonar_client, reference_data)


@pytest.fixture
def austin_address():
    """Complete Texas address including county and coordinates."""
    return {
        "line1": "100 Congress Ave",
        "line2": "",
        "city": "Austin",
        "state": "Texas",
        "county": "Travis",
        "zip": "78701",
        "country": "US",
        "latitude": "30.27",
        "longitude": "-97.74",
    }


def make_account_row(overrides=None):
    """Build a 25-column account import row, overriding columns by index."""
    row = [""] * 25
    values = {
        0: "1001", 1: "Jane Doe", 2: "1", 3: "2",
        7: "100 Congress Ave", 9: "Austin", 10: "Texas", 11: "Travis",
        12: "78701", 13: "US", 14: "30.27", 15: "-97.74", 16: "Jane Doe",
    }
    values.update(overrides or {})
    for index, value in values.items():
        row[index] = value
    return row


def write_csv(path, rows, encoding="utf-8"):
    with open(path, "w", newline="", encoding=encoding) as f:
        csv.writer(f).writerows(rows)
    return path


# Custom pytest markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (several components together)"
    )
