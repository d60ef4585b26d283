"""Tests for the run-scoped reference data cache."""

import pytest

from billing_importer.address.reference_data import ReferenceDataCache
from billing_importer.integrations.sonar.client import SonarConnectionError

pytestmark = pytest.mark.unit


def test_countries_loaded_eagerly(mock_sonar_client):
    cache = ReferenceDataCache(mock_sonar_client)

    mock_sonar_client.get_countries.assert_called_once()
    assert cache.has_country("US")
    assert not cache.has_country("ZZ")
    assert set(cache.countries()) == {"US", "CA"}


def test_country_table_cannot_be_mutated_through_accessor(reference_data):
    reference_data.countries()["ZZ"] = "Nowhere"

    assert not reference_data.has_country("ZZ")


def test_country_fetch_failure_propagates(mock_sonar_client):
    mock_sonar_client.get_countries.side_effect = SonarConnectionError("timed out")

    with pytest.raises(SonarConnectionError):
        ReferenceDataCache(mock_sonar_client)


def test_subdivisions_are_lowercased_codes_and_names(reference_data):
    assert reference_data.subdivisions("US") == {"tx", "texas", "wi", "wisconsin", "gu", "guam"}


def test_subdivisions_accept_list_responses(mock_sonar_client):
    mock_sonar_client.get_subdivisions.side_effect = None
    mock_sonar_client.get_subdivisions.return_value = ["Ontario", " Quebec "]
    cache = ReferenceDataCache(mock_sonar_client)

    assert cache.subdivisions("CA") == {"ontario", "quebec"}


def test_subdivisions_fetched_once_per_country(reference_data, mock_sonar_client):
    reference_data.subdivisions("US")
    reference_data.subdivisions("US")
    reference_data.subdivisions("CA")
    reference_data.subdivisions("CA")

    assert mock_sonar_client.get_subdivisions.call_count == 2


def test_counties_fetched_once_per_state(reference_data, mock_sonar_client):
    assert reference_data.counties("Texas") == {"Travis", "Harris"}
    assert reference_data.counties("Texas") == {"Travis", "Harris"}

    mock_sonar_client.get_counties.assert_called_once_with("Texas")


def test_empty_county_list_is_cached(reference_data, mock_sonar_client):
    assert reference_data.counties("GU") == set()
    assert reference_data.counties("GU") == set()

    mock_sonar_client.get_counties.assert_called_once_with("GU")


def test_lookup_failure_is_not_cached(reference_data, mock_sonar_client):
    mock_sonar_client.get_counties.side_effect = SonarConnectionError("timed out")
    with pytest.raises(SonarConnectionError):
        reference_data.counties("WI")

    mock_sonar_client.get_counties.side_effect = None
    mock_sonar_client.get_counties.return_value = ["Dane"]

    assert reference_data.counties("WI") == {"Dane"}
