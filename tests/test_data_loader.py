"""
Test suite for the disease.sh statistics fetcher and payload validation.
"""

import logging
from unittest.mock import Mock, patch

import pandas as pd
import pytest
import requests

from covid_map.data_loader import (
    FetchResult,
    build_url,
    fetch_all,
    fetch_continents,
    fetch_countries,
    fetch_country,
    fetch_stats,
    parse_aggregate,
    parse_country_records,
    records_to_dataframe,
)
from covid_map.models import AggregateStats


class TestFetchStats:
    """Test cases for single-request fetching."""

    @patch("requests.get")
    def test_fetch_success(self, mock_get, countries_payload):
        """Test that the parsed body is returned unchanged."""
        mock_response = Mock()
        mock_response.raise_for_status.return_value = None
        mock_response.json.return_value = countries_payload
        mock_get.return_value = mock_response

        result = fetch_stats("countries", "http://test-url.com")

        assert result.ok is True
        assert result.data is countries_payload
        assert result.error is None
        assert result.url == "http://test-url.com/countries"
        mock_get.assert_called_once()

    @patch("requests.get")
    def test_no_timeout_and_single_request(self, mock_get):
        """Test that exactly one request is made and no timeout is passed."""
        mock_get.return_value = Mock(json=Mock(return_value={}))

        fetch_all()

        mock_get.assert_called_once_with("https://disease.sh/v3/covid-19/all")

    @patch("requests.get")
    def test_transport_error(self, mock_get):
        """Test that transport errors become a failure result."""
        mock_get.side_effect = requests.exceptions.RequestException("API Error")

        result = fetch_countries("http://test-url.com")

        assert result.ok is False
        assert result.data is None
        assert "API Error" in result.error
        mock_get.assert_called_once()

    @patch("requests.get")
    def test_http_error(self, mock_get):
        """Test that non-2xx responses become a failure result without retrying."""
        mock_response = Mock()
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            "500 Server Error"
        )
        mock_get.return_value = mock_response

        result = fetch_countries()

        assert result.ok is False
        assert "500" in result.error
        mock_response.json.assert_not_called()
        assert mock_get.call_count == 1

    @patch("requests.get")
    def test_invalid_json(self, mock_get, caplog):
        mock_response = Mock()
        mock_response.raise_for_status.return_value = None
        mock_response.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "", 0)
        mock_get.return_value = mock_response

        with caplog.at_level(logging.ERROR):
            result = fetch_countries()

        assert result.ok is False
        assert "Invalid JSON" in result.error
        assert "Failed to parse" in caplog.text
        assert "Failed to fetch" not in caplog.text

    @patch("requests.get")
    def test_scope_wrappers(self, mock_get):
        mock_get.return_value = Mock(json=Mock(return_value=[]))

        fetch_continents("http://test-url.com")
        fetch_country("United States", "http://test-url.com")

        urls = [call.args[0] for call in mock_get.call_args_list]
        assert urls == [
            "http://test-url.com/continents",
            "http://test-url.com/countries/United%20States",
        ]

    def test_fetch_country_requires_name(self):
        with pytest.raises(ValueError):
            fetch_country("  ")

    def test_result_constructors(self):
        assert FetchResult.success([1]).ok is True
        failure = FetchResult.failure("boom", url="http://x")
        assert failure.ok is False
        assert failure.url == "http://x"


class TestBuildUrl:
    """Test cases for scope validation."""

    def test_valid_scopes(self):
        assert build_url("countries") == "https://disease.sh/v3/covid-19/countries"
        assert build_url("all", "http://test-url.com/") == "http://test-url.com/all"
        assert build_url("countries/USA") == "https://disease.sh/v3/covid-19/countries/USA"

    @pytest.mark.parametrize("scope", ["", "/all", "../secrets", "countries?x=1", None])
    def test_invalid_scopes(self, scope):
        with pytest.raises(ValueError):
            build_url(scope)


class TestPayloadValidation:
    """Test cases for schema validation of API payloads."""

    def test_parse_country_records(self, countries_payload):
        validation = parse_country_records(countries_payload)

        assert validation.ok
        assert validation.dropped == 0
        records = validation.records
        assert [r.country for r in records] == ["Afghanistan", "Albania", "USA"]
        assert records[0].country_info.iso3 == "AFG"
        assert records[0].country_info.id == 999
        assert records[0].cases_per_one_million == 5854.5
        assert records[0].coordinates == (65, 33)

    def test_parse_country_records_not_array(self):
        validation = parse_country_records({"cases": 1})

        assert not validation.ok
        assert "array" in validation.error
        assert validation.records == []

    def test_parse_country_records_counts_dropped(self, countries_payload):
        validation = parse_country_records([countries_payload[0], {"country": "X"}, 42])

        assert validation.ok
        assert len(validation.items) == 1
        assert validation.dropped == 2

    def test_parse_aggregate(self, world_payload):
        stats = parse_aggregate(world_payload)

        assert isinstance(stats, AggregateStats)
        assert stats.cases == 31000000
        assert stats.affected_countries == 215
        assert stats.get("testsPerOneMillion") == 57700.2
        assert stats.get("missing", "-") == "-"

    def test_parse_aggregate_invalid(self):
        assert parse_aggregate(None) is None
        assert parse_aggregate([{"cases": 1}]) is None

    def test_parse_aggregate_bad_field_is_absent(self, world_payload):
        stats = parse_aggregate(dict(world_payload, tests="unknown", updated=1609459200000.5))

        assert isinstance(stats, AggregateStats)
        assert stats.tests is None
        assert stats.get("tests", "-") == "-"
        assert stats.cases == 31000000
        assert stats.updated == 1609459200000.5

    def test_parse_country_records_lenient_statistics(self, countries_payload):
        data = [
            dict(countries_payload[0], recovered="N/A", critical=None),
            dict(countries_payload[1], updated=1609459200000.5, tests="12345"),
        ]

        validation = parse_country_records(data)

        assert validation.dropped == 0
        first, second = validation.records
        assert first.recovered is None
        assert first.critical is None
        assert second.updated == 1609459200000.5
        assert second.tests == 12345


class TestRecordsToDataFrame:
    """Test cases for the per-country table."""

    def test_records_to_dataframe(self, countries_payload):
        records = parse_country_records(countries_payload).records

        df = records_to_dataframe(records)

        assert len(df) == 3
        assert df.iloc[0]["country"] == "Afghanistan"
        assert df.iloc[0]["iso_code"] == "AFG"
        assert df.iloc[0]["current_cases"] == 234174
        assert df.iloc[2]["longitude"] == -97
        assert "last_updated" in df.columns
        assert "updated_timestamp" not in df.columns
        assert pd.notna(df.iloc[0]["last_updated"])

    def test_empty_records(self):
        df = records_to_dataframe([])

        assert len(df) == 0
        assert "country" in df.columns
        assert "last_updated" in df.columns
