"""
COVID-19 Statistics Loading Module

This module fetches current COVID-19 statistics from the disease.sh API and
validates the JSON payloads:
- collection scopes ("countries", "continents") return a JSON array
- aggregate scopes ("all", "countries/<name>") return a single JSON object

Each fetch performs exactly one request. There is no retry, no caching and
no request timeout; a failed fetch is reported through FetchResult and the
caller renders an empty map.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional
from urllib.parse import quote

import pandas as pd
import requests
from pydantic import ValidationError

from .config.constants import (
    ALL_SCOPE,
    COLUMN_MAPPINGS,
    CONTINENTS_SCOPE,
    COUNTRIES_SCOPE,
    DISEASE_SH_BASE_URL,
)
from .models import AggregateStats, CountryRecord, RecordsValidation, ValidRecord

logger = logging.getLogger(__name__)

SCOPE_PATTERN = re.compile(r"^[A-Za-z0-9 ._%-][A-Za-z0-9 ._%/-]*$")


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a single statistics request."""

    ok: bool
    data: Any = None
    error: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def success(cls, data: Any, url: Optional[str] = None) -> "FetchResult":
        return cls(ok=True, data=data, url=url)

    @classmethod
    def failure(cls, error: str, url: Optional[str] = None) -> "FetchResult":
        return cls(ok=False, error=error, url=url)


def build_url(api: str = COUNTRIES_SCOPE, base_url: str = DISEASE_SH_BASE_URL) -> str:
    """
    Build the endpoint URL for an API scope.

    Args:
        api: Relative scope path, e.g. "countries", "all" or "countries/USA"
        base_url: API base URL

    Returns:
        Absolute endpoint URL

    Raises:
        ValueError: If the scope is not a well-formed relative path
    """
    if not isinstance(api, str) or not SCOPE_PATTERN.match(api) or ".." in api:
        raise ValueError(f"Invalid API scope: {api!r}")
    return f"{base_url.rstrip('/')}/{api}"


def fetch_stats(api: str = COUNTRIES_SCOPE, base_url: str = DISEASE_SH_BASE_URL) -> FetchResult:
    """
    Fetch statistics for one API scope from disease.sh.

    The parsed JSON body is returned unchanged. Transport errors, non-2xx
    responses and undecodable bodies are logged and reported as a failure.

    Args:
        api: Relative scope path ("countries", "all", "countries/<name>", ...)
        base_url: API base URL

    Returns:
        FetchResult carrying either the parsed data or an error message
    """
    url = build_url(api, base_url)

    try:
        logger.info(f"Loading data from disease.sh API: {url}")

        response = requests.get(url)
        response.raise_for_status()

        data = response.json()

    # requests' JSONDecodeError is also a RequestException, so it goes first
    except (requests.exceptions.JSONDecodeError, json.JSONDecodeError) as e:
        logger.error(f"Failed to parse disease.sh JSON: {e}")
        return FetchResult.failure(f"Invalid JSON: {e}", url=url)
    except requests.RequestException as e:
        logger.error(f"Failed to fetch disease.sh API data: {e}")
        return FetchResult.failure(str(e), url=url)

    if isinstance(data, list):
        logger.info(f"Loaded disease.sh data: {len(data)} records")
    else:
        logger.info("Loaded disease.sh data: 1 record")

    return FetchResult.success(data, url=url)


def fetch_countries(base_url: str = DISEASE_SH_BASE_URL) -> FetchResult:
    """Fetch the per-country collection."""
    return fetch_stats(COUNTRIES_SCOPE, base_url)


def fetch_all(base_url: str = DISEASE_SH_BASE_URL) -> FetchResult:
    """Fetch the world aggregate record."""
    return fetch_stats(ALL_SCOPE, base_url)


def fetch_continents(base_url: str = DISEASE_SH_BASE_URL) -> FetchResult:
    """Fetch the per-continent aggregate collection."""
    return fetch_stats(CONTINENTS_SCOPE, base_url)


def fetch_country(country: str, base_url: str = DISEASE_SH_BASE_URL) -> FetchResult:
    """Fetch a single country's record by name, ISO code or id."""
    if not country or not country.strip():
        raise ValueError("Country must be a non-empty string")
    return fetch_stats(f"{COUNTRIES_SCOPE}/{quote(country.strip(), safe='')}", base_url)


def parse_country_records(data: Any) -> RecordsValidation:
    """
    Validate a country collection payload.

    A non-array payload is rejected as a whole. Inside an array, malformed
    records (no country name or no numeric countryInfo.lat/long) are dropped;
    a bad statistic value only blanks that field.

    Args:
        data: Parsed JSON body of a collection request

    Returns:
        RecordsValidation with the well-formed records in input order
    """
    if not isinstance(data, list):
        error = f"Expected a JSON array of country records, got {type(data).__name__}"
        logger.warning(error)
        return RecordsValidation(error=error)

    items = []
    dropped = 0

    for index, raw in enumerate(data):
        if not isinstance(raw, dict):
            logger.warning(f"Dropping record {index}: not an object")
            dropped += 1
            continue
        try:
            record = CountryRecord.model_validate(raw)
        except ValidationError as e:
            logger.warning(
                f"Dropping record {index} ({raw.get('country', 'unknown')}): "
                f"{e.error_count()} validation error(s)"
            )
            dropped += 1
            continue
        items.append(ValidRecord(record=record, raw=raw))

    if dropped:
        logger.info(f"Validated {len(items)} country records, dropped {dropped}")

    return RecordsValidation(items=tuple(items), dropped=dropped)


def parse_aggregate(data: Any) -> Optional[AggregateStats]:
    """
    Validate an aggregate ("all" or single country) payload.

    Non-numeric statistics are treated as absent, so only those fields fall
    back to the placeholder.

    Returns:
        AggregateStats, or None when the payload is missing or not an object
    """
    if not isinstance(data, dict):
        if data is not None:
            logger.warning(f"Expected a JSON object for aggregate stats, got {type(data).__name__}")
        return None

    try:
        return AggregateStats.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Invalid aggregate stats: {e.error_count()} validation error(s)")
        return None


def records_to_dataframe(records: Iterable[CountryRecord]) -> pd.DataFrame:
    """
    Flatten validated country records into a DataFrame.

    Args:
        records: Validated country records

    Returns:
        DataFrame with one row per country in input order
    """
    rows = []

    for record in records:
        raw = record.model_dump(by_alias=True)
        row = {column: raw.get(field) for field, column in COLUMN_MAPPINGS.items()}
        row.update(
            {
                "iso_code": record.country_info.iso3,
                "iso2_code": record.country_info.iso2,
                "latitude": record.country_info.lat,
                "longitude": record.country_info.long,
                "flag_url": record.country_info.flag,
                "updated_timestamp": record.updated,
            }
        )
        rows.append(row)

    columns = list(COLUMN_MAPPINGS.values()) + [
        "iso_code",
        "iso2_code",
        "latitude",
        "longitude",
        "flag_url",
        "updated_timestamp",
    ]
    df = pd.DataFrame(rows, columns=columns)

    # Convert timestamp to datetime
    df["last_updated"] = pd.to_datetime(df["updated_timestamp"], unit="ms", errors="coerce")
    df.drop("updated_timestamp", axis=1, inplace=True)

    return df
