"""
COVID-19 Tracker Pipeline

Runs one fetch cycle as explicit steps: fetch the country collection and the
world aggregate, validate and transform them, and bundle the results for the
map renderer and the tracker panel. Data problems never raise; they degrade
to an empty map and placeholder values.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .config.constants import ALL_SCOPE, COUNTRIES_SCOPE, PLACEHOLDER
from .config.map_config import MapConfig
from .data_loader import FetchResult, fetch_stats, parse_aggregate, parse_country_records
from .feature_builder import (
    build_markers,
    build_summary_rows,
    features_from_validation,
    last_updated_text,
)
from .models import AggregateStats, CountryMarker, CountryRecord, FeatureCollection, SummaryRow

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, str], FetchResult]


@dataclass(frozen=True)
class TrackerData:
    """Everything one render cycle needs."""

    collection: FeatureCollection = field(default_factory=FeatureCollection)
    markers: List[CountryMarker] = field(default_factory=list)
    summary_rows: List[SummaryRow] = field(default_factory=list)
    last_updated: str = PLACEHOLDER
    has_data: bool = False
    records: List[CountryRecord] = field(default_factory=list)
    stats: Optional[AggregateStats] = None


def load_tracker_data(config: Optional[MapConfig] = None, fetch: Fetcher = fetch_stats) -> TrackerData:
    """
    Fetch and transform the data for one render cycle.

    Args:
        config: Map settings (the API base URL is taken from here)
        fetch: Statistics fetcher, (api, base_url) -> FetchResult

    Returns:
        TrackerData with the feature collection, markers and tracker rows
    """
    config = config or MapConfig()
    logger.info("Starting data loading process...")

    countries_result = fetch(COUNTRIES_SCOPE, config.api_base_url)
    countries_data = countries_result.data if countries_result.ok else None
    if not countries_result.ok:
        logger.error(f"Country statistics unavailable: {countries_result.error}")

    stats_result = fetch(ALL_SCOPE, config.api_base_url)
    stats = parse_aggregate(stats_result.data) if stats_result.ok else None
    if not stats_result.ok:
        logger.error(f"Global statistics unavailable: {stats_result.error}")

    validation = parse_country_records(countries_data)
    collection, has_data = features_from_validation(validation)

    tracker_data = TrackerData(
        collection=collection,
        markers=build_markers(collection),
        summary_rows=build_summary_rows(stats),
        last_updated=last_updated_text(stats),
        has_data=has_data,
        records=validation.records,
        stats=stats,
    )

    logger.info(f"Data loading completed: {len(collection)} countries, has_data={has_data}")
    return tracker_data
