"""
COVID-19 Map Feature Builder

Pure transforms from disease.sh records to rendering-ready structures:
- a GeoJSON-style FeatureCollection with one point per country
- a CountryMarker (badge text + tooltip HTML) per feature
- the six tracker panel rows and the "last updated" line
"""

import logging
from html import escape
from typing import Any, List, Mapping, Optional, Tuple, Union

from .config.constants import PLACEHOLDER, SUMMARY_ROW_FIELDS, TOOLTIP_DATE_FORMAT
from .data_loader import parse_country_records
from .formatters import abbreviate_cases, commafy, friendly_date
from .models import (
    AggregateStats,
    CountryMarker,
    FeatureCollection,
    GeoFeature,
    RecordsValidation,
    StatValue,
    SummaryRow,
)

logger = logging.getLogger(__name__)

MARKER_TEMPLATE = """
<span class="icon-marker">
  <span class="icon-marker-tooltip">
    <h2>{country}</h2>
    <ul>
      <li><strong>Confirmed: </strong>{cases}</li>
      <li><strong>Deaths: </strong>{deaths}</li>
      <li><strong>Recovered: </strong>{recovered}</li>{updated_line}
    </ul>
  </span>
  {badge}
</span>
"""

UPDATED_LINE_TEMPLATE = "\n      <li><strong>Last Update: </strong>{updated}</li>"


def build_feature_collection(data: Any) -> Tuple[FeatureCollection, bool]:
    """
    Turn a country collection payload into point features.

    Args:
        data: Parsed JSON body of the countries endpoint

    Returns:
        Tuple of (feature_collection, has_data). Non-array or empty input
        yields an empty collection and has_data=False.
    """
    return features_from_validation(parse_country_records(data))


def features_from_validation(validation: RecordsValidation) -> Tuple[FeatureCollection, bool]:
    """Build point features from already-validated country records."""
    if not validation.ok:
        logger.warning("No data, sorry! Response was not an array")
        return FeatureCollection(), False

    if not validation.items:
        logger.warning("No data, sorry! Response contained no usable records")
        return FeatureCollection(), False

    features = tuple(
        GeoFeature(coordinates=item.record.coordinates, properties=dict(item.raw))
        for item in validation.items
    )

    logger.info(f"Built {len(features)} map features")
    return FeatureCollection(features=features), True


def marker_html(country: str, cases: str, deaths: str, recovered: str, updated: Optional[str], badge: str) -> str:
    """Render the marker body: hover tooltip plus the visible badge."""
    updated_line = UPDATED_LINE_TEMPLATE.format(updated=escape(updated)) if updated else ""
    return MARKER_TEMPLATE.format(
        country=escape(country),
        cases=cases,
        deaths=deaths,
        recovered=recovered,
        updated_line=updated_line,
        badge=escape(badge),
    )


def build_marker(feature: GeoFeature) -> CountryMarker:
    """
    Build the renderable marker for one feature.

    Args:
        feature: Point feature whose properties hold the raw country record

    Returns:
        CountryMarker with formatted counts, timestamp and badge text
    """
    properties = feature.properties or {}
    lng, lat = feature.coordinates

    country = str(properties.get("country", ""))
    cases = properties.get("cases")
    updated = properties.get("updated")

    updated_formatted = None
    if updated:
        updated_formatted = friendly_date(updated, fmt=TOOLTIP_DATE_FORMAT)

    formatted = {
        "country": country,
        "cases": commafy(cases),
        "deaths": commafy(properties.get("deaths")),
        "recovered": commafy(properties.get("recovered")),
        "updated": updated_formatted,
        "badge": abbreviate_cases(cases),
    }

    return CountryMarker(latlng=(lat, lng), html=marker_html(**formatted), **formatted)


def build_markers(collection: FeatureCollection) -> List[CountryMarker]:
    """Build one marker per feature, preserving order."""
    return [build_marker(feature) for feature in collection]


def _stat(stats: Union[AggregateStats, Mapping, None], key: Optional[str]):
    if stats is None or key is None:
        return None
    return stats.get(key)


def build_summary_rows(stats: Union[AggregateStats, Mapping, None]) -> List[SummaryRow]:
    """
    Build the six tracker panel rows from an aggregate record.

    Rows come in fixed order: total cases, total deaths, total tests, active,
    critical and recovered cases. Values are thousands-separated, or the
    placeholder when the field or the whole aggregate is absent.
    """
    rows = []

    for primary_key, primary_label, secondary_key, secondary_label in SUMMARY_ROW_FIELDS:
        primary = StatValue(label=primary_label, value=commafy(_stat(stats, primary_key)))

        secondary = None
        if secondary_key is not None:
            secondary = StatValue(label=secondary_label, value=commafy(_stat(stats, secondary_key)))

        rows.append(SummaryRow(primary=primary, secondary=secondary))

    return rows


def last_updated_text(stats: Union[AggregateStats, Mapping, None]) -> str:
    """Format the aggregate's last-updated timestamp for the tracker panel."""
    if stats is None:
        return PLACEHOLDER
    return friendly_date(stats.get("updated"))
