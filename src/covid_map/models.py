"""
Data models for the COVID-19 world map tracker.

Pydantic models validate the disease.sh JSON payloads; frozen dataclasses
carry the derived, read-only structures handed to the renderers.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, List, Mapping, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _number_or_none(value):
    """Keep numbers (and numeric strings); anything else becomes None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            float(value)
        except ValueError:
            return None
        return value
    return None


# Statistics never invalidate a record; a bad value is treated as absent.
Count = Annotated[Optional[Union[int, float]], BeforeValidator(_number_or_none)]
Timestamp = Annotated[Optional[float], BeforeValidator(_number_or_none)]


class CountryInfo(BaseModel):
    """Location and identifiers of a country as returned by disease.sh."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    id: Optional[int] = Field(default=None, alias="_id")
    iso2: Optional[str] = None
    iso3: Optional[str] = None
    lat: float = Field(strict=True)
    long: float = Field(strict=True)
    flag: Optional[str] = None


class CountryRecord(BaseModel):
    """One country's statistics."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    country: str = Field(strict=True)
    country_info: CountryInfo = Field(alias="countryInfo")
    updated: Timestamp = None
    cases: Count = None
    deaths: Count = None
    recovered: Count = None
    active: Count = None
    critical: Count = None
    tests: Count = None
    population: Count = None
    cases_per_one_million: Count = Field(default=None, alias="casesPerOneMillion")
    deaths_per_one_million: Count = Field(default=None, alias="deathsPerOneMillion")
    tests_per_one_million: Count = Field(default=None, alias="testsPerOneMillion")

    @property
    def coordinates(self) -> Tuple[float, float]:
        """Point coordinates in GeoJSON order (longitude, latitude)."""
        return (self.country_info.long, self.country_info.lat)


class AggregateStats(BaseModel):
    """World or continent totals used by the tracker panel."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    updated: Timestamp = None
    cases: Count = None
    today_cases: Count = Field(default=None, alias="todayCases")
    deaths: Count = None
    today_deaths: Count = Field(default=None, alias="todayDeaths")
    recovered: Count = None
    active: Count = None
    critical: Count = None
    tests: Count = None
    population: Count = None
    affected_countries: Count = Field(default=None, alias="affectedCountries")
    cases_per_one_million: Count = Field(default=None, alias="casesPerOneMillion")
    deaths_per_one_million: Count = Field(default=None, alias="deathsPerOneMillion")
    tests_per_one_million: Count = Field(default=None, alias="testsPerOneMillion")

    def get(self, key: str, default=None):
        """Look up a statistic by its API (camelCase) name."""
        value = self.model_dump(by_alias=True).get(key)
        return default if value is None else value


class ValidRecord(NamedTuple):
    record: CountryRecord
    raw: Mapping[str, Any]


@dataclass(frozen=True)
class RecordsValidation:
    """Outcome of validating a country collection payload."""

    items: Tuple[ValidRecord, ...] = ()
    dropped: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def records(self) -> List[CountryRecord]:
        return [item.record for item in self.items]


@dataclass(frozen=True)
class GeoFeature:
    """Point feature for one country; properties are the raw record fields."""

    coordinates: Tuple[float, float]
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_geojson(self) -> Dict[str, Any]:
        return {
            "type": "Feature",
            "properties": dict(self.properties),
            "geometry": {"type": "Point", "coordinates": list(self.coordinates)},
        }


@dataclass(frozen=True)
class FeatureCollection:
    features: Tuple[GeoFeature, ...] = ()

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self):
        return iter(self.features)

    def to_geojson(self) -> Dict[str, Any]:
        return {
            "type": "FeatureCollection",
            "features": [feature.to_geojson() for feature in self.features],
        }


@dataclass(frozen=True)
class CountryMarker:
    """Everything needed to draw one country's marker and tooltip."""

    country: str
    latlng: Tuple[float, float]
    cases: str
    deaths: str
    recovered: str
    updated: Optional[str]
    badge: str
    html: str


@dataclass(frozen=True)
class StatValue:
    label: str
    value: str


@dataclass(frozen=True)
class SummaryRow:
    primary: StatValue
    secondary: Optional[StatValue] = None
