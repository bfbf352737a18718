"""Shared disease.sh payload fixtures."""

import pytest


def country_record(name, lat, long, cases, deaths=10, recovered=100, updated=1609459200000, **extra):
    record = {
        "updated": updated,
        "country": name,
        "countryInfo": {
            "_id": 999,
            "iso2": name[:2].upper(),
            "iso3": name[:3].upper(),
            "lat": lat,
            "long": long,
            "flag": f"https://disease.sh/assets/img/flags/{name[:2].lower()}.png",
        },
        "cases": cases,
        "todayCases": 0,
        "deaths": deaths,
        "todayDeaths": 0,
        "recovered": recovered,
        "active": cases - deaths - recovered,
        "critical": 5,
        "casesPerOneMillion": 5854.5,
        "deathsPerOneMillion": 197,
        "tests": 1000000,
        "testsPerOneMillion": 25000,
        "population": 40000000,
        "continent": "Asia",
    }
    record.update(extra)
    return record


@pytest.fixture
def countries_payload():
    return [
        country_record("Afghanistan", 33, 65, 234174, deaths=7896, recovered=180000),
        country_record("Albania", 41, 20, 334090, deaths=3605, recovered=327000),
        country_record("USA", 38, -97, 111820082, deaths=1219487, recovered=109814428),
    ]


@pytest.fixture
def world_payload():
    return {
        "updated": 1609459200000,
        "cases": 31000000,
        "todayCases": 0,
        "deaths": 560000,
        "todayDeaths": 0,
        "recovered": 22000000,
        "active": 8440000,
        "critical": 61000,
        "casesPerOneMillion": 3977.5,
        "deathsPerOneMillion": 71.8,
        "tests": 450000000,
        "testsPerOneMillion": 57700.2,
        "population": 7800000000,
        "affectedCountries": 215,
    }


@pytest.fixture
def single_country_payload():
    return [
        {
            "country": "X",
            "countryInfo": {"lat": 1, "long": 2},
            "cases": 2500,
            "deaths": 10,
            "recovered": 100,
            "updated": 1609459200000,
        }
    ]
