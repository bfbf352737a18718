"""
COVID-19 World Map Tracker - Configuration Constants

Centralized configuration and constants for the entire project.
This module contains the endpoint URLs, map defaults, display formats and
labels used across the fetcher, the feature builder and the renderers.
"""

# Data source URLs
DISEASE_SH_BASE_URL = "https://disease.sh/v3/covid-19"

# API scopes
COUNTRIES_SCOPE = "countries"
ALL_SCOPE = "all"
CONTINENTS_SCOPE = "continents"

# Fallback viewer location (Washington, D.C.)
DEFAULT_LOCATION = (38.9072, -77.0369)

# Map defaults
DEFAULT_ZOOM = 2
FLY_TO_ZOOM = 10
FLY_TO_DELAY_MS = 2000
DEFAULT_BASE_MAP = "OpenStreetMap"
MAP_HEIGHT_PX = 600

# Display formatting
PLACEHOLDER = "-"
THOUSANDS_SEPARATOR = ","
FRIENDLY_DATE_FORMAT = "%b %d, %Y, %I:%M %p"
TOOLTIP_DATE_FORMAT = "%m/%d/%Y, %I:%M:%S %p"

# Case badge abbreviation thresholds
THOUSAND_THRESHOLD = 1_000
MILLION_THRESHOLD = 1_000_000

# Tracker panel rows: (primary field, primary label, secondary field, secondary label)
SUMMARY_ROW_FIELDS = [
    ("cases", "Total Cases", "casesPerOneMillion", "Per 1 Million"),
    ("deaths", "Total Deaths", "deathsPerOneMillion", "Per 1 Million"),
    ("tests", "Total Tests", "testsPerOneMillion", "Per 1 Million"),
    ("active", "Active Cases", None, None),
    ("critical", "Critical Cases", None, None),
    ("recovered", "Recovered Cases", None, None),
]

# Column mappings for the per-country table view
COLUMN_MAPPINGS = {
    "country": "country",
    "cases": "current_cases",
    "deaths": "current_deaths",
    "recovered": "current_recovered",
    "active": "current_active",
    "critical": "current_critical",
    "casesPerOneMillion": "cases_per_million",
    "deathsPerOneMillion": "deaths_per_million",
    "tests": "tests_total",
    "testsPerOneMillion": "tests_per_million",
    "population": "population",
}

# Output files
DEFAULT_OUTPUT_DIR = "site"
INDEX_FILENAME = "index.html"
CSV_FILENAME = "countries.csv"

# Logging configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL = "INFO"
