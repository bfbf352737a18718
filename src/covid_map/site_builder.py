"""
COVID-19 Static Site Builder

Writes a single self-contained index.html: the world map with one marker per
country and the tracker panel of global totals underneath. Optionally writes
the per-country table as CSV next to it.

Usage:
    python -m covid_map.site_builder --output site --csv
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import folium
from jinja2 import Template

from .config.constants import (
    CSV_FILENAME,
    DEFAULT_OUTPUT_DIR,
    DISEASE_SH_BASE_URL,
    INDEX_FILENAME,
    LOG_LEVEL,
)
from .config.logging_config import configure_logging
from .config.map_config import MapConfig
from .data_loader import fetch_stats, records_to_dataframe
from .map_renderer import render_map, render_map_html
from .models import SummaryRow
from .pipeline import Fetcher, TrackerData, load_tracker_data

logger = logging.getLogger(__name__)

PAGE_TITLE = "COVID-19 World Map Tracker"

TRACKER_TEMPLATE = Template(
    """
<style>
  .tracker { font-family: Helvetica, Arial, sans-serif; padding: 1em 2em; }
  .tracker-stats ul { display: grid; grid-template-columns: repeat(3, 1fr); list-style: none; padding: 0; }
  .tracker-stat { padding: 1em; border: 1px solid #ddd; margin: .25em; }
  .tracker-stat-primary { font-size: 1.6em; margin: 0; }
  .tracker-stat strong { display: block; font-size: .6em; color: #666; }
  .tracker-stat-secondary { font-size: 1em; margin: .5em 0 0; }
</style>
<div class="tracker">
  <div class="tracker-stats">
    <ul>
    {%- for row in rows %}
      <li class="tracker-stat">
        {%- if row.primary.value %}
        <p class="tracker-stat-primary">{{ row.primary.value }}<strong>{{ row.primary.label }}</strong></p>
        {%- endif %}
        {%- if row.secondary and row.secondary.value %}
        <p class="tracker-stat-secondary">{{ row.secondary.value }}<strong>{{ row.secondary.label }}</strong></p>
        {%- endif %}
      </li>
    {%- endfor %}
    </ul>
  </div>
  <div class="tracker-last-updated">
    <p>Last Updated: {{ last_updated }}</p>
  </div>
</div>
""",
    autoescape=True,
)


def render_tracker_html(rows: List[SummaryRow], last_updated: str) -> str:
    """Render the tracker panel for the six summary rows."""
    return TRACKER_TEMPLATE.render(rows=rows, last_updated=last_updated)


def build_page(data: TrackerData, config: MapConfig) -> str:
    """
    Render the full page: map, markers, fly-to and tracker panel.

    Args:
        data: Result of one pipeline run
        config: Map settings

    Returns:
        Complete HTML document
    """
    m = render_map(data.collection, config)

    root = m.get_root()
    root.header.add_child(folium.Element(f"<title>{PAGE_TITLE}</title>"))
    root.html.add_child(folium.Element(render_tracker_html(data.summary_rows, data.last_updated)))

    return render_map_html(m)


def build_site(
    output_dir: str = DEFAULT_OUTPUT_DIR,
    config: Optional[MapConfig] = None,
    csv: bool = False,
    fetch: Fetcher = fetch_stats,
) -> Path:
    """
    Fetch the statistics and write the static site.

    Args:
        output_dir: Directory for index.html (and countries.csv)
        config: Map settings
        csv: Also export the per-country table
        fetch: Statistics fetcher

    Returns:
        Path to the written index.html
    """
    config = config or MapConfig()
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    data = load_tracker_data(config, fetch=fetch)
    if not data.has_data:
        logger.warning("No country data available; writing map without markers")

    index_path = output_path / INDEX_FILENAME
    index_path.write_text(build_page(data, config), encoding="utf-8")
    logger.info(f"Wrote {index_path}")

    if csv:
        csv_path = output_path / CSV_FILENAME
        records_to_dataframe(data.records).to_csv(csv_path, index=False)
        logger.info(f"Wrote {csv_path} ({len(data.records)} countries)")

    return index_path


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the COVID-19 world map static site.")
    parser.add_argument("--output", default=DEFAULT_OUTPUT_DIR, help="Output directory")
    parser.add_argument("--base-url", default=DISEASE_SH_BASE_URL, help="disease.sh API base URL")
    parser.add_argument("--csv", action="store_true", help="Also write countries.csv")
    parser.add_argument("--no-geolocation", action="store_true", help="Always fly to the fallback location")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(level=args.log_level)

    config = MapConfig(api_base_url=args.base_url, use_browser_location=not args.no_geolocation)
    build_site(args.output, config=config, csv=args.csv)


if __name__ == "__main__":
    main()
