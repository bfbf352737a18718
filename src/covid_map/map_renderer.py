"""
COVID-19 Map Rendering Module

Builds the Leaflet map with folium: one DivIcon marker per country feature,
plus a delayed fly-to animation towards the viewer's location (or the
configured fallback location).
"""

import logging
from typing import Callable, Optional, Tuple

import folium
from branca.element import MacroElement
from jinja2 import Template

from .config.map_config import MapConfig
from .feature_builder import build_marker
from .models import FeatureCollection, GeoFeature

logger = logging.getLogger(__name__)

LatLng = Tuple[float, float]

MARKER_CSS = """
<style>
  .icon-marker {
    display: flex;
    position: relative;
    justify-content: center;
    align-items: center;
    color: white;
    width: 3.6em;
    height: 3.6em;
    font-size: .7em;
    font-weight: bold;
    background-color: #c52c02;
    border-radius: 100%;
    box-shadow: 0 2px 5px rgba(0, 0, 0, .9);
  }
  .icon-marker-tooltip {
    display: none;
    position: absolute;
    bottom: 100%;
    width: 16em;
    font-size: 1.4em;
    padding: 1em;
    background-color: #c52c02;
    border-radius: .4em;
    margin-bottom: 1em;
    box-shadow: 0 3px 5px rgba(0, 0, 0, .9);
  }
  .icon-marker-tooltip h2 { font-size: 1.5em; margin: 0 0 .5em; }
  .icon-marker-tooltip ul { list-style: none; padding: 0; margin: 0; }
  .icon-marker:hover .icon-marker-tooltip { display: block; }
</style>
"""


class FlyToLocation(MacroElement):
    """
    Animate the parent map to a location after a fixed delay.

    When use_browser_location is set the browser is asked for the viewer's
    position first; on failure (or without geolocation support) the given
    location is used. There is no cancellation: if the page goes away before
    the delay elapses the animation is simply dropped.
    """

    _template = Template(
        """
        {% macro script(this, kwargs) %}
            (function() {
                var fallback = {{ this.location|tojson }};
                function flyTo(latlng) {
                    setTimeout(function() {
                        {{ this._parent.get_name() }}.flyTo(latlng, {{ this.zoom }});
                    }, {{ this.delay_ms }});
                }
                {%- if this.use_browser_location %}
                if (navigator.geolocation) {
                    navigator.geolocation.getCurrentPosition(
                        function(position) {
                            flyTo([position.coords.latitude, position.coords.longitude]);
                        },
                        function() { flyTo(fallback); }
                    );
                } else {
                    flyTo(fallback);
                }
                {%- else %}
                flyTo(fallback);
                {%- endif %}
            })();
        {% endmacro %}
        """
    )

    def __init__(self, location: LatLng, zoom: int, delay_ms: int, use_browser_location: bool = True):
        super().__init__()
        self._name = "FlyToLocation"
        self.location = [float(location[0]), float(location[1])]
        self.zoom = int(zoom)
        self.delay_ms = int(delay_ms)
        self.use_browser_location = use_browser_location


def create_map(config: MapConfig) -> folium.Map:
    """Create the base map centered on the fallback location."""
    m = folium.Map(
        location=list(config.location),
        zoom_start=config.default_zoom,
        tiles=config.base_map,
    )
    m.get_root().header.add_child(folium.Element(MARKER_CSS))
    return m


def country_point_to_layer(feature: GeoFeature) -> folium.Marker:
    """Marker-construction callback: one DivIcon marker for a country feature."""
    marker = build_marker(feature)
    return folium.Marker(
        location=list(marker.latlng),
        icon=folium.DivIcon(html=marker.html, class_name="icon"),
        rise_on_hover=True,
    )


def add_features(
    m: folium.Map,
    collection: FeatureCollection,
    point_to_layer: Callable[[GeoFeature], folium.Marker] = country_point_to_layer,
    name: str = "COVID-19 Cases",
) -> folium.FeatureGroup:
    """
    Attach one marker per feature to the map, in collection order.

    Returns:
        The FeatureGroup holding the markers
    """
    group = folium.FeatureGroup(name=name)
    for feature in collection:
        point_to_layer(feature).add_to(group)
    group.add_to(m)

    logger.info(f"Attached {len(collection)} markers to the map")
    return group


def resolve_location(locate: Optional[Callable[[], LatLng]], fallback: LatLng) -> LatLng:
    """
    Ask the geolocation collaborator for the viewer's position.

    Any failure silently resolves to the fallback location.
    """
    if locate is None:
        return fallback

    try:
        lat, lng = locate()
        lat, lng = float(lat), float(lng)
    except Exception as e:
        logger.debug(f"Geolocation failed, using fallback {fallback}: {e}")
        return fallback

    if not -90 <= lat <= 90 or not -180 <= lng <= 180:
        logger.debug(f"Geolocation returned out-of-range coordinates ({lat}, {lng}), using fallback")
        return fallback

    return (lat, lng)


def render_map(
    collection: FeatureCollection,
    config: Optional[MapConfig] = None,
    locate: Optional[Callable[[], LatLng]] = None,
) -> folium.Map:
    """
    Build the complete map: base map, country markers and fly-to animation.

    Args:
        collection: Country features to draw
        config: Map settings (defaults to MapConfig())
        locate: Optional geolocation collaborator; when given, its result (or
            the fallback on failure) is the fly-to target and the browser is
            not asked for a position

    Returns:
        folium.Map ready to be saved or embedded
    """
    config = config or MapConfig()

    m = create_map(config)
    add_features(m, collection)

    target = resolve_location(locate, config.location)
    FlyToLocation(
        target,
        zoom=config.zoom,
        delay_ms=config.fly_delay_ms,
        use_browser_location=config.use_browser_location and locate is None,
    ).add_to(m)

    return m


def render_map_html(m: folium.Map) -> str:
    """Render the map as a complete HTML document."""
    return m.get_root().render()
