"""
Explicit map configuration passed into the pipeline and the renderers.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from .constants import (
    DEFAULT_BASE_MAP,
    DEFAULT_LOCATION,
    DEFAULT_ZOOM,
    DISEASE_SH_BASE_URL,
    FLY_TO_DELAY_MS,
    FLY_TO_ZOOM,
    MAP_HEIGHT_PX,
)


@dataclass(frozen=True)
class MapConfig:
    """Fixed map settings: fallback center, zoom levels and fly-to delay."""

    location: Tuple[float, float] = DEFAULT_LOCATION
    default_zoom: int = DEFAULT_ZOOM
    zoom: int = FLY_TO_ZOOM
    fly_delay_ms: int = FLY_TO_DELAY_MS
    base_map: str = DEFAULT_BASE_MAP
    use_browser_location: bool = True
    api_base_url: str = DISEASE_SH_BASE_URL
    height_px: int = MAP_HEIGHT_PX

    def __post_init__(self):
        lat, lng = self.location
        if not -90 <= lat <= 90 or not -180 <= lng <= 180:
            raise ValueError(f"Invalid fallback location: {self.location}")
        if self.fly_delay_ms < 0:
            raise ValueError("fly_delay_ms must be non-negative")

    def with_overrides(self, **changes) -> "MapConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)
