"""
Features for SafePlace.

Directional weather sampling, map view state and the safe place
recommendation flow.
"""

from .sampler import WeatherSampler
from .view_state import MapViewState, Marker
from .safe_place import SafePlaceFinder, build_directions_url, open_finder

__all__ = ["WeatherSampler", "MapViewState", "Marker", "SafePlaceFinder", "build_directions_url", "open_finder"]
