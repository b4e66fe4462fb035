"""
Adapters for SafePlace hexagonal architecture.

This module contains the concrete implementations of port interfaces
that handle external I/O against the weather, places and routing providers.
"""

from .http import JsonHttpClient
from .openweather.client import OpenWeatherClient
from .google.places import PlacesClient
from .google.directions import RoutingClient

__all__ = ["JsonHttpClient", "OpenWeatherClient", "PlacesClient", "RoutingClient"]
