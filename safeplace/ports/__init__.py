"""
Port interfaces for SafePlace hexagonal architecture.

This module defines the port interfaces (Protocols) that define
the contracts between the core domain and external providers.
"""

from .weather import WeatherProviderPort
from .places import PlacesProviderPort
from .routing import RoutingProviderPort

__all__ = ["WeatherProviderPort", "PlacesProviderPort", "RoutingProviderPort"]
