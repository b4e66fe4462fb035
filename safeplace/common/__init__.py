"""
Shared utilities for SafePlace.

Geographic helpers and retry logic used by the core and the adapters.
"""

from .geo import (
    haversine_distance,
    initial_bearing,
    angular_distance,
    normalize_bearing,
    offset_point,
    validate_coordinates,
)
from .retry import retry_with_backoff

__all__ = [
    "haversine_distance", "initial_bearing", "angular_distance", "normalize_bearing",
    "offset_point", "validate_coordinates", "retry_with_backoff",
]
