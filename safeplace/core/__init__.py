"""
Core domain models and pure functions for SafePlace.

This module contains the domain models and pure decision logic
that are independent of external I/O and infrastructure concerns.
"""

from .models import (
    GeoPoint, Direction, WeatherObservation, DirectionSample, Shelter,
    RiskLevel, CentralRiskAssessment, Route, Recommendation,
)
from .errors import (
    SafePlaceError, ProviderError, SampleFetchError, AllSamplesFailedError,
    NoCandidatesError, ProviderUnavailableError,
)
from .scoring import risk_score, sample_points, rank_samples, pick_safer_direction
from .cyclone import assess_central_risk
from .selector import select_best, DirectionalShelterSelector

__all__ = [
    "GeoPoint", "Direction", "WeatherObservation", "DirectionSample", "Shelter",
    "RiskLevel", "CentralRiskAssessment", "Route", "Recommendation",
    "SafePlaceError", "ProviderError", "SampleFetchError", "AllSamplesFailedError",
    "NoCandidatesError", "ProviderUnavailableError",
    "risk_score", "sample_points", "rank_samples", "pick_safer_direction",
    "assess_central_risk", "select_best", "DirectionalShelterSelector",
]
