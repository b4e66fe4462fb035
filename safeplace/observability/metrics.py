"""
Metrics definitions for SafePlace.

This module defines Prometheus metrics for monitoring
weather sampling, shelter search and routing.
"""

from prometheus_client import Counter, Histogram

# 카운터 메트릭
weather_fetch_total = Counter(
    "weather_fetch_total",
    "Directional weather fetches by outcome",
    ["direction", "outcome"]
)

shelter_search_total = Counter(
    "shelter_search_total",
    "Shelter searches by outcome",
    ["outcome"]
)

recommendations_total = Counter(
    "recommendations_total",
    "Safe place requests by outcome",
    ["outcome"]
)

route_requests_total = Counter(
    "route_requests_total",
    "Routing requests by outcome",
    ["outcome"]
)

# 히스토그램 메트릭
sample_duration_seconds = Histogram(
    "sample_duration_seconds",
    "Time spent sampling all directions",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)
