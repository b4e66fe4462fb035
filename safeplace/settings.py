# safeplace/settings.py
from __future__ import annotations
from typing import Dict, List, Literal
from pydantic import BaseModel, Field

class OpenWeatherConfig(BaseModel):
    api_key: str = ""
    base_url: str = "https://api.openweathermap.org/data/2.5"
    units: str = "metric"
    timeout_sec: float = 10

class PlacesConfig(BaseModel):
    api_key: str = ""
    base_url: str = "https://maps.googleapis.com/maps/api/place"
    radius_m: int = 10000                      # ~10km
    categories: List[str] = Field(default_factory=lambda: ["hospital", "police"])
    timeout_sec: float = 10

class RoutingConfig(BaseModel):
    api_key: str = ""
    base_url: str = "https://maps.googleapis.com/maps/api/directions"
    travel_mode: str = "driving"
    timeout_sec: float = 10

class Sampling(BaseModel):
    offset_deg: float = Field(default=0.09, gt=0)   # 0.09 ≈ 10km, 0.5 ≈ 55km
    weights: Dict[str, float] = Field(default_factory=lambda: {"rain": 1.0, "wind": 1.0})
    include_center: bool = False
    fetch_timeout_sec: float = Field(default=8.0, gt=0)

class Selection(BaseModel):
    center_policy: Literal["nearest", "first"] = "nearest"

class Observability(BaseModel):
    http_port: int = 8099
    metrics_enabled: bool = True
    service_name: str = "SafePlace"
    build_version: str = "0.1.0"
    build_date: str = "2025-01-01"
    log_level: str = "INFO"

class Reliability(BaseModel):
    max_retries: int = 2
    backoff_initial_sec: float = 0.5
    backoff_max_sec: float = 5.0

class Settings(BaseModel):
    # 하위 섹션 (기본값/팩토리로 누락 방지)
    openweather: OpenWeatherConfig = Field(default_factory=OpenWeatherConfig)
    places: PlacesConfig = Field(default_factory=PlacesConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    sampling: Sampling = Field(default_factory=Sampling)
    selection: Selection = Field(default_factory=Selection)
    observability: Observability = Field(default_factory=Observability)
    reliability: Reliability = Field(default_factory=Reliability)
