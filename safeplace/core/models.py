"""
Core domain models for SafePlace.

This module defines the core domain models using Pydantic v2
for type safety and validation.
"""

import math
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

# 방향 타입 정의 (열거 순서가 동점 처리 순서)
Direction = Literal["north", "south", "east", "west", "center"]

DIRECTION_ORDER: List[str] = ["north", "south", "east", "west", "center"]

# 위험 등급
RiskLevel = Literal["LOW", "HIGH", "EXTREME"]

class GeoPoint(BaseModel):
    """지리 좌표 모델 (WGS-84, 불변)"""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)

class WeatherObservation(BaseModel):
    """기상 관측 모델"""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    temperature: float
    humidity: float
    pressure: float
    wind_speed: float = Field(default=0.0, ge=0)
    rain_1h: float = Field(default=0.0, ge=0)

class DirectionSample(BaseModel):
    """방향별 샘플링 결과 모델"""
    model_config = ConfigDict(frozen=True)

    direction: Direction
    point: GeoPoint
    score: float = Field(ge=0)
    observation: Optional[WeatherObservation] = None
    error: Optional[str] = None

    @field_validator("score")
    @classmethod
    def _reject_nan(cls, v: float) -> float:
        if math.isnan(v):
            raise ValueError("score must not be NaN")
        return v

    @property
    def available(self) -> bool:
        """점수가 유한하면 True"""
        return math.isfinite(self.score)

class Shelter(BaseModel):
    """대피소 후보 모델"""
    model_config = ConfigDict(frozen=True)

    name: str
    location: GeoPoint
    address: Optional[str] = None
    place_id: Optional[str] = None
    category: Optional[str] = None

class CentralRiskAssessment(BaseModel):
    """중심 지점 폭풍 위험 평가 결과"""
    level: RiskLevel
    pressure_drop: float
    reasons: List[str] = Field(default_factory=list)

class Route(BaseModel):
    """경로 모델"""
    summary: str = ""
    distance_m: Optional[int] = None
    duration_s: Optional[int] = None
    polyline: Optional[str] = None

class Recommendation(BaseModel):
    """대피소 추천 결과 모델"""
    origin: GeoPoint
    safer_direction: DirectionSample
    samples: List[DirectionSample]
    shelter: Shelter
    bearing_deg: float
    angular_distance_deg: Optional[float] = None
    distance_km: float
    directions_url: str
    route: Optional[Route] = None
    route_status: Optional[str] = None
    central_risk: Optional[CentralRiskAssessment] = None
