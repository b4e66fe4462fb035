"""
Directional risk scoring for SafePlace.

This module contains pure functions for building the sample point set
around an origin, reducing observations to a risk score and ranking
the directional samples.
"""

import math
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from safeplace.common.geo import offset_point
from .errors import AllSamplesFailedError
from .models import DIRECTION_ORDER, DirectionSample, GeoPoint, WeatherObservation

# 인식하는 신호와 기본 가중치
DEFAULT_WEIGHTS: Dict[str, float] = {"rain": 1.0, "wind": 1.0}

# 방향별 (위도, 경도) 이동 부호
DIRECTION_VECTORS: Dict[str, Tuple[int, int]] = {
    "north": (1, 0),
    "south": (-1, 0),
    "east": (0, 1),
    "west": (0, -1),
    "center": (0, 0),
}

CARDINALS: List[str] = ["north", "south", "east", "west"]

def resolve_weights(weights: Optional[Mapping[str, float]] = None) -> Dict[str, float]:
    """
    가중치 설정을 검증하고 기본값을 채웁니다.

    Args:
        weights: 신호 이름 -> 가중치 (None 이면 기본값)

    Returns:
        rain, wind 가 모두 포함된 가중치 딕셔너리

    Raises:
        ValueError: 알 수 없는 신호이거나 음수/비유한 가중치인 경우
    """
    resolved = dict(DEFAULT_WEIGHTS)
    for name, value in (weights or {}).items():
        if name not in DEFAULT_WEIGHTS:
            raise ValueError(f"알 수 없는 가중치 신호: {name}")
        value = float(value)
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"가중치는 0 이상의 유한한 값이어야 합니다: {name}={value}")
        resolved[name] = value
    return resolved

def risk_score(observation: WeatherObservation, weights: Optional[Mapping[str, float]] = None) -> float:
    """
    관측값을 위험 점수로 변환합니다 (낮을수록 안전).

    score = rain_1h * weight_rain + wind_speed * weight_wind
    """
    w = resolve_weights(weights)
    return observation.rain_1h * w["rain"] + observation.wind_speed * w["wind"]

def normalize_directions(directions: Sequence[str]) -> List[str]:
    """방향 목록을 검증하고 열거 순서(north, south, east, west, center)로 정렬합니다."""
    unknown = [d for d in directions if d not in DIRECTION_VECTORS]
    if unknown:
        raise ValueError(f"알 수 없는 방향: {unknown}")
    if not directions:
        raise ValueError("최소 한 개의 방향이 필요합니다")
    return [d for d in DIRECTION_ORDER if d in set(directions)]

def sample_points(origin: GeoPoint, offset_deg: float,
                  directions: Sequence[str] = CARDINALS) -> List[Tuple[str, GeoPoint]]:
    """
    기준점 주변의 샘플 지점을 계산합니다.

    Args:
        origin: 기준 좌표
        offset_deg: 각도 이동량 (양수, 0.09도 ≈ 10km)
        directions: 샘플링할 방향 목록

    Returns:
        (방향, 좌표) 목록 (열거 순서)
    """
    if not offset_deg > 0 or not math.isfinite(offset_deg):
        raise ValueError(f"offset_deg 는 양수여야 합니다: {offset_deg}")

    points = []
    for direction in normalize_directions(directions):
        slat, slon = DIRECTION_VECTORS[direction]
        lat, lon = offset_point(origin.lat, origin.lon, slat * offset_deg, slon * offset_deg)
        points.append((direction, GeoPoint(lat=lat, lon=lon)))
    return points

def rank_samples(samples: Sequence[DirectionSample]) -> List[DirectionSample]:
    """점수 오름차순으로 안정 정렬합니다 (동점은 입력 순서 유지)."""
    return sorted(samples, key=lambda s: s.score)

def pick_safer_direction(ranked: Sequence[DirectionSample]) -> DirectionSample:
    """
    정렬된 샘플에서 가장 안전한 방향을 선택합니다.

    Raises:
        AllSamplesFailedError: 샘플이 없거나 모든 점수가 +inf 인 경우
    """
    if not ranked or not ranked[0].available:
        raise AllSamplesFailedError()
    return ranked[0]
