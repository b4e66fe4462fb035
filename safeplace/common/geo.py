"""
Geographic utilities for SafePlace.

This module provides geographic calculations including
distance, initial bearing, circular angle difference and
offset point computation.
"""

import math
from typing import Tuple

# 지구 반지름 (킬로미터)
EARTH_RADIUS_KM = 6371.0

def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    두 지점 간의 Haversine 거리를 계산합니다 (킬로미터).

    Args:
        lat1: 첫 번째 지점의 위도
        lon1: 첫 번째 지점의 경도
        lat2: 두 번째 지점의 위도
        lon2: 두 번째 지점의 경도

    Returns:
        두 지점 간의 거리 (킬로미터)
    """
    lat1_rad = math.radians(lat1)
    lon1_rad = math.radians(lon1)
    lat2_rad = math.radians(lat2)
    lon2_rad = math.radians(lon2)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    a = (math.sin(dlat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2)
    c = 2 * math.asin(min(1.0, math.sqrt(a)))

    return c * EARTH_RADIUS_KM

def initial_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    첫 번째 지점에서 두 번째 지점으로의 대원 초기 방위각을 계산합니다.

    Args:
        lat1: 출발 지점의 위도
        lon1: 출발 지점의 경도
        lat2: 도착 지점의 위도
        lon2: 도착 지점의 경도

    Returns:
        진북 기준 시계 방향 방위각 (도, [0, 360))
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlon = math.radians(lon2 - lon1)

    x = math.sin(dlon) * math.cos(lat2_rad)
    y = (math.cos(lat1_rad) * math.sin(lat2_rad) -
         math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(dlon))

    return normalize_bearing(math.degrees(math.atan2(x, y)))

def normalize_bearing(deg: float) -> float:
    """방위각을 [0, 360) 범위로 정규화합니다."""
    bearing = deg % 360.0
    # -1e-15 % 360 은 360.0 이 될 수 있음
    return 0.0 if bearing >= 360.0 else bearing

def angular_distance(a: float, b: float) -> float:
    """
    두 방위각 사이의 원형 거리를 계산합니다.

    Args:
        a: 첫 번째 방위각 (도)
        b: 두 번째 방위각 (도)

    Returns:
        시계/반시계 방향 중 작은 쪽의 각도 차이 ([0, 180])
    """
    diff = abs(normalize_bearing(a) - normalize_bearing(b))
    return min(diff, 360.0 - diff)

def offset_point(lat: float, lon: float, dlat: float, dlon: float) -> Tuple[float, float]:
    """
    위도/경도를 각도 단위로 이동한 지점을 계산합니다.

    위도는 [-90, 90]으로 제한하고 경도는 [-180, 180)으로 감쌉니다.

    Args:
        lat: 기준 위도
        lon: 기준 경도
        dlat: 위도 이동량 (도)
        dlon: 경도 이동량 (도)

    Returns:
        (위도, 경도)
    """
    new_lat = max(-90.0, min(90.0, lat + dlat))
    new_lon = lon + dlon
    if not -180.0 <= new_lon <= 180.0:
        new_lon = ((new_lon + 180.0) % 360.0) - 180.0
    return (new_lat, new_lon)

def validate_coordinates(lat: float, lon: float) -> bool:
    """
    좌표가 유효한지 확인합니다.

    Args:
        lat: 위도
        lon: 경도

    Returns:
        좌표가 유효하면 True
    """
    return -90 <= lat <= 90 and -180 <= lon <= 180
