"""
Directional shelter selection for SafePlace.

This module picks the shelter whose great-circle bearing from the
origin most closely matches the safest sampled direction.
"""

import math
from typing import List, Literal, Optional, Sequence, Tuple
from safeplace.common.geo import angular_distance, haversine_distance, initial_bearing
from .errors import NoCandidatesError
from .models import GeoPoint, Shelter
from safeplace.observability.logging_setup import get_logger

log = get_logger("safeplace.selector")

# 방향별 목표 방위각 (진북 기준 시계 방향)
TARGET_BEARINGS = {
    "north": 0.0,
    "east": 90.0,
    "south": 180.0,
    "west": 270.0,
}

CenterPolicy = Literal["nearest", "first"]

# (대피소, 방위각, 각도 차이, 거리 km)
RankedShelter = Tuple[Shelter, float, Optional[float], float]

def target_bearing(direction: str) -> Optional[float]:
    """
    방향 라벨의 목표 방위각을 반환합니다.

    center 는 목표 방위각이 없으므로 None 을 반환합니다.

    Raises:
        ValueError: 알 수 없는 방향인 경우
    """
    if direction == "center":
        return None
    try:
        return TARGET_BEARINGS[direction]
    except KeyError:
        raise ValueError(f"알 수 없는 방향: {direction}") from None

def rank_shelters(origin: GeoPoint, shelters: Sequence[Shelter], direction: str) -> List[RankedShelter]:
    """
    대피소별 방위각, 목표와의 각도 차이, 거리를 계산합니다 (입력 순서 유지).

    center 방향이면 각도 차이는 None 입니다.
    """
    target = target_bearing(direction)
    ranked: List[RankedShelter] = []
    for s in shelters:
        bearing = initial_bearing(origin.lat, origin.lon, s.location.lat, s.location.lon)
        diff = None if target is None else angular_distance(bearing, target)
        dist = haversine_distance(origin.lat, origin.lon, s.location.lat, s.location.lon)
        ranked.append((s, bearing, diff, dist))
    return ranked

def select_best(origin: GeoPoint,
                shelters: Sequence[Shelter],
                safer_direction: str,
                *,
                center_policy: CenterPolicy = "nearest") -> Shelter:
    """
    가장 안전한 방향과 방위각이 가장 가까운 대피소를 선택합니다.

    Args:
        origin: 기준 좌표
        shelters: 대피소 후보 목록
        safer_direction: 가장 안전한 방향 라벨
        center_policy: center 가 가장 안전할 때의 정책
            ("nearest": 거리순, "first": 제공자 순서)

    Returns:
        선택된 대피소 (동점은 입력 순서 우선)

    Raises:
        NoCandidatesError: 후보가 없는 경우
    """
    if not shelters:
        raise NoCandidatesError()

    if safer_direction == "center" and center_policy == "first":
        return shelters[0]

    best: Optional[Shelter] = None
    best_key = math.inf

    for s, _bearing, diff, dist in rank_shelters(origin, shelters, safer_direction):
        key = dist if diff is None else diff
        if key < best_key:
            best_key = key
            best = s

    if best is None:
        log.warning(f"방위각 기준 후보를 찾지 못해 첫 번째 대피소로 대체 direction:{safer_direction}")
        return shelters[0]

    return best

class DirectionalShelterSelector:
    """방향 기반 대피소 선택기"""

    def __init__(self, *, center_policy: CenterPolicy = "nearest"):
        """
        초기화합니다.

        Args:
            center_policy: center 가 가장 안전할 때의 정책
        """
        if center_policy not in ("nearest", "first"):
            raise ValueError(f"알 수 없는 center_policy: {center_policy}")
        self.center_policy = center_policy

    def select_best(self, origin: GeoPoint, shelters: Sequence[Shelter], safer_direction: str) -> Shelter:
        """가장 안전한 방향에 맞는 대피소를 선택합니다."""
        return select_best(origin, shelters, safer_direction, center_policy=self.center_policy)
