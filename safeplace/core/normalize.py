"""
Normalization functions for SafePlace.

This module contains pure functions for converting raw provider payloads
into internal domain models.
"""

from typing import Any, Dict, Iterable, List, Optional
from pydantic import ValidationError
from .errors import ProviderError
from .models import GeoPoint, Route, Shelter, WeatherObservation
from safeplace.observability.logging_setup import get_logger

log = get_logger("safeplace.normalize")

def _number(value: Any, default: float = 0.0) -> float:
    # null 또는 누락 값은 기본값으로 처리
    if value is None:
        return default
    return float(value)

def _object(value: Any, field: str) -> Dict[str, Any]:
    # 누락된 하위 객체는 빈 객체, 객체가 아니면 형식 오류
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ProviderError(f"malformed payload: '{field}' is not an object")
    return value

def to_observation(raw: Dict[str, Any]) -> WeatherObservation:
    """
    OpenWeather 현재 날씨 응답을 WeatherObservation 으로 변환합니다.

    rain.1h 와 wind.speed 가 없으면 0 으로 처리합니다.

    Args:
        raw: 원시 응답 딕셔너리

    Returns:
        기상 관측 모델

    Raises:
        ProviderError: 필수 필드(main)가 없거나 형식이 잘못된 경우
    """
    if not isinstance(raw, dict):
        raise ProviderError("malformed weather payload: not an object")

    main = raw.get("main")
    if not isinstance(main, dict):
        raise ProviderError("malformed weather payload: missing 'main'")

    wind = _object(raw.get("wind"), "wind")
    rain = _object(raw.get("rain"), "rain")

    try:
        return WeatherObservation(
            temperature=float(main["temp"]),
            humidity=float(main["humidity"]),
            pressure=float(main["pressure"]),
            wind_speed=_number(wind.get("speed")),
            rain_1h=_number(rain.get("1h")),
        )
    except (KeyError, TypeError, ValueError, ValidationError) as e:
        raise ProviderError(f"malformed weather payload: {e}") from e

def to_shelter(raw: Dict[str, Any], category: Optional[str] = None) -> Shelter:
    """
    Places Nearby Search 결과 항목을 Shelter 로 변환합니다.

    Raises:
        ProviderError: 이름 또는 좌표가 없는 경우
    """
    try:
        loc = raw["geometry"]["location"]
        return Shelter(
            name=str(raw["name"]),
            location=GeoPoint(lat=float(loc["lat"]), lon=float(loc["lng"])),
            address=raw.get("vicinity") or raw.get("formatted_address"),
            place_id=raw.get("place_id"),
            category=category,
        )
    except (KeyError, TypeError, ValueError, ValidationError) as e:
        raise ProviderError(f"malformed place entry: {e}") from e

def to_shelters(results: Iterable[Dict[str, Any]], category: Optional[str] = None) -> List[Shelter]:
    """Places 결과 목록을 변환합니다. 잘못된 항목은 건너뜁니다."""
    shelters: List[Shelter] = []
    for raw in results:
        try:
            shelters.append(to_shelter(raw, category))
        except ProviderError as e:
            log.warning(f"잘못된 장소 항목 건너뜀 category:{category} error:{e}")
    return shelters

def to_route(raw: Dict[str, Any]) -> Route:
    """
    Directions API 의 첫 번째 경로를 Route 로 변환합니다.

    Raises:
        ProviderError: routes, legs 등 하위 항목의 형식이 잘못된 경우
    """
    if not isinstance(raw, dict):
        raise ProviderError("malformed route payload: not an object")

    routes = raw.get("routes")
    if not isinstance(routes, list) or not routes:
        raise ProviderError("malformed route payload: missing 'routes'")

    route = routes[0]
    if not isinstance(route, dict):
        raise ProviderError("malformed route payload: 'routes[0]' is not an object")

    legs = route.get("legs") or []
    if not isinstance(legs, list) or not all(isinstance(leg, dict) for leg in legs):
        raise ProviderError("malformed route payload: 'legs' is not a list of objects")

    try:
        distance = sum(int(_object(leg.get("distance"), "distance").get("value", 0)) for leg in legs) if legs else None
        duration = sum(int(_object(leg.get("duration"), "duration").get("value", 0)) for leg in legs) if legs else None
        return Route(
            summary=str(route.get("summary") or ""),
            distance_m=distance,
            duration_s=duration,
            polyline=_object(route.get("overview_polyline"), "overview_polyline").get("points"),
        )
    except (TypeError, ValueError, ValidationError) as e:
        raise ProviderError(f"malformed route payload: {e}") from e
