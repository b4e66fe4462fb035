"""
Safe place recommendation feature for SafePlace.

This module wires the weather sampler, the places lookup, the
directional shelter selector and the routing provider into the
"Find Safe Place" flow, keeping the map view state up to date.
"""

import urllib.parse
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Sequence
from safeplace.adapters.google.directions import RoutingClient
from safeplace.adapters.google.places import PlacesClient
from safeplace.adapters.openweather.client import OpenWeatherClient
from safeplace.common.geo import validate_coordinates
from safeplace.core.errors import (
    AllSamplesFailedError,
    NoCandidatesError,
    ProviderError,
    ProviderUnavailableError,
)
from safeplace.core.models import (
    CentralRiskAssessment,
    DirectionSample,
    GeoPoint,
    Recommendation,
    Shelter,
    WeatherObservation,
)
from safeplace.core.scoring import pick_safer_direction
from safeplace.core.selector import DirectionalShelterSelector, rank_shelters
from safeplace.features.sampler import WeatherSampler
from safeplace.features.view_state import MapViewState
from safeplace.observability import metrics
from safeplace.observability.logging_setup import get_logger
from safeplace.ports.places import PlacesProviderPort
from safeplace.ports.routing import RoutingProviderPort
from safeplace.ports.weather import WeatherProviderPort
from safeplace.settings import Settings

log = get_logger("safeplace.finder")

def build_directions_url(origin: GeoPoint, destination: GeoPoint) -> str:
    """구글 지도 길찾기 URL을 생성합니다."""
    query = urllib.parse.urlencode({
        "api": 1,
        "origin": f"{origin.lat},{origin.lon}",
        "destination": f"{destination.lat},{destination.lon}",
    })
    return f"https://www.google.com/maps/dir/?{query}"

class SafePlaceFinder:
    """안전 장소 추천 오케스트레이터"""

    def __init__(self,
                 weather: WeatherProviderPort,
                 places: PlacesProviderPort,
                 routing: RoutingProviderPort,
                 sampler: WeatherSampler,
                 selector: DirectionalShelterSelector,
                 *,
                 radius_m: int = 10000,
                 categories: Sequence[str] = ("hospital", "police"),
                 travel_mode: str = "driving",
                 view: Optional[MapViewState] = None):
        """
        초기화합니다.

        Args:
            weather: 날씨 제공자 포트
            places: 장소 검색 포트
            routing: 경로 제공자 포트
            sampler: 방향별 날씨 샘플러
            selector: 방향 기반 대피소 선택기
            radius_m: 대피소 검색 반경 (미터)
            categories: 대피소 장소 유형
            travel_mode: 경로 이동 수단
            view: 지도 화면 상태 (None 이면 새로 생성)
        """
        self.weather = weather
        self.places = places
        self.routing = routing
        self.sampler = sampler
        self.selector = selector
        self.radius_m = radius_m
        self.categories: List[str] = list(categories)
        self.travel_mode = travel_mode
        self.view = view if view is not None else MapViewState()

    async def update_for_location(self, lat: float, lon: float, is_click: bool = False) -> Optional[WeatherObservation]:
        """
        위치를 갱신하고 현재 날씨를 표시합니다.

        Returns:
            현재 날씨 (조회 실패 시 None)

        Raises:
            ValueError: 좌표가 유효하지 않은 경우
        """
        if not validate_coordinates(lat, lon):
            raise ValueError(f"유효하지 않은 좌표: lat={lat}, lon={lon}")

        self.view.set_location(GeoPoint(lat=lat, lon=lon), is_click)

        try:
            obs = await self.weather.fetch_weather(lat, lon)
        except ProviderError as e:
            log.warning(f"현재 날씨 조회 실패 lat:{lat} lon:{lon} error:{e}")
            self.view.risk_description = "Could not load weather data."
            return None

        self.view.show_weather(obs)
        self.view.risk_description = "Current weather loaded. Click 'Find Safe Place' for full analysis."
        return obs

    async def find_safe_place(self, origin: Optional[GeoPoint] = None) -> Recommendation:
        """
        가장 안전한 방향의 대피소를 추천합니다.

        Args:
            origin: 기준 좌표 (None 이면 선택 마커, 사용자 마커 순)

        Returns:
            추천 결과

        Raises:
            ValueError: 기준 좌표가 없는 경우
            AllSamplesFailedError: 모든 방향의 날씨 조회가 실패한 경우
            NoCandidatesError: 대피소 후보가 없는 경우
        """
        origin = origin or self.view.current_location()
        if origin is None:
            raise ValueError("Please select a location first.")

        self.view.risk_description = "Analyzing surrounding weather..."
        samples = await self.sampler.sample_directions(origin)

        try:
            safer = pick_safer_direction(samples)
        except AllSamplesFailedError:
            log.error(f"모든 방향 날씨 조회 실패 origin:({origin.lat},{origin.lon})")
            self.view.risk_description = "Weather data unavailable. No safe direction could be determined."
            metrics.recommendations_total.labels(outcome="weather_unavailable").inc()
            raise

        central_risk = self._assess_central_risk(samples)

        self.view.risk_description = f"Safest weather vector: {safer.direction}. Searching shelters..."
        shelters = await self._search_shelters(origin)

        best = self.selector.select_best(origin, shelters, safer.direction)
        _, bearing, diff, dist = rank_shelters(origin, [best], safer.direction)[0]
        url = build_directions_url(origin, best.location)

        self.view.show_safe_place(best.name, best.location, best.address, url)
        log.info(f"대피소 선택됨 shelter:{best.name} direction:{safer.direction} "
                 f"bearing:{bearing:.1f} distance:{dist:.2f}km")

        recommendation = Recommendation(
            origin=origin,
            safer_direction=safer,
            samples=list(samples),
            shelter=best,
            bearing_deg=bearing,
            angular_distance_deg=diff,
            distance_km=dist,
            directions_url=url,
            central_risk=central_risk,
        )

        await self._display_route(origin, best, recommendation)
        metrics.recommendations_total.labels(outcome="ok").inc()
        return recommendation

    def _assess_central_risk(self, samples: Sequence[DirectionSample]) -> Optional[CentralRiskAssessment]:
        """center 를 샘플링했고 다섯 방향이 모두 성공했을 때만 평가합니다."""
        if "center" not in self.sampler.directions:
            return None
        try:
            risk = self.sampler.assess_central_risk(samples)
        except ValueError as e:
            log.warning(f"폭풍 위험 평가 생략 error:{e}")
            return None
        log.info(f"폭풍 위험 평가 level:{risk.level} pressure_drop:{risk.pressure_drop:.1f}")
        return risk

    async def _search_shelters(self, origin: GeoPoint) -> List[Shelter]:
        """대피소 후보를 검색합니다. 제공자 실패는 빈 결과로 처리하되 구분해서 표시합니다."""
        try:
            shelters = await self.places.search_nearby(origin, self.radius_m, self.categories)
        except ProviderError as e:
            log.error(f"대피소 검색 실패 status:{e.status} error:{e}")
            metrics.shelter_search_total.labels(outcome="error").inc()
            metrics.recommendations_total.labels(outcome="no_shelters").inc()
            message = f"Shelter search failed: {e.status or e}"
            self.view.risk_description = message
            raise NoCandidatesError(message) from e

        if not shelters:
            metrics.shelter_search_total.labels(outcome="empty").inc()
            metrics.recommendations_total.labels(outcome="no_shelters").inc()
            self.view.risk_description = "No shelters found nearby."
            raise NoCandidatesError()

        metrics.shelter_search_total.labels(outcome="ok").inc()
        return shelters

    async def _display_route(self, origin: GeoPoint, shelter: Shelter, recommendation: Recommendation) -> None:
        """경로를 표시합니다. 실패해도 추천은 유효합니다."""
        try:
            route = await self.routing.route(origin, shelter.location, self.travel_mode)
        except ProviderUnavailableError as e:
            log.warning(f"경로 조회 실패 status:{e.status}")
            metrics.route_requests_total.labels(outcome="error").inc()
            recommendation.route_status = e.status
            self.view.route = None
            self.view.route_status = e.status
            self.view.risk_description = f"Directions request failed: {e.status}"
            return

        metrics.route_requests_total.labels(outcome="ok").inc()
        recommendation.route = route
        recommendation.route_status = "OK"
        self.view.route = route
        self.view.route_status = "OK"
        self.view.risk_description = "Safe route displayed."

@asynccontextmanager
async def open_finder(settings: Settings, view: Optional[MapViewState] = None) -> AsyncIterator[SafePlaceFinder]:
    """설정으로 제공자 클라이언트를 열고 SafePlaceFinder 를 생성합니다."""
    rel = settings.reliability
    retry = {
        "max_retries": rel.max_retries,
        "backoff_initial": rel.backoff_initial_sec,
        "backoff_max": rel.backoff_max_sec,
    }

    weather = OpenWeatherClient(
        settings.openweather.api_key,
        settings.openweather.base_url,
        units=settings.openweather.units,
        timeout=settings.openweather.timeout_sec,
        **retry,
    )
    places = PlacesClient(
        settings.places.api_key,
        settings.places.base_url,
        timeout=settings.places.timeout_sec,
        **retry,
    )
    routing = RoutingClient(
        settings.routing.api_key,
        settings.routing.base_url,
        timeout=settings.routing.timeout_sec,
        **retry,
    )

    async with weather, places, routing:
        sampler = WeatherSampler(
            weather,
            offset_deg=settings.sampling.offset_deg,
            weights=settings.sampling.weights,
            include_center=settings.sampling.include_center,
            fetch_timeout_sec=settings.sampling.fetch_timeout_sec,
        )
        selector = DirectionalShelterSelector(center_policy=settings.selection.center_policy)
        yield SafePlaceFinder(
            weather, places, routing, sampler, selector,
            radius_m=settings.places.radius_m,
            categories=settings.places.categories,
            travel_mode=settings.routing.travel_mode,
            view=view,
        )
