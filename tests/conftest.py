"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import asyncio
import inspect
import pytest
from typing import Dict, List, Optional, Sequence, Union
from safeplace.core.errors import ProviderError, ProviderUnavailableError
from safeplace.core.models import GeoPoint, Route, Shelter, WeatherObservation
from safeplace.settings import Settings


CHENNAI = GeoPoint(lat=13.0827, lon=80.2707)


def make_obs(rain: float = 0.0, wind: float = 0.0, *, temperature: float = 28.0,
             humidity: float = 70.0, pressure: float = 1008.0) -> WeatherObservation:
    """테스트용 관측값 생성"""
    return WeatherObservation(
        temperature=temperature,
        humidity=humidity,
        pressure=pressure,
        wind_speed=wind,
        rain_1h=rain,
    )


class FakeWeather:
    """
    방향별 응답을 돌려주는 가짜 날씨 제공자

    기준점과 비교하여 요청 좌표의 방향을 판별합니다.
    값이 Exception 이면 발생시키고, "hang" 이면 응답하지 않습니다.
    """

    def __init__(self, origin: GeoPoint,
                 by_direction: Dict[str, Union[WeatherObservation, Exception, str]],
                 default: Optional[WeatherObservation] = None):
        self.origin = origin
        self.by_direction = by_direction
        self.default = default
        self.calls: List[tuple] = []

    def direction_of(self, lat: float, lon: float) -> str:
        if lat > self.origin.lat + 1e-9:
            return "north"
        if lat < self.origin.lat - 1e-9:
            return "south"
        if lon > self.origin.lon + 1e-9:
            return "east"
        if lon < self.origin.lon - 1e-9:
            return "west"
        return "center"

    async def fetch_weather(self, lat: float, lon: float) -> WeatherObservation:
        self.calls.append((lat, lon))
        value = self.by_direction.get(self.direction_of(lat, lon), self.default)
        if value == "hang":
            await asyncio.sleep(3600)
        if isinstance(value, Exception):
            raise value
        if value is None:
            raise ProviderError("no data")
        return value


class FakePlaces:
    """고정 결과를 돌려주는 가짜 장소 제공자"""

    def __init__(self, shelters: Sequence[Shelter] = (), error: Optional[Exception] = None):
        self.shelters = list(shelters)
        self.error = error
        self.calls: List[tuple] = []

    async def search_nearby(self, origin, radius_m, categories):
        self.calls.append((origin, radius_m, list(categories)))
        if self.error:
            raise self.error
        return list(self.shelters)


class FakeRouting:
    """고정 결과를 돌려주는 가짜 경로 제공자"""

    def __init__(self, status: str = "OK"):
        self.status = status
        self.calls: List[tuple] = []

    async def route(self, origin, destination, travel_mode="driving"):
        self.calls.append((origin, destination, travel_mode))
        if self.status != "OK":
            raise ProviderUnavailableError(self.status)
        return Route(summary="NH48", distance_m=5400, duration_s=780, polyline="abc")


@pytest.fixture
def origin():
    """테스트용 기준 좌표 (첸나이)"""
    return CHENNAI


@pytest.fixture
def sample_settings():
    """테스트용 설정"""
    settings = Settings()
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    settings.observability.http_port = 8080
    return settings


@pytest.fixture
def sample_shelters():
    """테스트용 대피소 데이터 (기준점 기준 동/서/남/북)"""
    return [
        Shelter(name="North Hospital", location=GeoPoint(lat=13.1300, lon=80.2707), address="Anna Nagar"),
        Shelter(name="East Police Station", location=GeoPoint(lat=13.0827, lon=80.3200), address="Marina"),
        Shelter(name="South Hospital", location=GeoPoint(lat=13.0300, lon=80.2707)),
        Shelter(name="West Police Station", location=GeoPoint(lat=13.0827, lon=80.2200), address="Koyambedu"),
    ]


# pytest 설정
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "slow: 느린 테스트 마커"
    )
    config.addinivalue_line(
        "markers", "integration: 통합 테스트 마커"
    )


def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        function = getattr(item, "function", None)
        # 비동기 테스트에 asyncio 마커 추가
        if function is not None and inspect.iscoroutinefunction(function):
            item.add_marker(pytest.mark.asyncio)

        # 통합 테스트 마커 추가
        if "integration" in item.name or "end_to_end" in item.name:
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def obs():
    """관측값 생성 함수"""
    return make_obs


@pytest.fixture
def fakes():
    """가짜 제공자 클래스 묶음"""
    class _Fakes:
        Weather = FakeWeather
        Places = FakePlaces
        Routing = FakeRouting
    return _Fakes
