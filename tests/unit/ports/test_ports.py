"""
포트 인터페이스 단위 테스트

어댑터와 테스트용 가짜 제공자가 포트 계약(메서드 이름, 매개변수,
비동기 여부)을 지키는지 검증합니다.
"""

import inspect
import pytest

from safeplace.adapters import OpenWeatherClient, PlacesClient, RoutingClient
from safeplace.ports import PlacesProviderPort, RoutingProviderPort, WeatherProviderPort

CONTRACTS = [
    (WeatherProviderPort, "fetch_weather", OpenWeatherClient, "Weather"),
    (PlacesProviderPort, "search_nearby", PlacesClient, "Places"),
    (RoutingProviderPort, "route", RoutingClient, "Routing"),
]


def _params(func):
    return [p for p in inspect.signature(func).parameters if p != "self"]


class TestPortContracts:
    """포트 계약 테스트"""

    @pytest.mark.parametrize("port,method,adapter,fake", CONTRACTS)
    def test_port_method_is_async(self, port, method, adapter, fake):
        assert inspect.iscoroutinefunction(getattr(port, method))

    @pytest.mark.parametrize("port,method,adapter,fake", CONTRACTS)
    def test_implementations_match(self, fakes, port, method, adapter, fake):
        """구현체는 같은 이름의 비동기 메서드와 매개변수를 가짐"""
        expected = _params(getattr(port, method))
        for impl in (adapter, getattr(fakes, fake)):
            func = getattr(impl, method)
            assert inspect.iscoroutinefunction(func), impl.__name__
            assert _params(func) == expected, impl.__name__

    def test_routing_default_travel_mode(self, fakes):
        """경로 이동 수단 기본값은 driving"""
        for cls in (RoutingProviderPort, RoutingClient, fakes.Routing):
            assert inspect.signature(cls.route).parameters["travel_mode"].default == "driving"
