"""
Weather provider port interface.

This module defines the protocol for current weather lookups.
"""

from typing import Protocol
from safeplace.core.models import WeatherObservation

class WeatherProviderPort(Protocol):
    """날씨 제공자 포트 인터페이스"""

    async def fetch_weather(self, lat: float, lon: float) -> WeatherObservation:
        """
        지정한 좌표의 현재 날씨를 조회합니다.

        Args:
            lat: 위도
            lon: 경도

        Returns:
            기상 관측값 (rain_1h, wind_speed 누락 시 0)

        Raises:
            ProviderError: 비정상 상태 코드 또는 잘못된 응답
        """
        ...
