"""
OpenWeather API client for SafePlace.

This module fetches current weather observations from the
OpenWeather current weather endpoint.
"""

from safeplace.adapters.http import JsonHttpClient
from safeplace.core.models import WeatherObservation
from safeplace.core.normalize import to_observation
from safeplace.observability.logging_setup import get_logger

log = get_logger("safeplace.openweather")

class OpenWeatherClient(JsonHttpClient):
    """OpenWeather 현재 날씨 클라이언트"""

    name = "openweather"

    def __init__(self,
                 api_key: str,
                 base_url: str = "https://api.openweathermap.org/data/2.5",
                 *,
                 units: str = "metric",
                 **kwargs):
        """
        초기화합니다.

        Args:
            api_key: OpenWeather API 키
            base_url: API 기본 URL
            units: 단위계 (metric: °C, m/s)
            **kwargs: JsonHttpClient 옵션 (timeout, max_retries, session 등)
        """
        super().__init__(base_url, **kwargs)
        self.api_key = api_key
        self.units = units

        log.info(f"OpenWeather 클라이언트 초기화됨 units:{units}")

    async def fetch_weather(self, lat: float, lon: float) -> WeatherObservation:
        """
        지정한 좌표의 현재 날씨를 조회합니다.

        Raises:
            ProviderError: 비정상 상태 코드 또는 잘못된 응답
        """
        data = await self._get_json("/weather", {
            "lat": lat,
            "lon": lon,
            "appid": self.api_key,
            "units": self.units,
        })
        obs = to_observation(data)
        log.debug(f"날씨 조회됨 lat:{lat:.4f} lon:{lon:.4f} rain:{obs.rain_1h} wind:{obs.wind_speed}")
        return obs
