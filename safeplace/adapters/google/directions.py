"""
Google Directions API client for SafePlace.

Route display is best-effort: any failure is reported as
ProviderUnavailableError carrying the provider status string.
"""

from safeplace.adapters.http import JsonHttpClient
from safeplace.core.errors import ProviderError, ProviderUnavailableError
from safeplace.core.models import GeoPoint, Route
from safeplace.core.normalize import to_route
from safeplace.observability.logging_setup import get_logger

log = get_logger("safeplace.directions")

class RoutingClient(JsonHttpClient):
    """Google Directions 경로 클라이언트"""

    name = "directions"

    def __init__(self,
                 api_key: str,
                 base_url: str = "https://maps.googleapis.com/maps/api/directions",
                 **kwargs):
        super().__init__(base_url, **kwargs)
        self.api_key = api_key

    async def route(self, origin: GeoPoint, destination: GeoPoint,
                    travel_mode: str = "driving") -> Route:
        """
        출발지에서 목적지까지의 경로를 조회합니다.

        Raises:
            ProviderUnavailableError: 상태가 OK 가 아니거나 요청이 실패한 경우
        """
        try:
            data = await self._get_json("/json", {
                "origin": f"{origin.lat},{origin.lon}",
                "destination": f"{destination.lat},{destination.lon}",
                "mode": travel_mode,
                "key": self.api_key,
            })
        except ProviderError as e:
            raise ProviderUnavailableError(e.status or str(e)) from e

        status = data.get("status") if isinstance(data, dict) else None
        if status != "OK" or not data.get("routes"):
            raise ProviderUnavailableError(status or "UNKNOWN_ERROR")

        try:
            route = to_route(data)
        except ProviderError as e:
            log.warning(f"경로 응답 형식 오류 error:{e}")
            raise ProviderUnavailableError("INVALID_RESPONSE") from e

        log.info(f"경로 조회됨 distance_m:{route.distance_m} duration_s:{route.duration_s}")
        return route
