"""
Google Places Nearby Search client for SafePlace.

This module searches shelter candidates (hospitals, police stations)
around a point. One request is issued per category, concurrently, and
the results are merged in category order.
"""

import asyncio
from typing import List, Sequence
from safeplace.adapters.http import JsonHttpClient
from safeplace.core.errors import ProviderError
from safeplace.core.models import GeoPoint, Shelter
from safeplace.core.normalize import to_shelters
from safeplace.observability.logging_setup import get_logger

log = get_logger("safeplace.places")

class PlacesClient(JsonHttpClient):
    """Google Places 주변 검색 클라이언트"""

    name = "places"

    def __init__(self,
                 api_key: str,
                 base_url: str = "https://maps.googleapis.com/maps/api/place",
                 **kwargs):
        super().__init__(base_url, **kwargs)
        self.api_key = api_key

    async def _search_category(self, origin: GeoPoint, radius_m: int, category: str | None) -> List[Shelter]:
        """단일 장소 유형을 검색합니다."""
        params = {
            "location": f"{origin.lat},{origin.lon}",
            "radius": radius_m,
            "key": self.api_key,
        }
        if category:
            params["type"] = category

        data = await self._get_json("/nearbysearch/json", params)
        status = data.get("status") if isinstance(data, dict) else None

        if status == "OK":
            return to_shelters(data.get("results") or [], category)
        if status == "ZERO_RESULTS":
            return []

        raise ProviderError(f"places status {status}", status=status or "UNKNOWN_ERROR")

    async def search_nearby(self, origin: GeoPoint, radius_m: int,
                            categories: Sequence[str]) -> List[Shelter]:
        """
        기준점 주변의 대피소 후보를 검색합니다.

        일부 유형만 실패하면 성공한 결과를 사용하고, 모두 실패하면
        첫 번째 오류를 전파합니다.

        Raises:
            ProviderError: 모든 유형 검색이 실패한 경우
        """
        cats: List[str | None] = list(categories) or [None]
        results = await asyncio.gather(
            *(self._search_category(origin, radius_m, c) for c in cats),
            return_exceptions=True,
        )

        shelters: List[Shelter] = []
        seen = set()
        errors: List[BaseException] = []

        for cat, result in zip(cats, results):
            if isinstance(result, BaseException):
                log.warning(f"장소 검색 실패 category:{cat} error:{result}")
                errors.append(result)
                continue
            for s in result:
                key = s.place_id or (s.name, s.location.lat, s.location.lon)
                if key in seen:
                    continue
                seen.add(key)
                shelters.append(s)

        if errors and len(errors) == len(cats):
            first = errors[0]
            if isinstance(first, ProviderError):
                raise first
            raise ProviderError(f"places 검색 실패: {first!r}") from first

        log.info(f"대피소 후보 검색됨 count:{len(shelters)} radius:{radius_m}")
        return shelters
