"""
Places provider port interface.

This module defines the protocol for nearby shelter search.
"""

from typing import List, Protocol, Sequence
from safeplace.core.models import GeoPoint, Shelter

class PlacesProviderPort(Protocol):
    """장소 검색 포트 인터페이스"""

    async def search_nearby(self, origin: GeoPoint, radius_m: int,
                            categories: Sequence[str]) -> List[Shelter]:
        """
        기준점 주변의 대피소 후보를 검색합니다.

        Args:
            origin: 기준 좌표
            radius_m: 검색 반경 (미터)
            categories: 장소 유형 필터 (예: hospital, police)

        Returns:
            대피소 목록 (결과 없음은 빈 목록)

        Raises:
            ProviderError: 제공자 수준 실패
        """
        ...
