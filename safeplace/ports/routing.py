"""
Routing provider port interface.

This module defines the protocol for route lookups.
"""

from typing import Protocol
from safeplace.core.models import GeoPoint, Route

class RoutingProviderPort(Protocol):
    """경로 제공자 포트 인터페이스"""

    async def route(self, origin: GeoPoint, destination: GeoPoint,
                    travel_mode: str = "driving") -> Route:
        """
        출발지에서 목적지까지의 경로를 조회합니다.

        Raises:
            ProviderUnavailableError: 제공자 상태가 OK 가 아닌 경우
        """
        ...
