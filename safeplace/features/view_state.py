"""
Map view state for SafePlace.

A single owner object that holds what the map surface should show:
center, markers, route and the text panels. The orchestrator mutates
it; the core algorithms never touch it.
"""

from typing import Dict, Optional
from pydantic import BaseModel, Field
from safeplace.core.models import GeoPoint, Route, WeatherObservation

# 기본 지도 중심 (인도)
DEFAULT_CENTER = GeoPoint(lat=20.5937, lon=78.9629)

SAFE_PLACE_ICON = "http://maps.google.com/mapfiles/ms/icons/green-dot.png"

class Marker(BaseModel):
    """지도 마커"""
    position: GeoPoint
    title: str
    icon: Optional[str] = None

class MapViewState(BaseModel):
    """지도 화면 상태"""
    center: GeoPoint = DEFAULT_CENTER
    zoom: int = 5
    user_marker: Optional[Marker] = None
    clicked_marker: Optional[Marker] = None
    safe_place_marker: Optional[Marker] = None
    route: Optional[Route] = None
    route_status: Optional[str] = None
    weather_display: Dict[str, str] = Field(default_factory=dict)
    risk_description: str = ""
    safe_place_result: str = ""

    def set_location(self, point: GeoPoint, is_click: bool) -> None:
        """지도를 이동하고 사용자/선택 마커를 교체합니다."""
        self.center = point
        self.zoom = 12
        if is_click:
            self.clicked_marker = Marker(position=point, title="Selected Location")
        else:
            self.user_marker = Marker(position=point, title="Your Location")
        self.clear_recommendation()

    def clear_recommendation(self) -> None:
        """이전 추천 결과와 경로를 지웁니다."""
        self.safe_place_marker = None
        self.route = None
        self.route_status = None
        self.safe_place_result = 'Click "Find Safe Place" for a recommendation.'

    def current_location(self) -> Optional[GeoPoint]:
        """선택 마커를 우선으로 현재 위치를 반환합니다."""
        marker = self.clicked_marker or self.user_marker
        return marker.position if marker else None

    def show_weather(self, obs: WeatherObservation) -> None:
        """현재 날씨를 표시합니다."""
        self.weather_display = {
            "temperature": f"{obs.temperature:.1f}°C",
            "humidity": f"{obs.humidity:g}%",
            "pressure": f"{obs.pressure:g} hPa",
            "rainfall": f"{obs.rain_1h:g} mm",
        }

    def show_safe_place(self, name: str, location: GeoPoint, address: Optional[str], url: str) -> None:
        """추천 대피소 마커와 결과 패널을 표시합니다."""
        self.safe_place_marker = Marker(position=location, title=name, icon=SAFE_PLACE_ICON)
        self.safe_place_result = f"{name}\n{address or 'No address'}\n{url}"
