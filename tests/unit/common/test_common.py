"""
Common 모듈 단위 테스트

이 모듈은 지리 유틸리티와 재시도 로직의 기능을 테스트합니다.
"""

import asyncio
import pytest
from unittest.mock import AsyncMock, patch
from hypothesis import given, strategies as st
from safeplace.common.geo import (
    haversine_distance, initial_bearing, angular_distance,
    normalize_bearing, offset_point, validate_coordinates
)
from safeplace.common.retry import retry_with_backoff


class TestHaversineDistance:
    """Haversine 거리 계산 테스트"""

    def test_haversine_distance_same_point(self):
        """같은 지점 간 거리 테스트"""
        assert haversine_distance(13.0827, 80.2707, 13.0827, 80.2707) == 0.0

    def test_haversine_distance_chennai_to_bengaluru(self):
        """첸나이에서 벵갈루루까지 거리 테스트"""
        # 실제 직선 거리는 약 290km
        distance = haversine_distance(13.0827, 80.2707, 12.9716, 77.5946)
        assert 280 <= distance <= 300

    def test_haversine_distance_equator(self):
        """적도상의 거리 테스트 (1도 ≈ 111km)"""
        assert 110 <= haversine_distance(0, 0, 0, 1) <= 112

    def test_haversine_distance_offset(self):
        """0.09도 이동은 약 10km"""
        assert 9.5 <= haversine_distance(13.0827, 80.2707, 13.1727, 80.2707) <= 10.5


class TestInitialBearing:
    """대원 초기 방위각 테스트"""

    @pytest.mark.parametrize("lat2,lon2,expected", [
        (1.0, 0.0, 0.0),
        (0.0, 1.0, 90.0),
        (-1.0, 0.0, 180.0),
        (0.0, -1.0, 270.0),
    ])
    def test_cardinal_bearings(self, lat2, lon2, expected):
        """정방위 방위각 테스트"""
        assert initial_bearing(0.0, 0.0, lat2, lon2) == pytest.approx(expected, abs=1e-9)

    def test_due_north_is_zero(self):
        """정북 방향은 0도 (360도 아님)"""
        bearing = initial_bearing(13.0827, 80.2707, 13.5, 80.2707)
        assert bearing == pytest.approx(0.0, abs=1e-9)
        assert bearing < 360.0

    def test_northwest_bearing(self):
        """북서 방향 방위각은 270~360 사이"""
        bearing = initial_bearing(13.0827, 80.2707, 13.2, 80.1)
        assert 270 < bearing < 360

    @given(
        lat1=st.floats(min_value=-89, max_value=89),
        lon1=st.floats(min_value=-180, max_value=180),
        lat2=st.floats(min_value=-89, max_value=89),
        lon2=st.floats(min_value=-180, max_value=180),
    )
    def test_bearing_range(self, lat1, lon1, lat2, lon2):
        """방위각은 항상 [0, 360) 범위"""
        bearing = initial_bearing(lat1, lon1, lat2, lon2)
        assert 0.0 <= bearing < 360.0


class TestAngularDistance:
    """원형 각도 차이 테스트"""

    def test_wraparound(self):
        """359도와 1도의 차이는 2도"""
        assert angular_distance(359.0, 1.0) == pytest.approx(2.0)
        assert angular_distance(1.0, 359.0) == pytest.approx(2.0)

    def test_350_vs_10(self):
        """350도와 10도의 차이는 20도"""
        assert angular_distance(350.0, 10.0) == pytest.approx(20.0)

    def test_opposite(self):
        """반대 방향은 180도"""
        assert angular_distance(90.0, 270.0) == pytest.approx(180.0)

    @given(a=st.floats(min_value=0, max_value=359.999), b=st.floats(min_value=0, max_value=359.999))
    def test_symmetric_and_bounded(self, a, b):
        """대칭이고 [0, 180] 범위"""
        d = angular_distance(a, b)
        assert 0.0 <= d <= 180.0
        assert d == pytest.approx(angular_distance(b, a))

    def test_normalize_bearing(self):
        """방위각 정규화 테스트"""
        assert normalize_bearing(-90.0) == pytest.approx(270.0)
        assert normalize_bearing(360.0) == 0.0
        assert normalize_bearing(725.0) == pytest.approx(5.0)


class TestOffsetPoint:
    """오프셋 지점 계산 테스트"""

    def test_simple_offset(self):
        """일반적인 이동"""
        assert offset_point(13.0, 80.0, 0.09, 0.0) == pytest.approx((13.09, 80.0))
        assert offset_point(13.0, 80.0, 0.0, -0.09) == pytest.approx((13.0, 79.91))

    def test_latitude_clamped(self):
        """극지방에서 위도는 90도로 제한"""
        lat, _ = offset_point(89.95, 10.0, 0.09, 0.0)
        assert lat == 90.0

    def test_longitude_wrapped(self):
        """날짜 변경선을 넘으면 경도를 감쌈"""
        _, lon = offset_point(0.0, 179.95, 0.0, 0.09)
        assert lon == pytest.approx(-179.96)
        assert validate_coordinates(0.0, lon)


class TestValidateCoordinates:
    """좌표 유효성 검사 테스트"""

    def test_valid(self):
        assert validate_coordinates(13.0827, 80.2707) is True
        assert validate_coordinates(-90, 180) is True

    def test_invalid(self):
        assert validate_coordinates(91, 0) is False
        assert validate_coordinates(0, -181) is False
        assert validate_coordinates(float("nan"), 0) is False


class TestRetryWithBackoff:
    """재시도 로직 테스트"""

    async def test_success_first_try(self):
        """첫 시도 성공"""
        func = AsyncMock(return_value="ok")
        assert await retry_with_backoff(func, max_retries=3) == "ok"
        assert func.call_count == 1

    async def test_retry_then_success(self):
        """재시도 후 성공"""
        func = AsyncMock(side_effect=[ConnectionError("x"), ConnectionError("y"), "ok"])
        with patch("asyncio.sleep", new=AsyncMock()) as sleep:
            result = await retry_with_backoff(func, max_retries=3, base_delay=0.1, jitter=False)
        assert result == "ok"
        assert func.call_count == 3
        # 지수 백오프 지연
        assert [c.args[0] for c in sleep.call_args_list] == [0.1, 0.2]

    async def test_max_retries_exceeded(self):
        """최대 재시도 초과 시 마지막 예외 전파"""
        func = AsyncMock(side_effect=ConnectionError("down"))
        with patch("asyncio.sleep", new=AsyncMock()):
            with pytest.raises(ConnectionError, match="down"):
                await retry_with_backoff(func, max_retries=2)
        assert func.call_count == 3

    async def test_non_retryable_error_propagates_immediately(self):
        """재시도 대상이 아닌 예외는 즉시 전파"""
        func = AsyncMock(side_effect=ValueError("bad"))
        with pytest.raises(ValueError):
            await retry_with_backoff(func, max_retries=5, retry_on=(asyncio.TimeoutError,))
        assert func.call_count == 1
