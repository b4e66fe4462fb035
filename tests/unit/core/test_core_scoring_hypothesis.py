"""
hypothesis를 활용한 scoring 모듈 테스트

위험 점수 함수의 단조성, 샘플 지점 계산, 안정 정렬을 검증합니다.
"""

import math
import pytest
from hypothesis import given, strategies as st

from safeplace.core.errors import AllSamplesFailedError
from safeplace.core.models import DirectionSample, GeoPoint, WeatherObservation
from safeplace.core.scoring import (
    pick_safer_direction, rank_samples, resolve_weights, risk_score, sample_points
)

non_negative = st.floats(min_value=0, max_value=500, allow_nan=False)


def _obs(rain: float, wind: float) -> WeatherObservation:
    return WeatherObservation(temperature=28, humidity=70, pressure=1008, rain_1h=rain, wind_speed=wind)


class TestRiskScore:
    """위험 점수 테스트"""

    def test_default_weights(self):
        """기본 가중치는 rain 1.0, wind 1.0"""
        assert risk_score(_obs(2.5, 4.0)) == pytest.approx(6.5)

    def test_custom_weights(self):
        """가중치 적용"""
        assert risk_score(_obs(2.0, 4.0), {"rain": 3.0, "wind": 0.5}) == pytest.approx(8.0)

    def test_missing_weight_defaults_to_one(self):
        assert risk_score(_obs(2.0, 4.0), {"rain": 2.0}) == pytest.approx(8.0)

    @given(rain=non_negative, wind=non_negative, extra=st.floats(min_value=0.001, max_value=100),
           w_rain=st.floats(min_value=0, max_value=10), w_wind=st.floats(min_value=0, max_value=10))
    def test_monotonic_in_rain_and_wind(self, rain, wind, extra, w_rain, w_wind):
        """강수/풍속이 증가하면 점수는 감소하지 않음"""
        weights = {"rain": w_rain, "wind": w_wind}
        base = risk_score(_obs(rain, wind), weights)
        assert risk_score(_obs(rain + extra, wind), weights) >= base
        assert risk_score(_obs(rain, wind + extra), weights) >= base

    @given(rain=non_negative, wind=non_negative, extra=st.floats(min_value=0.01, max_value=100))
    def test_strictly_monotonic_with_positive_weights(self, rain, wind, extra):
        """양의 가중치에서는 엄격하게 증가"""
        base = risk_score(_obs(rain, wind))
        assert risk_score(_obs(rain + extra, wind)) > base
        assert risk_score(_obs(rain, wind + extra)) > base


class TestResolveWeights:
    """가중치 검증 테스트"""

    def test_unknown_signal_rejected(self):
        with pytest.raises(ValueError, match="알 수 없는 가중치 신호"):
            resolve_weights({"snow": 1.0})

    @pytest.mark.parametrize("value", [-0.1, math.inf, math.nan])
    def test_invalid_value_rejected(self, value):
        with pytest.raises(ValueError):
            resolve_weights({"wind": value})

    def test_defaults(self):
        assert resolve_weights(None) == {"rain": 1.0, "wind": 1.0}


class TestSamplePoints:
    """샘플 지점 계산 테스트"""

    def test_four_cardinal_points(self):
        """네 방향 지점 좌표"""
        origin = GeoPoint(lat=13.0827, lon=80.2707)
        points = dict(sample_points(origin, 0.09))
        assert list(points) == ["north", "south", "east", "west"]
        assert points["north"].lat == pytest.approx(13.1727)
        assert points["north"].lon == pytest.approx(80.2707)
        assert points["south"].lat == pytest.approx(12.9927)
        assert points["east"].lon == pytest.approx(80.3607)
        assert points["east"].lat == pytest.approx(13.0827)
        assert points["west"].lon == pytest.approx(80.1807)

    def test_center_is_origin(self):
        origin = GeoPoint(lat=13.0827, lon=80.2707)
        points = dict(sample_points(origin, 0.5, ["center", "north", "south", "east", "west"]))
        assert list(points) == ["north", "south", "east", "west", "center"]
        assert points["center"] == origin

    @pytest.mark.parametrize("offset", [0, -0.09, math.nan, math.inf])
    def test_invalid_offset(self, offset):
        with pytest.raises(ValueError):
            sample_points(GeoPoint(lat=0, lon=0), offset)

    def test_unknown_direction(self):
        with pytest.raises(ValueError, match="알 수 없는 방향"):
            sample_points(GeoPoint(lat=0, lon=0), 0.09, ["northeast"])

    @given(
        lat=st.floats(min_value=-89, max_value=89),
        lon=st.floats(min_value=-179, max_value=179),
        offset=st.floats(min_value=0.01, max_value=0.9),
    )
    def test_one_point_per_direction_at_offset(self, lat, lon, offset):
        """방향마다 정확히 한 개, 기준점에서 offset 만큼 떨어짐"""
        origin = GeoPoint(lat=lat, lon=lon)
        points = dict(sample_points(origin, offset))
        assert len(points) == 4
        assert points["north"].lat - lat == pytest.approx(offset)
        assert lat - points["south"].lat == pytest.approx(offset)
        assert points["east"].lon - lon == pytest.approx(offset)
        assert lon - points["west"].lon == pytest.approx(offset)


def _sample(direction: str, score: float) -> DirectionSample:
    return DirectionSample(direction=direction, point=GeoPoint(lat=0, lon=0), score=score)


class TestRanking:
    """정렬 및 가장 안전한 방향 선택 테스트"""

    def test_sorted_ascending(self):
        ranked = rank_samples([_sample("north", 5), _sample("south", 1), _sample("east", 3)])
        assert [s.direction for s in ranked] == ["south", "east", "north"]

    def test_stable_ties(self):
        """동점은 열거 순서 유지"""
        ranked = rank_samples([_sample("north", 2), _sample("south", 1), _sample("east", 1), _sample("west", 2)])
        assert [s.direction for s in ranked] == ["south", "east", "north", "west"]

    def test_single_failure_sorted_last(self):
        ranked = rank_samples([_sample("north", math.inf), _sample("south", 1), _sample("east", 3), _sample("west", 0)])
        assert ranked[-1].direction == "north"
        assert sum(1 for s in ranked if not s.available) == 1

    def test_all_failed_keeps_order(self):
        ranked = rank_samples([_sample(d, math.inf) for d in ["north", "south", "east", "west"]])
        assert [s.direction for s in ranked] == ["north", "south", "east", "west"]

    def test_pick_safer_direction(self):
        ranked = rank_samples([_sample("north", 5), _sample("west", 0.5)])
        assert pick_safer_direction(ranked).direction == "west"

    def test_pick_safer_direction_all_failed(self):
        """모든 점수가 +inf 이면 방향을 고르지 않음"""
        ranked = [_sample(d, math.inf) for d in ["north", "south", "east", "west"]]
        with pytest.raises(AllSamplesFailedError, match="Weather data unavailable"):
            pick_safer_direction(ranked)

    def test_pick_safer_direction_empty(self):
        with pytest.raises(AllSamplesFailedError):
            pick_safer_direction([])
