"""
Directional weather sampling for SafePlace.

This module fans out one weather fetch per compass point around an
origin, reduces every observation to a risk score and returns the
samples ranked from safest to riskiest. A failed or timed-out fetch
scores +inf instead of failing the whole call.
"""

import asyncio
import math
import time
from typing import List, Mapping, Optional, Sequence
from safeplace.core.cyclone import assess_central_risk
from safeplace.core.errors import SampleFetchError
from safeplace.core.models import CentralRiskAssessment, DirectionSample, GeoPoint, WeatherObservation
from safeplace.core.scoring import (
    CARDINALS,
    normalize_directions,
    rank_samples,
    resolve_weights,
    risk_score,
    sample_points,
)
from safeplace.ports.weather import WeatherProviderPort
from safeplace.observability import metrics
from safeplace.observability.logging_setup import get_logger

log = get_logger("safeplace.sampler")

class WeatherSampler:
    """방향별 날씨 샘플러"""

    def __init__(self,
                 weather: WeatherProviderPort,
                 *,
                 offset_deg: float = 0.09,
                 weights: Optional[Mapping[str, float]] = None,
                 include_center: bool = False,
                 directions: Optional[Sequence[str]] = None,
                 fetch_timeout_sec: float = 8.0):
        """
        초기화합니다.

        Args:
            weather: 날씨 제공자 포트
            offset_deg: 기본 각도 이동량 (0.09도 ≈ 10km)
            weights: 신호별 가중치 (rain, wind)
            include_center: 기준점 자체도 샘플링할지 여부
            directions: 샘플링할 방향 목록 (지정 시 include_center 무시)
            fetch_timeout_sec: 방향별 조회 타임아웃 (초)
        """
        if not offset_deg > 0:
            raise ValueError(f"offset_deg 는 양수여야 합니다: {offset_deg}")
        if not fetch_timeout_sec > 0:
            raise ValueError(f"fetch_timeout_sec 는 양수여야 합니다: {fetch_timeout_sec}")

        if directions is None:
            directions = CARDINALS + (["center"] if include_center else [])

        self.weather = weather
        self.offset_deg = offset_deg
        self.weights = resolve_weights(weights)
        self.directions = normalize_directions(directions)
        self.fetch_timeout = fetch_timeout_sec

        log.info(f"WeatherSampler 초기화됨 offset_deg:{offset_deg} directions:{self.directions} weights:{self.weights}")

    async def sample_directions(self,
                                origin: GeoPoint,
                                offset_deg: Optional[float] = None,
                                weights: Optional[Mapping[str, float]] = None) -> List[DirectionSample]:
        """
        기준점 주변을 샘플링하여 위험 점수 오름차순으로 반환합니다.

        Args:
            origin: 기준 좌표
            offset_deg: 이번 호출의 각도 이동량 (None 이면 기본값)
            weights: 이번 호출의 가중치 (None 이면 기본값)

        Returns:
            방향별 샘플 목록 (점수 오름차순, 동점은 열거 순서)
        """
        offset = self.offset_deg if offset_deg is None else offset_deg
        w = self.weights if weights is None else resolve_weights(weights)
        points = sample_points(origin, offset, self.directions)

        started = time.perf_counter()
        samples = await asyncio.gather(*(self._sample(d, p, w) for d, p in points))
        metrics.sample_duration_seconds.observe(time.perf_counter() - started)

        ranked = rank_samples(samples)
        failed = sum(1 for s in ranked if not s.available)
        log.info(f"방향 샘플링 완료 origin:({origin.lat:.4f},{origin.lon:.4f}) "
                 f"best:{ranked[0].direction} score:{ranked[0].score} failed:{failed}/{len(ranked)}")
        return ranked

    async def _fetch(self, direction: str, point: GeoPoint) -> WeatherObservation:
        """단일 방향의 날씨를 타임아웃과 함께 조회합니다."""
        try:
            return await asyncio.wait_for(
                self.weather.fetch_weather(point.lat, point.lon),
                timeout=self.fetch_timeout,
            )
        except asyncio.TimeoutError as e:
            raise SampleFetchError(direction, f"timeout after {self.fetch_timeout}s") from e
        except Exception as e:
            raise SampleFetchError(direction, str(e) or repr(e)) from e

    async def _sample(self, direction: str, point: GeoPoint, weights: Mapping[str, float]) -> DirectionSample:
        """단일 방향을 샘플링합니다. 실패 시 점수는 +inf 입니다."""
        try:
            obs = await self._fetch(direction, point)
        except SampleFetchError as e:
            log.warning(f"방향 샘플 조회 실패 direction:{direction} error:{e.reason}")
            metrics.weather_fetch_total.labels(direction=direction, outcome="error").inc()
            return DirectionSample(direction=direction, point=point, score=math.inf, error=e.reason)

        metrics.weather_fetch_total.labels(direction=direction, outcome="ok").inc()
        return DirectionSample(
            direction=direction,
            point=point,
            score=risk_score(obs, weights),
            observation=obs,
        )

    @staticmethod
    def assess_central_risk(samples: Sequence[DirectionSample]) -> CentralRiskAssessment:
        """
        center 를 포함한 다섯 방향 샘플로 폭풍 위험을 평가합니다.

        Raises:
            ValueError: 다섯 방향 중 관측값이 없는 샘플이 있는 경우
        """
        return assess_central_risk({s.direction: s.observation for s in samples})
