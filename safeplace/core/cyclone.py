"""
Central storm risk classification for SafePlace.

Compares the pressure at the origin with the mean of the four
surrounding samples; a deep local low combined with saturated air
and strong wind indicates a cyclonic system over the origin.
"""

from typing import Mapping
from .models import CentralRiskAssessment, WeatherObservation

# 분류 임계값
EXTREME_PRESSURE_DROP = 6.0
EXTREME_HUMIDITY = 85.0
EXTREME_WIND = 15.0

HIGH_PRESSURE_DROP = 4.0
HIGH_HUMIDITY = 80.0
HIGH_WIND = 10.0

HEAVY_RAIN_1H = 20.0
EXTREME_TEMPERATURE = 40.0

SURROUNDING = ("north", "south", "east", "west")

def assess_central_risk(observations: Mapping[str, WeatherObservation]) -> CentralRiskAssessment:
    """
    다섯 지점의 관측값으로 중심 지점의 폭풍 위험을 분류합니다.

    Args:
        observations: 방향 -> 관측값 (north, south, east, west, center 필수)

    Returns:
        위험 평가 결과

    Raises:
        ValueError: 필요한 관측값이 없는 경우
    """
    missing = [d for d in SURROUNDING + ("center",) if observations.get(d) is None]
    if missing:
        raise ValueError(f"관측값이 없는 방향: {missing}")

    center = observations["center"]
    mean_pressure = sum(observations[d].pressure for d in SURROUNDING) / len(SURROUNDING)
    drop = mean_pressure - center.pressure

    if (drop > EXTREME_PRESSURE_DROP and center.humidity > EXTREME_HUMIDITY
            and center.wind_speed > EXTREME_WIND):
        return CentralRiskAssessment(
            level="EXTREME",
            pressure_drop=drop,
            reasons=[f"pressure_drop({drop:.1f}) > {EXTREME_PRESSURE_DROP}",
                     f"humidity({center.humidity}) > {EXTREME_HUMIDITY}",
                     f"wind({center.wind_speed}) > {EXTREME_WIND}"],
        )

    if (drop > HIGH_PRESSURE_DROP and center.humidity > HIGH_HUMIDITY
            and center.wind_speed > HIGH_WIND):
        return CentralRiskAssessment(
            level="HIGH",
            pressure_drop=drop,
            reasons=[f"pressure_drop({drop:.1f}) > {HIGH_PRESSURE_DROP}",
                     f"humidity({center.humidity}) > {HIGH_HUMIDITY}",
                     f"wind({center.wind_speed}) > {HIGH_WIND}"],
        )

    reasons = []
    if center.rain_1h > HEAVY_RAIN_1H:
        reasons.append(f"rain_1h({center.rain_1h}) > {HEAVY_RAIN_1H}")
    if center.temperature > EXTREME_TEMPERATURE:
        reasons.append(f"temperature({center.temperature}) > {EXTREME_TEMPERATURE}")
    if reasons:
        return CentralRiskAssessment(level="HIGH", pressure_drop=drop, reasons=reasons)

    return CentralRiskAssessment(level="LOW", pressure_drop=drop)
