"""
Error taxonomy for SafePlace.

Per-sample failures are recovered inside the sampler; the remaining
errors are surfaced to the caller as user-facing outcomes.
"""

from typing import Optional


class SafePlaceError(Exception):
    """SafePlace 오류 기본 클래스"""


class ProviderError(SafePlaceError):
    """외부 제공자(날씨/장소) 호출 실패"""

    def __init__(self, message: str, status: Optional[str] = None):
        super().__init__(message)
        self.status = status


class SampleFetchError(SafePlaceError):
    """단일 방향 날씨 조회 실패 (점수 +inf 로 복구됨)"""

    def __init__(self, direction: str, reason: str):
        super().__init__(f"{direction}: {reason}")
        self.direction = direction
        self.reason = reason


class AllSamplesFailedError(SafePlaceError):
    """모든 방향의 날씨 조회 실패"""

    def __init__(self, message: str = "Weather data unavailable"):
        super().__init__(message)


class NoCandidatesError(SafePlaceError):
    """대피소 후보 없음"""

    def __init__(self, message: str = "No shelters found nearby."):
        super().__init__(message)


class ProviderUnavailableError(SafePlaceError):
    """경로 제공자 실패 (상태 문자열을 그대로 사용자에게 표시)"""

    def __init__(self, status: str):
        super().__init__(f"Route unavailable: {status}")
        self.status = status
