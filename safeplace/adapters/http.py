"""
Shared JSON-over-HTTP client for SafePlace provider adapters.

This module provides the aiohttp session lifecycle, retry on transport
errors and status/payload checks used by the weather, places and
routing adapters.
"""

import asyncio
from typing import Any, Dict, Optional
import aiohttp
from safeplace.common.retry import retry_with_backoff
from safeplace.core.errors import ProviderError
from safeplace.observability.logging_setup import get_logger

log = get_logger("safeplace.http")

# 재시도 대상 예외 (전송 계층 오류만)
TRANSIENT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)

class JsonHttpClient:
    """JSON API 공통 클라이언트"""

    name = "http"

    def __init__(self,
                 base_url: str,
                 *,
                 timeout: float = 10,
                 max_retries: int = 2,
                 backoff_initial: float = 0.5,
                 backoff_max: float = 5.0,
                 session: Optional[aiohttp.ClientSession] = None):
        """
        초기화합니다.

        Args:
            base_url: API 기본 URL
            timeout: 요청 타임아웃 (초)
            max_retries: 전송 오류 시 최대 재시도 횟수
            backoff_initial: 첫 재시도 지연 (초)
            backoff_max: 최대 재시도 지연 (초)
            session: 외부에서 주입한 세션 (주입 시 닫지 않음)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_initial = backoff_initial
        self.backoff_max = backoff_max
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        if self._owns_session and self.session:
            await self.session.close()
            self.session = None

    async def _get_json(self, endpoint: str, params: Dict[str, Any]) -> Any:
        """
        GET 요청을 수행하고 JSON 응답을 반환합니다.

        Args:
            endpoint: API 엔드포인트
            params: 쿼리 매개변수

        Returns:
            응답 데이터

        Raises:
            ProviderError: 비정상 상태 코드, JSON 파싱 실패, 재시도 후 전송 실패
        """
        if not self.session:
            raise RuntimeError("세션이 초기화되지 않았습니다. async with를 사용하세요.")

        url = f"{self.base_url}{endpoint}"

        async def _request():
            async with self.session.get(url, params=params) as response:
                if response.status != 200:
                    raise ProviderError(
                        f"{self.name} HTTP {response.status}",
                        status=str(response.status),
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise ProviderError(f"{self.name} 응답 JSON 파싱 실패") from e

        try:
            return await retry_with_backoff(
                _request,
                max_retries=self.max_retries,
                base_delay=self.backoff_initial,
                max_delay=self.backoff_max,
                retry_on=TRANSIENT_ERRORS,
            )
        except TRANSIENT_ERRORS as e:
            log.warning(f"{self.name} 요청 실패 endpoint:{endpoint} error:{e!r}")
            raise ProviderError(f"{self.name} 요청 실패: {e!r}") from e
