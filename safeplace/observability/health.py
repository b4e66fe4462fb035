"""
HTTP endpoints for SafePlace.

This module implements health, readiness, metrics and info endpoints
together with the weather and safe place recommendation endpoints.
"""

import time
from typing import Optional, Tuple
from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from safeplace.common.geo import validate_coordinates
from safeplace.core.errors import AllSamplesFailedError, NoCandidatesError
from safeplace.core.models import GeoPoint
from safeplace.features.safe_place import open_finder
from safeplace.observability.logging_setup import get_logger
from safeplace.settings import Settings

log = get_logger("safeplace.http_api")

def _parse_coordinates(lat, lon) -> Tuple[float, float]:
    """요청 좌표를 검증합니다. 잘못되면 400 을 반환합니다."""
    try:
        lat_f, lon_f = float(lat), float(lon)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail="lat and lon are required numbers")
    if not validate_coordinates(lat_f, lon_f):
        raise HTTPException(status_code=400, detail=f"invalid coordinates: lat={lat}, lon={lon}")
    return lat_f, lon_f

def create_app(settings: Settings) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다."""
    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="SafePlace directional shelter recommendation service"
    )

    start_time = time.time()

    @app.get("/health")
    async def health():
        """헬스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })

    @app.get("/ready")
    async def ready():
        """레디니스 체크 엔드포인트 (API 키 설정 여부)"""
        missing = [name for name, key in (
            ("openweather", settings.openweather.api_key),
            ("places", settings.places.api_key),
            ("routing", settings.routing.api_key),
        ) if not key]
        return JSONResponse({
            "status": "ready" if not missing else "degraded",
            "service": settings.observability.service_name,
            "missing_api_keys": missing,
            "timestamp": time.time()
        })

    @app.get("/metrics")
    async def metrics():
        """Prometheus 메트릭 엔드포인트"""
        if not settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")

        return Response(
            generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    @app.get("/info")
    async def info():
        """서비스 정보 엔드포인트"""
        uptime = time.time() - start_time
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "build_date": settings.observability.build_date,
            "uptime_seconds": int(uptime),
            "metrics_enabled": settings.observability.metrics_enabled,
            "log_level": settings.observability.log_level,
            "sampling": settings.sampling.model_dump(),
            "center_policy": settings.selection.center_policy
        })

    @app.get("/weather")
    async def weather(lat: Optional[float] = Query(default=None), lon: Optional[float] = Query(default=None)):
        """지정한 좌표의 현재 날씨를 조회합니다."""
        lat_f, lon_f = _parse_coordinates(lat, lon)

        async with open_finder(settings) as finder:
            obs = await finder.update_for_location(lat_f, lon_f)
            if obs is None:
                raise HTTPException(status_code=502, detail=finder.view.risk_description)
            return JSONResponse({
                "observation": obs.model_dump(),
                "display": finder.view.weather_display,
                "message": finder.view.risk_description
            })

    @app.post("/safe-place")
    async def safe_place(payload: dict = Body(default={})):
        """가장 안전한 방향의 대피소를 추천합니다."""
        lat, lon = _parse_coordinates(payload.get("lat"), payload.get("lon"))

        try:
            async with open_finder(settings) as finder:
                rec = await finder.find_safe_place(GeoPoint(lat=lat, lon=lon))
        except AllSamplesFailedError as e:
            log.error(f"안전 장소 요청 실패 (날씨 데이터 없음) lat:{lat} lon:{lon}")
            raise HTTPException(status_code=503, detail=str(e))
        except NoCandidatesError as e:
            log.warning(f"안전 장소 요청 실패 (대피소 없음) lat:{lat} lon:{lon} reason:{e}")
            raise HTTPException(status_code=404, detail=str(e))

        log.info(f"안전 장소 요청 처리 완료 shelter:{rec.shelter.name} direction:{rec.safer_direction.direction}")
        # +inf 점수는 null 로 직렬화됨
        return Response(rec.model_dump_json(), media_type="application/json")

    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "endpoints": {
                "health": "/health",
                "ready": "/ready",
                "metrics": "/metrics",
                "info": "/info",
                "weather": "/weather",
                "safe_place": "/safe-place"
            }
        })

    return app
