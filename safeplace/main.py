# safeplace/main.py
import os, asyncio, signal
import uvicorn
from safeplace.settings import Settings
from safeplace.observability.health import create_app
from safeplace.observability.logging_setup import setup_logging, get_logger

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def _list(name, default):
    raw = os.getenv(name)
    if raw is None: return default
    return [p.strip() for p in raw.split(",") if p.strip()]

def build_settings() -> Settings:
    s = Settings()

    # 제공자 API 키 (GOOGLE_MAPS_API_KEY 는 places/routing 공용)
    google_key = os.getenv("GOOGLE_MAPS_API_KEY", "")
    s.openweather.api_key = os.getenv("OPENWEATHER_API_KEY", s.openweather.api_key)
    s.openweather.base_url = os.getenv("OPENWEATHER_BASE_URL", s.openweather.base_url)
    s.places.api_key = os.getenv("PLACES_API_KEY", google_key or s.places.api_key)
    s.routing.api_key = os.getenv("ROUTING_API_KEY", google_key or s.routing.api_key)

    # 대피소 검색
    s.places.radius_m = int(os.getenv("PLACES_RADIUS_M", s.places.radius_m))
    s.places.categories = _list("PLACES_CATEGORIES", s.places.categories)
    s.routing.travel_mode = os.getenv("TRAVEL_MODE", s.routing.travel_mode)

    # 샘플링
    s.sampling.offset_deg = float(os.getenv("SAMPLE_OFFSET_DEG", s.sampling.offset_deg))
    s.sampling.weights = {
        "rain": float(os.getenv("WEIGHT_RAIN", s.sampling.weights.get("rain", 1.0))),
        "wind": float(os.getenv("WEIGHT_WIND", s.sampling.weights.get("wind", 1.0))),
    }
    s.sampling.include_center = _b("SAMPLE_INCLUDE_CENTER", s.sampling.include_center)
    s.sampling.fetch_timeout_sec = float(os.getenv("FETCH_TIMEOUT_SEC", s.sampling.fetch_timeout_sec))
    s.selection.center_policy = os.getenv("CENTER_POLICY", s.selection.center_policy)

    # 관측성
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)
    s.observability.http_port = int(os.getenv("HTTP_PORT", s.observability.http_port))
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)

    # 신뢰성
    s.reliability.max_retries = int(os.getenv("PROVIDER_MAX_RETRIES", s.reliability.max_retries))

    # 환경변수로 덮어쓴 값 재검증
    return Settings.model_validate(s.model_dump())

async def main():
    s = build_settings()
    setup_logging(s.observability.log_level)
    log = get_logger()
    log.info("설정 로드 완료")

    if not s.openweather.api_key:
        log.warning("OPENWEATHER_API_KEY 가 설정되지 않았습니다")
    if not s.places.api_key or not s.routing.api_key:
        log.warning("GOOGLE_MAPS_API_KEY 가 설정되지 않았습니다")

    app = create_app(s)
    server = uvicorn.Server(
        uvicorn.Config(app, host="0.0.0.0", port=s.observability.http_port, log_level=s.observability.log_level.lower())
    )
    http_task = asyncio.create_task(server.serve())
    log.info(f"HTTP 서버 시작됨 port:{s.observability.http_port}")

    stop = asyncio.Future()
    try:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            try: loop.add_signal_handler(sig, lambda: (not stop.done()) and stop.set_result(True))
            except NotImplementedError: pass
    except RuntimeError: pass

    done, _ = await asyncio.wait({http_task, stop}, return_when=asyncio.FIRST_COMPLETED)
    if http_task not in done:
        server.should_exit = True
        await http_task
    log.info("서비스 종료")

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()
