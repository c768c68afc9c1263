from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings
from database.db import SessionLocal
from services.result_store import ResultStore

logging.basicConfig(level=settings.LOG_LEVEL)

# HTTP 라이브러리 디버그 로그 비활성화
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ 라우터 임포트
from routers import results

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ 저장소 핸들: 프로세스당 하나, 시작 시 비어 있는 상태로 생성
app.state.result_store = ResultStore(SessionLocal)

# ✅ CORS 설정 (프론트엔드 연동 대비)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
app.add_middleware(TimingMiddleware)

# ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
add_error_handlers(app)

# ✅ /v1 프리픽스 라우터 등록
app.include_router(results.router, prefix=settings.API_PREFIX)


@app.on_event("startup")
def _init_schema():
    app.state.result_store.init_schema()
    logger.info("Result store ready (%s)", settings.DATABASE_URL.split("@")[-1])


# ✅ 헬스체크 엔드포인트
@app.get("/health")
def health_check(request: Request):
    store = request.app.state.result_store
    return {"status": "ok", "records": store.count()}


# ✅ 루트 엔드포인트
@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} - {settings.ENV}"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
