"""src.main
FastAPI 애플리케이션 진입점

실행: uvicorn src.main:app --host 0.0.0.0 --port 8000
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.apis import place_router, test_router
from src.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
# httpx 요청 로그는 WARNING 이상만 출력
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"AI 서버 시작 (ENVIRONMENT={settings.ENVIRONMENT})")
    if not settings.is_apify_configured():
        logger.warning("APIFY_TOKEN 미설정 - 자막/영상/Instagram 수집이 비활성화됩니다")
    yield
    logger.info("AI 서버 종료")


app = FastAPI(
    title="Yori Place Extraction AI Server",
    description="SNS 콘텐츠에서 여행 장소를 추출하는 AI 서버",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(place_router.router)
app.include_router(test_router.router)


@app.get("/")
async def root():
    return {"status": "ok"}
