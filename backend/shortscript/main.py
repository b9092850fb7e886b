from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger

from shortscript.api import script
from shortscript.core.config import settings


def get_application() -> FastAPI:
    _app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="""
## Short Script API

뉴스 기사 URL을 받아 목표 길이에 맞춘 숏폼 영상 스크립트를 생성합니다.

### 주요 기능

- **🔍 Crawl**: 기사 본문 추출 (실패 시 fallback 텍스트로 계속 진행)
- **⏱️ Word budget**: 언어별 발화 속도로 목표 단어 수 계산
- **🎬 Script**: Gemini 기반 [HOOK] / [BODY] / [VISUAL CUES] / [ENDING] 스크립트 생성
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "script",
                "description": "숏폼 영상 스크립트 생성 API (Gemini)",
            },
        ],
    )

    # trailing slash 제거 (정규화)
    cors_origins = [str(o).rstrip("/") for o in settings.BACKEND_CORS_ORIGINS]

    if cors_origins:
        _app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            # 와일드카드 origin에는 credentials 허용 불가
            allow_credentials="*" not in cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.info(f"CORS 미들웨어 활성화됨 (origins: {cors_origins})")
    else:
        logger.warning("CORS origins가 설정되지 않음 - CORS 미들웨어 비활성화")

    _app.include_router(script.router)

    @_app.get("/health")
    async def health_check():
        return {"status": "ok"}

    # 프론트엔드 번들은 라우터 뒤에 마운트 (API 경로 우선)
    static_dir = Path(settings.STATIC_DIR)
    if static_dir.is_dir():
        _app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        logger.info(f"정적 파일 마운트: {static_dir.resolve()}")
    else:

        @_app.get("/")
        async def root():
            return {
                "message": "Welcome to Short Script API",
                "version": settings.VERSION,
                "status": "running",
            }

    return _app


app = get_application()


def run() -> None:
    """`shortscript` 콘솔 스크립트 진입점"""
    logger.info(f"✅ Server running at http://localhost:{settings.PORT}")
    uvicorn.run("shortscript.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
