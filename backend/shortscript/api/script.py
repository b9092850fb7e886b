"""
Script API Endpoint

기사 URL과 표현 파라미터를 받아 숏폼 영상 스크립트를 생성합니다.

Endpoints:
- POST /generate-script: 스크립트 생성

실패 응답은 원인과 관계없이 항상 동일합니다:
- 500 {"error": "Failed to generate script"}
"""

import time
from typing import Optional, Union

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from output_schemas.script import ScriptResult
from shortscript.services.generation import GenerationError
from shortscript.services.parameters import ScriptParameters
from shortscript.services.script_service import get_script_service

router = APIRouter(tags=["script"])

GENERATION_FAILED_MESSAGE = "Failed to generate script"


# ============================================================================
# Request/Response Schemas
# ============================================================================


class GenerateScriptRequest(BaseModel):
    """스크립트 생성 요청 스키마 (모든 필드 선택)"""

    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = Field(None, description="기사 URL")
    emotion: Optional[str] = Field(None, description="감정/톤 (기본값 Excited)")
    language: Optional[str] = Field(None, description="스크립트 언어 (기본값 English)")
    stance: Optional[str] = Field(None, description="관점 (기본값 Neutral)")
    duration: Optional[Union[int, float, str]] = Field(
        None,
        description="목표 발화 시간 (초, 기본값 60). 숫자가 아니면 기본값 사용",
    )
    extra_info: Optional[str] = Field(
        None,
        alias="extraInfo",
        description="추가 정보 (기본값 None)",
    )


class ScriptErrorResponse(BaseModel):
    """스크립트 생성 실패 응답 스키마"""

    error: str = Field(GENERATION_FAILED_MESSAGE, description="고정된 에러 메시지")


def _failure_response() -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": GENERATION_FAILED_MESSAGE},
    )


# ============================================================================
# API Endpoints
# ============================================================================


@router.post(
    "/generate-script",
    response_model=ScriptResult,
    summary="숏폼 영상 스크립트 생성",
    responses={500: {"model": ScriptErrorResponse, "description": "스크립트 생성 실패"}},
)
async def generate_script(request: GenerateScriptRequest):
    """
    기사 URL에서 숏폼 영상 스크립트를 생성합니다.

    ## 처리 흐름
    1. 기사 본문 크롤링 (실패해도 fallback 텍스트로 계속 진행)
    2. duration/language → 목표 단어 수 계산
    3. 프롬프트 조립 후 Gemini 호출

    Returns:
        {"script": str, "meta": {"targetWords": int, "duration": <요청 값>}}
    """
    start_time = time.time()

    try:
        params = ScriptParameters.from_request(
            url=request.url,
            emotion=request.emotion,
            language=request.language,
            stance=request.stance,
            duration=request.duration,
            extra_info=request.extra_info,
        )
        logger.info(
            f"스크립트 생성 요청: url={params.url}, language={params.language}, "
            f"duration={params.duration}s"
        )

        service = get_script_service()
        result = await service.generate_script(params)
    except GenerationError:
        # GenerationService에서 진단 정보와 함께 이미 로깅됨
        return _failure_response()
    except Exception as e:
        logger.error(f"스크립트 생성 중 예상치 못한 오류: {type(e).__name__}: {e}")
        return _failure_response()

    processing_time_ms = int((time.time() - start_time) * 1000)
    logger.info(f"스크립트 생성 응답: {processing_time_ms}ms")
    return result
