"""
Generation Service

LangChain과 Google Generative AI(Gemini)를 사용한 스크립트 생성 서비스입니다.

- 프롬프트는 단일 user 메시지로 전송
- 생성 설정: max_output_tokens=1200, temperature=0.9, top_p=0.95 (settings에서 오버라이드)
- 일시적인 실패(타임아웃, 연결 오류, 408/429/5xx)만 지수 백오프로 재시도
- 인증/권한/잘못된 요청 등 그 외 실패는 즉시 GenerationError로 변환
"""

import asyncio
from typing import Any

import httpx
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from shortscript.core.config import settings
from shortscript.core.tracing import instrument_generation
from shortscript.services.response_text import NO_SCRIPT_TEXT, extract_text

# 재시도 대상 HTTP 상태 코드
RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})

# 예외 체인(__cause__/__context__) 탐색 깊이
_MAX_CAUSE_DEPTH = 5


class GenerationError(Exception):
    """생성 서비스 호출 실패 (재시도 소진 또는 재시도 불가 오류)"""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


def _status_code(exc: BaseException) -> int | None:
    """예외에서 HTTP 상태 코드를 찾습니다 (google-genai, google-api-core, httpx 형태)."""
    for attr in ("status_code", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return int(value)
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int):
        return value
    return None


def _exception_chain(exc: BaseException):
    seen = 0
    current: BaseException | None = exc
    while current is not None and seen < _MAX_CAUSE_DEPTH:
        yield current
        current = current.__cause__ or current.__context__
        seen += 1


def _first_status_code(exc: BaseException) -> int | None:
    for err in _exception_chain(exc):
        code = _status_code(err)
        if code is not None:
            return code
    return None


def is_retryable(exc: BaseException) -> bool:
    """
    재시도할 가치가 있는 실패인지 판단합니다.

    LangChain은 SDK 예외를 감싸서 다시 raise하므로 예외 체인 전체를 확인합니다.
    """
    for err in _exception_chain(exc):
        if isinstance(
            err, (asyncio.TimeoutError, ConnectionError, httpx.TransportError)
        ):
            return True
        code = _status_code(err)
        if code is not None:
            return code in RETRYABLE_STATUS_CODES
    return False


def _diagnostic_detail(exc: BaseException) -> str:
    """로그용 진단 정보 (상태 코드, 원인 예외)"""
    details = [f"{type(exc).__name__}: {exc}"]
    for err in list(_exception_chain(exc))[1:]:
        details.append(f"caused by {type(err).__name__}: {err}")
    code = _first_status_code(exc)
    if code is not None:
        details.append(f"status={code}")
    return ", ".join(details)


def _log_retry(retry_state) -> None:
    """재시도 전 로깅을 수행합니다."""
    exception = retry_state.outcome.exception()
    attempt = retry_state.attempt_number
    logger.warning(
        f"Gemini API 호출 실패: {type(exception).__name__}: {exception}, "
        f"{attempt}번째 재시도 중..."
    )


class GenerationService:
    """Gemini 스크립트 생성 서비스"""

    def __init__(
        self,
        llm: BaseChatModel | None = None,
        model_name: str | None = None,
        max_attempts: int | None = None,
        retry_min_wait: float | None = None,
        retry_max_wait: float | None = None,
    ):
        """
        Args:
            llm: 사용할 채팅 모델 (테스트 주입용). None이면 ChatGoogleGenerativeAI 생성
            model_name: Gemini 모델 이름 (None이면 settings.GEMINI_MODEL)
            max_attempts: 최대 호출 횟수 (1이면 재시도 없음)
            retry_min_wait: 재시도 최소 대기 시간 (초)
            retry_max_wait: 재시도 최대 대기 시간 (초)
        """
        self.model_name = model_name or settings.GEMINI_MODEL
        self.max_attempts = max_attempts or settings.GENERATION_MAX_ATTEMPTS
        self.retry_min_wait = (
            settings.GENERATION_RETRY_MIN_WAIT
            if retry_min_wait is None
            else retry_min_wait
        )
        self.retry_max_wait = (
            settings.GENERATION_RETRY_MAX_WAIT
            if retry_max_wait is None
            else retry_max_wait
        )
        self.llm = llm if llm is not None else self._build_llm()

        logger.info(
            f"GenerationService 초기화 완료: model={self.model_name}, "
            f"max_attempts={self.max_attempts}"
        )

    def _build_llm(self) -> ChatGoogleGenerativeAI:
        instrument_generation(self.model_name)

        # 클라이언트 내부 재시도는 끄고 재시도 정책은 _invoke_llm 한 곳에서 관리
        return ChatGoogleGenerativeAI(
            model=self.model_name,
            google_api_key=settings.GEMINI_API_KEY,
            max_output_tokens=settings.GENERATION_MAX_OUTPUT_TOKENS,
            temperature=settings.GENERATION_TEMPERATURE,
            top_p=settings.GENERATION_TOP_P,
            timeout=settings.GENERATION_TIMEOUT_SECONDS,
            max_retries=1,
        )

    async def _invoke_llm(self, prompt: str) -> Any:
        """LLM을 호출합니다. (재시도 로직 포함)"""
        messages = [HumanMessage(content=prompt)]

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=1, min=self.retry_min_wait, max=self.retry_max_wait
            ),
            retry=retry_if_exception(is_retryable),
            before_sleep=_log_retry,
            reraise=True,
        ):
            with attempt:
                return await self.llm.ainvoke(messages)

    async def generate(self, prompt: str) -> str:
        """
        프롬프트로 스크립트를 생성합니다.

        Args:
            prompt: 완성된 생성 프롬프트

        Returns:
            스크립트 텍스트 (응답에서 텍스트를 찾지 못하면 NO_SCRIPT_TEXT)

        Raises:
            GenerationError: 전송/서비스 오류 (재시도 소진 포함)
        """
        logger.debug(f"스크립트 생성 요청: 프롬프트 길이={len(prompt)}자")

        try:
            response = await self._invoke_llm(prompt)
        except Exception as e:
            detail = _diagnostic_detail(e)
            logger.error(f"Gemini error: {detail}")
            raise GenerationError(detail, status_code=_first_status_code(e)) from e

        script = extract_text(response)
        if script == NO_SCRIPT_TEXT:
            logger.warning("Gemini 응답에서 스크립트 텍스트를 찾지 못함, placeholder 사용")
        else:
            logger.info(f"스크립트 생성 완료: {len(script.split())}단어")
        return script


# 싱글톤 인스턴스 (지연 초기화)
_generation_service: GenerationService | None = None


def get_generation_service() -> GenerationService:
    """GenerationService 싱글톤 인스턴스를 가져옵니다."""
    global _generation_service
    if _generation_service is None:
        _generation_service = GenerationService()
    return _generation_service
