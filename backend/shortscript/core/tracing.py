"""
Gemini 호출 트레이싱

GenerationService가 실제 Gemini 클라이언트를 만들 때 instrument_generation()을
호출해 LangChain 호출(프롬프트, 응답, 토큰 사용량)을 Phoenix로 내보냅니다.

- PHOENIX_ENABLED=false 이면 아무것도 하지 않음
- `tracing` extra가 설치되지 않았거나 초기화에 실패하면 경고만 남기고 계속 진행
- 결과는 프로세스당 한 번만 결정됨 (중복 instrument 방지)
"""

from loguru import logger

from shortscript.core.config import settings

# None: 아직 시도하지 않음
_instrumented: bool | None = None


def instrument_generation(model_name: str) -> bool:
    """
    Gemini 생성 호출에 대한 트레이싱을 켭니다.

    Args:
        model_name: 트레이싱 대상 모델 이름 (로그용)

    Returns:
        트레이싱 활성화 여부
    """
    global _instrumented
    if _instrumented is None:
        _instrumented = _instrument_langchain(model_name)
    return _instrumented


def _instrument_langchain(model_name: str) -> bool:
    if not settings.PHOENIX_ENABLED:
        logger.debug("PHOENIX_ENABLED=False, Gemini 호출 트레이싱 생략")
        return False

    try:
        from openinference.instrumentation.langchain import LangChainInstrumentor
        from phoenix.otel import register
    except ImportError as e:
        logger.warning(
            f"트레이싱 의존성이 없어 Gemini 호출을 트레이싱하지 않습니다: {e} "
            "(pip install 'short-script[tracing]')"
        )
        return False

    try:
        tracer_provider = register(
            project_name=settings.PHOENIX_PROJECT_NAME,
            endpoint=settings.PHOENIX_COLLECTOR_ENDPOINT,
        )
        LangChainInstrumentor().instrument(tracer_provider=tracer_provider)
    except Exception as e:
        logger.warning(f"Phoenix 초기화 실패, 트레이싱 없이 계속 진행: {e}")
        return False

    logger.info(
        f"Gemini 호출 트레이싱 활성화: model={model_name}, "
        f"project={settings.PHOENIX_PROJECT_NAME}, "
        f"endpoint={settings.PHOENIX_COLLECTOR_ENDPOINT}"
    )
    return True
