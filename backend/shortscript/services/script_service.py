"""
Script Service

요청 하나의 스크립트 생성 파이프라인입니다.

Step 1: 기사 URL → 본문 텍스트 (실패 시 fallback 텍스트)
Step 2: duration/language → 단어 예산
Step 3: 본문 + 단어 예산 + 파라미터 → 생성 프롬프트
Step 4: Gemini 호출 → 스크립트 텍스트

중간 데이터(본문, 단어 예산, 프롬프트)는 요청 처리 동안만 존재합니다.
"""

from loguru import logger

from output_schemas.script import ScriptMeta, ScriptResult
from shortscript.services.content import ContentExtractor
from shortscript.services.duration import WordBudget
from shortscript.services.generation import GenerationService, get_generation_service
from shortscript.services.parameters import ScriptParameters
from shortscript.services.prompt_builder import build_script_prompt


class ScriptService:
    """기사 → 숏폼 영상 스크립트 생성 서비스"""

    def __init__(
        self,
        content_extractor: ContentExtractor | None = None,
        generation_service: GenerationService | None = None,
    ):
        """
        Args:
            content_extractor: 기사 본문 추출기 (None이면 기본 설정으로 생성)
            generation_service: 생성 서비스 (None이면 싱글톤 사용)
        """
        self.content_extractor = content_extractor or ContentExtractor()
        self.generation_service = generation_service or get_generation_service()

    async def generate_script(self, params: ScriptParameters) -> ScriptResult:
        """
        스크립트를 생성합니다.

        Raises:
            GenerationError: 생성 서비스 호출 실패 시
        """
        article_text = await self.content_extractor.extract(params.url)

        budget = WordBudget.for_duration(params.duration, params.language)
        logger.info(
            f"단어 예산: {budget.target_words}단어 (최소 {budget.min_words}) "
            f"- duration={params.duration}s, language={params.language}"
        )

        prompt = build_script_prompt(params, budget, article_text)

        script = await self.generation_service.generate(prompt)

        return ScriptResult(
            script=script,
            meta=ScriptMeta(
                target_words=budget.target_words,
                duration=params.raw_duration,
            ),
        )


# 싱글톤 인스턴스 (지연 초기화)
_script_service: ScriptService | None = None


def get_script_service() -> ScriptService:
    """ScriptService 싱글톤 인스턴스를 가져옵니다."""
    global _script_service
    if _script_service is None:
        _script_service = ScriptService()
    return _script_service
