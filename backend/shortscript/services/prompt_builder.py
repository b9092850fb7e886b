"""
Prompt Builder

기사 본문, 단어 예산, 표현 파라미터를 하나의 생성 프롬프트로 조립합니다.

템플릿은 shortscript/prompts/<version>/short_video_script.md 에 있으며
처음 사용할 때 한 번 읽고 검증한 뒤 캐싱합니다.

모델이 분량 제약을 잘 지키지 않기 때문에 템플릿은 목표 단어 수와
최소 단어 수를 본문 지시와 마지막 RULES 섹션에 두 번 이상 명시합니다.
"""

from functools import lru_cache
from pathlib import Path
from string import Formatter

from loguru import logger

from shortscript.core.config import settings
from shortscript.services.duration import WordBudget
from shortscript.services.parameters import ScriptParameters

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"
PROMPT_NAME = "short_video_script"

# 모델에게 요구하는 출력 섹션 (순서 고정)
SCRIPT_SECTIONS: tuple[str, ...] = ("HOOK", "BODY", "VISUAL CUES", "ENDING")

# 템플릿이 정확히 이 placeholder만 사용해야 함
TEMPLATE_FIELDS = frozenset({
    "duration",
    "target_words",
    "min_words",
    "language",
    "emotion",
    "stance",
    "extra_info",
    "article_text",
})


class PromptTemplateError(ValueError):
    """프롬프트 템플릿이 스크립트 형식과 맞지 않음"""


def _template_fields(template: str) -> set[str]:
    return {field for _, field, _, _ in Formatter().parse(template) if field}


def validate_template(template: str, path: Path | str = "<template>") -> str:
    """
    템플릿의 placeholder와 섹션 마커를 검사합니다.

    Raises:
        PromptTemplateError: placeholder 누락/초과 또는 섹션 순서 불일치
    """
    fields = _template_fields(template)
    missing = TEMPLATE_FIELDS - fields
    unknown = fields - TEMPLATE_FIELDS
    if missing or unknown:
        raise PromptTemplateError(
            f"{path}: placeholder 불일치 (누락={sorted(missing)}, 알 수 없음={sorted(unknown)})"
        )

    positions = [template.find(f"[{section}]") for section in SCRIPT_SECTIONS]
    if -1 in positions or positions != sorted(positions):
        raise PromptTemplateError(
            f"{path}: 섹션 마커는 {' → '.join(SCRIPT_SECTIONS)} 순서로 모두 있어야 합니다"
        )
    return template


@lru_cache(maxsize=8)
def load_template(
    version: str,
    name: str = PROMPT_NAME,
    base_dir: Path = PROMPTS_DIR,
) -> str:
    """
    버전별 프롬프트 템플릿을 읽고 검증합니다. (캐싱됨)

    Raises:
        FileNotFoundError: 템플릿 파일이 없을 경우
        PromptTemplateError: 템플릿 형식이 맞지 않을 경우
    """
    path = base_dir / version / f"{name}.md"
    if not path.is_file():
        raise FileNotFoundError(f"프롬프트 파일을 찾을 수 없습니다: {path}")

    template = validate_template(path.read_text(encoding="utf-8"), path)
    logger.debug(f"프롬프트 템플릿 로드: {path}")
    return template


def build_script_prompt(
    params: ScriptParameters,
    budget: WordBudget,
    article_text: str,
    prompt_version: str | None = None,
) -> str:
    """
    스크립트 생성 프롬프트를 만듭니다.

    Args:
        params: 검증된 요청 파라미터
        budget: duration/language로 계산된 단어 예산
        article_text: 추출된 기사 본문 (또는 fallback 텍스트)
        prompt_version: 프롬프트 버전. None이면 settings.PROMPT_VERSION

    Returns:
        모델에 보낼 단일 프롬프트 문자열
    """
    template = load_template(prompt_version or settings.PROMPT_VERSION)
    return template.format(
        duration=params.duration,
        target_words=budget.target_words,
        min_words=budget.min_words,
        language=params.language,
        emotion=params.emotion,
        stance=params.stance,
        extra_info=params.extra_info,
        article_text=article_text,
    )
