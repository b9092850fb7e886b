"""
Script Parameters

HTTP 요청 값을 검증된 스크립트 생성 파라미터로 변환합니다.
모든 기본값과 강제 변환 규칙이 이 모듈 한 곳에 모여 있습니다.

기본값:
- duration: 60 (숫자가 아니거나, 없거나, 0 이하인 경우)
- language: "English"
- emotion: "Excited"
- stance: "Neutral"
- extra_info: "None"

빈 문자열(공백만 있는 경우 포함)은 값이 없는 것으로 취급합니다.
"""

import math
import re
from typing import Any, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from shortscript.services.duration import MAX_DURATION_SEC, is_supported_language

DEFAULT_DURATION_SEC = 60
DEFAULT_LANGUAGE = "English"
DEFAULT_EMOTION = "Excited"
DEFAULT_STANCE = "Neutral"
DEFAULT_EXTRA_INFO = "None"

# 선행 정수 부분만 사용 ("45s" → 45, "12.7" → 12)
_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")

# 이보다 자릿수가 많으면 int() 변환 없이 상한으로 포화
_MAX_DURATION_DIGITS = len(str(MAX_DURATION_SEC))


def parse_duration(value: Any) -> Optional[int]:
    """
    duration 입력을 10진 정수로 변환합니다.

    양수는 MAX_DURATION_SEC로 포화시키므로 아무리 큰 입력도
    이후 단어 수 계산에서 오버플로를 일으키지 않습니다.

    Returns:
        변환된 정수 또는 변환 불가 시 None
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return min(value, MAX_DURATION_SEC)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return min(int(value), MAX_DURATION_SEC)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return None
        sign, digits = match.groups()
        digits = digits.lstrip("0") or "0"
        if len(digits) > _MAX_DURATION_DIGITS:
            return -MAX_DURATION_SEC if sign == "-" else MAX_DURATION_SEC
        number = int(digits)
        if sign == "-":
            return -number
        return min(number, MAX_DURATION_SEC)
    return None


def _text_or_default(value: Optional[str], default: str) -> str:
    if value is None or not value.strip():
        return default
    return value.strip()


class ScriptParameters(BaseModel):
    """검증된 스크립트 생성 파라미터"""

    model_config = ConfigDict(frozen=True)

    url: Optional[str] = Field(None, description="기사 URL (없으면 본문 없이 생성)")
    duration: int = Field(DEFAULT_DURATION_SEC, gt=0, description="목표 발화 시간 (초)")
    language: str = Field(DEFAULT_LANGUAGE, description="스크립트 언어")
    emotion: str = Field(DEFAULT_EMOTION, description="감정/톤")
    stance: str = Field(DEFAULT_STANCE, description="관점")
    extra_info: str = Field(DEFAULT_EXTRA_INFO, description="추가 정보")
    raw_duration: Any = Field(
        DEFAULT_DURATION_SEC,
        description="요청에 들어온 duration 원본 값 (응답 meta용)",
    )

    @property
    def language_supported(self) -> bool:
        """speaking-rate 표에 있는 언어인지 여부"""
        return is_supported_language(self.language)

    @classmethod
    def from_request(
        cls,
        url: Optional[str] = None,
        emotion: Optional[str] = None,
        language: Optional[str] = None,
        stance: Optional[str] = None,
        duration: Any = None,
        extra_info: Optional[str] = None,
    ) -> "ScriptParameters":
        """요청 값에 기본값과 강제 변환 규칙을 적용합니다."""
        parsed = parse_duration(duration)
        if parsed is None or parsed <= 0:
            if duration is not None:
                logger.debug(
                    f"duration 값 {duration!r}을 해석할 수 없어 "
                    f"기본값 {DEFAULT_DURATION_SEC}초 사용"
                )
            parsed = DEFAULT_DURATION_SEC

        params = cls(
            url=url.strip() if url and url.strip() else None,
            duration=parsed,
            language=_text_or_default(language, DEFAULT_LANGUAGE),
            emotion=_text_or_default(emotion, DEFAULT_EMOTION),
            stance=_text_or_default(stance, DEFAULT_STANCE),
            extra_info=_text_or_default(extra_info, DEFAULT_EXTRA_INFO),
            raw_duration=duration if duration is not None else DEFAULT_DURATION_SEC,
        )

        if not params.language_supported:
            logger.debug(
                f"speaking-rate 표에 없는 언어: {params.language} (기본 속도 적용)"
            )
        return params
