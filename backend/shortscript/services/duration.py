"""
Duration Estimator

목표 발화 시간(초)과 언어로부터 스크립트 목표 단어 수를 계산합니다.

    raw = duration × words_per_second(language) × 1.05
    target_words = clamp(round(raw), 60, 450)
    min_words = floor(target_words × 0.9)

1.05는 모델이 분량을 짧게 뽑는 경향을 보정하는 5% 버퍼이며,
[60, 450] 범위 제한은 극단적인 duration(1초, 3600초 등)에서도
생성 요청을 비용 한도 내로 유지합니다.
"""

import math
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_WORDS_PER_SECOND = 2.5
LENGTH_BUFFER = 1.05
MIN_TARGET_WORDS = 60
MAX_TARGET_WORDS = 450

# 계산에 사용하는 duration 상한 (하루). 이 값이면 이미 MAX_TARGET_WORDS에 도달
MAX_DURATION_SEC = 86_400

# 자연스러운 낭독 기준 초당 단어 수 (언어명 정확히 일치할 때만 적용)
WORDS_PER_SECOND_BY_LANGUAGE: Mapping[str, float] = MappingProxyType({
    "English": 2.7,
    "Hindi": 2.4,
    "Bengali": 2.4,
    "Marathi": 2.4,
    "Tamil": 2.3,
    "Telugu": 2.3,
    "Gujarati": 2.3,
    "Kannada": 2.3,
    "Malayalam": 2.2,
    "Punjabi": 2.4,
    "Odia": 2.3,
    "Assamese": 2.3,
    "Nepali": 2.3,
    "Urdu": 2.4,
    "Sindhi": 2.3,
    "Bodo": 2.2,
    "Manipuri": 2.2,
    "Sanskrit": 2.1,
    "Gurmukhi": 2.4,
    "Konkani": 2.3,
    "Marwari": 2.3,
})

SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(WORDS_PER_SECOND_BY_LANGUAGE)


def words_per_second(language: str) -> float:
    return WORDS_PER_SECOND_BY_LANGUAGE.get(language, DEFAULT_WORDS_PER_SECOND)


def is_supported_language(language: str) -> bool:
    return language in WORDS_PER_SECOND_BY_LANGUAGE


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def target_words(duration_sec: int, language: str) -> int:
    """
    목표 단어 수를 계산합니다.

    Args:
        duration_sec: 목표 발화 시간 (양의 정수, 초)
        language: 언어명 (예: "English", "Hindi"). 모르는 언어는 2.5 words/sec

    Returns:
        [MIN_TARGET_WORDS, MAX_TARGET_WORDS] 범위의 목표 단어 수
    """
    duration_sec = min(duration_sec, MAX_DURATION_SEC)
    words = _round_half_up(duration_sec * words_per_second(language) * LENGTH_BUFFER)
    return max(MIN_TARGET_WORDS, min(words, MAX_TARGET_WORDS))


def minimum_words(target: int) -> int:
    """목표 단어 수의 90% (내림)"""
    return target * 9 // 10


class WordBudget(BaseModel):
    """duration/language로부터 계산된 단어 예산 (불변)"""

    model_config = ConfigDict(frozen=True)

    target_words: int = Field(
        ...,
        ge=MIN_TARGET_WORDS,
        le=MAX_TARGET_WORDS,
        description="목표 단어 수",
    )
    min_words: int = Field(..., description="최소 단어 수 (목표의 90%)")

    @classmethod
    def for_duration(cls, duration_sec: int, language: str) -> "WordBudget":
        target = target_words(duration_sec, language)
        return cls(target_words=target, min_words=minimum_words(target))
