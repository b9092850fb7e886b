"""
Script Output Schema

스크립트 생성 API 응답을 위한 Pydantic 스키마를 정의합니다.
JSON 필드명은 프론트엔드 계약에 맞춰 camelCase alias(targetWords)를 사용합니다.
"""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class ScriptMeta(BaseModel):
    """스크립트 메타데이터"""

    model_config = ConfigDict(populate_by_name=True)

    target_words: int = Field(
        ...,
        alias="targetWords",
        description="목표 단어 수",
    )
    duration: Union[int, float, str] = Field(
        ...,
        description="요청에 들어온 duration 값 (없으면 60)",
    )


class ScriptResult(BaseModel):
    """스크립트 생성 결과"""

    script: str = Field(
        ...,
        description="[HOOK] / [BODY] / [VISUAL CUES] / [ENDING] 구조의 스크립트",
    )
    meta: ScriptMeta = Field(..., description="메타데이터")
