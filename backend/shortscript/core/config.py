import json
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Short Script API"
    VERSION: str = "0.1.0"

    # 서버 설정
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # CORS 설정: 콤마로 구분된 문자열이나 JSON 리스트 모두 처리
    BACKEND_CORS_ORIGINS: Annotated[list[str], NoDecode] = ["*"]

    # 프론트엔드 번들 디렉토리 (없으면 마운트하지 않음)
    STATIC_DIR: str = "public"

    # ===== Gemini (스크립트 생성) 설정 =====
    # 기본값 없음: 누락 시 기동 단계에서 실패
    GEMINI_API_KEY: str
    GEMINI_MODEL: str = "gemini-2.5-pro"
    GENERATION_MAX_OUTPUT_TOKENS: int = 1200
    GENERATION_TEMPERATURE: float = 0.9
    GENERATION_TOP_P: float = 0.95
    GENERATION_TIMEOUT_SECONDS: float = 120.0

    # Retry 설정 (1이면 재시도 없음)
    GENERATION_MAX_ATTEMPTS: int = 1
    GENERATION_RETRY_MIN_WAIT: float = 2.0
    GENERATION_RETRY_MAX_WAIT: float = 10.0

    # ===== 기사 크롤링 설정 =====
    FETCH_TIMEOUT_SECONDS: float = 15.0
    MAX_ARTICLE_CHARS: int = 8000

    PROMPT_VERSION: str = "v1"

    # ===== Phoenix LLMOps 설정 =====
    PHOENIX_COLLECTOR_ENDPOINT: str = "http://localhost:6006/v1/traces"
    PHOENIX_PROJECT_NAME: str = "short-script"
    PHOENIX_ENABLED: bool = False

    @field_validator("GEMINI_API_KEY")
    @classmethod
    def require_api_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError(
                "GEMINI_API_KEY is not set. Provide it via the environment or .env file."
            )
        return v.strip()

    @field_validator("GENERATION_MAX_ATTEMPTS")
    @classmethod
    def at_least_one_attempt(cls, v: int) -> int:
        if v < 1:
            raise ValueError("GENERATION_MAX_ATTEMPTS must be >= 1")
        return v

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            # JSON 배열 형태인 경우 파싱
            if v.startswith("["):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            # 콤마로 구분된 문자열인 경우
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True
    )


settings = Settings()
