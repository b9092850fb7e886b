"""
Crawler Error Definitions

기사 크롤링 관련 커스텀 에러 타입을 정의합니다.

크롤링 에러는 API 응답으로 노출되지 않습니다.
ContentExtractor가 모두 흡수하여 fallback 텍스트로 대체하며,
에러 코드와 detail은 서버 로그 진단용으로만 사용됩니다.
"""

from enum import Enum
from typing import Optional


class CrawlErrorCode(str, Enum):
    """크롤링 에러 코드"""

    INVALID_URL_FORMAT = "INVALID_URL_FORMAT"
    UNSUPPORTED_CONTENT = "UNSUPPORTED_CONTENT"
    CRAWL_FAILED = "CRAWL_FAILED"
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"


ERROR_MESSAGES: dict[CrawlErrorCode, str] = {
    CrawlErrorCode.INVALID_URL_FORMAT: "URL must be an absolute http(s) address.",
    CrawlErrorCode.UNSUPPORTED_CONTENT: "The page did not return HTML content.",
    CrawlErrorCode.CRAWL_FAILED: "The page could not be fetched.",
    CrawlErrorCode.TIMEOUT: "The page took too long to respond.",
    CrawlErrorCode.NETWORK_ERROR: "A network error occurred while fetching the page.",
}


class CrawlError(Exception):
    """
    크롤링 에러 기본 클래스

    Attributes:
        code: 에러 코드 (CrawlErrorCode)
        message: 에러 메시지
        detail: 개발자용 상세 정보 (선택)
        url: 크롤링 대상 URL
    """

    def __init__(
        self,
        code: CrawlErrorCode,
        url: str,
        detail: Optional[str] = None,
    ):
        self.code = code
        self.url = url
        self.message = ERROR_MESSAGES.get(code, "Unknown crawl error.")
        self.detail = detail

        super().__init__(self.message)

    def to_dict(self) -> dict:
        """로그용 딕셔너리 변환"""
        result = {
            "error_code": self.code.value,
            "message": self.message,
            "url": self.url,
        }
        if self.detail:
            result["detail"] = self.detail
        return result


class InvalidURLError(CrawlError):
    """잘못된 URL 형식 에러"""

    def __init__(self, url: str, detail: Optional[str] = None):
        super().__init__(
            code=CrawlErrorCode.INVALID_URL_FORMAT,
            url=url,
            detail=detail or f"Invalid URL: {url}",
        )


class UnsupportedContentError(CrawlError):
    """HTML이 아닌 콘텐츠 에러"""

    def __init__(self, url: str, content_type: str):
        super().__init__(
            code=CrawlErrorCode.UNSUPPORTED_CONTENT,
            url=url,
            detail=f"Unsupported content type: {content_type or 'unknown'}",
        )
        self.content_type = content_type


class CrawlFailedError(CrawlError):
    """크롤링 실패 에러 (HTTP 상태 코드 오류 등)"""

    def __init__(self, url: str, reason: Optional[str] = None):
        super().__init__(
            code=CrawlErrorCode.CRAWL_FAILED,
            url=url,
            detail=reason or f"Crawl failed: {url}",
        )


class CrawlTimeoutError(CrawlError):
    """타임아웃 에러"""

    def __init__(self, url: str, timeout_seconds: float):
        super().__init__(
            code=CrawlErrorCode.TIMEOUT,
            url=url,
            detail=f"Timed out after {timeout_seconds}s: {url}",
        )
        self.timeout_seconds = timeout_seconds


class NetworkError(CrawlError):
    """네트워크 에러"""

    def __init__(self, url: str, reason: Optional[str] = None):
        super().__init__(
            code=CrawlErrorCode.NETWORK_ERROR,
            url=url,
            detail=reason or f"Network error: {url}",
        )
