"""
Crawlers Package

기사 크롤링 관련 모듈을 제공합니다.

공개 API:
- article: 뉴스 기사 본문 크롤러 (ArticleCrawler)
- errors: 크롤링 에러 타입
- text: 텍스트 정규화 헬퍼
"""

from shortscript.services.crawlers.article import ArticleCrawler
from shortscript.services.crawlers.errors import (
    ERROR_MESSAGES,
    CrawlError,
    CrawlErrorCode,
    CrawlFailedError,
    CrawlTimeoutError,
    InvalidURLError,
    NetworkError,
    UnsupportedContentError,
)

__all__ = [
    # Crawlers
    "ArticleCrawler",
    # Errors
    "CrawlError",
    "CrawlErrorCode",
    "InvalidURLError",
    "UnsupportedContentError",
    "CrawlFailedError",
    "CrawlTimeoutError",
    "NetworkError",
    "ERROR_MESSAGES",
]
