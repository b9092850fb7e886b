"""
Content Extractor

기사 URL을 스크립트 생성용 컨텍스트 텍스트로 변환합니다.

이 단계의 실패는 절대 파이프라인을 중단시키지 않습니다.
URL 없음 / 크롤링 실패 / 빈 결과는 모두 고정된 fallback 텍스트로 대체됩니다.
"""

from loguru import logger

from shortscript.core.config import settings
from shortscript.services.crawlers import ArticleCrawler, CrawlError

NO_URL_TEXT = "No URL provided."
NO_TEXT_EXTRACTED = "No text extracted."
FETCH_FAILED_TEXT = (
    "Failed to fetch the article content. Use what you can from the link."
)


class ContentExtractor:
    """기사 본문 추출기 (fallback 포함)"""

    def __init__(
        self,
        crawler: ArticleCrawler | None = None,
        max_chars: int | None = None,
    ):
        """
        Args:
            crawler: 사용할 크롤러. None이면 FETCH_TIMEOUT_SECONDS가 적용된 ArticleCrawler
            max_chars: 본문 최대 길이. None이면 settings.MAX_ARTICLE_CHARS
        """
        self.crawler = crawler or ArticleCrawler(
            timeout=settings.FETCH_TIMEOUT_SECONDS
        )
        self.max_chars = max_chars or settings.MAX_ARTICLE_CHARS

    async def extract(self, url: str | None) -> str:
        """
        URL에서 본문을 추출합니다. 항상 비어있지 않은 문자열을 반환합니다.

        Args:
            url: 기사 URL (없으면 NO_URL_TEXT 반환)

        Returns:
            max_chars 이하로 잘린 본문 또는 fallback 텍스트
        """
        if not url:
            return NO_URL_TEXT

        try:
            content = await self.crawler.extract(url)
        except CrawlError as e:
            logger.warning(f"기사 크롤링 실패, fallback 텍스트 사용: {e.to_dict()}")
            return FETCH_FAILED_TEXT
        except Exception as e:
            # HTML 파싱 등 예상하지 못한 실패도 흡수
            logger.warning(
                f"기사 본문 추출 실패, fallback 텍스트 사용: "
                f"{type(e).__name__}: {e} (url={url})"
            )
            return FETCH_FAILED_TEXT

        content = content[: self.max_chars]
        if not content.strip():
            logger.warning(f"추출된 본문 없음: {url}")
            return NO_TEXT_EXTRACTED

        logger.debug(f"기사 본문 추출 완료: {len(content)}자 (url={url})")
        return content
