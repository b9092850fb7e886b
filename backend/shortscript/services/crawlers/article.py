"""
Article Crawler

뉴스 기사 URL에서 읽을 수 있는 본문 텍스트를 추출하는 크롤러입니다.

추출 규칙:
- <article>/<main> 컨테이너 안의 <p> 요소를 우선 사용
- 없으면 문서 전체의 <p> 요소 사용
- 문서 순서대로 한 문단당 한 줄로 연결
- <p>가 하나도 없으면 trafilatura 본문 추출로 fallback

요청 규칙:
- httpx (async), 브라우저 User-Agent, 리다이렉트 허용
- 전체 요청 시간은 timeout으로 상한을 둠 (httpx 개별 타임아웃 + 전체 wall-clock)
- 실패는 CrawlError 계열 예외로 raise (흡수 여부는 호출자가 결정)

Usage:
    crawler = ArticleCrawler()
    text = await crawler.extract("https://example.com/news/1")
"""

import asyncio
import re
from typing import Optional
from urllib.parse import urlparse

import httpx
import trafilatura
from bs4 import BeautifulSoup
from loguru import logger

from shortscript.services.crawlers.errors import (
    CrawlFailedError,
    CrawlTimeoutError,
    InvalidURLError,
    NetworkError,
    UnsupportedContentError,
)
from shortscript.services.crawlers.text import (
    clean_text,
    collapse_whitespace,
    strip_elements,
)


class ArticleCrawler:
    """뉴스 기사 본문 크롤러"""

    # 일부 사이트는 브라우저 UA가 없으면 본문을 주지 않음
    DEFAULT_HEADERS: dict = {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
        ),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }

    DEFAULT_TIMEOUT: float = 15.0

    URL_PATTERN: str = r"^https?://.+"

    # HTML로 취급하는 Content-Type 조각
    HTML_CONTENT_TYPES: tuple[str, ...] = ("html", "xml")

    # 텍스트로 수집하면 안 되는 요소
    NOISE_SELECTORS: list[str] = ["script", "style", "noscript", "template"]

    # 문단 우선 수집 컨테이너
    PREFERRED_PARAGRAPH_SELECTOR: str = "article p, main p"

    def __init__(
        self,
        timeout: Optional[float] = None,
        headers: Optional[dict] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            timeout: 전체 요청 타임아웃 (초). 기본값 15초
            headers: 커스텀 HTTP 헤더. 기본값은 DEFAULT_HEADERS
            transport: httpx 전송 계층 (테스트에서 MockTransport 주입용)
        """
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self.headers = headers or self.DEFAULT_HEADERS.copy()
        self.transport = transport

    def validate_url(self, url: str) -> bool:
        if not re.match(self.URL_PATTERN, url):
            return False
        return bool(urlparse(url).netloc)

    async def extract(self, url: str) -> str:
        """
        URL에서 본문을 추출합니다.

        Returns:
            추출된 본문 (추출 결과가 없으면 빈 문자열)

        Raises:
            InvalidURLError: http(s) URL이 아닌 경우
            CrawlError: fetch_html() 단계의 실패
        """
        if not self.validate_url(url):
            raise InvalidURLError(url)

        html = await self.fetch_html(url)
        content = self._parse_content(html)

        logger.info(f"Extracted {len(content)} chars from {url}")
        return content

    async def fetch_html(self, url: str) -> str:
        """
        URL에서 HTML을 비동기로 가져옵니다.

        Raises:
            CrawlTimeoutError: timeout 초과
            CrawlFailedError: 4xx/5xx 응답
            UnsupportedContentError: HTML이 아닌 응답
            NetworkError: 그 외 요청 오류
        """
        logger.info(f"Fetching HTML from: {url}")

        try:
            return await asyncio.wait_for(self._get(url), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise CrawlTimeoutError(url, self.timeout) from e
        except httpx.HTTPStatusError as e:
            raise CrawlFailedError(
                url, f"HTTP error {e.response.status_code} for {url}"
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(url, f"Request error for {url}: {e}") from e

    async def _get(self, url: str) -> str:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=self.headers,
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()

            content_type = response.headers.get("content-type", "").lower()
            if content_type and not any(
                kind in content_type for kind in self.HTML_CONTENT_TYPES
            ):
                raise UnsupportedContentError(url, content_type)

            return response.text

    def _parse_content(self, html: str) -> str:
        soup = strip_elements(BeautifulSoup(html, "html.parser"), self.NOISE_SELECTORS)

        paragraphs = self._collect_paragraphs(soup)
        if paragraphs:
            return "\n".join(paragraphs)

        logger.warning("No <p> text found, trying trafilatura fallback")
        return self._extract_content_with_trafilatura(html)

    def _collect_paragraphs(self, soup: BeautifulSoup) -> list[str]:
        """
        문단 텍스트를 문서 순서대로 수집합니다.

        article/main 안의 문단이 하나라도 있으면 그것만 사용하고,
        없으면 모든 <p>를 사용합니다. 빈 문단은 건너뜁니다.
        """
        elements = soup.select(self.PREFERRED_PARAGRAPH_SELECTOR)
        if not elements:
            elements = soup.find_all("p")

        paragraphs = []
        for element in elements:
            text = collapse_whitespace(element.get_text())
            if text:
                paragraphs.append(text)
        return paragraphs

    def _extract_content_with_trafilatura(self, html: Optional[str]) -> str:
        if not html:
            return ""

        content = trafilatura.extract(
            html,
            include_comments=False,
            include_tables=False,
            favor_recall=True,
        )
        if content:
            return clean_text(content)
        return ""
