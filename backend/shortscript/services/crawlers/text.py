"""
기사 HTML 텍스트 정규화 헬퍼
"""

import re

from bs4 import BeautifulSoup


def clean_text(text: str) -> str:
    """
    여러 줄 본문을 정리합니다. (trafilatura 결과용)
    - 3줄 이상 연속 줄바꿈 → 2줄
    - 탭/연속 공백 → 스페이스 1개
    - 각 줄의 앞뒤 공백 제거
    """
    if not text:
        return ""

    text = re.sub(r'\n{3,}', '\n\n', text)
    text = re.sub(r'[ \t]+', ' ', text)
    lines = [line.strip() for line in text.split('\n')]
    return '\n'.join(lines).strip()


def collapse_whitespace(text: str) -> str:
    """문단 하나를 한 줄로: 줄바꿈을 포함한 연속 공백을 스페이스 1개로 합칩니다."""
    if not text:
        return ""
    return re.sub(r'\s+', ' ', text).strip()


def strip_elements(soup: BeautifulSoup, selectors: list[str]) -> BeautifulSoup:
    """selector에 맞는 요소를 제자리에서 제거합니다."""
    for selector in selectors:
        for element in soup.select(selector):
            element.decompose()
    return soup
