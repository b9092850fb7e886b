"""
Generation Response Text

생성 응답에서 텍스트를 꺼내는 단일 진입점입니다.

지원하는 응답 형태 (우선순위 순):
1. text 접근자 (속성 또는 메서드) - LangChain AIMessage, google-genai 응답
2. content (문자열 또는 content block 리스트) - LangChain AIMessage
3. candidates[0].content.parts[0].text - Gemini REST 응답 (객체/딕셔너리)

어느 경로에서도 텍스트를 찾지 못하면 NO_SCRIPT_TEXT를 반환합니다.
"""

from typing import Any, Optional

NO_SCRIPT_TEXT = "⚠️ No script generated."


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _first(items: Any) -> Any:
    if isinstance(items, (list, tuple)) and items:
        return items[0]
    return None


def _from_text_accessor(response: Any) -> Optional[str]:
    text = _field(response, "text")
    if isinstance(text, str):
        return str(text)
    if callable(text):
        text = text()
    if isinstance(text, str):
        return text
    return None


def _from_content(response: Any) -> Optional[str]:
    content = _field(response, "content")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type", "text") == "text":
                parts.append(block.get("text") or "")
        return "".join(parts)
    return None


def _from_candidates(response: Any) -> Optional[str]:
    candidate = _first(_field(response, "candidates"))
    if candidate is None:
        return None
    part = _first(_field(_field(candidate, "content"), "parts"))
    if part is None:
        return None
    text = _field(part, "text")
    return text if isinstance(text, str) else None


def extract_text(response: Any) -> str:
    """
    생성 응답에서 스크립트 텍스트를 추출합니다.

    Args:
        response: 모델 응답 (형태 무관)

    Returns:
        추출된 텍스트 또는 NO_SCRIPT_TEXT
    """
    if response is None:
        return NO_SCRIPT_TEXT

    for lookup in (_from_text_accessor, _from_content, _from_candidates):
        try:
            text = lookup(response)
        except (AttributeError, KeyError, IndexError, TypeError):
            text = None
        if text and text.strip():
            return text

    return NO_SCRIPT_TEXT
