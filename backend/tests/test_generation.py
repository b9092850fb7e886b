"""
Tests for shortscript.services.generation
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from langchain_core.messages import AIMessage, HumanMessage

from shortscript.services.generation import (
    GenerationError,
    GenerationService,
    is_retryable,
)
from shortscript.services.response_text import NO_SCRIPT_TEXT


class FakeAPIError(Exception):
    """google-genai APIError처럼 code 속성을 가진 예외"""

    def __init__(self, code: int, message: str = "api error"):
        self.code = code
        super().__init__(message)


def _wrapped(cause: Exception) -> Exception:
    err = RuntimeError("Error calling model")
    err.__cause__ = cause
    return err


@pytest.fixture
def llm():
    mock_llm = MagicMock()
    mock_llm.ainvoke = AsyncMock(return_value=AIMessage(content="[HOOK]\nWow."))
    return mock_llm


def _service(llm, max_attempts=3):
    return GenerationService(
        llm=llm, max_attempts=max_attempts, retry_min_wait=0, retry_max_wait=0
    )


class TestIsRetryable:
    @pytest.mark.parametrize("code", [408, 429, 500, 502, 503, 504])
    def test_transient_status_codes(self, code):
        assert is_retryable(FakeAPIError(code))

    @pytest.mark.parametrize("code", [400, 401, 403, 404])
    def test_terminal_status_codes(self, code):
        assert not is_retryable(FakeAPIError(code))

    def test_transport_errors(self):
        assert is_retryable(httpx.ConnectError("refused"))
        assert is_retryable(TimeoutError())
        assert is_retryable(ConnectionResetError())

    def test_wrapped_cause_is_inspected(self):
        assert is_retryable(_wrapped(FakeAPIError(503)))
        assert not is_retryable(_wrapped(FakeAPIError(401)))

    def test_unknown_errors_are_terminal(self):
        assert not is_retryable(ValueError("bad prompt"))


class TestGenerationService:
    def test_client_generation_controls(self):
        with patch("shortscript.services.generation.ChatGoogleGenerativeAI") as mock_cls:
            service = GenerationService()

        kwargs = mock_cls.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-pro"
        assert kwargs["google_api_key"] == "test-key"
        assert kwargs["max_output_tokens"] == 1200
        assert kwargs["temperature"] == 0.9
        assert kwargs["top_p"] == 0.95
        assert service.llm is mock_cls.return_value

    @pytest.mark.asyncio
    async def test_prompt_sent_as_single_user_message(self, llm):
        script = await _service(llm).generate("PROMPT TEXT")

        assert script == "[HOOK]\nWow."
        llm.ainvoke.assert_awaited_once()
        messages = llm.ainvoke.await_args.args[0]
        assert len(messages) == 1
        assert isinstance(messages[0], HumanMessage)
        assert messages[0].content == "PROMPT TEXT"

    @pytest.mark.asyncio
    async def test_empty_response_uses_placeholder(self, llm):
        llm.ainvoke.return_value = AIMessage(content="")

        assert await _service(llm).generate("p") == NO_SCRIPT_TEXT

    @pytest.mark.asyncio
    async def test_retries_transient_failure(self, llm):
        llm.ainvoke.side_effect = [
            httpx.ConnectError("refused"),
            FakeAPIError(503),
            AIMessage(content="third time"),
        ]

        assert await _service(llm).generate("p") == "third time"
        assert llm.ainvoke.await_count == 3

    @pytest.mark.asyncio
    async def test_terminal_failure_is_not_retried(self, llm):
        llm.ainvoke.side_effect = FakeAPIError(401, "API key not valid")

        with pytest.raises(GenerationError) as exc_info:
            await _service(llm).generate("p")

        assert llm.ainvoke.await_count == 1
        assert exc_info.value.status_code == 401
        assert "API key not valid" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, llm):
        llm.ainvoke.side_effect = FakeAPIError(429, "quota exceeded")

        with pytest.raises(GenerationError) as exc_info:
            await _service(llm, max_attempts=2).generate("p")

        assert llm.ainvoke.await_count == 2
        assert exc_info.value.status_code == 429
        assert isinstance(exc_info.value.__cause__, FakeAPIError)

    @pytest.mark.asyncio
    async def test_single_attempt_disables_retry(self, llm):
        llm.ainvoke.side_effect = httpx.ReadTimeout("slow")

        with pytest.raises(GenerationError):
            await _service(llm, max_attempts=1).generate("p")

        assert llm.ainvoke.await_count == 1

    @pytest.mark.asyncio
    async def test_default_is_single_attempt(self, llm):
        llm.ainvoke.side_effect = FakeAPIError(503, "overloaded")
        service = GenerationService(llm=llm, retry_min_wait=0, retry_max_wait=0)

        with pytest.raises(GenerationError):
            await service.generate("p")

        assert service.max_attempts == 1
        assert llm.ainvoke.await_count == 1
