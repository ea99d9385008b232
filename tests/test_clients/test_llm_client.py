"""Tests for LLMClient (Claude API wrapper)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from resume_builder.clients.llm_client import LLMClient, LLMResponse


def _make_api_message(text: str, input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Build a mock anthropic Message-like object."""
    message = MagicMock()
    message.usage.input_tokens = input_tokens
    message.usage.output_tokens = output_tokens
    message.content = [MagicMock(text=text)]
    return message


class TestLLMClientInit:
    def test_init_default_creates_client_with_no_kwargs(self):
        """Creates AsyncAnthropic with no extra kwargs when no args supplied."""
        with patch("resume_builder.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            llm = LLMClient()
            mock_cls.assert_called_once_with()
        assert llm.max_attempts == 1

    def test_init_with_api_key_and_timeout(self):
        with patch("resume_builder.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            LLMClient(api_key="test-key", timeout=30.0)
            mock_cls.assert_called_once_with(api_key="test-key", timeout=30.0)

    def test_max_attempts_floor_is_one(self):
        with patch("resume_builder.clients.llm_client.anthropic.AsyncAnthropic"):
            assert LLMClient(max_attempts=0).max_attempts == 1


class TestLLMClientGenerate:
    async def test_generate_returns_llm_response(self):
        """generate() wraps API response fields into an LLMResponse dataclass."""
        with patch("resume_builder.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(
                return_value=_make_api_message("hello world", input_tokens=100, output_tokens=50)
            )
            mock_cls.return_value = mock_client

            llm = LLMClient()
            result = await llm.generate("say hello")

        assert isinstance(result, LLMResponse)
        assert result.text == "hello world"
        assert result.input_tokens == 100
        assert result.output_tokens == 50

    async def test_system_prompt_passed_when_given(self):
        with patch("resume_builder.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(return_value=_make_api_message("ok"))
            mock_cls.return_value = mock_client

            llm = LLMClient()
            await llm.generate("prompt", system="be brief", model="m", temperature=0.5, max_tokens=10)

        mock_client.messages.create.assert_awaited_once_with(
            model="m",
            max_tokens=10,
            temperature=0.5,
            messages=[{"role": "user", "content": "prompt"}],
            system="be brief",
        )

    async def test_no_system_key_when_empty(self):
        with patch("resume_builder.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(return_value=_make_api_message("ok"))
            mock_cls.return_value = mock_client

            await LLMClient().generate("prompt")

        assert "system" not in mock_client.messages.create.call_args.kwargs

    async def test_single_attempt_by_default(self):
        """A failure is raised after one call, with no retry."""
        with patch("resume_builder.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(side_effect=RuntimeError("overloaded"))
            mock_cls.return_value = mock_client

            llm = LLMClient()
            with pytest.raises(RuntimeError, match="overloaded"):
                await llm.generate("prompt")

        assert mock_client.messages.create.await_count == 1
        assert llm._token_log == []

    async def test_retries_when_configured(self):
        with patch("resume_builder.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(
                side_effect=[RuntimeError("overloaded"), _make_api_message("second time")]
            )
            mock_cls.return_value = mock_client

            llm = LLMClient(max_attempts=2)
            result = await llm.generate("prompt")

        assert result.text == "second time"
        assert mock_client.messages.create.await_count == 2

    async def test_token_log_stores_model_and_counts(self):
        """_token_log entries are (model, input_tokens, output_tokens) tuples."""
        with patch("resume_builder.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(
                return_value=_make_api_message("resp", input_tokens=20, output_tokens=8)
            )
            mock_cls.return_value = mock_client

            llm = LLMClient()
            await llm.generate("prompt", model="claude-haiku-4-5-20251001")

        model, inp, out = llm._token_log[0]
        assert model == "claude-haiku-4-5-20251001"
        assert inp == 20
        assert out == 8


class TestLLMClientTokenSummary:
    async def test_summary_sums_and_resets(self):
        with patch("resume_builder.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(
                return_value=_make_api_message("r", input_tokens=10, output_tokens=5)
            )
            mock_cls.return_value = mock_client

            llm = LLMClient()
            await llm.generate("one")
            await llm.generate("two")

        summary = llm.get_token_summary()
        assert summary["input"] == 20
        assert summary["output"] == 10
        assert len(summary["calls"]) == 2
        assert llm.get_token_summary()["calls"] == []
