"""Tests for LLMClient."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from litellm.exceptions import AuthenticationError, RateLimitError

from memopad.config import LLMConfig
from memopad.infrastructure.llm import (
    LLMAuthenticationError,
    LLMClient,
    LLMConfigurationError,
    LLMError,
    LLMRateLimitError,
)

MESSAGES = [{"role": "user", "content": "Hello"}]


class TestLLMClient:
    """LLMClient tests."""

    @pytest.fixture
    def config(self) -> LLMConfig:
        """Create LLM config with an explicit key."""
        return LLMConfig(
            model="gemini/gemini-2.0-flash-001",
            temperature=0.7,
            max_tokens=1000,
            api_key="test-key",
        )

    @pytest.fixture
    def client(self, config: LLMConfig) -> LLMClient:
        """Create LLMClient instance."""
        return LLMClient(config=config)

    @pytest.fixture
    def mock_response(self) -> MagicMock:
        """Create mock LiteLLM response."""
        response = MagicMock()
        response.choices = [MagicMock()]
        response.choices[0].message.content = "こんにちは"
        return response

    async def test_complete_success(
        self, client: LLMClient, mock_response: MagicMock
    ) -> None:
        """Test successful completion."""
        with patch(
            "litellm.acompletion", new=AsyncMock(return_value=mock_response)
        ) as mock_completion:
            result = await client.complete(MESSAGES)

        assert result == "こんにちは"
        mock_completion.assert_awaited_once()

    async def test_complete_applies_config(
        self, client: LLMClient, mock_response: MagicMock
    ) -> None:
        """Test that config parameters are applied."""
        with patch(
            "litellm.acompletion", new=AsyncMock(return_value=mock_response)
        ) as mock_completion:
            await client.complete(MESSAGES)

        call_kwargs = mock_completion.call_args.kwargs
        assert call_kwargs["model"] == "gemini/gemini-2.0-flash-001"
        assert call_kwargs["temperature"] == 0.7
        assert call_kwargs["max_tokens"] == 1000
        assert call_kwargs["api_key"] == "test-key"
        assert call_kwargs["messages"] == MESSAGES

    async def test_complete_kwargs_override(
        self, client: LLMClient, mock_response: MagicMock
    ) -> None:
        """Test that kwargs override config values."""
        with patch(
            "litellm.acompletion", new=AsyncMock(return_value=mock_response)
        ) as mock_completion:
            await client.complete(MESSAGES, temperature=0.2, max_tokens=200)

        call_kwargs = mock_completion.call_args.kwargs
        assert call_kwargs["temperature"] == 0.2
        assert call_kwargs["max_tokens"] == 200

    async def test_complete_none_content(
        self, client: LLMClient, mock_response: MagicMock
    ) -> None:
        """Test that missing content is returned as an empty string."""
        mock_response.choices[0].message.content = None
        with patch("litellm.acompletion", new=AsyncMock(return_value=mock_response)):
            assert await client.complete(MESSAGES) == ""

    async def test_authentication_error(self, client: LLMClient) -> None:
        """Test authentication error handling."""
        error = AuthenticationError(
            message="Invalid API key",
            llm_provider="gemini",
            model="gemini-2.0-flash-001",
        )
        with patch("litellm.acompletion", new=AsyncMock(side_effect=error)):
            with pytest.raises(LLMAuthenticationError):
                await client.complete(MESSAGES)

    async def test_rate_limit_error(self, client: LLMClient) -> None:
        """Test rate limit error handling."""
        error = RateLimitError(
            message="Rate limit exceeded",
            llm_provider="gemini",
            model="gemini-2.0-flash-001",
        )
        with patch("litellm.acompletion", new=AsyncMock(side_effect=error)):
            with pytest.raises(LLMRateLimitError):
                await client.complete(MESSAGES)

    async def test_generic_error(self, client: LLMClient) -> None:
        """Test generic error handling."""
        with patch(
            "litellm.acompletion", new=AsyncMock(side_effect=Exception("boom"))
        ):
            with pytest.raises(LLMError, match="boom"):
                await client.complete(MESSAGES)


class TestCredentials:
    """API key detection tests."""

    def test_explicit_api_key(self) -> None:
        client = LLMClient(LLMConfig(model="gemini/gemini-2.0-flash-001", api_key="k"))

        with patch("litellm.validate_environment") as mock_validate:
            assert client.has_credentials is True

        mock_validate.assert_not_called()

    @pytest.mark.parametrize("present", [True, False])
    def test_environment_lookup(self, present: bool) -> None:
        client = LLMClient(LLMConfig(model="gemini/gemini-2.0-flash-001"))

        with patch(
            "litellm.validate_environment",
            return_value={"keys_in_environment": present, "missing_keys": []},
        ) as mock_validate:
            assert client.has_credentials is present

        mock_validate.assert_called_once_with(model="gemini/gemini-2.0-flash-001")

    async def test_missing_key_fails_before_call(self) -> None:
        client = LLMClient(LLMConfig(model="gemini/gemini-2.0-flash-001"))

        with (
            patch(
                "litellm.validate_environment",
                return_value={"keys_in_environment": False, "missing_keys": ["GEMINI_API_KEY"]},
            ),
            patch("litellm.acompletion", new=AsyncMock()) as mock_completion,
        ):
            with pytest.raises(LLMConfigurationError):
                await client.complete(MESSAGES)

        mock_completion.assert_not_called()
