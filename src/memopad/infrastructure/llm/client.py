"""Async LiteLLM client used by the summary and tag adapters."""

import logging
from typing import Any

import litellm
from litellm.exceptions import AuthenticationError, RateLimitError

from memopad.config import LLMConfig
from memopad.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMConfigurationError,
    LLMError,
    LLMRateLimitError,
)

logger = logging.getLogger(__name__)


class LLMClient:
    """Thin async wrapper around ``litellm.acompletion``.

    Applies one LLMConfig to every request and converts LiteLLM
    exceptions into the LLMError family.
    """

    def __init__(self, config: LLMConfig) -> None:
        """Initialize the client.

        Args:
            config: Model, sampling settings and optional API key.
        """
        self._config = config

    @property
    def model(self) -> str:
        """Configured model identifier."""
        return self._config.model

    @property
    def has_credentials(self) -> bool:
        """Whether an API key is available for the configured model.

        An explicit ``api_key`` in the config wins; otherwise LiteLLM checks
        the provider's environment variables (e.g. GEMINI_API_KEY).
        """
        if self._config.api_key:
            return True
        env = litellm.validate_environment(model=self._config.model)
        return bool(env.get("keys_in_environment"))

    async def complete(self, messages: list[dict[str, str]], **overrides: Any) -> str:
        """Run a chat completion and return the reply text.

        Args:
            messages: Chat messages, e.g. ``[{"role": "user", "content": "..."}]``.
            **overrides: Request parameters that replace the configured ones.

        Returns:
            Reply text, or "" when the model sent no content.

        Raises:
            LLMConfigurationError: No API key is available. Raised before any
                network call.
            LLMAuthenticationError: The provider rejected the key.
            LLMRateLimitError: The provider throttled the request.
            LLMError: Any other failure.
        """
        if not self.has_credentials:
            logger.error("No API key available for model %s", self.model)
            raise LLMConfigurationError(
                f"No API key is configured for model '{self.model}'"
            )

        request: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }
        if self._config.api_key:
            request["api_key"] = self._config.api_key
        request.update(overrides)

        logger.debug("Calling %s with %d messages", request["model"], len(messages))
        try:
            response = await litellm.acompletion(**request)
        except AuthenticationError as e:
            logger.error("LLM authentication failed: %s", e)
            raise LLMAuthenticationError(str(e)) from e
        except RateLimitError as e:
            logger.warning("LLM rate limited: %s", e)
            raise LLMRateLimitError(str(e)) from e
        except Exception as e:
            logger.error("LLM request failed: %s", e)
            raise LLMError(str(e)) from e

        return response.choices[0].message.content or ""
