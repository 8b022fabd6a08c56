"""LLM-based memo summarizer implementation."""

import logging

from memopad.domain.exceptions import (
    ConfigurationError,
    EmptyReplyError,
    SuggestionError,
)
from memopad.infrastructure.llm.client import LLMClient
from memopad.infrastructure.llm.exceptions import LLMConfigurationError, LLMError
from memopad.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)


class LLMMemoSummarizer:
    """LLM-based memo summarization service."""

    DEFAULT_TEMPERATURE = 0.7
    DEFAULT_MAX_TOKENS = 500

    def __init__(
        self,
        client: LLMClient,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        """Initialize the summarizer.

        Args:
            client: LLM client for text generation.
            temperature: Sampling temperature for summaries.
            max_tokens: Maximum output tokens for summaries.
        """
        self._client = client
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._template = create_jinja_env().get_template("summary_prompt.j2")

    @property
    def model(self) -> str:
        """Model identifier recorded with generated summaries."""
        return self._client.model

    async def summarize(self, content: str, title: str | None = None) -> str:
        """Generate a summary of a memo.

        Args:
            content: Memo body.
            title: Memo title, if any.

        Returns:
            Generated summary text.

        Raises:
            ConfigurationError: No API key is available.
            EmptyReplyError: The LLM returned no text.
            SuggestionError: The LLM call failed.
        """
        prompt = self._template.render(title=title, content=content)

        try:
            response = await self._client.complete(
                [{"role": "user", "content": prompt}],
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except LLMConfigurationError as e:
            raise ConfigurationError(str(e)) from e
        except LLMError as e:
            raise SuggestionError(f"Failed to generate summary: {e}") from e

        summary = response.strip()
        if not summary:
            logger.warning("LLM returned an empty summary")
            raise EmptyReplyError("Failed to generate summary")
        return summary
