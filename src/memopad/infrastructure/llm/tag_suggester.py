"""LLM-based tag suggester implementation."""

import logging

from memopad.domain.entities.memo import normalize_tags
from memopad.domain.exceptions import (
    ConfigurationError,
    EmptyReplyError,
    NoTagsExtractedError,
    SuggestionError,
)
from memopad.infrastructure.llm.client import LLMClient
from memopad.infrastructure.llm.exceptions import LLMConfigurationError, LLMError
from memopad.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)

MAX_TAGS = 5


def parse_tags(text: str, limit: int = MAX_TAGS) -> list[str]:
    """Parse a comma-separated LLM reply into tags.

    Pieces are trimmed, empty pieces and repeats are dropped, and the
    first ``limit`` remaining tags are kept in reply order.

    Args:
        text: Raw LLM reply.
        limit: Maximum number of tags.

    Returns:
        Parsed tags.
    """
    return normalize_tags(text.split(","))[:limit]


class LLMTagSuggester:
    """LLM-based tag suggestion service."""

    DEFAULT_TEMPERATURE = 0.7
    DEFAULT_MAX_TOKENS = 200

    def __init__(
        self,
        client: LLMClient,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        """Initialize the suggester.

        Args:
            client: LLM client for text generation.
            temperature: Sampling temperature.
            max_tokens: Maximum output tokens.
        """
        self._client = client
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._template = create_jinja_env().get_template("tag_prompt.j2")

    async def suggest(self, content: str, title: str | None = None) -> list[str]:
        """Suggest tags for a memo.

        Args:
            content: Memo body.
            title: Memo title, if any.

        Returns:
            Between 1 and 5 tags.

        Raises:
            ConfigurationError: No API key is available.
            EmptyReplyError: The LLM returned no text.
            NoTagsExtractedError: No tags could be parsed from the reply.
            SuggestionError: The LLM call failed.
        """
        prompt = self._template.render(title=title, content=content, max_tags=MAX_TAGS)

        try:
            response = await self._client.complete(
                [{"role": "user", "content": prompt}],
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except LLMConfigurationError as e:
            raise ConfigurationError(str(e)) from e
        except LLMError as e:
            raise SuggestionError(f"Failed to suggest tags: {e}") from e

        text = response.strip()
        if not text:
            logger.warning("LLM returned an empty tag reply")
            raise EmptyReplyError("Failed to generate tags")

        tags = parse_tags(text)
        if not tags:
            logger.warning("No tags extracted from reply: %r", text)
            raise NoTagsExtractedError("Could not extract any tags")

        logger.debug("Suggested tags: %s", tags)
        return tags
