"""SuggestTagsUseCase for LLM tag suggestions."""

import logging

from memopad.domain.exceptions import ValidationError
from memopad.domain.services.protocols import TagSuggester

logger = logging.getLogger(__name__)


class SuggestTagsUseCase:
    """Suggest tags for memo content.

    Validates input before any LLM call and delegates to the TagSuggester.
    """

    def __init__(self, tag_suggester: TagSuggester) -> None:
        """Initialize SuggestTagsUseCase.

        Args:
            tag_suggester: Service that asks the LLM for tags.
        """
        self._tag_suggester = tag_suggester

    async def execute(self, content: str, title: str | None = None) -> list[str]:
        """Suggest up to 5 tags.

        Args:
            content: Memo body (required).
            title: Memo title (optional).

        Returns:
            Suggested tags in the order returned by the LLM.

        Raises:
            ValidationError: Content is empty.
            ConfigurationError: No LLM credential is available.
            EmptyReplyError: The LLM returned no text.
            NoTagsExtractedError: No tags could be parsed.
        """
        if not content.strip():
            raise ValidationError("Memo content is required")

        title = title.strip() if title else None
        tags = await self._tag_suggester.suggest(content.strip(), title or None)
        logger.info("Suggested %d tags", len(tags))
        return tags
