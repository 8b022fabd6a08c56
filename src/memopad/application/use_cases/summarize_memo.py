"""SummarizeMemoUseCase for generating and storing memo summaries."""

import logging
from uuid import UUID

from memopad.domain.entities.memo_summary import create_memo_summary
from memopad.domain.exceptions import ValidationError
from memopad.domain.repositories.memo_summary_repository import (
    MemoSummaryRepository,
)
from memopad.domain.services.protocols import MemoSummarizer

logger = logging.getLogger(__name__)


class SummarizeMemoUseCase:
    """Summarize memo use case.

    Generates a summary with the LLM and appends it to the summary
    repository. A failure to store the summary is logged and does not
    prevent the summary from being returned.
    """

    def __init__(
        self,
        summarizer: MemoSummarizer,
        summary_repository: MemoSummaryRepository,
    ) -> None:
        """Initialize SummarizeMemoUseCase.

        Args:
            summarizer: Service for generating summaries.
            summary_repository: Repository for summary persistence.
        """
        self._summarizer = summarizer
        self._summary_repository = summary_repository

    async def execute(
        self,
        memo_id: UUID,
        content: str,
        title: str | None = None,
    ) -> str:
        """Generate, store and return a summary.

        Args:
            memo_id: ID of the summarized memo.
            content: Memo body (required).
            title: Memo title (optional).

        Returns:
            Generated summary text.

        Raises:
            ValidationError: Content is empty.
            ConfigurationError: No LLM credential is available.
            EmptyReplyError: The LLM returned no text.
            SuggestionError: The LLM call failed.
        """
        if not content.strip():
            raise ValidationError("Memo content is required")

        summary = await self._summarizer.summarize(content, title or None)

        record = create_memo_summary(
            memo_id=memo_id,
            summary=summary,
            model=self._summarizer.model,
            meta={"has_title": bool(title), "content_length": len(content)},
        )
        try:
            await self._summary_repository.save(record)
        except Exception:
            logger.exception("Failed to save summary for memo %s", memo_id)
        else:
            logger.info("Saved summary for memo %s", memo_id)

        return summary

    async def get_latest_summary(self, memo_id: UUID) -> str | None:
        """Return the most recent summary text for a memo.

        Args:
            memo_id: Memo ID.

        Returns:
            Summary text, or None if the memo has never been summarized.

        Raises:
            PersistenceError: The repository failed.
        """
        latest = await self._summary_repository.find_latest(memo_id)
        if latest is None:
            return None
        return latest.summary
