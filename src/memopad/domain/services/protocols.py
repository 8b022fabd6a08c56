"""Domain service protocols."""

from typing import Protocol


class MemoSummarizer(Protocol):
    """Memo summarization service protocol."""

    @property
    def model(self) -> str:
        """Model identifier recorded with generated summaries."""
        ...

    async def summarize(self, content: str, title: str | None = None) -> str:
        """Generate a summary of a memo.

        Args:
            content: Memo body.
            title: Memo title, if any.

        Returns:
            Generated summary text.

        Raises:
            ConfigurationError: No credential for the LLM is available.
            EmptyReplyError: The LLM returned no text.
            SuggestionError: Other generation failures.
        """
        ...


class TagSuggester(Protocol):
    """Tag suggestion service protocol."""

    async def suggest(self, content: str, title: str | None = None) -> list[str]:
        """Suggest tags for a memo.

        Args:
            content: Memo body.
            title: Memo title, if any.

        Returns:
            Between 1 and 5 tags in the order the LLM returned them.

        Raises:
            ConfigurationError: No credential for the LLM is available.
            EmptyReplyError: The LLM returned no text.
            NoTagsExtractedError: No tags could be parsed from the reply.
        """
        ...
