"""LLM integration."""

from memopad.infrastructure.llm.client import LLMClient
from memopad.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMConfigurationError,
    LLMError,
    LLMRateLimitError,
)
from memopad.infrastructure.llm.memo_summarizer import LLMMemoSummarizer
from memopad.infrastructure.llm.tag_suggester import LLMTagSuggester, parse_tags

__all__ = [
    "LLMAuthenticationError",
    "LLMClient",
    "LLMConfigurationError",
    "LLMError",
    "LLMMemoSummarizer",
    "LLMRateLimitError",
    "LLMTagSuggester",
    "parse_tags",
]
