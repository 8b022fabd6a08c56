"""Use cases."""

from memopad.application.use_cases.suggest_tags import SuggestTagsUseCase
from memopad.application.use_cases.summarize_memo import SummarizeMemoUseCase

__all__ = ["SuggestTagsUseCase", "SummarizeMemoUseCase"]
