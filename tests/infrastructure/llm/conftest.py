"""Common fixtures for LLM infrastructure tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from memopad.infrastructure.llm import LLMClient


@pytest.fixture
def mock_client() -> MagicMock:
    """Create mock LLMClient."""
    client = MagicMock(spec=LLMClient)
    client.model = "gemini/gemini-2.0-flash-001"
    client.complete = AsyncMock()
    return client
