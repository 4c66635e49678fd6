"""Pytest configuration and fixtures."""

import json
import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# Required settings must exist before app modules read them
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("APP_ENV", "test")


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["SUPABASE_URL"] = "https://test.supabase.co"
    os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-key"
    os.environ["OPENAI_API_KEY"] = "test-openai-key"
    os.environ["APP_ENV"] = "test"


def make_completion(content, model="gpt-4.1-mini", prompt_tokens=120, completion_tokens=80):
    """Create a mock chat.completions.create response."""
    response = MagicMock()
    response.model = model
    response.choices = [MagicMock(message=MagicMock(content=content))]
    response.usage = MagicMock(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens)
    return response


@pytest.fixture
def valid_model_output():
    """A complete, in-range model reply."""
    return {
        "score_out_of_10": 6,
        "complexity": "Low",
        "summary": "Voice-to-notes tool for small UK care homes.",
        "risks": [
            "Managers must be shown to pay for note-taking time savings; without that there is no budget.",
            "Notes must pass CQC review; if not, homes will not switch.",
        ],
        "costs_effort": ["2-3 weeks solo build on hosted speech APIs", "About £50/month in API costs"],
        "verdict": (
            "BUILD ONLY IF five managers agree to a paid pilot.\n"
            "Next steps:\n1) Call 20 homes\n2) Mock up a note\n3) Ask for a pre-sale"
        ),
    }


@pytest.fixture
def mock_openai():
    """Patch the shared OpenAI client used by the scoring chain."""
    with patch("app.chains.score_idea.get_openai_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.chat.completions.create = AsyncMock()
        mock_get_client.return_value = mock_client
        yield mock_client


@pytest.fixture
def reply_with(mock_openai):
    """Make the mocked model return the given payload (dicts are JSON-encoded)."""

    def _reply(payload):
        content = json.dumps(payload) if isinstance(payload, (dict, list)) else payload
        mock_openai.chat.completions.create.return_value = make_completion(content)
        return mock_openai

    return _reply
