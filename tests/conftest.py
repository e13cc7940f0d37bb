"""
Pytest configuration and fixtures for FitCoach tests.
"""

import os
import pytest
from unittest.mock import MagicMock

# Set test environment before importing fitcoach modules
os.environ["FITCOACH_ENV"] = "development"
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456:test-token-not-real")
os.environ.setdefault("GROQ_API_KEY", "test-key-not-real")


class RecordingResponder:
    """Responder that records everything the conversation sends."""

    def __init__(self):
        self.sent: list[tuple[str, str, object]] = []

    async def send_text(self, text, *, clear_keyboard=False):
        self.sent.append(("text", text, clear_keyboard))

    async def send_markdown(self, text):
        self.sent.append(("markdown", text, None))

    async def send_choices(self, text, options):
        self.sent.append(("choices", text, tuple(options)))

    @property
    def texts(self) -> list[str]:
        return [text for _, text, _ in self.sent]


@pytest.fixture
def responder():
    """Fresh recording responder."""
    return RecordingResponder()


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations (every builder call returns the same query)
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.insert.return_value = mock_table
    mock_table.upsert.return_value = mock_table
    mock_table.update.return_value = mock_table
    mock_table.delete.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.order.return_value = mock_table
    mock_table.limit.return_value = mock_table
    mock_table.maybe_single.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[{"id": "row-1"}])

    mock_client.table.return_value = mock_table

    return mock_client


@pytest.fixture
def sample_profile():
    """A completed onboarding profile."""
    return {
        "user_id": 42,
        "age": "30",
        "gender": "Female",
        "height": "170",
        "weight": "65",
        "fitness_level": "Intermediate",
        "training_experience": "2 years",
        "available_equipment": "Dumbbells only",
        "training_location": "Home",
        "injuries": "None",
        "diet_type": "Vegetarian",
        "daily_schedule": "Work 9-5",
        "sleep_hours": "7",
        "stress_level": "Moderate",
        "goal": "Strength",
        "username": "jane",
        "full_name": "Jane Doe",
    }
