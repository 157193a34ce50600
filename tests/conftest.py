import time
from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from simple_explain.config import settings
from simple_explain.main import app
from simple_explain.utils.llm import LLMResponse
from simple_explain.utils.storage import InMemoryStorage

FIXED_NOW = datetime(2025, 3, 5, 14, 30, 0, tzinfo=timezone.utc)


def make_lesson(
    topic: str = "Photosynthesis",
    beginner: str = "Plants make food from light.\n\nThey use leaves.",
    intermediate: str = "Chlorophyll absorbs light energy.",
    advance: str = "The Calvin cycle fixes carbon dioxide into sugars.",
    schema_version: str = "1.0",
) -> dict[str, Any]:
    return {
        "schema_version": schema_version,
        "topic": topic,
        "lesson": {
            "beginner": beginner,
            "intermediate": intermediate,
            "advance": advance,
        },
    }


def set_local_timezone(monkeypatch, value: str) -> None:
    monkeypatch.setenv("TZ", value)
    time.tzset()


@pytest.fixture(autouse=True)
def utc_local_time(monkeypatch):
    """Render dates as if the machine ran on UTC."""
    set_local_timezone(monkeypatch, "UTC")
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def lesson_data() -> dict[str, Any]:
    return make_lesson()


@pytest.fixture
def lesson_factory():
    return make_lesson


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def configured(monkeypatch):
    """Pretend an upstream credential is configured."""
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "test-key")


class FakeCompletion:
    """Stands in for ``get_completion`` and records the prompts it received."""

    def __init__(self):
        self.content: Any = make_lesson()
        self.error: Exception | None = None
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, **kwargs: Any) -> LLMResponse:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, usage={"total_tokens": 42})


@pytest.fixture
def fake_completion(monkeypatch) -> FakeCompletion:
    fake = FakeCompletion()
    monkeypatch.setattr("simple_explain.services.generation.get_completion", fake)
    return fake


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
