"""End-to-end flows through ExplainSession with a fake generation API."""

import json

import httpx
import pytest

from conftest import FIXED_NOW
from simple_explain.client.api_client import GenerateApiClient
from simple_explain.client.controller import (
    ContinueToNextLevel,
    NewTopic,
    ToggleFontSize,
    Variant,
    ViewState,
)
from simple_explain.client.session import ExplainSession
from simple_explain.client.view_models import LessonView
from simple_explain.exceptions import GenerationRequestError
from simple_explain.main import app
from simple_explain.schemas.lesson import LessonLevel
from simple_explain.services.export import DirectoryFileSaver
from simple_explain.services.history import (
    RECENT_SEARCHES_STORAGE_KEY,
    RecentHistoryCache,
)


class FakeApi:
    def __init__(self, lesson=None, essay=None, error=None):
        self.lesson = lesson
        self.essay = essay
        self.error = error
        self.calls = []

    async def generate_lesson(self, topic, lang):
        self.calls.append(("lesson", topic, lang))
        if self.error:
            raise self.error
        return self.lesson

    async def generate_essay(self, topic, lang, level):
        self.calls.append(("essay", topic, lang, level))
        if self.error:
            raise self.error
        return self.essay


@pytest.fixture
def history(storage, fixed_clock):
    return RecentHistoryCache(storage, clock=fixed_clock)


def stored(storage):
    raw = storage.read(RECENT_SEARCHES_STORAGE_KEY)
    return None if raw is None else json.loads(raw)


@pytest.mark.asyncio
async def test_submit_shows_lesson_and_records_search(history, storage, fixed_clock, lesson_factory):
    api = FakeApi(lesson=lesson_factory(topic="Photosynthesis"))
    session = ExplainSession("en", api, history, clock=fixed_clock)

    state = await session.submit("Photosynthesis")

    assert state.view == ViewState.RESULT
    assert isinstance(state.result, LessonView)
    assert api.calls == [("lesson", "Photosynthesis", "en")]
    assert [entry.topic for entry in session.recent] == ["Photosynthesis"]
    assert session.recent[0].searched_at == "2025-03-05T14:30:00.000Z"
    assert stored(storage)["en"][0]["topic"] == "Photosynthesis"


@pytest.mark.asyncio
async def test_resubmitting_in_other_case_moves_entry_to_front(history, lesson_factory):
    api = FakeApi(lesson=lesson_factory())
    session = ExplainSession("en", api, history)

    for topic in ["Photosynthesis", "Gravity", "photosynthesis"]:
        await session.submit(topic)
        await session.dispatch(NewTopic())

    assert [entry.topic for entry in session.recent] == ["photosynthesis", "Gravity"]


@pytest.mark.asyncio
async def test_blank_submit_makes_no_request(history, storage):
    api = FakeApi()
    session = ExplainSession("en", api, history)

    state = await session.submit("   ")

    assert state.view == ViewState.INPUT
    assert api.calls == []
    assert session.generation_requests == 0
    assert session.focus_requests == 1
    assert stored(storage) is None


@pytest.mark.asyncio
async def test_rejected_lesson_notifies_and_leaves_cache_unchanged(history, storage, lesson_factory):
    api = FakeApi(lesson=lesson_factory(topic="X", beginner="", intermediate="ok", advance="ok"))
    notified = []
    session = ExplainSession("en", api, history, notifier=notified.append)

    state = await session.submit("X")

    assert state.view == ViewState.INPUT
    assert session.notifications == ["Failed to generate the explanation. Please try again."]
    assert notified == session.notifications
    assert session.recent == []
    assert stored(storage) is None


@pytest.mark.asyncio
async def test_request_error_notifies(history):
    api = FakeApi(error=GenerationRequestError("API request failed with status 500", 500))
    session = ExplainSession("vi", api, history)

    state = await session.submit("Trọng lực")

    assert state.view == ViewState.INPUT
    assert session.notifications == ["Không thể tạo giải thích. Vui lòng thử lại."]


@pytest.mark.asyncio
async def test_reopening_cached_entry_makes_no_request(history, lesson_factory):
    gravity = lesson_factory(
        topic="Gravity",
        beginner="Things fall down.",
        intermediate="Mass attracts mass.",
        advance="Spacetime curvature guides motion.",
    )
    first = ExplainSession("en", FakeApi(lesson=gravity), history)
    await first.submit("Gravity")

    api = FakeApi()
    session = ExplainSession("en", api, history)
    state = await session.open_recent(0)

    assert api.calls == []
    assert state.view == ViewState.RESULT
    assert state.result.title == "Gravity"
    beginner = state.result.level(LessonLevel.BEGINNER)
    assert beginner.paragraphs == ("Things fall down.",)
    assert beginner.word_count == 3
    assert state.result.total_words == 3 + 3 + 4


@pytest.mark.asyncio
async def test_reopening_entry_without_payload_generates(history, lesson_factory):
    history.upsert("en", "Gravity")
    api = FakeApi(lesson=lesson_factory(topic="Gravity"))
    session = ExplainSession("en", api, history)

    state = await session.open_recent(0)

    assert api.calls == [("lesson", "Gravity", "en")]
    assert state.view == ViewState.RESULT
    assert session.recent[0].lesson is not None


@pytest.mark.asyncio
async def test_histories_are_kept_per_language(history, lesson_factory):
    await ExplainSession("en", FakeApi(lesson=lesson_factory()), history).submit("Gravity")

    session = ExplainSession("vi", FakeApi(), history)

    assert session.recent == []
    assert [e.topic for e in history.lookup("en")] == ["Gravity"]


@pytest.mark.asyncio
async def test_essay_session(history, storage):
    api = FakeApi(essay="Gravity pulls.\n\nIt bends light.")
    session = ExplainSession("en", api, history, variant=Variant.ESSAY)

    state = await session.submit("Gravity")

    assert api.calls == [("essay", "Gravity", "en", "intermediate")]
    assert state.result.paragraphs == ("Gravity pulls.", "It bends light.")
    assert stored(storage)["en"][0]["essay"] == {
        "text": "Gravity pulls.\n\nIt bends light.",
        "level": "intermediate",
    }


@pytest.mark.asyncio
async def test_reading_tools(history, lesson_factory):
    session = ExplainSession("en", FakeApi(lesson=lesson_factory()), history)
    await session.submit("Photosynthesis")

    await session.dispatch(ToggleFontSize())
    await session.dispatch(ContinueToNextLevel())

    assert session.font_size_class == "font-large"
    assert session.state.active_level == LessonLevel.INTERMEDIATE


@pytest.mark.asyncio
async def test_export_recent_writes_file(history, lesson_factory, tmp_path):
    session = ExplainSession(
        "en", FakeApi(lesson=lesson_factory()), history, saver=DirectoryFileSaver(tmp_path)
    )
    await session.submit("Photosynthesis")
    await session.dispatch(NewTopic())

    await session.export_recent(0)

    (path,) = session.exported
    assert path.name == "simple-explain-en-01-2025-03-05-Photosynthesis.json"
    assert json.loads(path.read_text())["topic"] == "Photosynthesis"


@pytest.mark.asyncio
async def test_session_against_the_application(
    history, storage, configured, fake_completion, fixed_clock
):
    api = GenerateApiClient("http://testserver", transport=httpx.ASGITransport(app=app))
    session = ExplainSession("en", api, history, clock=fixed_clock)

    state = await session.submit("Photosynthesis")

    assert state.view == ViewState.RESULT
    assert stored(storage)["en"][0]["searchedAt"] == FIXED_NOW.isoformat(
        timespec="milliseconds"
    ).replace("+00:00", "Z")
