"""The explain page as an explicit state machine.

``transition`` is pure: it takes the current state and an event and returns
the next state plus the side effects the caller must perform, in order.
The page moves between three views::

    INPUT --submit--> LOADING --completed--> RESULT --new topic--> INPUT
                         |
                         +------failed------> INPUT

Reading tools (level switching, font size, print) keep the page in RESULT.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Callable

from simple_explain.client.view_models import (
    LessonView,
    ResultView,
    create_essay_view,
    create_lesson_view,
    next_level,
)
from simple_explain.dictionaries import Dictionary, get_dictionary
from simple_explain.schemas.lesson import (
    EssayLevel,
    EssayPayload,
    LessonLevel,
    LessonPayload,
)
from simple_explain.services.history import RecentSearchEntry, to_iso, utcnow
from simple_explain.services.validation import Accepted, validate_essay, validate_lesson

FONT_SIZE_CLASSES = ("font-small", "font-medium", "font-large")
DEFAULT_FONT_SIZE_INDEX = 1


class ViewState(str, Enum):
    INPUT = "input"
    LOADING = "loading"
    RESULT = "result"


class Variant(str, Enum):
    """Which kind of content the page asks for."""

    LESSON = "lesson"
    ESSAY = "essay"


@dataclass(frozen=True)
class ControllerContext:
    lang: str
    variant: Variant = Variant.LESSON
    clock: Callable[[], datetime] = utcnow

    @property
    def dictionary(self) -> Dictionary:
        return get_dictionary(self.lang)


@dataclass(frozen=True)
class ControllerState:
    view: ViewState = ViewState.INPUT
    topic: str = ""
    essay_level: EssayLevel = EssayLevel.INTERMEDIATE
    result: ResultView | None = None
    active_level: LessonLevel = LessonLevel.BEGINNER
    font_size_index: int = DEFAULT_FONT_SIZE_INDEX
    request_id: int | None = None  # in-flight request, only set while LOADING
    request_topic: str = ""
    last_request_id: int = 0


# --- Events ---


@dataclass(frozen=True)
class TopicChanged:
    topic: str


@dataclass(frozen=True)
class EssayLevelChosen:
    level: EssayLevel


@dataclass(frozen=True)
class Submit:
    topic: str | None = None  # None submits the topic currently typed


@dataclass(frozen=True)
class GenerationCompleted:
    request_id: int
    raw: Any


@dataclass(frozen=True)
class GenerationFailed:
    request_id: int
    reason: str


@dataclass(frozen=True)
class OpenRecent:
    entry: RecentSearchEntry


@dataclass(frozen=True)
class NewTopic:
    pass


@dataclass(frozen=True)
class SelectLevel:
    level: LessonLevel


@dataclass(frozen=True)
class ContinueToNextLevel:
    pass


@dataclass(frozen=True)
class ToggleFontSize:
    pass


@dataclass(frozen=True)
class PrintRequested:
    pass


@dataclass(frozen=True)
class ExportRequested:
    entry: RecentSearchEntry
    index: int


Event = (
    TopicChanged
    | EssayLevelChosen
    | Submit
    | GenerationCompleted
    | GenerationFailed
    | OpenRecent
    | NewTopic
    | SelectLevel
    | ContinueToNextLevel
    | ToggleFontSize
    | PrintRequested
    | ExportRequested
)


# --- Effects ---


@dataclass(frozen=True)
class RequestGeneration:
    request_id: int
    topic: str
    lang: str
    variant: Variant
    level: EssayLevel | None = None


@dataclass(frozen=True)
class PersistRecent:
    topic: str
    lesson: LessonPayload | None = None
    essay: EssayPayload | None = None


@dataclass(frozen=True)
class Notify:
    message: str


@dataclass(frozen=True)
class FocusInput:
    pass


@dataclass(frozen=True)
class ScrollToTop:
    pass


@dataclass(frozen=True)
class ApplyFontSize:
    css_class: str


@dataclass(frozen=True)
class Print:
    pass


@dataclass(frozen=True)
class ExportEntry:
    entry: RecentSearchEntry
    index: int


Effect = (
    RequestGeneration
    | PersistRecent
    | Notify
    | FocusInput
    | ScrollToTop
    | ApplyFontSize
    | Print
    | ExportEntry
)


@dataclass(frozen=True)
class Transition:
    state: ControllerState
    effects: tuple[Effect, ...] = field(default_factory=tuple)


def _stay(state: ControllerState) -> Transition:
    return Transition(state)


def _start_request(
    state: ControllerState, topic: str, context: ControllerContext
) -> Transition:
    request_id = state.last_request_id + 1
    loading = replace(
        state,
        view=ViewState.LOADING,
        topic=topic,
        request_id=request_id,
        request_topic=topic,
        last_request_id=request_id,
    )
    level = state.essay_level if context.variant == Variant.ESSAY else None
    return Transition(
        loading,
        (RequestGeneration(request_id, topic, context.lang, context.variant, level),),
    )


def _show(state: ControllerState, result: ResultView, topic: str) -> ControllerState:
    return replace(
        state,
        view=ViewState.RESULT,
        topic=topic,
        result=result,
        active_level=LessonLevel.BEGINNER,
        request_id=None,
    )


def _fail(state: ControllerState, context: ControllerContext) -> Transition:
    back = replace(state, view=ViewState.INPUT, request_id=None)
    return Transition(back, (Notify(context.dictionary.error_message),))


def _on_submit(
    state: ControllerState, event: Submit, context: ControllerContext
) -> Transition:
    if state.view != ViewState.INPUT:
        return _stay(state)
    topic = (event.topic if event.topic is not None else state.topic).strip()
    if not topic:
        return Transition(state, (FocusInput(),))
    return _start_request(state, topic, context)


def _on_completed(
    state: ControllerState, event: GenerationCompleted, context: ControllerContext
) -> Transition:
    if state.view != ViewState.LOADING or event.request_id != state.request_id:
        return _stay(state)

    generated_at = to_iso(context.clock())
    topic = state.request_topic

    if context.variant == Variant.LESSON:
        lesson = validate_lesson(event.raw)
        if not isinstance(lesson, Accepted):
            return _fail(state, context)
        view = create_lesson_view(lesson.value, generated_at, context.dictionary)
        persist = PersistRecent(topic=topic, lesson=lesson.value)
    else:
        essay = validate_essay(event.raw)
        if not isinstance(essay, Accepted):
            return _fail(state, context)
        view = create_essay_view(topic, essay.value, generated_at, context.dictionary)
        persist = PersistRecent(
            topic=topic, essay=EssayPayload(text=essay.value, level=state.essay_level)
        )

    return Transition(_show(state, view, topic), (persist, ScrollToTop()))


def _on_open_recent(
    state: ControllerState, event: OpenRecent, context: ControllerContext
) -> Transition:
    if state.view != ViewState.INPUT:
        return _stay(state)

    entry = event.entry
    if entry.lesson is not None:
        view = create_lesson_view(entry.lesson, entry.searched_at, context.dictionary)
    elif entry.essay is not None:
        view = create_essay_view(
            entry.topic, entry.essay.text, entry.searched_at, context.dictionary
        )
    else:
        # Entries saved before content was cached are generated again
        return _start_request(replace(state, topic=entry.topic), entry.topic, context)

    return Transition(_show(state, view, entry.topic), (ScrollToTop(),))


def _on_result_event(
    state: ControllerState, event: Any, context: ControllerContext
) -> Transition:
    if state.view != ViewState.RESULT:
        return _stay(state)

    if isinstance(event, NewTopic):
        cleared = replace(state, view=ViewState.INPUT, topic="", result=None)
        return Transition(cleared, (FocusInput(),))

    if isinstance(event, ToggleFontSize):
        index = (state.font_size_index + 1) % len(FONT_SIZE_CLASSES)
        return Transition(
            replace(state, font_size_index=index),
            (ApplyFontSize(FONT_SIZE_CLASSES[index]),),
        )

    if isinstance(event, PrintRequested):
        return Transition(state, (Print(),))

    if not isinstance(state.result, LessonView):
        return _stay(state)

    if isinstance(event, SelectLevel):
        return _stay(replace(state, active_level=event.level))

    following = next_level(state.active_level)
    if following is None:
        return _stay(state)
    return Transition(replace(state, active_level=following), (ScrollToTop(),))


def transition(
    state: ControllerState, event: Event, context: ControllerContext
) -> Transition:
    """Compute the next state and the effects to perform for ``event``."""
    if isinstance(event, TopicChanged):
        if state.view != ViewState.INPUT:
            return _stay(state)
        return _stay(replace(state, topic=event.topic))

    if isinstance(event, EssayLevelChosen):
        if state.view != ViewState.INPUT:
            return _stay(state)
        return _stay(replace(state, essay_level=event.level))

    if isinstance(event, Submit):
        return _on_submit(state, event, context)

    if isinstance(event, GenerationCompleted):
        return _on_completed(state, event, context)

    if isinstance(event, GenerationFailed):
        if state.view != ViewState.LOADING or event.request_id != state.request_id:
            return _stay(state)
        return _fail(state, context)

    if isinstance(event, OpenRecent):
        return _on_open_recent(state, event, context)

    if isinstance(event, ExportRequested):
        if state.view != ViewState.INPUT:
            return _stay(state)
        return Transition(state, (ExportEntry(event.entry, event.index),))

    if isinstance(
        event,
        (NewTopic, SelectLevel, ContinueToNextLevel, ToggleFontSize, PrintRequested),
    ):
        return _on_result_event(state, event, context)

    raise TypeError(f"Unknown event: {type(event).__name__}")
