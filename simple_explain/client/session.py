"""Runs the explain page state machine and performs its side effects."""

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Protocol

from simple_explain.client import controller
from simple_explain.client.controller import (
    ApplyFontSize,
    ControllerContext,
    ControllerState,
    Effect,
    Event,
    ExportEntry,
    FocusInput,
    FONT_SIZE_CLASSES,
    GenerationCompleted,
    GenerationFailed,
    Notify,
    PersistRecent,
    Print,
    RequestGeneration,
    ScrollToTop,
    Variant,
)
from simple_explain.services.export import FileSaver, export_entry
from simple_explain.services.history import RecentHistoryCache, RecentSearchEntry, utcnow
from simple_explain.utils.logger import get_logger

logger = get_logger(__name__)


class GenerationApi(Protocol):
    async def generate_lesson(self, topic: str, lang: str) -> Any: ...

    async def generate_essay(self, topic: str, lang: str, level: str) -> Any: ...


class ExplainSession:
    """One user's page: current view, recent searches and reading preferences.

    Events go through :func:`controller.transition`; the resulting state is
    applied first and the effects are then performed in order, so a result is
    on screen before it is written to the history.
    """

    def __init__(
        self,
        lang: str,
        api: GenerationApi,
        history: RecentHistoryCache,
        saver: FileSaver | None = None,
        notifier: Callable[[str], None] | None = None,
        variant: Variant = Variant.LESSON,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.context = ControllerContext(lang=lang, variant=variant, clock=clock)
        self.api = api
        self.history = history
        self.saver = saver
        self.notifier = notifier
        self.state = ControllerState()
        self.recent: list[RecentSearchEntry] = history.lookup(lang)
        self.notifications: list[str] = []
        self.exported: list[Path] = []
        self.font_size_class = FONT_SIZE_CLASSES[self.state.font_size_index]
        self.focus_requests = 0
        self.print_requests = 0
        self.generation_requests = 0

    @property
    def lang(self) -> str:
        return self.context.lang

    async def dispatch(self, event: Event) -> ControllerState:
        result = controller.transition(self.state, event, self.context)
        self.state = result.state
        for effect in result.effects:
            await self._perform(effect)
        return self.state

    async def submit(self, topic: str | None = None) -> ControllerState:
        return await self.dispatch(controller.Submit(topic))

    async def open_recent(self, index: int) -> ControllerState:
        return await self.dispatch(controller.OpenRecent(self.recent[index]))

    async def export_recent(self, index: int) -> ControllerState:
        return await self.dispatch(
            controller.ExportRequested(self.recent[index], index)
        )

    async def _perform(self, effect: Effect) -> None:
        if isinstance(effect, RequestGeneration):
            await self._request_generation(effect)
        elif isinstance(effect, PersistRecent):
            self.recent = self.history.upsert(
                self.lang, effect.topic, lesson=effect.lesson, essay=effect.essay
            )
        elif isinstance(effect, Notify):
            self.notifications.append(effect.message)
            if self.notifier:
                self.notifier(effect.message)
        elif isinstance(effect, ExportEntry):
            self._export(effect)
        elif isinstance(effect, ApplyFontSize):
            self.font_size_class = effect.css_class
        elif isinstance(effect, FocusInput):
            self.focus_requests += 1
        elif isinstance(effect, Print):
            self.print_requests += 1
        elif isinstance(effect, ScrollToTop):
            pass

    async def _request_generation(self, effect: RequestGeneration) -> None:
        self.generation_requests += 1
        try:
            if effect.variant == Variant.ESSAY:
                level = effect.level.value if effect.level else "intermediate"
                raw = await self.api.generate_essay(effect.topic, effect.lang, level)
            else:
                raw = await self.api.generate_lesson(effect.topic, effect.lang)
        except Exception as e:
            logger.warning(
                "Generation failed", topic=effect.topic, lang=effect.lang, error=str(e)
            )
            await self.dispatch(GenerationFailed(effect.request_id, str(e)))
            return
        await self.dispatch(GenerationCompleted(effect.request_id, raw))

    def _export(self, effect: ExportEntry) -> None:
        if self.saver is None:
            logger.warning("Export requested without a file saver", index=effect.index)
            return
        path = export_entry(effect.entry, effect.index, self.lang, self.saver)
        self.exported.append(path)
