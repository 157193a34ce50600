"""Recent-searches history, kept per language in a single storage record.

The whole store is read and written as one JSON value under
``RECENT_SEARCHES_STORAGE_KEY``. Reads fall back to the legacy key when the
current one has never been written; the legacy key is never written back.
The cache is best effort: unreadable data degrades to an empty store and
failed writes are logged and dropped.
"""

import json
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from simple_explain.schemas.lesson import EssayPayload, LessonPayload
from simple_explain.services.validation import Accepted, validate_essay, validate_lesson
from simple_explain.utils.logger import get_logger
from simple_explain.utils.storage import KeyValueStorage

logger = get_logger(__name__)

RECENT_SEARCHES_STORAGE_KEY = "simple-explain-recent-searches-v2"
LEGACY_STORAGE_KEY = "simple-explain-recent-searches-v1"
MAX_RECENT_SEARCHES = 10


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """Format a datetime the way browsers do: UTC, milliseconds, ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (
        moment.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def parse_iso(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning None for anything unusable."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class RecentSearchEntry(BaseModel):
    """One remembered query, optionally with the content generated for it."""

    model_config = ConfigDict(populate_by_name=True)

    topic: str
    searched_at: str = Field(..., alias="searchedAt")
    lesson: LessonPayload | None = None
    essay: EssayPayload | None = None

    @property
    def has_payload(self) -> bool:
        return self.lesson is not None or self.essay is not None

    def to_storage(self) -> dict[str, Any]:
        data: dict[str, Any] = {"topic": self.topic, "searchedAt": self.searched_at}
        if self.lesson is not None:
            data["lesson"] = self.lesson.model_dump(mode="json")
        if self.essay is not None:
            data["essay"] = self.essay.model_dump(mode="json")
        return data


RecentSearchStore = dict[str, list[RecentSearchEntry]]


def _normalize_essay(value: Any) -> EssayPayload | None:
    if not isinstance(value, Mapping):
        return None
    result = validate_essay(value.get("text"))
    if not isinstance(result, Accepted):
        return None
    try:
        return EssayPayload(text=result.value, level=value.get("level", "intermediate"))
    except ValueError:
        return EssayPayload(text=result.value)


def normalize_entry(value: Any, now: datetime) -> RecentSearchEntry | None:
    """Rebuild one stored entry, or return None when it cannot be salvaged.

    Entries without a usable topic are dropped. A bad timestamp is replaced
    with ``now``; a bad cached payload is discarded but the entry is kept.
    """
    if not isinstance(value, Mapping):
        return None

    topic = value.get("topic")
    if not isinstance(topic, str) or not topic.strip():
        return None

    searched_at = value.get("searchedAt")
    if parse_iso(searched_at) is None:
        searched_at = to_iso(now)

    lesson_result = validate_lesson(value.get("lesson"))
    lesson = lesson_result.value if isinstance(lesson_result, Accepted) else None

    return RecentSearchEntry(
        topic=topic.strip(),
        searched_at=searched_at,
        lesson=lesson,
        essay=_normalize_essay(value.get("essay")),
    )


class RecentHistoryCache:
    """Bounded, most-recent-first search history for each language."""

    def __init__(
        self,
        storage: KeyValueStorage,
        clock: Callable[[], datetime] = utcnow,
        max_entries: int = MAX_RECENT_SEARCHES,
    ):
        self.storage = storage
        self.clock = clock
        self.max_entries = max_entries

    def _read_raw(self) -> bytes | None:
        raw = self.storage.read(RECENT_SEARCHES_STORAGE_KEY)
        if raw is None:
            raw = self.storage.read(LEGACY_STORAGE_KEY)
        return raw

    def read(self) -> RecentSearchStore:
        """Load and sanitize the whole store. Never raises."""
        try:
            raw = self._read_raw()
            if not raw:
                return {}
            parsed = json.loads(raw)
        except Exception as e:
            logger.warning("Discarding unreadable recent searches", error=str(e))
            return {}

        if not isinstance(parsed, dict):
            logger.warning(
                "Discarding recent searches with unexpected shape",
                type=type(parsed).__name__,
            )
            return {}

        now = self.clock()
        store: RecentSearchStore = {}
        for language, entries in parsed.items():
            if not isinstance(entries, list):
                continue
            normalized = [self._salvage(entry, now) for entry in entries]
            store[language] = [e for e in normalized if e is not None][
                : self.max_entries
            ]
        return store

    def _salvage(self, value: Any, now: datetime) -> RecentSearchEntry | None:
        try:
            return normalize_entry(value, now)
        except Exception as e:
            logger.warning("Dropping unreadable recent search", error=type(e).__name__)
            return None

    def write(self, store: RecentSearchStore) -> bool:
        """Persist the whole store. Failures are logged and reported as False."""
        try:
            serialized = json.dumps(
                {
                    language: [entry.to_storage() for entry in entries]
                    for language, entries in store.items()
                },
                ensure_ascii=False,
            ).encode("utf-8")
            written = self.storage.write(RECENT_SEARCHES_STORAGE_KEY, serialized)
        except Exception as e:
            logger.warning("Failed to persist recent searches", error=str(e))
            return False

        if not written:
            logger.warning("Recent searches were not persisted")
        return written

    def lookup(self, language: str) -> list[RecentSearchEntry]:
        """Return the entries for ``language``, most recent first."""
        return self.read().get(language, [])

    def upsert(
        self,
        language: str,
        topic: str,
        lesson: LessonPayload | None = None,
        essay: EssayPayload | None = None,
    ) -> list[RecentSearchEntry]:
        """Record a search, moving an existing entry for the same topic to the front.

        Topics are compared case-insensitively. The list is capped at
        ``max_entries`` and persisted; the returned list reflects the update
        even when persisting failed.
        """
        normalized_topic = topic.strip()
        store = self.read()
        current = store.get(language, [])
        if not normalized_topic:
            return current

        lowered = normalized_topic.lower()
        deduplicated = [e for e in current if e.topic.lower() != lowered]

        entry = RecentSearchEntry(
            topic=normalized_topic,
            searched_at=to_iso(self.clock()),
            lesson=lesson,
            essay=essay,
        )
        updated = [entry, *deduplicated][: self.max_entries]

        store[language] = updated
        self.write(store)
        logger.info(
            "Recorded recent search",
            language=language,
            topic=normalized_topic,
            cached=entry.has_payload,
            count=len(updated),
        )
        return updated
