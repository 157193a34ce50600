"""Display-ready representations of generated lessons and essays."""

import math
import re
from dataclasses import dataclass
from datetime import tzinfo

from simple_explain.dictionaries import Dictionary
from simple_explain.schemas.lesson import LEVEL_ORDER, LessonLevel, LessonPayload
from simple_explain.services.history import parse_iso

WORDS_PER_MINUTE = 200

_BLANK_LINE = re.compile(r"\n\s*\n")


@dataclass(frozen=True)
class LessonViewLevel:
    key: LessonLevel
    label: str
    word_count: int
    paragraphs: tuple[str, ...]


@dataclass(frozen=True)
class LessonView:
    title: str
    generated_date: str
    total_words: int
    schema_version: str
    levels: tuple[LessonViewLevel, ...]

    def level(self, key: LessonLevel) -> LessonViewLevel:
        for level in self.levels:
            if level.key == key:
                return level
        return self.levels[0]


@dataclass(frozen=True)
class EssayView:
    title: str
    generated_date: str
    word_count: int
    reading_minutes: int
    paragraphs: tuple[str, ...]


ResultView = LessonView | EssayView


def to_display_paragraphs(value: str) -> list[str]:
    """Split text on blank lines, accepting literal ``\\n`` escapes from the model."""
    normalized = value.replace("\\n", "\n").strip()
    return [p.strip() for p in _BLANK_LINE.split(normalized) if p.strip()]


def count_words(value: str) -> int:
    return len(value.split())


def reading_minutes(words: int) -> int:
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def next_level(level: LessonLevel) -> LessonLevel | None:
    """The level after ``level``, or None when it is the last one."""
    index = LEVEL_ORDER.index(level)
    return LEVEL_ORDER[index + 1] if index + 1 < len(LEVEL_ORDER) else None


def level_label(dictionary: Dictionary, level: LessonLevel) -> str:
    return {
        LessonLevel.BEGINNER: dictionary.lesson.beginner_label,
        LessonLevel.INTERMEDIATE: dictionary.lesson.intermediate_label,
        LessonLevel.ADVANCE: dictionary.lesson.advance_label,
    }[level]


def format_date(iso_value: str, dictionary: Dictionary, tz: tzinfo | None = None) -> str:
    """Long localized date, e.g. ``March 5, 2025`` or ``5 tháng 3, 2025``.

    The moment is shown in ``tz``, or in the local time zone when ``tz`` is None.
    """
    moment = parse_iso(iso_value)
    if moment is None:
        return ""
    moment = moment.astimezone(tz)
    month = dictionary.month_names[moment.month - 1]
    if dictionary.date_locale == "en-US":
        return f"{month} {moment.day}, {moment.year}"
    return f"{moment.day} {month}, {moment.year}"


def format_datetime(
    iso_value: str, dictionary: Dictionary, tz: tzinfo | None = None
) -> str:
    """Short localized date and time for the recent searches list."""
    moment = parse_iso(iso_value)
    if moment is None:
        return ""
    moment = moment.astimezone(tz)
    if dictionary.date_locale == "en-US":
        hour = moment.hour % 12 or 12
        suffix = "AM" if moment.hour < 12 else "PM"
        month = dictionary.month_names[moment.month - 1][:3]
        return f"{month} {moment.day}, {moment.year}, {hour}:{moment.minute:02d} {suffix}"
    return f"{moment.hour:02d}:{moment.minute:02d} {moment.day}/{moment.month}/{moment.year}"


def create_lesson_view(
    lesson: LessonPayload,
    generated_at: str,
    dictionary: Dictionary,
    tz: tzinfo | None = None,
) -> LessonView:
    levels = tuple(
        LessonViewLevel(
            key=key,
            label=level_label(dictionary, key),
            word_count=count_words(lesson.text_for(key)),
            paragraphs=tuple(to_display_paragraphs(lesson.text_for(key))),
        )
        for key in LEVEL_ORDER
    )
    return LessonView(
        title=lesson.topic,
        generated_date=format_date(generated_at, dictionary, tz),
        total_words=sum(level.word_count for level in levels),
        schema_version=lesson.schema_version,
        levels=levels,
    )


def create_essay_view(
    topic: str,
    essay: str,
    generated_at: str,
    dictionary: Dictionary,
    tz: tzinfo | None = None,
) -> EssayView:
    words = count_words(essay)
    return EssayView(
        title=f"{dictionary.article.title_prefix} {topic}",
        generated_date=format_date(generated_at, dictionary, tz),
        word_count=words,
        reading_minutes=reading_minutes(words),
        paragraphs=tuple(to_display_paragraphs(essay)),
    )
