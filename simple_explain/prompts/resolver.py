"""Fill the localized prompt templates."""

from typing import Any

from simple_explain.prompts import essay, lesson
from simple_explain.schemas.lesson import EssayLevel, Lang


def normalize_lang(value: Any) -> Lang:
    """Anything other than Vietnamese falls back to English."""
    return Lang.VI if value == Lang.VI.value else Lang.EN


def normalize_level(value: Any) -> EssayLevel:
    """Map a requested level onto a known one, defaulting to intermediate."""
    if isinstance(value, str):
        try:
            return EssayLevel(value)
        except ValueError:
            pass
    return EssayLevel.INTERMEDIATE


def resolve_lesson_prompt(topic: str, lang: Any) -> str:
    """Prompt asking for the three-level JSON lesson about ``topic``."""
    template = lesson.user_prompts[normalize_lang(lang).value]
    return template.format(topic=topic, schema_version=lesson.SCHEMA_VERSION)


def resolve_essay_prompt(topic: str, lang: Any, level: Any = None) -> str:
    """Prompt asking for a plain-text essay about ``topic`` at ``level``."""
    safe_lang = normalize_lang(lang).value
    instruction = essay.level_instructions[safe_lang][normalize_level(level)]
    return essay.user_prompts[safe_lang].format(
        topic=topic, level_instruction=instruction
    )
