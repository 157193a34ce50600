import pytest

from simple_explain.prompts.resolver import (
    normalize_lang,
    normalize_level,
    resolve_essay_prompt,
    resolve_lesson_prompt,
)
from simple_explain.schemas.lesson import EssayLevel, Lang


@pytest.mark.parametrize(
    "value, expected",
    [("vi", Lang.VI), ("en", Lang.EN), ("fr", Lang.EN), ("VI", Lang.EN), (None, Lang.EN)],
)
def test_normalize_lang(value, expected):
    assert normalize_lang(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("beginner", EssayLevel.BEGINNER),
        ("advanced", EssayLevel.ADVANCED),
        ("expert", EssayLevel.INTERMEDIATE),
        (None, EssayLevel.INTERMEDIATE),
        (3, EssayLevel.INTERMEDIATE),
    ],
)
def test_normalize_level(value, expected):
    assert normalize_level(value) == expected


def test_lesson_prompt_embeds_topic_and_schema_version():
    prompt = resolve_lesson_prompt("Black holes", "en")

    assert '"Black holes"' in prompt
    assert '"schema_version": "1.0"' in prompt
    assert "{topic}" not in prompt


def test_lesson_prompt_for_unknown_language_is_english():
    assert resolve_lesson_prompt("Gravity", "de") == resolve_lesson_prompt("Gravity", "en")


def test_vietnamese_lesson_prompt():
    assert "tiếng Việt" in resolve_lesson_prompt("Trọng lực", "vi")


def test_essay_prompt_includes_level_instruction():
    beginner = resolve_essay_prompt("Gravity", "en", "beginner")
    advanced = resolve_essay_prompt("Gravity", "en", "advanced")

    assert "intuitive examples" in beginner
    assert "deeper mechanisms" in advanced
    assert resolve_essay_prompt("Gravity", "en") == resolve_essay_prompt(
        "Gravity", "en", "intermediate"
    )
