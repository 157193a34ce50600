from typing import Any

import structlog

from simple_explain.config import settings
from simple_explain.dictionaries import get_dictionary
from simple_explain.exceptions import ConfigurationError, GenerationError
from simple_explain.prompts import lesson as lesson_prompts
from simple_explain.prompts.resolver import (
    normalize_lang,
    normalize_level,
    resolve_essay_prompt,
    resolve_lesson_prompt,
)
from simple_explain.schemas.lesson import LessonPayload
from simple_explain.services.validation import Accepted, validate_essay, validate_lesson
from simple_explain.utils.llm import LLMMessage, ResponseFormat, get_completion

logger = structlog.get_logger()


def _require_credential() -> None:
    if not settings.llm_configured:
        logger.error("Generation requested without an upstream credential")
        raise ConfigurationError(
            "OPENAI_API_KEY is not configured", setting="OPENAI_API_KEY"
        )


async def _complete(prompt: str, lang: str, **kwargs: Any) -> Any:
    """Run one completion, mapping any upstream failure to GenerationError."""
    try:
        response = await get_completion(
            ai_model=settings.LLM_MODEL,
            messages=[LLMMessage(role="user", content=prompt)],
            temperature=settings.LLM_TEMPERATURE,
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.LLM_TIMEOUT_SECONDS,
            max_attempts=settings.LLM_MAX_ATTEMPTS,
            **kwargs,
        )
    except Exception as e:
        logger.exception("Upstream generation failed", error=str(e), lang=lang)
        raise GenerationError(
            get_dictionary(lang).error_message, reason="upstream_error"
        ) from e

    logger.info("Generation completed", lang=lang, usage=response.usage)
    return response.content


async def generate_lesson(topic: str, lang: str) -> LessonPayload:
    """Generate and validate a three-level lesson for ``topic``."""
    _require_credential()
    safe_lang = normalize_lang(lang).value

    raw = await _complete(
        resolve_lesson_prompt(topic, safe_lang),
        safe_lang,
        system_prompt=lesson_prompts.system_prompt,
        max_tokens=settings.LESSON_MAX_TOKENS,
        response_format=ResponseFormat.JSON_OBJECT,
    )

    result = validate_lesson(raw)
    if not isinstance(result, Accepted):
        logger.warning("Rejected lesson from model", topic=topic, reason=result.reason)
        raise GenerationError(
            get_dictionary(safe_lang).error_message, reason="invalid_shape"
        )
    return result.value


async def generate_essay(topic: str, lang: str, level: Any = None) -> str:
    """Generate a plain-text essay for ``topic`` at the requested level."""
    _require_credential()
    safe_lang = normalize_lang(lang).value
    selected_level = normalize_level(level)

    raw = await _complete(
        resolve_essay_prompt(topic, safe_lang, selected_level),
        safe_lang,
        max_tokens=settings.ESSAY_MAX_TOKENS,
        response_format=ResponseFormat.TEXT,
    )

    result = validate_essay(raw)
    if not isinstance(result, Accepted):
        logger.warning("Rejected essay from model", topic=topic, reason=result.reason)
        raise GenerationError(
            get_dictionary(safe_lang).error_message, reason="invalid_shape"
        )
    return result.value
