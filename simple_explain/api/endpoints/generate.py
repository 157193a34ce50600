import structlog
from fastapi import APIRouter, status

from simple_explain.exceptions import ValidationError
from simple_explain.schemas.generate import EssayResponse, GenerateRequest, LessonResponse
from simple_explain.services import generation as generation_service

router = APIRouter()
logger = structlog.get_logger()


def _require_topic_and_lang(request: GenerateRequest) -> tuple[str, str]:
    topic = (request.topic or "").strip()
    lang = (request.lang or "").strip()
    if not topic or not lang:
        raise ValidationError(
            "Missing topic or lang", field="topic" if not topic else "lang"
        )
    return topic, lang


@router.post(
    "",
    response_model=LessonResponse,
    status_code=status.HTTP_200_OK,
    description="Generate a validated three-level lesson for a topic.",
)
async def generate_lesson(request: GenerateRequest) -> LessonResponse:
    """
    Asks the language model for a beginner / intermediate / advanced lesson.
    Only lessons that pass validation are ever returned.
    """
    topic, lang = _require_topic_and_lang(request)
    logger.info("Generating lesson", topic=topic, lang=lang)
    lesson = await generation_service.generate_lesson(topic, lang)
    return LessonResponse(lesson=lesson)


@router.post(
    "/essay",
    response_model=EssayResponse,
    status_code=status.HTTP_200_OK,
    description="Generate a plain-text essay for a topic at one level.",
)
async def generate_essay(request: GenerateRequest) -> EssayResponse:
    """
    Asks the language model for a ~500 word essay. Unknown levels fall back
    to intermediate.
    """
    topic, lang = _require_topic_and_lang(request)
    logger.info("Generating essay", topic=topic, lang=lang, level=request.level)
    essay = await generation_service.generate_essay(topic, lang, request.level)
    return EssayResponse(essay=essay)
