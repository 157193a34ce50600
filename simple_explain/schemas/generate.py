from typing import Optional

from pydantic import BaseModel, Field

from simple_explain.schemas.lesson import LessonPayload


class GenerateRequest(BaseModel):
    """Body of the generation endpoints.

    Fields are optional at the schema level so that a missing topic or
    language is answered with a 400 rather than a schema error.
    """

    topic: Optional[str] = Field(None, description="Subject to explain")
    lang: Optional[str] = Field(None, description="Language code, 'en' or 'vi'")
    level: Optional[str] = Field(
        None,
        description="Essay level: beginner, intermediate or advanced",
        examples=["intermediate"],
    )


class LessonResponse(BaseModel):
    lesson: LessonPayload


class EssayResponse(BaseModel):
    essay: str
