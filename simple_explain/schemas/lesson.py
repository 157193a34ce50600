from enum import Enum

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    field_validator,
)


class Lang(str, Enum):
    """Supported interface and prompt languages."""

    EN = "en"
    VI = "vi"


class EssayLevel(str, Enum):
    """Explanation levels offered by the freeform essay variant."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class LessonLevel(str, Enum):
    """Sections of a structured lesson, in reading order."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCE = "advance"


LEVEL_ORDER: tuple[LessonLevel, ...] = (
    LessonLevel.BEGINNER,
    LessonLevel.INTERMEDIATE,
    LessonLevel.ADVANCE,
)


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must contain at least one non-whitespace character")
    return value


class LessonLevels(BaseModel):
    """The three explanation texts of a lesson."""

    model_config = ConfigDict(extra="ignore")

    beginner: StrictStr = Field(..., description="Explanation for newcomers")
    intermediate: StrictStr = Field(..., description="Balanced explanation")
    advance: StrictStr = Field(..., description="In-depth explanation")

    @field_validator("beginner", "intermediate", "advance")
    @classmethod
    def require_text(cls, value: str) -> str:
        return _require_text(value)


class LessonPayload(BaseModel):
    """A structured three-level lesson produced by the language model."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    schema_version: StrictStr = Field(
        ...,
        validation_alias=AliasChoices("schema_version", "schemaVersion"),
        description="Version of the lesson JSON contract",
    )
    topic: StrictStr = Field(..., description="Topic the lesson explains")
    lesson: LessonLevels

    @field_validator("schema_version", "topic")
    @classmethod
    def require_text(cls, value: str) -> str:
        return _require_text(value)

    def text_for(self, level: LessonLevel) -> str:
        return getattr(self.lesson, level.value)


class EssayPayload(BaseModel):
    """A cached freeform essay together with the level it was written for."""

    model_config = ConfigDict(extra="ignore")

    text: StrictStr
    level: EssayLevel = EssayLevel.INTERMEDIATE
