from __future__ import annotations

from enum import Enum
from typing import Mapping

from pydantic import Field, PositiveInt, field_validator

from persona_engine.schemas.base import EngineModel

LIKERT_MIN = 1
LIKERT_MAX = 5
NEUTRAL_ANSWER = 3

# question id -> Likert value (1-5); partial maps are allowed
AnswerSet = Mapping[int, int]


class Section(str, Enum):
    """Instrument a question belongs to."""

    BIGFIVE = "bigfive"
    RIASEC = "riasec"
    STRENGTHS = "strengths"
    ATTACHMENT = "attachment"
    SENSITIVITY = "sensitivity"
    EGOGRAM = "egogram"


class Question(EngineModel):
    id: PositiveInt
    section: Section
    trait: str = Field(min_length=1)
    text: str
    reverse: bool = False

    @field_validator("trait")
    @classmethod
    def _normalise_trait(cls, v: str) -> str:
        return v.strip().lower()
