"""Per-instrument profile models returned by the profilers."""

from __future__ import annotations

from persona_engine.schemas.base import EngineModel, ScoreMap, TextMap


class RankedTrait(EngineModel):
    trait: str
    score: int


class TraitProfile(EngineModel):
    """Big Five scores, including the derived ``stability`` score."""

    scores: ScoreMap
    dominant: tuple[str, ...]
    labels: TextMap
    descriptions: TextMap


class InterestProfile(EngineModel):
    scores: ScoreMap
    ranking: tuple[RankedTrait, ...]
    top3: tuple[RankedTrait, ...]
    holland_code: str
    labels: TextMap
    descriptions: TextMap
    careers: tuple[str, ...]


class VirtueProfile(EngineModel):
    scores: ScoreMap
    ranking: tuple[RankedTrait, ...]
    top3: tuple[RankedTrait, ...]
    labels: TextMap
    descriptions: TextMap


class AttachmentProfile(EngineModel):
    scores: ScoreMap
    dominant: str
    labels: TextMap
    descriptions: TextMap
    advice: tuple[str, ...]


class SensitivityProfile(EngineModel):
    scores: ScoreMap
    overall: int
    level: str
    description: str
    labels: TextMap
    tips: tuple[str, ...]


class EgoStatePattern(EngineModel):
    key: str
    name: str
    description: str


class EgoStateProfile(EngineModel):
    scores: ScoreMap
    dominant: str
    pattern: EgoStatePattern
    labels: TextMap
    short_labels: TextMap
    descriptions: TextMap
    advice: tuple[str, ...]
