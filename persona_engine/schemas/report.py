"""Synthesised advice sections and the top-level ``Report``."""

from __future__ import annotations

from persona_engine.schemas.base import EngineModel
from persona_engine.schemas.profile import (
    AttachmentProfile,
    EgoStateProfile,
    InterestProfile,
    SensitivityProfile,
    TraitProfile,
    VirtueProfile,
)


class CareerAdvice(EngineModel):
    careers: tuple[str, ...]
    advice: tuple[str, ...]
    work_style: tuple[str, ...]


class RelationshipAdvice(EngineModel):
    style: str
    style_label: str
    advice: tuple[str, ...]


class Resilience(EngineModel):
    level: str
    description: str
    score: int


class StressAdvice(EngineModel):
    stress_factors: tuple[str, ...]
    coping_strategies: tuple[str, ...]
    resilience: Resilience


class Summary(EngineModel):
    type_name: str
    type_words: tuple[str, ...]
    summary: str
    keywords: tuple[str, ...]


class Report(EngineModel):
    """Complete analysis produced by one ``analyze`` call."""

    trait_profile: TraitProfile
    interest_profile: InterestProfile
    virtue_profile: VirtueProfile
    attachment_profile: AttachmentProfile
    sensitivity_profile: SensitivityProfile
    ego_state_profile: EgoStateProfile
    career_advice: CareerAdvice
    relationship_advice: RelationshipAdvice
    stress_advice: StressAdvice
    summary: Summary
