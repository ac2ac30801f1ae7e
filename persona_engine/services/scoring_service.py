"""
Persona Engine — Likert scoring primitives.

Every instrument is scored the same way:

  1. Select the questions of one ``(section, trait)`` group
  2. Resolve each answer (missing -> neutral 3), reverse-coding as ``6 - v``
  3. Sum the group and map ``[n, 5n]`` linearly onto ``[0, 100]``::

         score = round(((total - n) / (n * 4)) * 100)

Rounding is half-up so that a 2-item group summing to 3 scores 13, not 12.
"""

from __future__ import annotations

import math
from typing import Iterable, Mapping, Sequence

import structlog

from persona_engine.schemas.question import (
    LIKERT_MAX,
    LIKERT_MIN,
    NEUTRAL_ANSWER,
    AnswerSet,
    Question,
    Section,
)
from persona_engine.schemas.profile import RankedTrait
from persona_engine.utils.exceptions import EmptyTraitGroupError

logger = structlog.get_logger("persona_engine.scoring_service")

_SCALE_SPAN = LIKERT_MAX - LIKERT_MIN  # 4
_REVERSE_PIVOT = LIKERT_MAX + LIKERT_MIN  # 6


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up."""
    return int(math.floor(value + 0.5))


def resolve_answer(question: Question, answers: AnswerSet) -> int:
    """Answer value for ``question``, defaulted and reverse-coded."""
    value = answers.get(question.id) or NEUTRAL_ANSWER
    if question.reverse:
        value = _REVERSE_PIVOT - value
    return value


def normalise_group_total(total: int, group_size: int) -> int:
    """Map a group sum in ``[n, 5n]`` onto ``[0, 100]``."""
    return round_half_up(((total - group_size * LIKERT_MIN) / (group_size * _SCALE_SPAN)) * 100)


def compute_trait_scores(
    questions: Sequence[Question],
    section: Section | str,
    traits: Iterable[str],
    answers: AnswerSet,
) -> dict[str, int]:
    """Score every trait of one instrument.

    Parameters
    ----------
    questions:
        The full question bank; only ``section`` questions are used.
    section:
        Instrument to score.
    traits:
        Trait keys in canonical order.  The returned dict preserves it.
    answers:
        Question id -> Likert value.

    Returns
    -------
    dict[str, int]
        Trait -> 0-100 score.

    Raises
    ------
    EmptyTraitGroupError
        If any requested trait has no questions in ``section``.
    """
    section = Section(section)
    in_section = [q for q in questions if q.section == section]

    scores: dict[str, int] = {}
    for trait in traits:
        group = [q for q in in_section if q.trait == trait]
        if not group:
            raise EmptyTraitGroupError(section.value, trait)

        total = sum(resolve_answer(q, answers) for q in group)
        scores[trait] = normalise_group_total(total, len(group))

    logger.debug("scoring.section_scored", section=section.value, scores=scores)
    return scores


def rank_traits(scores: Mapping[str, int], order: Sequence[str]) -> list[RankedTrait]:
    """Descending by score; ties keep the position they have in ``order``."""
    ranked = sorted(order, key=lambda trait: scores[trait], reverse=True)
    return [RankedTrait(trait=trait, score=scores[trait]) for trait in ranked]
