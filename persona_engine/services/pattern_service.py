"""
Persona Engine — Egogram shape classification.

Assigns a named shape to the five ego-state scores (CP, NP, A, FC, AC).
Rules are evaluated in order and the first match wins; the A-dominant rule
overlaps the single-state rules that follow it, so the order matters.
"""

from __future__ import annotations

from typing import Callable, Mapping

import structlog

from persona_engine.schemas.profile import EgoStatePattern

logger = structlog.get_logger("persona_engine.pattern_service")

EGO_STATES: tuple[str, ...] = ("cp", "np", "a", "fc", "ac")

FLAT_RANGE = 15
HIGH = 60
LOW = 40

# Predicate receives (scores, max, min).
_Rule = Callable[[Mapping[str, int], int, int], bool]

PATTERN_RULES: tuple[tuple[str, _Rule], ...] = (
    ("flat", lambda s, hi, lo: hi - lo <= FLAT_RANGE),
    ("inverse_n", lambda s, hi, lo: s["np"] >= HIGH and s["fc"] >= HIGH and s["cp"] <= LOW),
    ("n", lambda s, hi, lo: s["cp"] >= HIGH and s["ac"] >= HIGH and s["np"] <= LOW),
    ("a_dominant", lambda s, hi, lo: s["a"] >= HIGH and s["a"] >= s["cp"] and s["a"] >= s["ac"]),
    ("np_dominant", lambda s, hi, lo: s["np"] == hi),
    ("cp_dominant", lambda s, hi, lo: s["cp"] == hi),
    ("fc_dominant", lambda s, hi, lo: s["fc"] == hi),
    ("ac_dominant", lambda s, hi, lo: s["ac"] == hi),
)

PATTERNS: dict[str, dict[str, str]] = {
    "flat": {
        "name": "Flat",
        "description": (
            "All five ego states are evenly developed. You adapt flexibly, "
            "though your distinctive traits can be harder to see."
        ),
    },
    "inverse_n": {
        "name": "Inverse-N",
        "description": "A free-spirited type who combines kindness with a sense of freedom.",
    },
    "n": {
        "name": "N",
        "description": (
            "Highly responsible and cooperative, but strict with yourself "
            "and prone to holding things in."
        ),
    },
    "a_dominant": {
        "name": "A-dominant",
        "description": "A rational type with excellent objective judgement.",
    },
    "np_dominant": {
        "name": "NP-dominant",
        "description": "A caring, nurturing type whom others rely on.",
    },
    "cp_dominant": {
        "name": "CP-dominant",
        "description": "A strong leader who values discipline and standards.",
    },
    "fc_dominant": {
        "name": "FC-dominant",
        "description": "A free, creative and spontaneous type.",
    },
    "ac_dominant": {
        "name": "AC-dominant",
        "description": (
            "Highly cooperative and attentive to others. "
            "Remember to value your own feelings too."
        ),
    },
    "mixed": {
        "name": "Mixed",
        "description": (
            "Several ego states are strong, and you switch between them "
            "depending on the situation."
        ),
    },
}

FALLBACK_PATTERN = "mixed"


def classify_pattern(scores: Mapping[str, int]) -> EgoStatePattern:
    """Return the first matching egogram shape for ``scores``."""
    values = [scores[state] for state in EGO_STATES]
    highest, lowest = max(values), min(values)

    key = next(
        (name for name, rule in PATTERN_RULES if rule(scores, highest, lowest)),
        FALLBACK_PATTERN,
    )
    logger.debug("pattern.classified", pattern=key, max=highest, min=lowest)
    return EgoStatePattern(key=key, **PATTERNS[key])
