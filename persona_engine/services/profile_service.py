"""
Persona Engine — Instrument profilers.

Six independent profilers, each a thin layer over ``compute_trait_scores``:

  bigfive      5 traits x 3 items, plus derived ``stability = 100 - neuroticism``
  riasec       6 interest types x 2 items, Holland code + career lookup
  strengths    6 virtues x 2 items
  attachment   4 styles x 3 items
  sensitivity  3 dimensions x 3 items, overall level + tips
  egogram      5 ego states x 2 items, shape classification + advice

No profiler reads another profiler's output.
"""

from __future__ import annotations

from typing import Callable, Mapping, Sequence

import structlog

from persona_engine.schemas.profile import (
    AttachmentProfile,
    EgoStateProfile,
    InterestProfile,
    SensitivityProfile,
    TraitProfile,
    VirtueProfile,
)
from persona_engine.schemas.question import AnswerSet, Question, Section
from persona_engine.services.career_service import suggest_careers
from persona_engine.services.pattern_service import EGO_STATES, classify_pattern
from persona_engine.services.scoring_service import (
    compute_trait_scores,
    rank_traits,
    round_half_up,
)
from persona_engine.utils.lookup import lookup_or_raise

logger = structlog.get_logger("persona_engine.profile_service")

# ──────────────────────────────────────────────────────────────────────────────
# Big Five
# ──────────────────────────────────────────────────────────────────────────────

BIGFIVE_TRAITS: tuple[str, ...] = (
    "openness", "conscientiousness", "extraversion", "agreeableness", "neuroticism",
)
# Ranking set: neuroticism is replaced by its complement.
BIGFIVE_RANKED: tuple[str, ...] = (
    "openness", "conscientiousness", "extraversion", "agreeableness", "stability",
)

BIGFIVE_LABELS: dict[str, str] = {
    "openness": "Openness",
    "conscientiousness": "Conscientiousness",
    "extraversion": "Extraversion",
    "agreeableness": "Agreeableness",
    "stability": "Emotional stability",
}

# (lower bound, text) from the highest band down; the last band catches the rest.
BIGFIVE_BANDS: dict[str, tuple[tuple[int, str], ...]] = {
    "openness": (
        (70, "You are very open to new experiences and ideas. You are curious and "
             "tend to be drawn to art and abstract concepts."),
        (40, "You balance curiosity about new things with the comfort of familiar ways."),
        (0, "You prefer practical, grounded thinking. You tend to value established "
            "methods and concrete approaches."),
    ),
    "conscientiousness": (
        (70, "You are organised and responsible, moving steadily toward your goals. "
             "Your self-management is strong."),
        (40, "You adapt well, able to plan ahead or stay flexible as needed."),
        (0, "You are good at flexible, improvised responses. You tend to prefer a "
            "free style that does not fit a mould."),
    ),
    "extraversion": (
        (70, "You are sociable and energetic. You draw energy from being with people."),
        (40, "You are balanced, enjoying both social time and time alone depending "
             "on the situation."),
        (0, "You are introspective and prefer a few deep relationships. You recharge "
            "with time on your own."),
    ),
    "agreeableness": (
        (70, "You are considerate and value harmony with those around you. You are "
             "cooperative and able to stay close to other people's feelings."),
        (40, "You balance cooperation and self-assertion. You respond flexibly to "
             "each situation."),
        (0, "You are independent and act on your own convictions. You tend to shine "
            "in competitive situations."),
    ),
    "stability": (
        (70, "You are emotionally steady with a high tolerance for stress. You tend "
             "to keep a calm, clear judgement."),
        (40, "Your emotional ups and downs are moderate, and you cope well with "
             "everyday stress."),
        (0, "You are richly sensitive with a delicate side. That gives you deep "
            "empathy and a keen awareness."),
    ),
}

# ──────────────────────────────────────────────────────────────────────────────
# RIASEC interests
# ──────────────────────────────────────────────────────────────────────────────

RIASEC_TRAITS: tuple[str, ...] = (
    "realistic", "investigative", "artistic", "social", "enterprising", "conventional",
)

RIASEC_LABELS: dict[str, str] = {
    "realistic": "Realistic",
    "investigative": "Investigative",
    "artistic": "Artistic",
    "social": "Social",
    "enterprising": "Enterprising",
    "conventional": "Conventional",
}

RIASEC_DESCRIPTIONS: dict[str, str] = {
    "realistic": "Hands-on work with concrete, physical things",
    "investigative": "Work that researches, analyses and deepens knowledge",
    "artistic": "Work that draws on creativity and free expression",
    "social": "Work that helps, teaches and supports people",
    "enterprising": "Work that leads people and moves organisations",
    "conventional": "Work that organises data and manages it precisely",
}

HOLLAND_CODE_LENGTH = 3

# ──────────────────────────────────────────────────────────────────────────────
# Character strengths (virtues)
# ──────────────────────────────────────────────────────────────────────────────

VIRTUE_TRAITS: tuple[str, ...] = (
    "wisdom", "courage", "humanity", "justice", "temperance", "transcendence",
)

VIRTUE_LABELS: dict[str, str] = {
    "wisdom": "Wisdom",
    "courage": "Courage",
    "humanity": "Humanity",
    "justice": "Justice",
    "temperance": "Temperance",
    "transcendence": "Transcendence",
}

VIRTUE_DESCRIPTIONS: dict[str, str] = {
    "wisdom": "Using knowledge to judge with a broad perspective",
    "courage": "Facing difficulty and holding to your convictions",
    "humanity": "Kindness toward others and deep empathy",
    "justice": "Fairness and a commitment to contributing to the team",
    "temperance": "Self-control and humility",
    "transcendence": "Gratitude, hope and an eye for beauty",
}

# ──────────────────────────────────────────────────────────────────────────────
# Attachment styles
# ──────────────────────────────────────────────────────────────────────────────

ATTACHMENT_STYLES: tuple[str, ...] = ("secure", "anxious", "avoidant", "disorganized")

ATTACHMENT_LABELS: dict[str, str] = {
    "secure": "Secure",
    "anxious": "Anxious",
    "avoidant": "Avoidant",
    "disorganized": "Disorganized",
}

ATTACHMENT_DESCRIPTIONS: dict[str, str] = {
    "secure": (
        "You feel safe in relationships and balance trust with independence. You can "
        "lean on people close to you openly while respecting their freedom."
    ),
    "anxious": (
        "You seek deep bonds and are sensitive to how others respond. You are loving, "
        "but tend to want reassurance about the other person's feelings. Recognising "
        "your own appeal and worth is the key to growth."
    ),
    "avoidant": (
        "You are independent and value your own space. You tend to keep feelings "
        "inside, which also makes you calm and dependable. Opening up little by little "
        "will make your relationships richer."
    ),
    "disorganized": (
        "A longing for closeness and a sense of caution live side by side in you. Past "
        "experiences often play a part, and noticing your own patterns is the first step "
        "to change. You can build safe relationships little by little."
    ),
}

ATTACHMENT_ADVICE: dict[str, tuple[str, ...]] = {
    "secure": (
        "Your ability to build stable relationships is a source of reassurance for those around you",
        "When a partner or friend feels uneasy, your calm can be a great support",
        "You can use this strength to act as a bridge between the people around you",
    ),
    "anxious": (
        "When you feel anxious, try making a habit of separating facts from feelings",
        "No reply does not mean you are disliked; remember the other person has their own circumstances",
        "Making time to focus on your own hobbies and goals helps keep you steady",
    ),
    "avoidant": (
        "Practise sharing your feelings, little by little, with someone you trust",
        "Try reframing showing weakness not as losing but as a sign of strength",
        "While keeping your time alone, explore a comfortable distance with others",
    ),
    "disorganized": (
        "Simply noticing your relationship patterns is a big step forward",
        "Build up small successes with people you feel safe with",
        "Seeking professional support when you need it is a sign of strength",
    ),
}
ATTACHMENT_ADVICE_FALLBACK = "secure"

# ──────────────────────────────────────────────────────────────────────────────
# Sensitivity
# ──────────────────────────────────────────────────────────────────────────────

SENSITIVITY_DIMENSIONS: tuple[str, ...] = ("sensory", "emotional", "depth")

SENSITIVITY_LABELS: dict[str, str] = {
    "sensory": "Sensory sensitivity",
    "emotional": "Emotional reactivity",
    "depth": "Depth of processing",
}

# (lower bound, level, description)
SENSITIVITY_LEVELS: tuple[tuple[int, str, str], ...] = (
    (70, "High sensitivity",
     "You tend to process stimuli from your surroundings deeply. This is the source of a "
     "rich inner world and strong empathy, but guarding against overstimulation matters too."),
    (40, "Moderate",
     "You have a healthy degree of sensitivity and respond flexibly to circumstances. "
     "You balance delicacy with resilience."),
    (0, "Low sensitivity",
     "You have a strong tolerance for stimulation and tend to perform steadily even in "
     "stressful environments."),
)

_SensitivityRule = Callable[[int, Mapping[str, int]], bool]

# Evaluated in order; every matching rule contributes its tips.
SENSITIVITY_TIP_RULES: tuple[tuple[_SensitivityRule, tuple[str, ...]], ...] = (
    (lambda overall, s: overall >= 60, (
        "Deliberately set aside quiet, low-stimulation time in your day",
        "Time spent in nature is an effective way to reset body and mind",
    )),
    (lambda overall, s: s["sensory"] >= 60, (
        "Adjusting your environment, such as noise-cancelling earphones or softer lighting, helps",
    )),
    (lambda overall, s: s["emotional"] >= 60, (
        "Practising telling other people's feelings apart from your own, such as keeping an emotion journal, helps",
    )),
    (lambda overall, s: s["depth"] >= 60, (
        "Taking time to decide is a sign of care. Respect your own pace",
    )),
    (lambda overall, s: overall < 40, (
        "Your mental toughness contributes a great deal to a team's stability",
        "Make a conscious effort to take the perspective of more sensitive people",
    )),
)
SENSITIVITY_TIP_FALLBACK = "Your sensitivity brings a good balance to your daily life"

# ──────────────────────────────────────────────────────────────────────────────
# Egogram (transactional analysis)
# ──────────────────────────────────────────────────────────────────────────────

EGO_STATE_LABELS: dict[str, str] = {
    "cp": "CP (Critical Parent)",
    "np": "NP (Nurturing Parent)",
    "a": "A (Adult)",
    "fc": "FC (Free Child)",
    "ac": "AC (Adapted Child)",
}

EGO_STATE_SHORT_LABELS: dict[str, str] = {
    "cp": "CP", "np": "NP", "a": "A", "fc": "FC", "ac": "AC",
}

EGO_STATE_DESCRIPTIONS: dict[str, str] = {
    "cp": (
        "The side that values rules and justice, with a strong sense of responsibility. "
        "It is a source of leadership, but too much of it can turn critical."
    ),
    "np": (
        "The caring side that enjoys looking after people. Others are drawn to it, and "
        "it shines in support and care work."
    ),
    "a": (
        "The side that judges calmly based on facts. Its logical thinking excels at "
        "analysis and problem solving."
    ),
    "fc": (
        "The innocent, intuitive side. It is a source of creativity and humour that "
        "generates new ideas."
    ),
    "ac": (
        "The cooperative side that reads the room. It values teamwork, but holding "
        "yourself back too much can cause stress."
    ),
}

_EgoRule = Callable[[Mapping[str, int]], bool]

# Evaluated in order; every matching rule contributes its advice.
EGO_STATE_ADVICE_RULES: tuple[tuple[_EgoRule, str], ...] = (
    (lambda s: s["np"] >= 60,
     "Your high NP (Nurturing Parent) is a great strength that enriches your relationships."),
    (lambda s: s["a"] >= 60,
     "Your calm judgement (A) is dependable when solving complex problems."),
    (lambda s: s["fc"] >= 60,
     "Use your free thinking (FC) to shine in creative situations."),
    (lambda s: s["cp"] >= 70 and s["np"] <= 30,
     "Leaving room to hear the other person's circumstances, even while being strict, "
     "will make you even more trusted."),
    (lambda s: s["ac"] >= 70 and s["fc"] <= 30,
     "Now and then, put what you want to do first. Releasing a little FC will lighten your mood."),
    (lambda s: s["np"] >= 70 and s["a"] <= 30,
     "Bringing in a calm perspective (A) alongside your feelings will sharpen your judgement."),
)
EGO_STATE_ADVICE_FALLBACK = (
    "A well-balanced egogram. You have the flexibility to switch ego states as the "
    "situation requires."
)


def _banded(score: int, bands: Sequence[tuple[int, str]]) -> str:
    for lower, text in bands:
        if score >= lower:
            return text
    return bands[-1][1]


class ProfileService:
    """Scores the six instruments.

    Each ``score_*`` method takes the full question bank and the answer set
    and returns that instrument's profile model.  ``PROFILERS`` maps the
    instrument name to its method name so callers can run them uniformly.
    """

    PROFILERS: dict[str, str] = {
        "trait_profile": "score_trait_profile",
        "interest_profile": "score_interest_profile",
        "virtue_profile": "score_virtue_profile",
        "attachment_profile": "score_attachment_profile",
        "sensitivity_profile": "score_sensitivity_profile",
        "ego_state_profile": "score_ego_state_profile",
    }

    # ══════════════════════════════════════════════════════════════════════
    # Big Five
    # ══════════════════════════════════════════════════════════════════════

    def score_trait_profile(
        self, questions: Sequence[Question], answers: AnswerSet,
    ) -> TraitProfile:
        scores = compute_trait_scores(questions, Section.BIGFIVE, BIGFIVE_TRAITS, answers)
        scores["stability"] = 100 - scores["neuroticism"]

        dominant = [r.trait for r in rank_traits(scores, BIGFIVE_RANKED)[:2]]
        descriptions = {
            trait: _banded(scores[trait], lookup_or_raise(BIGFIVE_BANDS, trait, "bigfive_bands"))
            for trait in BIGFIVE_RANKED
        }

        logger.info("profile.trait_scored", dominant=dominant)
        return TraitProfile(
            scores=scores,
            dominant=dominant,
            labels=dict(BIGFIVE_LABELS),
            descriptions=descriptions,
        )

    # ══════════════════════════════════════════════════════════════════════
    # RIASEC
    # ══════════════════════════════════════════════════════════════════════

    def score_interest_profile(
        self, questions: Sequence[Question], answers: AnswerSet,
    ) -> InterestProfile:
        scores = compute_trait_scores(questions, Section.RIASEC, RIASEC_TRAITS, answers)
        ranking = rank_traits(scores, RIASEC_TRAITS)
        top3 = ranking[:HOLLAND_CODE_LENGTH]
        holland_code = "".join(r.trait[0].upper() for r in top3)

        logger.info("profile.interest_scored", holland_code=holland_code)
        return InterestProfile(
            scores=scores,
            ranking=ranking,
            top3=top3,
            holland_code=holland_code,
            labels=dict(RIASEC_LABELS),
            descriptions=dict(RIASEC_DESCRIPTIONS),
            careers=suggest_careers([r.trait for r in ranking[:2]]),
        )

    # ══════════════════════════════════════════════════════════════════════
    # Strengths
    # ══════════════════════════════════════════════════════════════════════

    def score_virtue_profile(
        self, questions: Sequence[Question], answers: AnswerSet,
    ) -> VirtueProfile:
        scores = compute_trait_scores(questions, Section.STRENGTHS, VIRTUE_TRAITS, answers)
        ranking = rank_traits(scores, VIRTUE_TRAITS)

        logger.info("profile.virtue_scored", top=ranking[0].trait)
        return VirtueProfile(
            scores=scores,
            ranking=ranking,
            top3=ranking[:3],
            labels=dict(VIRTUE_LABELS),
            descriptions=dict(VIRTUE_DESCRIPTIONS),
        )

    # ══════════════════════════════════════════════════════════════════════
    # Attachment
    # ══════════════════════════════════════════════════════════════════════

    def score_attachment_profile(
        self, questions: Sequence[Question], answers: AnswerSet,
    ) -> AttachmentProfile:
        scores = compute_trait_scores(questions, Section.ATTACHMENT, ATTACHMENT_STYLES, answers)
        dominant = rank_traits(scores, ATTACHMENT_STYLES)[0].trait

        logger.info("profile.attachment_scored", dominant=dominant)
        return AttachmentProfile(
            scores=scores,
            dominant=dominant,
            labels=dict(ATTACHMENT_LABELS),
            descriptions=dict(ATTACHMENT_DESCRIPTIONS),
            advice=self.attachment_advice(dominant),
        )

    @staticmethod
    def attachment_advice(style: str) -> list[str]:
        """Canned advice for ``style``; unknown styles get the secure list."""
        advice = ATTACHMENT_ADVICE.get(style)
        if advice is None:
            logger.warning("profile.attachment_advice_fallback", style=style)
            advice = ATTACHMENT_ADVICE[ATTACHMENT_ADVICE_FALLBACK]
        return list(advice)

    # ══════════════════════════════════════════════════════════════════════
    # Sensitivity
    # ══════════════════════════════════════════════════════════════════════

    def score_sensitivity_profile(
        self, questions: Sequence[Question], answers: AnswerSet,
    ) -> SensitivityProfile:
        scores = compute_trait_scores(
            questions, Section.SENSITIVITY, SENSITIVITY_DIMENSIONS, answers,
        )
        overall = round_half_up(sum(scores.values()) / len(SENSITIVITY_DIMENSIONS))

        level, description = SENSITIVITY_LEVELS[-1][1:]
        for lower, band_level, band_description in SENSITIVITY_LEVELS:
            if overall >= lower:
                level, description = band_level, band_description
                break

        logger.info("profile.sensitivity_scored", overall=overall, level=level)
        return SensitivityProfile(
            scores=scores,
            overall=overall,
            level=level,
            description=description,
            labels=dict(SENSITIVITY_LABELS),
            tips=self.sensitivity_tips(overall, scores),
        )

    @staticmethod
    def sensitivity_tips(overall: int, scores: Mapping[str, int]) -> list[str]:
        tips: list[str] = []
        for rule, rule_tips in SENSITIVITY_TIP_RULES:
            if rule(overall, scores):
                tips.extend(rule_tips)
        return tips or [SENSITIVITY_TIP_FALLBACK]

    # ══════════════════════════════════════════════════════════════════════
    # Egogram
    # ══════════════════════════════════════════════════════════════════════

    def score_ego_state_profile(
        self, questions: Sequence[Question], answers: AnswerSet,
    ) -> EgoStateProfile:
        scores = compute_trait_scores(questions, Section.EGOGRAM, EGO_STATES, answers)
        dominant = rank_traits(scores, EGO_STATES)[0].trait
        pattern = classify_pattern(scores)

        logger.info("profile.ego_state_scored", dominant=dominant, pattern=pattern.key)
        return EgoStateProfile(
            scores=scores,
            dominant=dominant,
            pattern=pattern,
            labels=dict(EGO_STATE_LABELS),
            short_labels=dict(EGO_STATE_SHORT_LABELS),
            descriptions=dict(EGO_STATE_DESCRIPTIONS),
            advice=self.ego_state_advice(scores),
        )

    @staticmethod
    def ego_state_advice(scores: Mapping[str, int]) -> list[str]:
        advice = [text for rule, text in EGO_STATE_ADVICE_RULES if rule(scores)]
        return advice or [EGO_STATE_ADVICE_FALLBACK]
