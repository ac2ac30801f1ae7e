"""
Persona Engine — Cross-instrument advice synthesis.

Four independent synthesisers read the six instrument profiles:

  career        interest x Big Five, egogram x interest, top virtue
  relationship  attachment style description + Big Five / sensitivity riders
  stress        stress factors, coping strategies, resilience tier
  summary       type name, narrative, keywords

Every rule table is an ordered tuple of ``(predicate, text)`` pairs.  All
matching rules contribute, in table order, with no deduplication.  A
synthesiser-specific fallback is used only when nothing matched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import structlog

from persona_engine.schemas.profile import (
    AttachmentProfile,
    EgoStateProfile,
    InterestProfile,
    SensitivityProfile,
    TraitProfile,
    VirtueProfile,
)
from persona_engine.schemas.report import (
    CareerAdvice,
    RelationshipAdvice,
    Resilience,
    StressAdvice,
    Summary,
)
from persona_engine.services.scoring_service import round_half_up
from persona_engine.utils.lookup import lookup_or_raise

logger = structlog.get_logger("persona_engine.advice_service")


@dataclass(frozen=True)
class ProfileSet:
    """The six instrument profiles a synthesiser may read."""

    trait: TraitProfile
    interest: InterestProfile
    virtue: VirtueProfile
    attachment: AttachmentProfile
    sensitivity: SensitivityProfile
    ego_state: EgoStateProfile

    @property
    def big5(self) -> dict[str, int]:
        return self.trait.scores

    @property
    def top_interest(self) -> str:
        return self.interest.top3[0].trait

    @property
    def top_virtue(self) -> str:
        return self.virtue.top3[0].trait


Predicate = Callable[[ProfileSet], bool]
RuleTable = Sequence[tuple[Predicate, str]]


def evaluate_rules(rules: RuleTable, profiles: ProfileSet) -> list[str]:
    """Texts of every rule whose predicate holds, in table order."""
    return [text for predicate, text in rules if predicate(profiles)]


# ──────────────────────────────────────────────────────────────────────────────
# Career
# ──────────────────────────────────────────────────────────────────────────────

CAREER_RULES: tuple[tuple[Predicate, str], ...] = (
    # Top interest x Big Five
    (lambda p: p.top_interest == "social" and p.big5["agreeableness"] >= 60,
     "Your strengths come through most in helping professions. Education, healthcare "
     "and counselling suit you."),
    (lambda p: p.top_interest == "investigative" and p.big5["openness"] >= 60,
     "Research and analysis, where you can use your inquisitiveness and intellectual "
     "curiosity, suit you well."),
    (lambda p: p.top_interest == "artistic" and p.big5["openness"] >= 60,
     "You shine where you can use your creativity to the full. Design, content creation "
     "and the arts suit you."),
    (lambda p: p.top_interest == "enterprising" and p.big5["extraversion"] >= 60,
     "You do your best work using leadership and drive to bring people along with you."),
    (lambda p: p.top_interest == "realistic" and p.big5["conscientiousness"] >= 60,
     "Your honest, steady way of working earns recognition. Technical and specialist "
     "roles suit you."),
    (lambda p: p.top_interest == "conventional" and p.big5["conscientiousness"] >= 60,
     "You show your true value in work that demands accuracy and reliability. "
     "Administration, office work and accounting suit you."),
    # Egogram x top interest
    (lambda p: p.ego_state.scores["np"] >= 60 and p.top_interest == "social",
     "A high NP (Nurturing Parent) is a major strength in welfare, education and "
     "healthcare. You have a natural calling for work that helps people grow."),
    (lambda p: p.ego_state.scores["cp"] >= 60 and p.top_interest == "enterprising",
     "The leadership of your CP (Critical Parent) combined with an enterprising bent "
     "lets you excel as a manager or business owner."),
    (lambda p: p.ego_state.scores["a"] >= 60,
     "The calm analytical power of your A (Adult) is valued in consulting, data "
     "analysis and strategic planning."),
    (lambda p: p.ego_state.scores["fc"] >= 60 and p.top_interest == "artistic",
     "The imagination of your FC (Free Child) and your artistic aptitude can carve out "
     "a unique place in the creative industries."),
    # Top virtue
    (lambda p: p.top_virtue == "wisdom",
     "Your wisdom makes you someone people rely on when judgement is needed."),
    (lambda p: p.top_virtue == "humanity",
     "Your strong empathy is a great asset in teamwork and customer-facing work."),
    (lambda p: p.top_virtue == "courage",
     "Your willingness to take on challenges suits you to driving new projects."),
)
CAREER_FALLBACK = (
    "You have a well-balanced range of abilities and the potential to thrive across "
    "many fields."
)

WORK_STYLE_FALLBACK = "You are the kind of person who can flexibly choose the environment that suits you"

# ──────────────────────────────────────────────────────────────────────────────
# Relationship
# ──────────────────────────────────────────────────────────────────────────────

RELATIONSHIP_RULES: tuple[tuple[Predicate, str], ...] = (
    (lambda p: p.big5["agreeableness"] >= 70 and p.attachment.dominant == "anxious",
     "Because you are so cooperative, you tend to put your own feelings last. Practising "
     "saying no matters too."),
    (lambda p: p.big5["extraversion"] <= 30 and p.attachment.dominant == "avoidant",
     "Valuing time alone is natural. Still, try gradually spending more time with people "
     "you trust."),
    (lambda p: p.sensitivity.overall >= 60,
     "Your high sensitivity lets you notice how others feel. Take care not to carry their "
     "emotions for them."),
)

# ──────────────────────────────────────────────────────────────────────────────
# Stress
# ──────────────────────────────────────────────────────────────────────────────

STRESS_FACTOR_RULES: tuple[tuple[Predicate, str], ...] = (
    (lambda p: p.big5["neuroticism"] >= 60, "Uncertain situations and unexpected change"),
    (lambda p: p.sensitivity.overall >= 60, "Sensory overload (noise, crowds and the like)"),
    (lambda p: p.attachment.scores["anxious"] >= 60,
     "Ambiguity in relationships or shifts in emotional distance"),
    (lambda p: p.big5["conscientiousness"] >= 70, "Situations that do not go to plan"),
    (lambda p: p.big5["agreeableness"] >= 70, "Confrontation and conflict"),
)
STRESS_FACTOR_FALLBACK = (
    "No particular stressor stands out, but keep an eye on stress building up"
)

COPING_SOCIAL = "Talk things through with someone you trust"
COPING_INTROSPECTIVE = "Make time to reflect quietly on your own"

COPING_RULES: tuple[tuple[Predicate, str], ...] = (
    (lambda p: p.big5["openness"] >= 60,
     "Recharge through creative activities such as art, music or nature"),
    (lambda p: p.sensitivity.scores["sensory"] >= 60,
     "Adjust your surroundings to reduce stimulation (quiet places, soft lighting)"),
)
COPING_ALWAYS: tuple[str, ...] = (
    "Regular exercise or mindfulness practice",
    "A habit of writing down three things you managed today",
)

# (lower bound, level, description)
RESILIENCE_TIERS: tuple[tuple[int, str, str], ...] = (
    (60, "high",
     "You bounce back from stress quickly and can treat hardship as a chance to grow."),
    (40, "normal",
     "You handle everyday stress well, but larger stress calls for deliberate self-care."),
    (0, "needs care",
     "Your delicate sensitivity makes you more prone to the effects of stress. Make "
     "self-care your top priority."),
)

# ──────────────────────────────────────────────────────────────────────────────
# Summary
# ──────────────────────────────────────────────────────────────────────────────

# (trait, high word, low word), evaluated in this order at a threshold of 60.
# ``type_words`` keeps this order; the display name puts the openness noun last
# ("The Sociable Harmonious Explorer").
TYPE_AXES: tuple[tuple[str, str, str], ...] = (
    ("openness", "Explorer", "Practitioner"),
    ("extraversion", "Sociable", "Thoughtful"),
    ("agreeableness", "Harmonious", "Independent"),
)
TYPE_AXIS_THRESHOLD = 60

SENSITIVITY_SUMMARY_CLAUSE = (
    "Your delicate sensitivity is a strength that lets you stay close to other "
    "people's feelings."
)

_KeywordRule = Callable[[ProfileSet], "str | None"]

# Each rule returns its keyword or None; order decides which five survive.
KEYWORD_RULES: tuple[_KeywordRule, ...] = (
    lambda p: "Curious" if p.big5["openness"] >= 60 else None,
    lambda p: "Responsible" if p.big5["conscientiousness"] >= 60 else None,
    lambda p: "Sociable" if p.big5["extraversion"] >= 60 else None,
    lambda p: "Introspective" if p.big5["extraversion"] <= 30 else None,
    lambda p: "Caring" if p.big5["agreeableness"] >= 60 else None,
    lambda p: "Composed" if p.big5["stability"] >= 60 else None,
    lambda p: "Highly sensitive" if p.sensitivity.overall >= 60 else None,
    lambda p: "Secure bonds" if p.attachment.dominant == "secure" else None,
    lambda p: (
        lookup_or_raise(p.virtue.labels, p.top_virtue, "virtue_labels")
        if p.virtue.top3[0].score >= 70 else None
    ),
)
MAX_KEYWORDS = 5


def _first_sentence(text: str) -> str:
    return text.split(". ")[0].rstrip(".") + "."


class AdviceService:
    """Synthesises the career, relationship, stress and summary sections."""

    # ══════════════════════════════════════════════════════════════════════
    # Career
    # ══════════════════════════════════════════════════════════════════════

    def career_advice(self, profiles: ProfileSet) -> CareerAdvice:
        advice = evaluate_rules(CAREER_RULES, profiles) or [CAREER_FALLBACK]
        logger.debug("advice.career", n_advice=len(advice))
        return CareerAdvice(
            careers=list(profiles.interest.careers),
            advice=advice,
            work_style=self.work_style(profiles.big5),
        )

    @staticmethod
    def work_style(big5: dict[str, int]) -> list[str]:
        """Preferred working environments.

        The extraversion and conscientiousness checks are high/low pairs: at
        most one side of each pair can apply.
        """
        styles: list[str] = []
        if big5["extraversion"] >= 60:
            styles.append("An environment with lots of teamwork and discussion")
        elif big5["extraversion"] <= 40:
            styles.append("A quiet environment where you can concentrate")
        if big5["openness"] >= 60:
            styles.append("Work with variety and new challenges")
        if big5["conscientiousness"] >= 60:
            styles.append("An organisation with clear goals and plans")
        elif big5["conscientiousness"] <= 40:
            styles.append("A flexible environment with plenty of autonomy")
        return styles or [WORK_STYLE_FALLBACK]

    # ══════════════════════════════════════════════════════════════════════
    # Relationships
    # ══════════════════════════════════════════════════════════════════════

    def relationship_advice(self, profiles: ProfileSet) -> RelationshipAdvice:
        attachment = profiles.attachment
        style = attachment.dominant

        advice = [lookup_or_raise(attachment.descriptions, style, "attachment_descriptions")]
        advice.extend(evaluate_rules(RELATIONSHIP_RULES, profiles))

        return RelationshipAdvice(
            style=style,
            style_label=lookup_or_raise(attachment.labels, style, "attachment_labels"),
            advice=advice,
        )

    # ══════════════════════════════════════════════════════════════════════
    # Stress
    # ══════════════════════════════════════════════════════════════════════

    def stress_advice(self, profiles: ProfileSet) -> StressAdvice:
        factors = evaluate_rules(STRESS_FACTOR_RULES, profiles) or [STRESS_FACTOR_FALLBACK]

        coping = [
            COPING_SOCIAL if profiles.big5["extraversion"] >= 60 else COPING_INTROSPECTIVE
        ]
        coping.extend(evaluate_rules(COPING_RULES, profiles))
        coping.extend(COPING_ALWAYS)

        return StressAdvice(
            stress_factors=factors,
            coping_strategies=coping,
            resilience=self.resilience(profiles),
        )

    @staticmethod
    def resilience(profiles: ProfileSet) -> Resilience:
        """Tier from ``mean(stability, conscientiousness, 100 - sensitivity)``.

        Banding uses the unrounded mean; ``score`` is reported rounded.
        """
        raw = (
            profiles.big5["stability"]
            + profiles.big5["conscientiousness"]
            + (100 - profiles.sensitivity.overall)
        ) / 3

        level, description = RESILIENCE_TIERS[-1][1:]
        for lower, tier_level, tier_description in RESILIENCE_TIERS:
            if raw >= lower:
                level, description = tier_level, tier_description
                break

        logger.debug("advice.resilience", raw=round(raw, 2), level=level)
        return Resilience(level=level, description=description, score=round_half_up(raw))

    # ══════════════════════════════════════════════════════════════════════
    # Summary
    # ══════════════════════════════════════════════════════════════════════

    def summary(self, profiles: ProfileSet) -> Summary:
        type_words = [
            high if profiles.big5[trait] >= TYPE_AXIS_THRESHOLD else low
            for trait, high, low in TYPE_AXES
        ]
        noun, social_word, harmony_word = type_words
        type_name = f"The {social_word} {harmony_word} {noun}"

        dominant = profiles.trait.dominant[0]
        opening = _first_sentence(
            lookup_or_raise(profiles.trait.descriptions, dominant, "bigfive_descriptions")
        )
        interest_label = lookup_or_raise(
            profiles.interest.labels, profiles.top_interest, "riasec_labels",
        )
        virtue_label = lookup_or_raise(
            profiles.virtue.labels, profiles.top_virtue, "virtue_labels",
        )

        parts = [
            opening,
            f"You have a strong {interest_label} aptitude, and {virtue_label} is one of "
            f"your greatest strengths.",
        ]
        if profiles.sensitivity.overall >= 60:
            parts.append(SENSITIVITY_SUMMARY_CLAUSE)

        return Summary(
            type_name=type_name,
            type_words=type_words,
            summary=" ".join(parts),
            keywords=self.keywords(profiles),
        )

    @staticmethod
    def keywords(profiles: ProfileSet) -> list[str]:
        matched = [kw for kw in (rule(profiles) for rule in KEYWORD_RULES) if kw is not None]
        return matched[:MAX_KEYWORDS]
