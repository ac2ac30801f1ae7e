"""Shared pytest fixtures for persona engine tests."""
import pytest

from persona_engine.schemas.question import Question, Section
from persona_engine.services.advice_service import AdviceService, ProfileSet
from persona_engine.services.pattern_service import EGO_STATES
from persona_engine.services.profile_service import (
    ATTACHMENT_STYLES,
    BIGFIVE_TRAITS,
    RIASEC_TRAITS,
    SENSITIVITY_DIMENSIONS,
    VIRTUE_TRAITS,
    ProfileService,
)
from persona_engine.services.question_bank_service import (
    DEFAULT_QUESTION_BANK_PATH,
    load_question_bank,
)

# section -> (traits, items per trait)
STANDARD_LAYOUT = {
    Section.BIGFIVE: (BIGFIVE_TRAITS, 3),
    Section.RIASEC: (RIASEC_TRAITS, 2),
    Section.STRENGTHS: (VIRTUE_TRAITS, 2),
    Section.ATTACHMENT: (ATTACHMENT_STYLES, 3),
    Section.SENSITIVITY: (SENSITIVITY_DIMENSIONS, 3),
    Section.EGOGRAM: (EGO_STATES, 2),
}


def build_question_bank(layout=None, skip_sections=()):
    """Synthetic bank with sequential ids and no reverse-coded items."""
    layout = layout or STANDARD_LAYOUT
    questions = []
    next_id = 1
    for section, (traits, n_items) in layout.items():
        if section in skip_sections:
            continue
        for trait in traits:
            for i in range(n_items):
                questions.append(Question(
                    id=next_id,
                    section=section,
                    trait=trait,
                    text=f"{section.value} {trait} item {i + 1}",
                ))
                next_id += 1
    return tuple(questions)


@pytest.fixture
def synthetic_bank():
    return build_question_bank()


@pytest.fixture
def bundled_bank():
    return load_question_bank(DEFAULT_QUESTION_BANK_PATH)


@pytest.fixture
def make_answers(synthetic_bank):
    """Build an answer set for the synthetic bank.

    ``values`` maps ``(section, trait)`` to either one value for every item in
    the group or a tuple of per-item values.  Everything else gets ``default``.
    """
    def _make(values=None, default=3):
        values = values or {}
        answers = {}
        position = {}
        for q in synthetic_bank:
            key = (q.section.value, q.trait)
            value = values.get(key, default)
            if isinstance(value, tuple):
                idx = position.get(key, 0)
                position[key] = idx + 1
                value = value[idx]
            answers[q.id] = value
        return answers

    return _make


@pytest.fixture
def profile_service():
    return ProfileService()


@pytest.fixture
def advice_service():
    return AdviceService()


@pytest.fixture
def build_profiles(synthetic_bank, profile_service):
    """Run all six profilers over the synthetic bank and bundle the results."""
    def _build(answers):
        return ProfileSet(
            trait=profile_service.score_trait_profile(synthetic_bank, answers),
            interest=profile_service.score_interest_profile(synthetic_bank, answers),
            virtue=profile_service.score_virtue_profile(synthetic_bank, answers),
            attachment=profile_service.score_attachment_profile(synthetic_bank, answers),
            sensitivity=profile_service.score_sensitivity_profile(synthetic_bank, answers),
            ego_state=profile_service.score_ego_state_profile(synthetic_bank, answers),
        )

    return _build
