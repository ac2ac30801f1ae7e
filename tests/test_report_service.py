"""Unit tests for ReportService — aggregation, validation and failures."""
import pytest
from pydantic import ValidationError

from persona_engine.config import get_settings
from persona_engine.schemas.question import Section
from persona_engine.services.report_service import (
    ReportService,
    analyze,
    render_share_text,
)
from persona_engine.utils.exceptions import (
    AnswerValidationError,
    EmptyTraitGroupError,
    ProfilerFailureError,
)

from conftest import build_question_bank


@pytest.fixture
def report_service():
    return ReportService(require_complete_answers=False)


class TestAnalyze:
    def test_deterministic(self, report_service, synthetic_bank, make_answers):
        answers = make_answers({("riasec", "social"): 5, ("bigfive", "openness"): 4})
        first = report_service.analyze(answers, synthetic_bank)
        second = report_service.analyze(answers, synthetic_bank)
        assert first == second
        assert first.model_dump() == second.model_dump()

    def test_missing_answers_match_explicit_neutral(
        self, report_service, synthetic_bank, make_answers,
    ):
        assert report_service.analyze({}, synthetic_bank) == report_service.analyze(
            make_answers(), synthetic_bank,
        )

    def test_sections_wired_to_profiles(self, report_service, synthetic_bank, make_answers):
        report = report_service.analyze(make_answers(), synthetic_bank)
        assert report.career_advice.careers == report.interest_profile.careers
        assert report.relationship_advice.style == report.attachment_profile.dominant

    def test_module_level_analyze(self, synthetic_bank, make_answers):
        report = analyze(make_answers(), synthetic_bank)
        assert report.summary.type_name == "The Thoughtful Independent Practitioner"

    def test_unknown_answer_ids_ignored(self, report_service, synthetic_bank, make_answers):
        answers = make_answers()
        baseline = report_service.analyze(answers, synthetic_bank)
        answers[9999] = 5
        assert report_service.analyze(answers, synthetic_bank) == baseline

    def test_environment_does_not_affect_analyze(
        self, monkeypatch, synthetic_bank, make_answers,
    ):
        get_settings.cache_clear()
        monkeypatch.setenv("PERSONA_REQUIRE_COMPLETE_ANSWERS", "true")
        monkeypatch.setenv("PERSONA_LOG_LEVEL", "verbose")
        try:
            partial = analyze({}, synthetic_bank)
        finally:
            get_settings.cache_clear()
        assert partial == analyze(make_answers(), synthetic_bank)


class TestAnswerValidation:
    @pytest.mark.parametrize("value", [0, 6, -1, 5.9, 0.5, True, "4", None])
    def test_out_of_range_rejected(self, report_service, synthetic_bank, value):
        with pytest.raises(AnswerValidationError) as excinfo:
            report_service.analyze({1: value}, synthetic_bank)
        assert excinfo.value.details["out_of_range"] == {1: value}

    def test_strict_mode_rejects_missing(self, synthetic_bank, make_answers):
        answers = make_answers()
        del answers[1]
        del answers[2]
        service = ReportService(require_complete_answers=True)
        with pytest.raises(AnswerValidationError) as excinfo:
            service.analyze(answers, synthetic_bank)
        assert excinfo.value.details["missing"] == [1, 2]

    def test_strict_mode_accepts_complete(self, synthetic_bank, make_answers):
        service = ReportService(require_complete_answers=True)
        report = service.analyze(make_answers(), synthetic_bank)
        assert report.trait_profile.scores["openness"] == 50


class TestProfilerFailures:
    def test_single_missing_section(self, report_service):
        bank = build_question_bank(skip_sections=(Section.EGOGRAM,))
        with pytest.raises(ProfilerFailureError) as excinfo:
            report_service.analyze({}, bank)
        assert list(excinfo.value.failures) == ["ego_state_profile"]
        assert isinstance(excinfo.value.__cause__, EmptyTraitGroupError)
        assert "ego_state_profile" in str(excinfo.value)

    def test_every_failed_profiler_reported(self, report_service):
        bank = build_question_bank(skip_sections=(Section.RIASEC, Section.SENSITIVITY))
        with pytest.raises(ProfilerFailureError) as excinfo:
            report_service.analyze({}, bank)
        assert list(excinfo.value.failures) == ["interest_profile", "sensitivity_profile"]
        for exc in excinfo.value.failures.values():
            assert isinstance(exc, EmptyTraitGroupError)


class TestReportModel:
    def test_camel_case_serialisation(self, report_service, synthetic_bank):
        dumped = report_service.analyze({}, synthetic_bank).model_dump(by_alias=True)
        assert set(dumped) == {
            "traitProfile", "interestProfile", "virtueProfile", "attachmentProfile",
            "sensitivityProfile", "egoStateProfile", "careerAdvice",
            "relationshipAdvice", "stressAdvice", "summary",
        }
        assert dumped["interestProfile"]["hollandCode"] == "RIA"
        assert "shortLabels" in dumped["egoStateProfile"]
        assert "typeName" in dumped["summary"]

    def test_report_is_frozen(self, report_service, synthetic_bank):
        report = report_service.analyze({}, synthetic_bank)
        with pytest.raises(ValidationError):
            report.summary = report.summary

    def test_nested_collections_are_read_only(self, report_service, synthetic_bank):
        report = report_service.analyze({}, synthetic_bank)
        with pytest.raises(TypeError):
            report.trait_profile.scores["openness"] = 999
        with pytest.raises(TypeError):
            report.ego_state_profile.labels["cp"] = "tampered"
        with pytest.raises(AttributeError):
            report.summary.keywords.append("tampered")
        with pytest.raises(TypeError):
            report.interest_profile.top3[0] = report.interest_profile.top3[1]
        assert report.trait_profile.scores["openness"] == 50

    def test_dump_uses_plain_containers(self, report_service, synthetic_bank):
        dumped = report_service.analyze({}, synthetic_bank).model_dump()
        assert type(dumped["trait_profile"]["scores"]) is dict
        assert type(dumped["ego_state_profile"]["short_labels"]) is dict
        assert dumped["summary"]["keywords"] == ("Secure bonds",)

    def test_scores_within_bounds(self, report_service, synthetic_bank, make_answers):
        report = report_service.analyze(make_answers(default=5), synthetic_bank)
        for section in (
            report.trait_profile, report.interest_profile, report.virtue_profile,
            report.attachment_profile, report.sensitivity_profile, report.ego_state_profile,
        ):
            assert all(0 <= score <= 100 for score in section.scores.values())


class TestShareText:
    def test_digest_contents(self, report_service, synthetic_bank):
        report = report_service.analyze({}, synthetic_bank)
        text = render_share_text(report)
        assert "Type: The Thoughtful Independent Practitioner" in text
        assert "Holland code: RIA" in text
        assert "Top strengths: Wisdom, Courage, Humanity" in text
        assert "Attachment style: Secure" in text
        assert "Sensitivity: Moderate (50)" in text
        assert "Egogram: Flat" in text
        assert "CP:50 NP:50 A:50 FC:50 AC:50" in text
        assert "  Emotional stability: 50" in text
        assert text.endswith("\n")
