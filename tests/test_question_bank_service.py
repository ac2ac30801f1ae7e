"""Unit tests for question bank loading and the bundled bank."""
import json

import pytest

from persona_engine.schemas.question import Section
from persona_engine.services.question_bank_service import (
    load_question_bank,
    parse_question_bank,
    section_counts,
)
from persona_engine.services.report_service import ReportService
from persona_engine.utils.exceptions import ConfigurationError, QuestionBankError


def _record(qid, section="bigfive", trait="openness", **extra):
    return {"id": qid, "section": section, "trait": trait, "text": f"q{qid}", **extra}


class TestParseQuestionBank:
    def test_valid_records(self):
        bank = parse_question_bank([_record(1), _record(2, reverse=True)])
        assert isinstance(bank, tuple)
        assert [q.id for q in bank] == [1, 2]
        assert bank[1].reverse is True
        assert bank[0].section is Section.BIGFIVE

    def test_trait_normalised(self):
        bank = parse_question_bank([_record(1, trait="  Openness ")])
        assert bank[0].trait == "openness"

    def test_duplicate_ids_rejected(self):
        with pytest.raises(QuestionBankError) as excinfo:
            parse_question_bank([_record(1), _record(2), _record(1)])
        assert excinfo.value.details["duplicates"] == [1]

    @pytest.mark.parametrize("record", [
        _record(1, section="horoscope"),
        _record(0),
        {"id": 1, "section": "bigfive", "text": "no trait"},
    ])
    def test_invalid_record_rejected(self, record):
        with pytest.raises(QuestionBankError) as excinfo:
            parse_question_bank([record])
        assert excinfo.value.details["errors"]

    def test_not_a_list(self):
        with pytest.raises(QuestionBankError):
            parse_question_bank({"id": 1})

    def test_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            parse_question_bank([_record(1), _record(1)])


class TestLoadQuestionBank:
    def test_load_from_path(self, tmp_path):
        path = tmp_path / "bank.json"
        path.write_text(json.dumps([_record(1), _record(2, trait="extraversion")]))
        bank = load_question_bank(path)
        assert [q.trait for q in bank] == ["openness", "extraversion"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(QuestionBankError) as excinfo:
            load_question_bank(tmp_path / "absent.json")
        assert "absent.json" in excinfo.value.details["path"]

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bank.json"
        path.write_text("[{")
        with pytest.raises(QuestionBankError):
            load_question_bank(str(path))


class TestBundledBank:
    def test_layout(self, bundled_bank):
        assert len(bundled_bank) == 70
        counts = section_counts(bundled_bank)
        assert list(counts) == [s.value for s in Section]
        assert counts["bigfive"] == {
            "openness": 3, "conscientiousness": 3, "extraversion": 3,
            "agreeableness": 3, "neuroticism": 3,
        }
        assert set(counts["riasec"].values()) == {2}
        assert set(counts["strengths"].values()) == {2}
        assert set(counts["attachment"].values()) == {3}
        assert set(counts["sensitivity"].values()) == {3}
        assert set(counts["egogram"].values()) == {2}

    def test_reverse_items(self, bundled_bank):
        assert [q.id for q in bundled_bank if q.reverse] == [3, 6, 9, 12, 15]

    def test_all_neutral_end_to_end(self, bundled_bank):
        answers = {q.id: 3 for q in bundled_bank}
        report = ReportService(require_complete_answers=True).analyze(answers, bundled_bank)
        assert set(report.trait_profile.scores.values()) == {50}
        assert report.summary.type_name == "The Thoughtful Independent Practitioner"
        assert report.ego_state_profile.pattern.key == "flat"

    def test_reverse_item_scored_end_to_end(self, bundled_bank):
        answers = {q.id: 3 for q in bundled_bank}
        # openness items 1, 2 agree; item 3 is reverse-coded and disagreed with
        answers.update({1: 5, 2: 5, 3: 1})
        report = ReportService(require_complete_answers=True).analyze(answers, bundled_bank)
        assert report.trait_profile.scores["openness"] == 100

    def test_interest_maximum_gives_ria(self, bundled_bank):
        answers = {q.id: 5 if q.section is Section.RIASEC else 3 for q in bundled_bank}
        report = ReportService(require_complete_answers=True).analyze(answers, bundled_bank)
        assert set(report.interest_profile.scores.values()) == {100}
        assert report.interest_profile.holland_code == "RIA"
