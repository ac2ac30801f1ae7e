"""
Persona Engine — Report aggregation.

``analyze`` is the engine's single entry point:

  1. Validate the answer set (range check; completeness in strict mode)
  2. Run all six instrument profilers, collecting configuration failures
  3. Synthesise career / relationship / stress / summary sections
  4. Return one frozen ``Report``

The question bank is always passed in explicitly; nothing is cached between
calls, and settings are never read here: strict mode is a constructor argument.
``render_share_text`` turns a finished report into a plain-text digest.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from persona_engine.schemas.question import LIKERT_MAX, LIKERT_MIN, AnswerSet, Question
from persona_engine.schemas.report import Report
from persona_engine.services.advice_service import AdviceService, ProfileSet
from persona_engine.services.profile_service import BIGFIVE_RANKED, ProfileService
from persona_engine.utils.exceptions import (
    AnswerValidationError,
    ConfigurationError,
    ProfilerFailureError,
)

logger = structlog.get_logger("persona_engine.report_service")


class ReportService:
    """Orchestrates the profilers and synthesisers into a ``Report``."""

    def __init__(
        self,
        profile_service: ProfileService | None = None,
        advice_service: AdviceService | None = None,
        require_complete_answers: bool = False,
    ):
        self.profile_service = profile_service or ProfileService()
        self.advice_service = advice_service or AdviceService()
        self.require_complete_answers = require_complete_answers

    # ══════════════════════════════════════════════════════════════════════
    # analyze — full pipeline entry point
    # ══════════════════════════════════════════════════════════════════════

    def analyze(self, answers: AnswerSet, question_bank: Sequence[Question]) -> Report:
        """Score every instrument and build the full report.

        Parameters
        ----------
        answers:
            Question id -> Likert value in [1, 5].  Missing ids score as 3
            unless ``require_complete_answers`` is set.
        question_bank:
            Ordered question records.

        Raises
        ------
        AnswerValidationError
            An answer is out of range, or answers are missing in strict mode.
        ProfilerFailureError
            One or more instruments could not be scored against the bank.
        """
        log = logger.bind(n_questions=len(question_bank), n_answers=len(answers))
        log.info("report.analyze_start")

        self._validate_answers(answers, question_bank)

        profiles: dict[str, object] = {}
        failures: dict[str, Exception] = {}
        for instrument, method_name in ProfileService.PROFILERS.items():
            try:
                profiles[instrument] = getattr(self.profile_service, method_name)(
                    question_bank, answers,
                )
            except ConfigurationError as exc:
                log.error("report.profiler_failed", instrument=instrument, error=str(exc))
                failures[instrument] = exc

        if failures:
            error = ProfilerFailureError(failures)
            if len(failures) == 1:
                raise error from next(iter(failures.values()))
            raise error

        profile_set = ProfileSet(
            trait=profiles["trait_profile"],
            interest=profiles["interest_profile"],
            virtue=profiles["virtue_profile"],
            attachment=profiles["attachment_profile"],
            sensitivity=profiles["sensitivity_profile"],
            ego_state=profiles["ego_state_profile"],
        )

        report = Report(
            trait_profile=profile_set.trait,
            interest_profile=profile_set.interest,
            virtue_profile=profile_set.virtue,
            attachment_profile=profile_set.attachment,
            sensitivity_profile=profile_set.sensitivity,
            ego_state_profile=profile_set.ego_state,
            career_advice=self.advice_service.career_advice(profile_set),
            relationship_advice=self.advice_service.relationship_advice(profile_set),
            stress_advice=self.advice_service.stress_advice(profile_set),
            summary=self.advice_service.summary(profile_set),
        )
        log.info("report.analyze_complete", type_name=report.summary.type_name)
        return report

    # ══════════════════════════════════════════════════════════════════════
    # Answer validation
    # ══════════════════════════════════════════════════════════════════════

    def _validate_answers(self, answers: AnswerSet, question_bank: Sequence[Question]) -> None:
        out_of_range = {
            qid: value for qid, value in answers.items()
            if isinstance(value, bool) or not isinstance(value, int)
            or not LIKERT_MIN <= value <= LIKERT_MAX
        }
        if out_of_range:
            raise AnswerValidationError(
                f"Answers must be integers in [{LIKERT_MIN}, {LIKERT_MAX}]",
                details={"out_of_range": out_of_range},
            )

        known_ids = {q.id for q in question_bank}
        unknown = sorted(set(answers) - known_ids)
        if unknown:
            logger.debug("report.unknown_answer_ids", ids=unknown)

        missing = sorted(known_ids - set(answers))
        if not missing:
            return
        if self.require_complete_answers:
            raise AnswerValidationError(
                f"{len(missing)} question(s) unanswered",
                details={"missing": missing},
            )
        logger.info("report.missing_answers_defaulted", count=len(missing))


def analyze(answers: AnswerSet, question_bank: Sequence[Question]) -> Report:
    """Module-level convenience wrapper around ``ReportService.analyze``."""
    return ReportService().analyze(answers, question_bank)


# ──────────────────────────────────────────────────────────────────────────────
# Plain-text digest
# ──────────────────────────────────────────────────────────────────────────────

def render_share_text(report: Report) -> str:
    """Human-readable multi-line digest of ``report``."""
    summary = report.summary
    traits = report.trait_profile
    interest = report.interest_profile
    virtue = report.virtue_profile
    attachment = report.attachment_profile
    sensitivity = report.sensitivity_profile
    ego = report.ego_state_profile

    lines = [
        "[Personality Profile Results]",
        "",
        f"Type: {summary.type_name}",
        f"Summary: {summary.summary}",
        "",
        "Big Five:",
    ]
    lines.extend(f"  {traits.labels[t]}: {traits.scores[t]}" for t in BIGFIVE_RANKED)
    lines.extend([
        "",
        f"Holland code: {interest.holland_code}",
        "Top strengths: " + ", ".join(virtue.labels[r.trait] for r in virtue.top3),
        f"Attachment style: {attachment.labels[attachment.dominant]}",
        f"Sensitivity: {sensitivity.level} ({sensitivity.overall})",
        f"Egogram: {ego.pattern.name}",
        "  " + " ".join(
            f"{ego.short_labels[state]}:{score}" for state, score in ego.scores.items()
        ),
    ])
    return "\n".join(lines) + "\n"
