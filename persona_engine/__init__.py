"""
Persona Engine — multi-instrument questionnaire scoring.

Turns Likert answers into Big Five, RIASEC, character-strength, attachment,
sensitivity and egogram profiles plus rule-based career, relationship and
stress guidance.
"""

from persona_engine.schemas.question import AnswerSet, Question, Section
from persona_engine.schemas.report import Report
from persona_engine.services.question_bank_service import load_question_bank
from persona_engine.services.report_service import (
    ReportService,
    analyze,
    render_share_text,
)

__all__ = [
    "AnswerSet",
    "Question",
    "Section",
    "Report",
    "ReportService",
    "analyze",
    "load_question_bank",
    "render_share_text",
]
