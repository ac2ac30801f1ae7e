"""
Persona Engine — Question bank loading.

A bank is a JSON array of question objects::

    [{"id": 1, "section": "bigfive", "trait": "openness",
      "text": "...", "reverse": false}, ...]

The bundled bank lives in ``persona_engine/data/question_bank.json``; the
``PERSONA_QUESTION_BANK_PATH`` setting overrides it.
"""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Sequence

import structlog
from pydantic import TypeAdapter, ValidationError

from persona_engine.config import get_settings
from persona_engine.schemas.question import Question
from persona_engine.utils.exceptions import QuestionBankError

logger = structlog.get_logger("persona_engine.question_bank_service")

DEFAULT_QUESTION_BANK_PATH = Path(__file__).resolve().parent.parent / "data" / "question_bank.json"

_QUESTION_LIST = TypeAdapter(list[Question])


def parse_question_bank(records: object) -> tuple[Question, ...]:
    """Validate raw records into an immutable, id-unique question bank."""
    try:
        questions = _QUESTION_LIST.validate_python(records)
    except ValidationError as exc:
        raise QuestionBankError(
            "Question bank failed validation",
            details={"errors": exc.errors(include_url=False)},
        ) from exc

    duplicates = sorted(qid for qid, n in Counter(q.id for q in questions).items() if n > 1)
    if duplicates:
        raise QuestionBankError(
            f"Duplicate question ids: {duplicates}",
            details={"duplicates": duplicates},
        )
    return tuple(questions)


def load_question_bank(path: str | Path | None = None) -> tuple[Question, ...]:
    """Read a question bank from ``path``, the configured path, or the bundled file."""
    if path is None:
        path = get_settings().QUESTION_BANK_PATH or DEFAULT_QUESTION_BANK_PATH
    path = Path(path)

    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise QuestionBankError(
            f"Could not read question bank from {path}",
            details={"path": str(path), "error": str(exc)},
        ) from exc

    questions = parse_question_bank(records)
    logger.info(
        "question_bank.loaded",
        path=str(path),
        n_questions=len(questions),
        sections=section_counts(questions),
    )
    return questions


def section_counts(questions: Sequence[Question]) -> dict[str, dict[str, int]]:
    """``{section: {trait: n_questions}}`` for a bank, in first-seen order."""
    counts: dict[str, dict[str, int]] = {}
    for q in questions:
        traits = counts.setdefault(q.section.value, {})
        traits[q.trait] = traits.get(q.trait, 0) + 1
    return counts
