#!/usr/bin/env python3
"""
Persona Engine — Analyse a saved answer set from the command line.

Reads a JSON object mapping question id to Likert value (1-5), runs the full
analysis against the bundled (or a supplied) question bank, and prints the
report.

Usage examples
--------------
  # Full report as camelCase JSON
  python scripts/analyze_answers.py answers.json

  # Plain-text digest against a custom bank, failing on unanswered items
  python scripts/analyze_answers.py answers.json --question-bank bank.json \\
      --format text --strict
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Ensure the project root is importable
sys.path.insert(0, ".")

import structlog

from persona_engine.config import get_settings
from persona_engine.logging_config import configure_logging
from persona_engine.services.question_bank_service import load_question_bank
from persona_engine.services.report_service import ReportService, render_share_text
from persona_engine.utils.exceptions import PersonaEngineError

logger = structlog.get_logger("persona_engine.cli")


def read_answers(path: Path) -> dict[int, object]:
    """Load ``{"<id>": value}`` JSON into an int-keyed answer set.

    Values are passed through untouched so the engine can reject non-integers.
    """
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a JSON object of id -> value")
    return {int(qid): value for qid, value in raw.items()}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Score a questionnaire answer set and print the personality report.",
    )
    parser.add_argument(
        "answers",
        type=Path,
        help="JSON file mapping question id to an answer in 1-5.",
    )
    parser.add_argument(
        "--question-bank", "-q",
        type=Path,
        default=None,
        help="JSON question bank (default: bundled bank or PERSONA_QUESTION_BANK_PATH).",
    )
    parser.add_argument(
        "--format", "-f",
        choices=("json", "text"),
        default="json",
        help="Output the full report as JSON or a plain-text digest (default: json).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Reject answer sets with unanswered questions.",
    )

    args = parser.parse_args(argv)
    configure_logging()

    try:
        strict = args.strict
        if strict is None:
            strict = get_settings().REQUIRE_COMPLETE_ANSWERS
        answers = read_answers(args.answers)
        question_bank = load_question_bank(args.question_bank)
        report = ReportService(require_complete_answers=strict).analyze(
            answers, question_bank,
        )
    except (OSError, ValueError, PersonaEngineError) as exc:
        logger.error("cli.analyze_failed", error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.format == "text":
        sys.stdout.write(render_share_text(report))
    else:
        print(report.model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
