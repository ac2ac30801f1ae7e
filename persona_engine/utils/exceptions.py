"""
Persona Engine — Exception hierarchy.

Configuration errors are fatal: they mean the question bank or a static
lookup table does not match what a profiler needs.  Answer validation errors
describe a bad caller-supplied answer set.
"""

from __future__ import annotations

from typing import Any


class PersonaEngineError(Exception):
    """Base exception for the persona engine."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(PersonaEngineError):
    """The engine was handed configuration it cannot score against."""


class EmptyTraitGroupError(ConfigurationError, LookupError):
    """A requested ``(section, trait)`` group has no questions."""

    def __init__(self, section: str, trait: str):
        self.section = section
        self.trait = trait
        super().__init__(
            f"No questions found for section={section!r} trait={trait!r}",
            details={"section": section, "trait": trait},
        )


class UnknownTraitKeyError(ConfigurationError, KeyError):
    """A key was looked up in a table that defines no fallback."""

    def __init__(self, table: str, key: str):
        self.table = table
        self.key = key
        super().__init__(
            f"Key {key!r} is not defined in table {table!r}",
            details={"table": table, "key": key},
        )

    def __str__(self) -> str:
        return self.message


class QuestionBankError(ConfigurationError, ValueError):
    """The question bank is unreadable or structurally invalid."""


class ProfilerFailureError(ConfigurationError):
    """One or more instrument profilers could not be computed.

    ``failures`` maps each failed instrument name to the exception it raised.
    """

    def __init__(self, failures: dict[str, Exception]):
        self.failures = dict(failures)
        names = ", ".join(self.failures)
        super().__init__(
            f"Profiler configuration error in: {names}",
            details={
                name: str(exc) for name, exc in self.failures.items()
            },
        )


class AnswerValidationError(PersonaEngineError, ValueError):
    """The answer set contains out-of-range or (in strict mode) missing values."""
