from __future__ import annotations

from typing import Mapping, TypeVar

from persona_engine.utils.exceptions import UnknownTraitKeyError

V = TypeVar("V")


def lookup_or_raise(table: Mapping[str, V], key: str, table_name: str) -> V:
    """Fetch ``key`` from a table that has no fallback entry."""
    try:
        return table[key]
    except KeyError:
        raise UnknownTraitKeyError(table_name, key) from None
