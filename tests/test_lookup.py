"""Strict table lookup."""
import pytest

from persona_engine.utils.exceptions import ConfigurationError, UnknownTraitKeyError
from persona_engine.utils.lookup import lookup_or_raise


def test_hit():
    assert lookup_or_raise({"secure": "Secure"}, "secure", "attachment_labels") == "Secure"


def test_miss_names_table_and_key():
    with pytest.raises(UnknownTraitKeyError) as excinfo:
        lookup_or_raise({}, "disorganised", "attachment_labels")
    assert excinfo.value.table == "attachment_labels"
    assert excinfo.value.key == "disorganised"
    assert "attachment_labels" in str(excinfo.value)
    assert isinstance(excinfo.value, (KeyError, ConfigurationError))
    assert excinfo.value.__cause__ is None
