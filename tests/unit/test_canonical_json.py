"""
Schemas & Canonicalization
File: tests/unit/test_canonical_json.py

Purpose: Unit tests for canonical JSON serialization.
These tests ensure exported proofs and trees serialize identically across runs.
"""

import math
from enum import Enum

import pytest
from pydantic import BaseModel, ConfigDict, Field

from core.schemas import (
    CanonicalizationException,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)


class SampleEnum(str, Enum):
    """Sample enum for testing."""
    OPTION_A = "option_a"
    OPTION_B = "option_b"


class SampleModel(BaseModel):
    """Sample Pydantic model with an aliased field."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    leaf_index: int = Field(..., alias="leafIndex")
    optional_field: str | None = None


class TestDumpsCanonical:
    """Tests for dumps_canonical()."""

    def test_sorted_keys_no_whitespace(self):
        assert dumps_canonical({"b": 1, "a": [1, 2]}) == '{"a":[1,2],"b":1}'

    def test_key_order_independent(self):
        assert dumps_canonical({"x": 1, "y": 2}) == dumps_canonical({"y": 2, "x": 1})

    def test_none_values_dropped(self):
        assert dumps_canonical({"a": None, "b": 0}) == '{"b":0}'

    def test_enum_as_value(self):
        assert dumps_canonical({"opt": SampleEnum.OPTION_B}) == '{"opt":"option_b"}'

    def test_model_uses_aliases(self):
        model = SampleModel(name="n", leaf_index=3)

        assert dumps_canonical(model) == '{"leafIndex":3,"name":"n"}'

    def test_bytes_as_hex(self):
        assert dumps_canonical({"raw": b"\x00\xff"}) == '{"raw":"00ff"}'

    def test_non_ascii_kept(self):
        assert dumps_canonical({"p": "é"}) == '{"p":"é"}'

    def test_nan_rejected(self):
        with pytest.raises(CanonicalizationException):
            dumps_canonical({"v": math.nan})

    def test_infinity_rejected(self):
        with pytest.raises(CanonicalizationException):
            dumps_canonical([math.inf])

    def test_unsupported_type_rejected(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            dumps_canonical({"s": {1, 2}})

        assert exc_info.value.details["path"] == "s"


class TestCanonicalizeValue:
    """Tests for canonicalize_value()."""

    def test_bool_not_treated_as_int(self):
        assert canonicalize_value(True) is True

    def test_tuple_becomes_list(self):
        assert canonicalize_value((1, "a")) == [1, "a"]

    def test_nested_path_reported(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            canonicalize_value({"outer": [1, object()]})

        assert exc_info.value.details["path"] == "outer[1]"


class TestLoadsCanonical:
    """Tests for loads_canonical() and canonical_equals()."""

    def test_parses_json(self):
        assert loads_canonical('{"a":[1,2]}') == {"a": [1, 2]}

    def test_invalid_json(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            loads_canonical("{oops")

        assert exc_info.value.details["line"] == 1

    def test_canonical_equals(self):
        assert canonical_equals({"a": 1, "b": None}, {"a": 1})
        assert not canonical_equals({"a": 1}, {"a": 2})

    def test_canonical_equals_unserializable(self):
        assert not canonical_equals({"v": math.nan}, {"v": math.nan})
