#!/usr/bin/env python3
"""
Unit tests pinning the enum mappings between the grammar and the schema model
"""

import pytest

from ddl_schema.models import ColumnKeyOption, ValueType
from ddl_schema.parser import KEY_OPTIONS, VALUE_TYPES
from ddl_schema.sqlparser import ColumnKeyOpt, ValType


@pytest.mark.unit
def test_key_option_ordinals():
    """Downstream code stores key options by position, so every ordinal is pinned"""
    expected = [
        (0, ColumnKeyOpt.NONE, ColumnKeyOption.NONE),
        (1, ColumnKeyOpt.PRIMARY, ColumnKeyOption.PRIMARY),
        (2, ColumnKeyOpt.SPATIAL_KEY, ColumnKeyOption.SPATIAL_KEY),
        (3, ColumnKeyOpt.UNIQUE, ColumnKeyOption.UNIQUE),
        (4, ColumnKeyOpt.UNIQUE_KEY, ColumnKeyOption.UNIQUE_KEY),
        (5, ColumnKeyOpt.KEY, ColumnKeyOption.KEY),
    ]

    for ordinal, grammar_option, model_option in expected:
        assert int(grammar_option) == ordinal, f"grammar {grammar_option.name} moved to {int(grammar_option)}"
        assert int(model_option) == ordinal, f"model {model_option.name} moved to {int(model_option)}"
        assert KEY_OPTIONS[grammar_option] is model_option, (
            f"Failed for {grammar_option.name}: mapped to {KEY_OPTIONS[grammar_option].name}"
        )
        print(f"✓ PASS: {ordinal} {grammar_option.name:<12} -> {model_option.name}")


@pytest.mark.unit
def test_key_option_mapping_is_complete():
    assert set(KEY_OPTIONS) == set(ColumnKeyOpt)
    assert set(KEY_OPTIONS.values()) == set(ColumnKeyOption)


@pytest.mark.unit
def test_value_type_mapping():
    expected = {
        ValType.STR_VAL: ValueType.STRING,
        ValType.INT_VAL: ValueType.INTEGER,
        ValType.FLOAT_VAL: ValueType.FLOAT,
        ValType.HEX_NUM: ValueType.HEX_NUMBER,
        ValType.HEX_VAL: ValueType.HEX_STRING,
        ValType.VAL_ARG: ValueType.PLACEHOLDER,
        ValType.BIT_VAL: ValueType.BIT,
    }
    assert VALUE_TYPES == expected
    assert set(VALUE_TYPES) == set(ValType)
