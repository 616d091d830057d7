import logging

import pytest

from ddl_schema.errors import MalformedNumericLiteralError
from ddl_schema.models import Value, ValueType
from ddl_schema.parser import parse_value
from ddl_schema.sqlparser import SQLVal, ValType


def test_missing_literal():
    assert parse_value(None) is None


@pytest.mark.parametrize("raw,expected", [
    ("1", True),
    ("0", False),
    ("x", False),
    ("", False),
    ("11", False),
])
def test_bit_literal(raw, expected):
    value = parse_value(SQLVal(ValType.BIT_VAL, raw))
    assert value == Value(value_type=ValueType.BIT, raw=raw, bit_val=expected), (
        f"Failed for bit literal {raw!r}: got {value}"
    )
    assert value.payload is expected


@pytest.mark.parametrize("raw,expected", [
    ("0", 0),
    ("42", 42),
    ("-7", -7),
    ("+15", 15),
    ("9223372036854775807", 2 ** 63 - 1),
    ("-9223372036854775808", -(2 ** 63)),
])
def test_integer_literal(raw, expected):
    value = parse_value(SQLVal(ValType.INT_VAL, raw))
    assert value.value_type == ValueType.INTEGER
    assert value.int_val == expected
    assert value.raw == raw
    assert value.str_val is None and value.float_val is None and value.bit_val is None


@pytest.mark.parametrize("raw,expected", [
    ("0.5", 0.5),
    ("-1.25", -1.25),
    (".5", 0.5),
    ("1.5e3", 1500.0),
    ("2E-2", 0.02),
    ("3.", 3.0),
])
def test_float_literal(raw, expected):
    value = parse_value(SQLVal(ValType.FLOAT_VAL, raw))
    assert value.value_type == ValueType.FLOAT
    assert value.float_val == pytest.approx(expected)
    assert value.raw == raw


@pytest.mark.parametrize("val_type,raw,value_type", [
    (ValType.INT_VAL, "12a", ValueType.INTEGER),
    (ValType.INT_VAL, "", ValueType.INTEGER),
    (ValType.INT_VAL, "1.5", ValueType.INTEGER),
    (ValType.INT_VAL, "9223372036854775808", ValueType.INTEGER),
    (ValType.INT_VAL, "18446744073709551615", ValueType.INTEGER),
    (ValType.FLOAT_VAL, "abc", ValueType.FLOAT),
    (ValType.FLOAT_VAL, "nan", ValueType.FLOAT),
    (ValType.FLOAT_VAL, "1e999", ValueType.FLOAT),
])
def test_malformed_numeric_literal(val_type, raw, value_type):
    with pytest.raises(MalformedNumericLiteralError) as exc_info:
        parse_value(SQLVal(val_type, raw))
    assert exc_info.value.value_type == value_type
    assert exc_info.value.raw == raw


@pytest.mark.parametrize("val_type,raw,value_type", [
    (ValType.STR_VAL, "it's", ValueType.STRING),
    (ValType.HEX_NUM, "0x1F", ValueType.HEX_NUMBER),
    (ValType.HEX_VAL, "1f", ValueType.HEX_STRING),
    (ValType.VAL_ARG, ":id", ValueType.PLACEHOLDER),
    (ValType.VAL_ARG, "current_timestamp", ValueType.PLACEHOLDER),
])
def test_raw_literal(val_type, raw, value_type):
    value = parse_value(SQLVal(val_type, raw))
    assert value.value_type == value_type
    assert value.raw == raw
    assert value.payload == raw
    assert value.int_val is None and value.float_val is None and value.bit_val is None


def test_string_literal_payload():
    value = parse_value(SQLVal(ValType.STR_VAL, "hello"))
    assert value.str_val == "hello"
    assert value.to_dict() == {'type': 'STRING', 'raw': 'hello', 'value': 'hello'}


def test_unknown_literal_type(caplog):
    with caplog.at_level(logging.ERROR, logger='ddl_schema.parser'):
        assert parse_value(SQLVal(99, "whatever")) is None
    assert 'unknown literal type' in caplog.text
