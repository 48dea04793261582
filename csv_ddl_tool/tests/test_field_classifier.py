import pytest

from csv_ddl_tool.field_classifier import FieldClassifier, classify_field
from csv_ddl_tool.value_kind import ValueKind


def test_classify_integer():
    assert classify_field("0") == ValueKind.INTEGER
    assert classify_field("25000") == ValueKind.INTEGER
    assert classify_field("-42") == ValueKind.INTEGER
    assert classify_field("+7") == ValueKind.INTEGER


def test_classify_float():
    assert classify_field("0.0") == ValueKind.FLOAT
    assert classify_field("2.5") == ValueKind.FLOAT
    assert classify_field("-.5") == ValueKind.FLOAT
    assert classify_field("5.") == ValueKind.FLOAT
    assert classify_field("1e10") == ValueKind.FLOAT
    assert classify_field("-2.5E-3") == ValueKind.FLOAT


def test_integer_outside_int64_is_float():
    assert classify_field("9223372036854775807") == ValueKind.INTEGER
    assert classify_field("-9223372036854775808") == ValueKind.INTEGER
    assert classify_field("9223372036854775808") == ValueKind.FLOAT
    assert classify_field("-9223372036854775809") == ValueKind.FLOAT


def test_classify_text():
    assert classify_field("Springfield") == ValueKind.TEXT
    assert classify_field("12abc") == ValueKind.TEXT
    assert classify_field("1,000") == ValueKind.TEXT
    assert classify_field("1_000") == ValueKind.TEXT
    assert classify_field("inf") == ValueKind.TEXT
    assert classify_field("NaN") == ValueKind.TEXT


def test_lone_sign_is_text():
    assert classify_field("-") == ValueKind.TEXT
    assert classify_field("+") == ValueKind.TEXT
    assert classify_field(".") == ValueKind.TEXT


def test_whitespace_is_not_trimmed():
    assert classify_field(" 1") == ValueKind.TEXT
    assert classify_field("1 ") == ValueKind.TEXT
    assert classify_field(" 2.5 ") == ValueKind.TEXT
    assert classify_field(" ") == ValueKind.TEXT


def test_null_sentinel_exact_match():
    assert classify_field("") == ValueKind.NULL
    assert classify_field("NULL", null_sentinel="NULL") == ValueKind.NULL
    assert classify_field("null", null_sentinel="NULL") == ValueKind.TEXT
    # With a custom sentinel the empty string is ordinary text
    assert classify_field("", null_sentinel="NULL") == ValueKind.TEXT


def test_numeric_sentinel_wins_over_integer():
    assert classify_field("-1", null_sentinel="-1") == ValueKind.NULL


def test_extended_types_are_off_by_default():
    assert classify_field("true") == ValueKind.TEXT
    assert classify_field("2020-01-01") == ValueKind.TEXT
    assert classify_field("2020-01-01 18:30:04") == ValueKind.TEXT


def test_extended_boolean():
    assert classify_field("true", extended=True) == ValueKind.BOOLEAN
    assert classify_field("FALSE", extended=True) == ValueKind.BOOLEAN
    assert classify_field("yes", extended=True) == ValueKind.TEXT


def test_extended_date_and_timestamp():
    assert classify_field("2020-01-01", extended=True) == ValueKind.DATE
    assert classify_field("31/12/2020", extended=True) == ValueKind.DATE
    assert classify_field("2020-01-01 18:30:04", extended=True) == ValueKind.TIMESTAMP
    assert classify_field("2020-01-01T00:00:00", extended=True) == ValueKind.TIMESTAMP
    assert classify_field("2020-01-01 18:30:04 +02:00", extended=True) == ValueKind.TIMESTAMP
    assert classify_field("2020-01-01T18:30:04.123Z", extended=True) == ValueKind.TIMESTAMP
    assert classify_field(" 2020-01-01", extended=True) == ValueKind.TEXT
    assert classify_field("2020-13-01", extended=True) == ValueKind.TEXT


def test_numbers_win_over_extended_types():
    assert classify_field("1", extended=True) == ValueKind.INTEGER
    assert classify_field("20200101", extended=True) == ValueKind.INTEGER


@pytest.mark.parametrize("value", ["", "1", "-", "abc", " 3 ", "1e5"])
def test_classifier_matches_function(value):
    classifier = FieldClassifier(null_sentinel="", extended=False)
    assert classifier.classify(value) == classify_field(value)


def test_classifier_treats_none_sentinel_as_empty():
    assert FieldClassifier(null_sentinel=None).classify("") == ValueKind.NULL


def test_very_long_digit_string_is_float():
    assert classify_field("1" * 5000) == ValueKind.FLOAT
    assert classify_field("0000000000000000000001") == ValueKind.INTEGER
