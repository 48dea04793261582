from pathlib import Path

import pytest

from csv_ddl_tool.column_names import letter_name, letter_names, resolve_column_names
from csv_ddl_tool.config import InferenceConfig
from csv_ddl_tool.exceptions import ColumnNamesMismatch, EmptySource, RowWidthMismatch
from csv_ddl_tool.schema_inference import EngineState, SchemaInferenceEngine, infer_schema
from csv_ddl_tool.source_reader import read_rows
from csv_ddl_tool.value_kind import ValueKind

DATA = Path(__file__).parent / 'data'

EXAMPLE_ROWS = [
    ["city", "region", "country", "population"],
    ["Springfield", "Illinois", "USA", "25000"],
    ["Shelbyville", "Illinois", "USA", "12000"],
]


def summary(schema):
    return [(c.name, c.kind, c.nullable) for c in schema.columns]


def test_infer_example_with_header():
    schema = infer_schema(EXAMPLE_ROWS)
    assert summary(schema) == [
        ("city", ValueKind.TEXT, False),
        ("region", ValueKind.TEXT, False),
        ("country", ValueKind.TEXT, False),
        ("population", ValueKind.INTEGER, False),
    ]
    assert schema.row_count == 2


def test_infer_schema_from_csv_file():
    with (DATA / 'mixed.csv').open(newline='') as f:
        schema = infer_schema(read_rows(f))
    assert summary(schema) == [
        ("id", ValueKind.INTEGER, False),
        ("score", ValueKind.FLOAT, False),
        ("comment", ValueKind.TEXT, True),
        ("empty", ValueKind.TEXT, True),
    ]


def test_rows_are_consumed_lazily():
    def rows():
        yield ["n"]
        for i in range(10000):
            yield [str(i)]

    schema = infer_schema(rows())
    assert schema.columns[0].kind == ValueKind.INTEGER
    assert schema.row_count == 10000


def test_no_header_uses_letters_and_first_row_is_data():
    config = InferenceConfig(has_header=False)
    schema = infer_schema([["1", "x"], ["2", "y"]], config)
    assert schema.column_names == ["a", "b"]
    assert schema.columns[0].kind == ValueKind.INTEGER
    assert schema.row_count == 2


def test_twenty_seven_columns_without_header():
    config = InferenceConfig(has_header=False)
    schema = infer_schema([["1"] * 27], config)
    names = schema.column_names
    assert names[:26] == list("abcdefghijklmnopqrstuvwxyz")
    assert names[26] == "aa"


def test_letter_names_continue_base26():
    assert letter_name(0) == "a"
    assert letter_name(25) == "z"
    assert letter_name(26) == "aa"
    assert letter_name(51) == "az"
    assert letter_name(52) == "ba"
    assert letter_name(701) == "zz"
    assert letter_name(702) == "aaa"
    assert len(set(letter_names(1000))) == 1000


def test_header_names_are_normalized():
    schema = infer_schema([["City Name", "Population"], ["x", "1"]])
    assert schema.column_names == ["city_name", "population"]


def test_override_names_win_over_header():
    config = InferenceConfig(column_names=("town", "st", "nation", "pop"))
    schema = infer_schema(EXAMPLE_ROWS, config)
    assert schema.column_names == ["town", "st", "nation", "pop"]
    assert schema.row_count == 2


def test_override_names_without_header():
    config = InferenceConfig(has_header=False, column_names=("x", "y"))
    schema = infer_schema([["1", "2"]], config)
    assert schema.column_names == ["x", "y"]


def test_override_names_count_mismatch():
    config = InferenceConfig(column_names=("a", "b"))
    with pytest.raises(ColumnNamesMismatch) as excinfo:
        infer_schema(EXAMPLE_ROWS, config)
    assert excinfo.value.provided == 2
    assert excinfo.value.expected == 4


def test_resolve_column_names_policy():
    assert resolve_column_names(2, header=["A B", "c"], override=["x", "y"]) == ["x", "y"]
    assert resolve_column_names(2, header=["A B", "c"]) == ["a_b", "c"]
    assert resolve_column_names(2) == ["a", "b"]


def test_empty_header_cell_keeps_letter_name():
    assert resolve_column_names(3, header=["id", "", "Score"]) == ["id", "b", "score"]
    schema = infer_schema([["id", ""], ["1", "x"]])
    assert schema.column_names == ["id", "b"]


def test_short_row_after_header_is_fatal():
    rows = EXAMPLE_ROWS[:2] + [["Shelbyville", "Illinois", "USA"]]
    engine = SchemaInferenceEngine()
    with pytest.raises(RowWidthMismatch) as excinfo:
        engine.infer(rows)
    # record 1 is the header, so the bad row is record 3
    assert excinfo.value.row_number == 3
    assert excinfo.value.expected == 4
    assert excinfo.value.actual == 3
    assert engine.state == EngineState.FAILED
    assert engine.accumulators == []


def test_long_row_without_header_reports_record_number():
    config = InferenceConfig(has_header=False)
    with pytest.raises(RowWidthMismatch) as excinfo:
        infer_schema([["1", "2"], ["3", "4"], ["5", "6", "7"]], config)
    assert excinfo.value.row_number == 3


def test_width_mismatch_on_first_data_row():
    with pytest.raises(RowWidthMismatch) as excinfo:
        infer_schema([["a", "b"], ["1"]])
    assert excinfo.value.row_number == 2


def test_processing_stops_at_first_bad_row():
    consumed = []

    def rows():
        for row in (["a"], ["1"], ["1", "2"], ["3"]):
            consumed.append(row)
            yield row

    with pytest.raises(RowWidthMismatch):
        infer_schema(rows())
    assert consumed == [["a"], ["1"], ["1", "2"]]


def test_empty_source():
    engine = SchemaInferenceEngine(source="empty.csv")
    with pytest.raises(EmptySource) as excinfo:
        engine.infer([])
    assert "empty.csv" in str(excinfo.value)
    assert engine.state == EngineState.FAILED


def test_header_only_gives_nullable_text_columns():
    schema = infer_schema([["city", "population"]])
    assert summary(schema) == [
        ("city", ValueKind.TEXT, True),
        ("population", ValueKind.TEXT, True),
    ]
    assert schema.row_count == 0


def test_custom_null_sentinel():
    config = InferenceConfig(null_sentinel="NULL")
    schema = infer_schema([["n", "s"], ["1", ""], ["NULL", "x"]], config)
    assert summary(schema) == [
        ("n", ValueKind.INTEGER, True),
        ("s", ValueKind.TEXT, False),
    ]


def test_extended_types():
    config = InferenceConfig(extended_types=True)
    rows = [
        ["flag", "day", "at"],
        ["true", "2020-01-01", "2020-01-01 10:00:00"],
        ["false", "2020-02-01", "2020-01-02"],
    ]
    schema = infer_schema(rows, config)
    assert [c.kind for c in schema.columns] == [
        ValueKind.BOOLEAN, ValueKind.DATE, ValueKind.TIMESTAMP,
    ]


def test_engine_is_single_use():
    engine = SchemaInferenceEngine()
    engine.infer(EXAMPLE_ROWS)
    assert engine.state == EngineState.FINALIZED
    with pytest.raises(RuntimeError):
        engine.infer(EXAMPLE_ROWS)


def test_schema_is_immutable():
    schema = infer_schema(EXAMPLE_ROWS)
    with pytest.raises(Exception):
        schema.columns[0].kind = ValueKind.INTEGER
