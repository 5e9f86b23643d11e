import csv
from datetime import date

import pytest

from config import AppConfig, LoaderConfig
from exceptions import MalformedFileError, RowParseError, SchemaError, UnparseableDateError
from models import FixedDate, ONGOING
from parsing.loader import RecordLoader, coerce_identifier, load_records


def test_loads_mixed_formats(write_csv):
    path = write_csv("""
        EmpID,ProjectID,DateFrom,DateTo
        143,12,2013-11-01,2014-01-05
        218,10,05/16/2012,NULL
        143,10,01-Jan-09,2011-04-27
        """)
    records = load_records(path)

    assert len(records) == 3
    assert records[0].employee_id == 143
    assert records[0].project_id == 12
    assert records[0].date_from == FixedDate(date(2013, 11, 1))
    assert records[1].date_from == FixedDate(date(2012, 5, 16))
    assert records[1].date_to is ONGOING
    assert records[2].date_from == FixedDate(date(2009, 1, 1))


def test_missing_required_columns():
    loader = RecordLoader()
    with pytest.raises(SchemaError) as excinfo:
        loader.load(["Employee", "ProjectID", "DateFrom", "DateTo"], [])
    assert excinfo.value.missing_columns == ["EmpID"]
    assert "'EmpID'" in str(excinfo.value)


def test_empty_file_is_schema_error(write_csv):
    path = write_csv("")
    with pytest.raises(SchemaError):
        load_records(path)


def test_malformed_rows_are_skipped():
    loader = RecordLoader()
    header = ["EmpID", "ProjectID", "DateFrom", "DateTo"]
    rows = [
        ["1", "10", "2020-01-01", "2020-02-01"],
        ["2", "10", "2020-01-15"],
        [],
        ["3", "10", "2020-01-01", "2020-03-01", "extra"],
        ["4", "10", "2020-01-01", ""],
    ]
    records = loader.load(header, rows)
    assert [r.employee_id for r in records] == [1, 4]


def test_bad_date_aborts_whole_load(write_csv):
    path = write_csv("""
        EmpID,ProjectID,DateFrom,DateTo
        1,10,2020-01-01,2020-02-01
        2,10,2020-02-30,2020-03-01
        3,10,2020-01-01,2020-02-01
        """)
    with pytest.raises(RowParseError) as excinfo:
        load_records(path)

    error = excinfo.value
    assert error.row_number == 2
    assert isinstance(error.cause, UnparseableDateError)
    assert isinstance(error.__cause__, UnparseableDateError)
    assert "2020-02-30" in str(error)


def test_open_ended_start_is_rejected():
    loader = RecordLoader()
    with pytest.raises(RowParseError) as excinfo:
        loader.load(
            ["EmpID", "ProjectID", "DateFrom", "DateTo"],
            [["1", "10", "NULL", "2020-01-01"]],
        )
    assert isinstance(excinfo.value.cause, ValueError)


def test_end_before_start_is_rejected():
    loader = RecordLoader()
    with pytest.raises(RowParseError):
        loader.load(
            ["EmpID", "ProjectID", "DateFrom", "DateTo"],
            [["1", "10", "2020-05-01", "2020-01-01"]],
        )


def test_missing_file_raises_before_parsing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_records(str(tmp_path / "nope.csv"))


def test_extra_columns_are_carried(write_csv):
    path = write_csv("""
        Name,EmpID,ProjectID,DateFrom,DateTo
        Alice,1,10,2020-01-01,2020-02-01
        """)
    (record,) = load_records(path)
    assert record.extra == {"Name": "Alice"}
    assert record.employee_id == 1


def test_whitespace_and_bom_are_stripped(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_bytes(
        "\ufeffEmpID, ProjectID ,DateFrom,DateTo\r\n7, A1 , 2020-01-01 ,null\r\n".encode("utf-8")
    )
    (record,) = load_records(str(path))
    assert record.employee_id == 7
    assert record.project_id == "A1"
    assert record.date_to is ONGOING


def test_custom_delimiter_and_columns(write_csv):
    config = AppConfig(
        loader=LoaderConfig(
            employee_column="Employee",
            project_column="Project",
            delimiter=";",
        )
    )
    path = write_csv("""
        Employee;Project;DateFrom;DateTo
        E1;P1;2020-01-01;2020-02-01
        """)
    (record,) = load_records(path, config)
    assert record.employee_id == "E1"
    assert record.project_id == "P1"


def test_load_bytes():
    data = b"EmpID,ProjectID,DateFrom,DateTo\n1,2,2021-01-01,2021-06-01\n"
    (record,) = RecordLoader().load_bytes(data)
    assert record.date_to == FixedDate(date(2021, 6, 1))


@pytest.mark.parametrize(
    "raw, expected", [("42", 42), ("007", 7), ("E42", "E42"), ("4.2", "4.2"), ("", "")]
)
def test_coerce_identifier(raw, expected):
    assert coerce_identifier(raw) == expected


def test_oversized_field_is_malformed_file():
    data = b"EmpID,ProjectID,DateFrom,DateTo,Notes\n1,10,2023-01-01,2023-06-01," + b"x" * 200000
    with pytest.raises(MalformedFileError) as excinfo:
        RecordLoader().load_bytes(data)
    assert excinfo.value.line_number == 2
    assert isinstance(excinfo.value.__cause__, csv.Error)


def test_row_number_counts_physical_lines(write_csv):
    path = write_csv("""
        EmpID,ProjectID,DateFrom,DateTo,Notes
        1,10,2020-01-01,2020-02-01,"first
        second"
        2,10,2020-99-01,2020-03-01,x
        """)
    with pytest.raises(RowParseError) as excinfo:
        load_records(path)
    assert excinfo.value.row_number == 3
