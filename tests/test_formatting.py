from datetime import datetime

from analysis.formatting import (
    NO_OVERLAP_MESSAGE,
    NO_PAIR_MESSAGE,
    OVERLAP_COLUMNS,
    overlap_rows,
    overlap_summary_message,
    overlaps_to_dataframe,
    pair_totals_to_dataframe,
    top_pair_message,
)
from analysis.report import analyze_upload
from models import PairOverlap, TopPair

CSV = (
    "EmpID,ProjectID,DateFrom,DateTo\n"
    "1,10,2023-01-01,2023-06-01\n"
    "2,10,03/01/2023,2023-09-01\n"
    "3,11,2023-01-01,NULL\n"
)


def test_overlap_rows_are_ordered_tuples():
    overlaps = [PairOverlap(1, 2, 10, 92), PairOverlap(1, 3, 11, 5)]
    assert overlap_rows(overlaps) == [(1, 2, 10, 92), (1, 3, 11, 5)]


def test_overlaps_to_dataframe():
    df = overlaps_to_dataframe([PairOverlap(1, 2, 10, 92)])
    assert list(df.columns) == list(OVERLAP_COLUMNS)
    assert df.iloc[0]["Days Worked"] == 92


def test_empty_dataframes_keep_columns():
    assert list(overlaps_to_dataframe([]).columns) == list(OVERLAP_COLUMNS)
    assert len(pair_totals_to_dataframe([])) == 0


def test_top_pair_message():
    message = top_pair_message(TopPair(143, 218, 1200))
    assert "(143, 218)" in message
    assert message.endswith("Total overlapping days: 1200")
    assert top_pair_message(None) == NO_PAIR_MESSAGE


def test_overlap_summary_message():
    assert overlap_summary_message(0) == NO_OVERLAP_MESSAGE
    assert "3 common project overlaps" in overlap_summary_message(3)


def test_analyze_upload_success():
    report = analyze_upload(CSV.encode("utf-8"), as_of=datetime(2024, 1, 1))
    assert report.ok
    assert report.overlaps == [PairOverlap(1, 2, 10, 92)]
    assert report.totals == [TopPair(1, 2, 92)]
    assert "1 common project overlaps" in report.message


def test_analyze_upload_accepts_text():
    report = analyze_upload(CSV, as_of=datetime(2024, 1, 1))
    assert len(report.overlaps) == 1


def test_analyze_upload_reports_errors_inline():
    report = analyze_upload(b"EmpID,DateFrom,DateTo\n1,2023-01-01,NULL\n")
    assert not report.ok
    assert report.error.startswith("An error occurred during file processing:")
    assert "ProjectID" in report.error
    assert report.overlaps == []


def test_analyze_upload_bad_date():
    report = analyze_upload(b"EmpID,ProjectID,DateFrom,DateTo\n1,2,31/31/2023,NULL\n")
    assert not report.ok
    assert "31/31/2023" in report.error


def test_analyze_upload_undecodable_bytes():
    report = analyze_upload(b"\xff\xfe\x00garbage")
    assert not report.ok


def test_analyze_upload_no_overlap():
    report = analyze_upload(b"EmpID,ProjectID,DateFrom,DateTo\n1,2,2023-01-01,NULL\n")
    assert report.ok
    assert report.message == NO_OVERLAP_MESSAGE


def test_analyze_upload_oversized_field():
    data = b"EmpID,ProjectID,DateFrom,DateTo,Notes\n1,10,2023-01-01,2023-06-01," + b"x" * 200000
    report = analyze_upload(data)
    assert not report.ok
    assert "Malformed CSV near line 2" in report.error
