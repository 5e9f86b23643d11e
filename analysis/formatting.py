"""
Shaping overlap results for display.
"""
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from models import PairOverlap, TopPair

OVERLAP_COLUMNS = ("Employee ID #1", "Employee ID #2", "Project ID", "Days Worked")
TOTAL_COLUMNS = ("Employee ID #1", "Employee ID #2", "Total Days")

NO_PAIR_MESSAGE = "No employees found who worked together on any projects."
NO_OVERLAP_MESSAGE = (
    "No pairs were found to have worked on a common project "
    "with an overlapping date range."
)


def overlap_rows(overlaps: Sequence[PairOverlap]) -> List[Tuple]:
    """Ordered display tuples, one per overlap."""
    return [o.as_tuple() for o in overlaps]


def overlaps_to_dataframe(overlaps: Sequence[PairOverlap]) -> pd.DataFrame:
    return pd.DataFrame(overlap_rows(overlaps), columns=list(OVERLAP_COLUMNS))


def pair_totals_to_dataframe(totals: Sequence[TopPair]) -> pd.DataFrame:
    return pd.DataFrame(
        [(t.employee_a, t.employee_b, t.total_overlap_days) for t in totals],
        columns=list(TOTAL_COLUMNS),
    )


def top_pair_message(top: Optional[TopPair]) -> str:
    """Human readable summary of the top pair."""
    if top is None:
        return NO_PAIR_MESSAGE
    return (
        "The pair of employees who have worked together the longest is: "
        f"({top.employee_a}, {top.employee_b})\n"
        f"Total overlapping days: {top.total_overlap_days}"
    )


def overlap_summary_message(count: int) -> str:
    if count == 0:
        return NO_OVERLAP_MESSAGE
    return f"Displaying {count} common project overlaps found across all employee pairs."
