# Directory: analysis/overlap.py
"""
Pairwise overlap computation between employees sharing a project.
"""
import math
from collections import defaultdict
from datetime import datetime
from itertools import combinations
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from models import (
    AssignmentRecord,
    Identifier,
    PairOverlap,
    TopPair,
    identifier_key,
)
from utils.logger import logger

SECONDS_PER_DAY = 86400


def round_days(days: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(days) + 0.5), days))


def group_by_project(
    records: Iterable[AssignmentRecord],
) -> Dict[Identifier, List[AssignmentRecord]]:
    """Group records by project, preserving input order within each group."""
    groups: Dict[Identifier, List[AssignmentRecord]] = defaultdict(list)
    for record in records:
        groups[record.project_id].append(record)
    return groups


def overlap_days(
    first: AssignmentRecord, second: AssignmentRecord, as_of: datetime
) -> int:
    """
    Whole days two assignments overlap, or 0 if they do not intersect.

    Ongoing end dates resolve to ``as_of``.
    """
    start = max(first.date_from.resolve(as_of), second.date_from.resolve(as_of))
    end = min(first.date_to.resolve(as_of), second.date_to.resolve(as_of))
    if start >= end:
        return 0
    return max(0, round_days((end - start).total_seconds() / SECONDS_PER_DAY))


def _canonical_pair(
    first: AssignmentRecord, second: AssignmentRecord
) -> Tuple[AssignmentRecord, AssignmentRecord]:
    if identifier_key(second.employee_id) < identifier_key(first.employee_id):
        return second, first
    return first, second


def _iter_overlaps(
    records: Sequence[AssignmentRecord], as_of: datetime
) -> Iterator[PairOverlap]:
    for project_id, group in group_by_project(records).items():
        for first, second in combinations(group, 2):
            if first.employee_id == second.employee_id:
                continue
            a, b = _canonical_pair(first, second)
            days = overlap_days(a, b, as_of)
            if days > 0:
                yield PairOverlap(a.employee_id, b.employee_id, project_id, days)


def all_overlaps(
    records: Sequence[AssignmentRecord], as_of: Optional[datetime] = None
) -> List[PairOverlap]:
    """
    Compute per-project overlaps for every pair of employees.

    Args:
        records: Assignment records
        as_of: Evaluation instant standing in for ongoing end dates
            (defaults to now, captured once for the whole call)

    Returns:
        List[PairOverlap]: Positive overlaps ordered by EmployeeA,
        EmployeeB, then ProjectID
    """
    if not records:
        return []
    as_of = as_of or datetime.now()

    overlaps = sorted(
        _iter_overlaps(records, as_of),
        key=lambda o: (
            identifier_key(o.employee_a),
            identifier_key(o.employee_b),
            identifier_key(o.project_id),
        ),
    )
    logger.debug(f"Found {len(overlaps)} project overlap(s) across {len(records)} records")
    return overlaps


def pair_totals(
    records: Sequence[AssignmentRecord], as_of: Optional[datetime] = None
) -> List[TopPair]:
    """
    Sum positive overlaps per employee pair across all shared projects.

    Returns:
        List[TopPair]: Ordered by total descending; equal totals keep the
        canonical pair order (smallest EmployeeA, then EmployeeB, first)
    """
    return totals_from_overlaps(all_overlaps(records, as_of))


def totals_from_overlaps(overlaps: Iterable[PairOverlap]) -> List[TopPair]:
    """Aggregate already computed overlaps (in canonical order) into pair totals."""
    totals: Dict[Tuple[Identifier, Identifier], int] = defaultdict(int)
    for overlap in overlaps:
        totals[(overlap.employee_a, overlap.employee_b)] += overlap.overlap_days

    # Input is in canonical pair order and sorted() is stable
    ranked = sorted(totals.items(), key=lambda item: -item[1])
    return [TopPair(a, b, total) for (a, b), total in ranked]


def top_pair(
    records: Sequence[AssignmentRecord], as_of: Optional[datetime] = None
) -> Optional[TopPair]:
    """
    Find the employee pair with the greatest summed overlap.

    Ties go to the smallest pair under the canonical identifier order.

    Returns:
        Optional[TopPair]: The winning pair, or None if no pair overlaps
    """
    totals = pair_totals(records, as_of)
    if not totals:
        return None
    best = totals[0]
    logger.debug(
        f"Top pair ({best.employee_a}, {best.employee_b}) with "
        f"{best.total_overlap_days} day(s)"
    )
    return best
