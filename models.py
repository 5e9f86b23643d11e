# Directory: models.py
"""
Core data models for the employee pair finder.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Tuple, Union

Identifier = Union[int, str]


def identifier_key(value: Identifier) -> Tuple[bool, Union[int, str]]:
    """Total order over identifiers: integers first, then strings."""
    return (isinstance(value, str), value)


@dataclass(frozen=True)
class FixedDate:
    """A resolved calendar date."""

    value: date

    @property
    def canonical(self) -> str:
        return self.value.isoformat()

    def resolve(self, as_of: datetime) -> datetime:
        """Return the date as a midnight instant."""
        return datetime(self.value.year, self.value.month, self.value.day)


@dataclass(frozen=True)
class Ongoing:
    """Open-ended marker: the assignment is active through the evaluation instant."""

    @property
    def canonical(self) -> str:
        return "NULL"

    def resolve(self, as_of: datetime) -> datetime:
        return as_of


DateValue = Union[FixedDate, Ongoing]

ONGOING = Ongoing()


@dataclass(frozen=True)
class AssignmentRecord:
    """One employee's stint on one project."""

    employee_id: Identifier
    project_id: Identifier
    date_from: FixedDate
    date_to: DateValue
    extra: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self):
        """Enforce the interval invariants."""
        if not isinstance(self.date_from, FixedDate):
            raise ValueError("DateFrom must be a calendar date, not open-ended")
        if isinstance(self.date_to, FixedDate) and self.date_to.value < self.date_from.value:
            raise ValueError(
                f"DateTo {self.date_to.canonical} is before DateFrom {self.date_from.canonical}"
            )

    def __repr__(self) -> str:
        return (
            f"AssignmentRecord(emp={self.employee_id}, project={self.project_id}, "
            f"from={self.date_from.canonical}, to={self.date_to.canonical})"
        )


@dataclass(frozen=True)
class PairOverlap:
    """Days two employees overlapped on a single project."""

    employee_a: Identifier
    employee_b: Identifier
    project_id: Identifier
    overlap_days: int

    def as_tuple(self) -> Tuple[Identifier, Identifier, Identifier, int]:
        return (self.employee_a, self.employee_b, self.project_id, self.overlap_days)


@dataclass(frozen=True)
class TopPair:
    """Summed overlap of an employee pair across all shared projects."""

    employee_a: Identifier
    employee_b: Identifier
    total_overlap_days: int

    @property
    def pair(self) -> Tuple[Identifier, Identifier]:
        return (self.employee_a, self.employee_b)
