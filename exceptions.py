"""
Error types raised while loading and analysing assignment data.
"""
from typing import Iterable


class PairFinderError(Exception):
    """Base class for all pair finder failures."""


class ConfigError(PairFinderError):
    """Configuration could not be read or is invalid."""


class SchemaError(PairFinderError):
    """Required columns are missing from the input header."""

    def __init__(self, missing_columns: Iterable[str]):
        self.missing_columns = list(missing_columns)
        super().__init__(
            "CSV file must contain the columns: "
            + ", ".join(f"'{c}'" for c in self.missing_columns)
        )


class MalformedFileError(PairFinderError):
    """The input could not be split into rows and fields."""

    def __init__(self, line_number: int, cause: Exception):
        self.line_number = line_number
        self.cause = cause
        super().__init__(f"Malformed CSV near line {line_number}: {cause}")


class UnparseableDateError(PairFinderError):
    """A date cell matched none of the supported formats."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Date '{value}' is not in a supported format.")


class RowParseError(PairFinderError):
    """A data row could not be turned into an assignment record."""

    def __init__(self, row_number: int, cause: Exception):
        self.row_number = row_number
        self.cause = cause
        super().__init__(f"Data parsing error in row {row_number}: {cause}")
