# Directory: parsing/dates.py
"""
Date normalization across the supported input formats.
"""
from datetime import date, datetime
from typing import List, Optional, Sequence

from config import DateConfig, SUPPORTED_DATE_FORMATS
from exceptions import UnparseableDateError
from models import DateValue, FixedDate, ONGOING


class DateNormalizer:
    """
    Parses date cells against an ordered list of strptime formats.

    A candidate format only matches when formatting the parsed date with
    the same format reproduces the input exactly, so partially consumed
    or overflowed values (e.g. a day field of 34) are rejected instead of
    being silently reinterpreted by a later format.
    """

    def __init__(
        self,
        formats: Optional[Sequence[str]] = None,
        two_digit_year_pivot: int = 70,
        null_token: str = "NULL",
    ):
        """
        Initialize the normalizer.

        Args:
            formats: strptime patterns in priority order
            two_digit_year_pivot: yy values below this map to 20yy, others to 19yy
            null_token: Cell value (any case) meaning "no end date"
        """
        self.formats: List[str] = list(
            formats if formats is not None else SUPPORTED_DATE_FORMATS
        )
        self.two_digit_year_pivot = two_digit_year_pivot
        self.null_token = null_token

    @classmethod
    def from_config(cls, config: DateConfig) -> "DateNormalizer":
        return cls(
            formats=config.formats,
            two_digit_year_pivot=config.two_digit_year_pivot,
            null_token=config.null_token,
        )

    def normalize(self, raw: Optional[str]) -> DateValue:
        """
        Normalize a raw date cell.

        Args:
            raw: Cell value as read from the file

        Returns:
            DateValue: FixedDate for a calendar date, ONGOING for an empty/NULL cell

        Raises:
            UnparseableDateError: If no configured format matches
        """
        if not raw or raw.upper() == self.null_token.upper():
            return ONGOING

        for fmt in self.formats:
            parsed = self._parse_strict(raw, fmt)
            if parsed is not None:
                return FixedDate(parsed)

        raise UnparseableDateError(raw)

    def _parse_strict(self, raw: str, fmt: str) -> Optional[date]:
        try:
            parsed = datetime.strptime(raw, fmt)
        except ValueError:
            return None

        if parsed.strftime(fmt) != raw:
            return None

        if "%y" in fmt:
            try:
                parsed = parsed.replace(year=self.resolve_two_digit_year(parsed.year % 100))
            except ValueError:
                # Feb 29 in a century that is not a leap year
                return None

        return parsed.date()

    def resolve_two_digit_year(self, yy: int) -> int:
        """Map a two-digit year onto a full year using the pivot."""
        if yy < self.two_digit_year_pivot:
            return 2000 + yy
        return 1900 + yy


def normalize(
    raw: Optional[str],
    formats: Optional[Sequence[str]] = None,
    two_digit_year_pivot: int = 70,
) -> DateValue:
    """Normalize a single date cell with a throwaway normalizer."""
    return DateNormalizer(formats, two_digit_year_pivot).normalize(raw)
