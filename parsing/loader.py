# Directory: parsing/loader.py
"""
Loading assignment records from delimiter-separated files.
"""
import csv
import io
import os
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, TextIO, Tuple

from config import AppConfig, LoaderConfig
from exceptions import MalformedFileError, RowParseError, SchemaError, UnparseableDateError
from models import AssignmentRecord, FixedDate, Identifier
from parsing.dates import DateNormalizer
from utils.logger import logger


def coerce_identifier(value: str) -> Identifier:
    """Digit-only identifiers become ints so they order numerically."""
    return int(value) if value.isdecimal() else value


class RecordLoader:
    """Builds AssignmentRecords from a header and raw rows."""

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Initialize the loader.

        Args:
            config: Application configuration (defaults are used if omitted)
        """
        config = config or AppConfig()
        self.columns: LoaderConfig = config.loader
        self.normalizer = DateNormalizer.from_config(config.date)

    def load(
        self, header: Sequence[str], rows: Iterable[Sequence[str]]
    ) -> List[AssignmentRecord]:
        """
        Convert raw rows into assignment records.

        Rows whose field count differs from the header are skipped. Any
        row that cannot be converted aborts the whole load.

        Args:
            header: Column names
            rows: Data rows, each a sequence of cell values

        Returns:
            List[AssignmentRecord]: Records in input order

        Raises:
            SchemaError: If required columns are missing from the header
            RowParseError: If a row's dates cannot be normalized
        """
        return self._load_rows(header, enumerate(rows, start=1))

    def _load_rows(
        self, header: Sequence[str], numbered_rows: Iterable[Tuple[int, Sequence[str]]]
    ) -> List[AssignmentRecord]:
        header = [str(name).strip() for name in header]
        missing = [c for c in self.columns.required_columns if c not in header]
        if missing:
            raise SchemaError(missing)

        records = []
        skipped = 0
        for row_number, row in numbered_rows:
            if len(row) != len(header):
                skipped += 1
                continue
            fields = dict(zip(header, (cell.strip() for cell in row)))
            records.append(self._build_record(row_number, fields))

        if skipped:
            logger.info(f"Skipped {skipped} malformed row(s)")
        logger.debug(f"Loaded {len(records)} assignment record(s)")
        return records

    def load_stream(self, stream: TextIO) -> List[AssignmentRecord]:
        """
        Load records from an open text stream.

        Row numbers count physical data lines, so a quoted cell spanning
        several lines moves the following rows down accordingly.

        Raises:
            MalformedFileError: If the text cannot be split into fields
        """
        reader = csv.reader(stream, delimiter=self.columns.delimiter)
        try:
            header = next(reader, None)
            if header is None:
                raise SchemaError(self.columns.required_columns)
            return self._load_rows(header, _numbered_rows(reader))
        except csv.Error as e:
            raise MalformedFileError(reader.line_num, e) from e

    def load_file(self, file_path: str) -> List[AssignmentRecord]:
        """
        Load records from a file on disk.

        Raises:
            FileNotFoundError: If the file does not exist
            PermissionError: If the file is not readable
        """
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"File not found or is not readable: {file_path}")
        if not os.access(file_path, os.R_OK):
            raise PermissionError(f"File not found or is not readable: {file_path}")

        logger.info(f"Reading assignments from {file_path}")
        with open(file_path, "r", encoding=self.columns.encoding, newline="") as f:
            return self.load_stream(f)

    def load_bytes(self, data: bytes) -> List[AssignmentRecord]:
        """Load records from raw uploaded bytes."""
        text = data.decode(self.columns.encoding)
        return self.load_stream(io.StringIO(text, newline=""))

    def _build_record(self, row_number: int, fields: Dict[str, str]) -> AssignmentRecord:
        cols = self.columns
        try:
            date_from = self.normalizer.normalize(fields[cols.date_from_column])
            date_to = self.normalizer.normalize(fields[cols.date_to_column])
            if not isinstance(date_from, FixedDate):
                raise ValueError(f"{cols.date_from_column} must not be empty or NULL")
            return AssignmentRecord(
                employee_id=coerce_identifier(fields[cols.employee_column]),
                project_id=coerce_identifier(fields[cols.project_column]),
                date_from=date_from,
                date_to=date_to,
                extra={
                    k: v for k, v in fields.items() if k not in cols.required_columns
                },
            )
        except (UnparseableDateError, ValueError) as e:
            raise RowParseError(row_number, e) from e


def _numbered_rows(reader) -> Iterator[Tuple[int, List[str]]]:
    """Pair each row with the data line it starts on."""
    header_end = previous = reader.line_num
    for row in reader:
        yield previous - header_end + 1, row
        previous = reader.line_num


def load_records(file_path: str, config: Optional[AppConfig] = None) -> List[AssignmentRecord]:
    """Load assignment records from a CSV file."""
    return RecordLoader(config).load_file(file_path)
