# Directory: analysis/report.py
"""
Request-scoped analysis of an uploaded assignment file.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union

from analysis.formatting import overlap_summary_message
from analysis.overlap import all_overlaps, totals_from_overlaps
from config import AppConfig
from exceptions import PairFinderError
from models import PairOverlap, TopPair
from parsing.loader import RecordLoader
from utils.logger import logger


@dataclass
class AnalysisReport:
    """Everything the web page renders for one upload."""

    overlaps: List[PairOverlap] = field(default_factory=list)
    totals: List[TopPair] = field(default_factory=list)
    message: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def analyze_upload(
    source: Union[bytes, str],
    config: Optional[AppConfig] = None,
    as_of: Optional[datetime] = None,
) -> AnalysisReport:
    """
    Load an uploaded file and compute all pair overlaps.

    Failures never propagate: they are returned in ``error`` so the
    caller can render them inline.

    Args:
        source: Uploaded file content as bytes or already-decoded text
        config: Application configuration
        as_of: Evaluation instant for ongoing assignments

    Returns:
        AnalysisReport: Overlaps, pair totals and a status message
    """
    loader = RecordLoader(config)
    try:
        if isinstance(source, str):
            source = source.encode("utf-8")
        records = loader.load_bytes(source)
    except (PairFinderError, OSError, UnicodeDecodeError) as e:
        logger.error(f"Upload rejected: {e}")
        return AnalysisReport(
            error=f"An error occurred during file processing: {e}"
        )

    overlaps = all_overlaps(records, as_of or datetime.now())
    return AnalysisReport(
        overlaps=overlaps,
        totals=totals_from_overlaps(overlaps),
        message=overlap_summary_message(len(overlaps)),
    )
