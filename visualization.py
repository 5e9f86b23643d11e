"""
Visualization and export utilities for pair overlap results.

This module renders overlap results as an Excel workbook and as a bar
chart of the pairs with the largest combined overlap.
"""
import os
from typing import BinaryIO, List, Optional, Sequence, Union

import matplotlib.pyplot as plt
from openpyxl import Workbook
from openpyxl.styles import PatternFill, Font, Alignment
from openpyxl.utils import get_column_letter

from analysis.formatting import OVERLAP_COLUMNS, TOTAL_COLUMNS, overlap_rows
from models import PairOverlap, TopPair
from utils.logger import logger


def build_workbook(
        overlaps: Sequence[PairOverlap],
        totals: Sequence[TopPair],
) -> Workbook:
    """
    Build a workbook with an "Overlaps" and a "Pair Totals" sheet.

    Args:
        overlaps: Per-project overlaps
        totals: Per-pair totals, largest first

    Returns:
        Workbook: The populated workbook
    """
    wb = Workbook()

    header_fill = PatternFill(start_color="D0D0D0", end_color="D0D0D0", fill_type="solid")
    header_font = Font(bold=True)
    center_align = Alignment(horizontal="center")

    ws1 = wb.active
    ws1.title = "Overlaps"
    ws1.append(list(OVERLAP_COLUMNS))
    for row in overlap_rows(overlaps):
        ws1.append(list(row))

    ws2 = wb.create_sheet("Pair Totals")
    ws2.append(list(TOTAL_COLUMNS))
    for t in totals:
        ws2.append([t.employee_a, t.employee_b, t.total_overlap_days])

    for sheet in wb.worksheets:
        for cell in sheet[1]:
            cell.fill = header_fill
            cell.font = header_font
            cell.alignment = center_align

        # Fit columns to their widest value
        for col in sheet.columns:
            col_letter = get_column_letter(col[0].column)
            max_len = max(len(str(cell.value)) for cell in col if cell.value is not None)
            sheet.column_dimensions[col_letter].width = max_len + 2

    return wb


def export_overlaps_to_excel(
        target: Union[str, BinaryIO],
        overlaps: Sequence[PairOverlap],
        totals: Sequence[TopPair],
) -> bool:
    """
    Export overlap results to Excel.

    Args:
        target: File path or writable binary stream
        overlaps: Per-project overlaps
        totals: Per-pair totals

    Returns:
        bool: True if export successful
    """
    wb = build_workbook(overlaps, totals)

    if isinstance(target, str) and os.path.dirname(target):
        os.makedirs(os.path.dirname(target), exist_ok=True)

    try:
        wb.save(target)
    except OSError as e:
        logger.error(f"Error saving Excel report: {e}")
        return False

    if isinstance(target, str):
        logger.info(f"Excel report saved as '{target}'")
    return True


def plot_pair_totals(
        totals: Sequence[TopPair],
        top_n: int = 10,
        filename: Optional[str] = None,
) -> plt.Figure:
    """
    Plot a horizontal bar chart of the pairs with the most shared days.

    Args:
        totals: Per-pair totals, largest first
        top_n: Number of pairs to show
        filename: File to save the plot (None to skip saving)

    Returns:
        plt.Figure: The chart figure
    """
    shown: List[TopPair] = list(totals[:top_n])
    fig, ax = plt.subplots(figsize=(10, max(3, 0.5 * len(shown) + 1)))

    if not shown:
        ax.text(0.5, 0.5, "No overlapping pairs", ha="center", va="center")
        ax.axis("off")
        return fig

    # Largest pair on top
    labels = [f"{t.employee_a} & {t.employee_b}" for t in reversed(shown)]
    values = [t.total_overlap_days for t in reversed(shown)]
    colors = plt.cm.viridis(
        [0.2 + 0.6 * i / max(1, len(shown) - 1) for i in range(len(shown))]
    )
    bars = ax.barh(labels, values, color=colors)

    for bar in bars:
        width = bar.get_width()
        ax.text(
            width,
            bar.get_y() + bar.get_height() / 2,
            f" {int(width)}",
            ha="left",
            va="center",
            fontsize=9,
        )

    ax.set_xlabel("Total Overlapping Days")
    ax.set_ylabel("Employee Pair")
    ax.set_title(f"Top {len(shown)} Employee Pairs by Shared Days")
    ax.grid(axis="x", linestyle="--", alpha=0.3)
    fig.tight_layout()

    if filename:
        if os.path.dirname(filename):
            os.makedirs(os.path.dirname(filename), exist_ok=True)
        fig.savefig(filename, dpi=150, bbox_inches="tight")
        logger.info(f"Pair totals chart saved as {filename}")

    return fig
