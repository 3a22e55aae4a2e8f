"""Table rendering for harmonic and comparator results.

Builds lists of already formatted string cells (header first) that can be
printed as aligned text or written to CSV.
"""

import csv
from typing import Sequence

from . import config
from .comparator import ComparisonRow
from .harmonic_series import HarmonicRow
from .systems import TuningSystem

Table = list[list[str]]

HARMONIC_HEADER = [
    "n", "Note (12-TET)", "Ratio (J)", "Cents (J)", "Hz (J)",
    "Hz (EI)", "Dev EI (¢)", "Hz (P)", "3-limit", "Dev P (¢)",
    "Hz (W3)", "Dev W3 (¢)",
]

COMPARISON_HEADER = [
    "Target", "Hz (target)", "Cents (EI)", "Degree (system)",
    "Ratio (system)", "Cents (system)", "Hz (system)", "Dev EI−S (¢)",
    "Dist (ratio)", "Dist (¢)",
]

ABSENT = "—"


def harmonic_table(
    rows: Sequence[HarmonicRow],
    real_octave: bool = config.DEFAULT_REAL_OCTAVE,
) -> Table:
    """Format harmonic rows, header first.

    Args:
        rows: Output of generate_harmonic_series()
        real_octave: Frequencies in each partial's own octave, or in the
            base octave above the fundamental

    Returns:
        Table of string cells
    """
    table = [list(HARMONIC_HEADER)]
    for row in rows:
        table.append([
            str(row.n),
            row.note,
            row.just_fraction,
            f"{row.just_cents:.1f}",
            f"{row.playable_frequency(TuningSystem.JUST, real_octave):.6f}",
            f"{row.playable_frequency(TuningSystem.EQUAL, real_octave):.3f}",
            f"{row.equal.deviation:.1f}",
            f"{row.playable_frequency(TuningSystem.PYTHAGOREAN, real_octave):.3f}",
            row.pythagorean.ratio_text,
            f"{row.pythagorean.deviation:.1f}",
            f"{row.playable_frequency(TuningSystem.WERCKMEISTER, real_octave):.3f}",
            f"{row.werckmeister.deviation:.1f}",
        ])
    return table


def comparison_table(rows: Sequence[ComparisonRow]) -> Table:
    """Format comparator rows, header first; a missing distance shows as —."""
    table = [list(COMPARISON_HEADER)]
    for row in rows:
        if row.distance is None:
            dist_ratio = dist_cents = ABSENT
        else:
            dist_ratio = row.distance.ratio_text
            dist_cents = f"{row.distance.cents:.1f}"
        table.append([
            row.target,
            f"{row.frequency:.6f}",
            f"{row.ei_cents:.1f}",
            row.projection.label,
            row.projection.ratio_text,
            f"{row.projection.cents:.1f}",
            f"{row.system_frequency:.6f}",
            f"{row.deviation:.1f}",
            dist_ratio,
            dist_cents,
        ])
    return table


def format_text_table(table: Table) -> list[str]:
    """Align a table into lines of text, columns padded to their widest cell."""
    if not table:
        return []
    widths = [max(len(r[i]) for r in table) for i in range(len(table[0]))]
    lines = []
    for i, row in enumerate(table):
        lines.append("  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip())
        if i == 0:
            lines.append("  ".join("-" * w for w in widths))
    return lines


def write_csv(path: str, table: Table) -> None:
    """Write a table as CSV with every cell quoted."""
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerows(table)
