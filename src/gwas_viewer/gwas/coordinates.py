"""Genome-wide cumulative coordinates for Manhattan plotting."""

import math
from collections.abc import Sequence
from dataclasses import replace

from .cleaning import EmptyResultError
from .models import AxisEntry, VariantRecord


def chromosome_offsets(records: Sequence[VariantRecord]) -> dict[int, float]:
    """Compute the x-axis offset of each chromosome.

    Each chromosome starts where the previous one (in ascending code order)
    ends, using the largest observed position as the chromosome length.

    Returns:
        Dict mapping chromosome code to offset; the lowest code has offset 0
    """
    max_positions: dict[int, float] = {}
    for record in records:
        current = max_positions.get(record.chr_numeric)
        if current is None or record.position > current:
            max_positions[record.chr_numeric] = record.position

    offsets = {}
    running = 0.0
    for code in sorted(max_positions):
        offsets[code] = running
        running += max_positions[code]
    return offsets


def build_coordinates(
    records: Sequence[VariantRecord],
) -> tuple[list[VariantRecord], list[AxisEntry]]:
    """Attach cumulative positions and compute axis tick centers.

    Records come back in the order they were given. The axis is ordered by
    chromosome code and labelled with the first label seen for each code.

    Raises:
        EmptyResultError: If there are no records or the axis is degenerate.
    """
    offsets = chromosome_offsets(records)

    placed = []
    totals: dict[int, float] = {}
    counts: dict[int, int] = {}
    labels: dict[int, str] = {}
    for record in records:
        cumulative = record.position + offsets[record.chr_numeric]
        placed.append(replace(record, cumulative_position=cumulative))
        totals[record.chr_numeric] = totals.get(record.chr_numeric, 0.0) + cumulative
        counts[record.chr_numeric] = counts.get(record.chr_numeric, 0) + 1
        labels.setdefault(record.chr_numeric, record.chr_original)

    axis = [
        AxisEntry(chr_numeric=code, chr_original=labels[code], center=totals[code] / counts[code])
        for code in sorted(totals)
    ]

    if not axis or not math.isfinite(axis[0].center):
        raise EmptyResultError("Could not compute chromosome axis positions")

    return placed, axis
