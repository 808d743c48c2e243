"""Plot-ready derivations for Manhattan and QQ plots.

Manhattan points carry a significance flag (-log10 p at or above the
threshold) and a parity group (chromosome code mod 2) used to alternate
point colors between neighbouring chromosomes.

QQ points pair the i-th smallest observed p-value with the expected
uniform quantile i/n, both on the -log10 scale. The genomic inflation
factor is the median 1-df chi-square statistic divided by its expected
median under the null.
"""

import math
import statistics
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..gwas.models import VariantRecord

CHI2_1DF_MEDIAN = 0.4549364231195724

_STANDARD_NORMAL = statistics.NormalDist()


@dataclass(frozen=True)
class PlotPoint:
    """A filtered record annotated for plotting."""

    record: VariantRecord
    is_significant: bool
    parity_group: int


def derive_plot_data(
    records: Sequence[VariantRecord], threshold: float
) -> tuple[PlotPoint, ...]:
    """Annotate records for plotting without adding, removing or reordering."""
    return tuple(
        PlotPoint(
            record=r,
            is_significant=r.neg_log10_p >= threshold,
            parity_group=r.chr_numeric % 2,
        )
        for r in records
    )


def manhattan_series(points: Sequence[PlotPoint]) -> list[dict[str, Any]]:
    """Flatten plot points into rows a charting layer can consume directly."""
    return [
        {
            "x": p.record.cumulative_position,
            "y": p.record.neg_log10_p,
            "snp": p.record.snp_id,
            "chr": p.record.chr_original,
            "bp": p.record.position,
            "p": p.record.p_value,
            "parity": p.parity_group,
            "significant": p.is_significant,
        }
        for p in points
    ]


def qq_points(records: Sequence[VariantRecord]) -> list[tuple[float, float]]:
    """Return (expected, observed) -log10 p pairs, ascending."""
    n = len(records)
    observed = sorted((r.neg_log10_p for r in records), reverse=True)
    pairs = [(-math.log10(i / n), obs) for i, obs in enumerate(observed, start=1)]
    pairs.reverse()
    return pairs


def genomic_inflation(records: Sequence[VariantRecord]) -> float | None:
    """Compute lambda GC from p-values, or None for an empty selection."""
    if not records:
        return None

    chi2 = []
    for r in records:
        p = max(r.p_value, sys.float_info.min)
        z = _STANDARD_NORMAL.inv_cdf(p / 2)
        chi2.append(z * z)

    return statistics.median(chi2) / CHI2_1DF_MEDIAN
