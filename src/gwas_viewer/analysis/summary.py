"""Summary statistics over a filtered selection of variants."""

from collections.abc import Sequence
from dataclasses import dataclass

from ..gwas.models import VariantRecord
from .plot_data import PlotPoint

DEFAULT_TOP_K = 10


@dataclass(frozen=True)
class Summary:
    """Counts and strongest associations for a selection."""

    total_count: int
    significant_count: int
    threshold: float
    top_hits: tuple[VariantRecord, ...]


def _as_records(items: Sequence[VariantRecord | PlotPoint]) -> list[VariantRecord]:
    return [item.record if isinstance(item, PlotPoint) else item for item in items]


def count_significant(records: Sequence[VariantRecord], threshold: float) -> int:
    """Count records with p-value below 10^-threshold."""
    cutoff = 10 ** (-threshold)
    return sum(1 for r in records if r.p_value < cutoff)


def top_k(records: Sequence[VariantRecord], k: int = DEFAULT_TOP_K) -> list[VariantRecord]:
    """Return the k records with the smallest p-values.

    Ties keep their order in the input.
    """
    if k <= 0:
        return []
    return sorted(records, key=lambda r: r.p_value)[:k]


def summarize(
    items: Sequence[VariantRecord | PlotPoint],
    threshold: float,
    k: int = DEFAULT_TOP_K,
) -> Summary:
    """Summarize a filtered selection of records or plot points."""
    records = _as_records(items)
    return Summary(
        total_count=len(records),
        significant_count=count_significant(records, threshold),
        threshold=threshold,
        top_hits=tuple(top_k(records, k)),
    )
