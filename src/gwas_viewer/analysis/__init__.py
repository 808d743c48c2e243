"""Filtering, plot derivation and summary aggregation over a GwasDataset."""

from .filters import FilterSpec, NumericRange, TextPattern, apply_filters
from .plot_data import (
    PlotPoint,
    derive_plot_data,
    genomic_inflation,
    manhattan_series,
    qq_points,
)
from .summary import Summary, count_significant, summarize, top_k

__all__ = [
    "FilterSpec",
    "NumericRange",
    "PlotPoint",
    "Summary",
    "TextPattern",
    "apply_filters",
    "count_significant",
    "derive_plot_data",
    "genomic_inflation",
    "manhattan_series",
    "qq_points",
    "summarize",
    "top_k",
]
