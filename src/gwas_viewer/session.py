"""Per-session viewer state.

A session holds the loaded dataset, the filter specification last applied
and the resulting plot-ready view. Applying a new specification returns a
new state; the dataset is shared read-only between states.
"""

import logging
from dataclasses import dataclass

from .analysis.filters import RANGE_FIELDS, FilterSpec, apply_filters
from .analysis.plot_data import PlotPoint, derive_plot_data
from .analysis.summary import DEFAULT_TOP_K, Summary, summarize
from .gwas.chromosomes import chromosome_label
from .gwas.models import GwasDataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InputBounds:
    """Valid input range for one numeric filter control."""

    minimum: float
    maximum: float
    default: tuple[float, float]


@dataclass(frozen=True)
class SessionState:
    dataset: GwasDataset
    filter_spec: FilterSpec
    view: tuple[PlotPoint, ...]

    @classmethod
    def start(cls, dataset: GwasDataset, spec: FilterSpec | None = None) -> "SessionState":
        spec = spec or FilterSpec()
        return cls(dataset=dataset, filter_spec=spec, view=_compute_view(dataset, spec))

    def apply(self, spec: FilterSpec) -> "SessionState":
        """Re-filter the full dataset with a new specification."""
        view = _compute_view(self.dataset, spec)
        logger.debug("Applied filters: %d of %d variants", len(view), len(self.dataset))
        return SessionState(dataset=self.dataset, filter_spec=spec, view=view)

    def summary(self, k: int = DEFAULT_TOP_K) -> Summary:
        return summarize(self.view, self.filter_spec.significance_threshold, k)


def _compute_view(dataset: GwasDataset, spec: FilterSpec) -> tuple[PlotPoint, ...]:
    records = apply_filters(dataset, spec)
    return derive_plot_data(records, spec.significance_threshold)


def derive_input_bounds(dataset: GwasDataset) -> dict[str, InputBounds]:
    """Compute min/max/default for each numeric filter field.

    Fields without any non-null value are omitted.
    """
    bounds = {}
    for name in RANGE_FIELDS:
        values = [v for v in (getattr(r, name) for r in dataset.records) if v is not None]
        if not values:
            continue
        low, high = min(values), max(values)
        bounds[name] = InputBounds(minimum=low, maximum=high, default=(low, high))
    return bounds


def chromosome_choices(dataset: GwasDataset) -> list[tuple[str, str]]:
    """Return (value, label) pairs for a chromosome selector, in axis order."""
    return [
        (str(entry.chr_numeric), chromosome_label(entry.chr_numeric)) for entry in dataset.axis
    ]
