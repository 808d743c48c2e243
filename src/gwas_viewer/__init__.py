"""gwas-viewer: interactive exploration of GWAS summary statistics."""

__version__ = "0.1.0"

from .analysis import FilterSpec, NumericRange, TextPattern, apply_filters, summarize  # noqa: E402
from .gwas import GwasDataset, LoadConfig, LoadResult, LoadStatus, load_dataset  # noqa: E402
from .session import SessionState, derive_input_bounds  # noqa: E402

__all__ = [
    "FilterSpec",
    "GwasDataset",
    "LoadConfig",
    "LoadResult",
    "LoadStatus",
    "NumericRange",
    "SessionState",
    "TextPattern",
    "__version__",
    "apply_filters",
    "derive_input_bounds",
    "load_dataset",
    "summarize",
]
