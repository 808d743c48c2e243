"""GWAS summary statistics loading: column mapping, cleaning and coordinates."""

from .chromosomes import chromosome_label, normalize_chromosome
from .cleaning import EmptyResultError, clean_row, clean_rows, neg_log10
from .columns import REQUIRED_COLUMNS, ColumnLayout, SchemaError, map_columns
from .coordinates import build_coordinates, chromosome_offsets
from .loader import DatasetLoader, LoadConfig, LoadResult, LoadStatus, load_dataset
from .models import AxisEntry, GwasDataset, RowSkip, StudyMetadata, VariantRecord

__all__ = [
    "REQUIRED_COLUMNS",
    "AxisEntry",
    "ColumnLayout",
    "DatasetLoader",
    "EmptyResultError",
    "GwasDataset",
    "LoadConfig",
    "LoadResult",
    "LoadStatus",
    "RowSkip",
    "SchemaError",
    "StudyMetadata",
    "VariantRecord",
    "build_coordinates",
    "chromosome_label",
    "chromosome_offsets",
    "clean_row",
    "clean_rows",
    "load_dataset",
    "map_columns",
    "neg_log10",
    "normalize_chromosome",
]
