"""Canonical column schema and source column mapping."""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

SNP = "SNP"
CHR = "CHR"
BP = "BP"
P = "P"
A1 = "A1"
A2 = "A2"
EFFECT_A1 = "EFFECT_A1"
SE = "SE"
FREQ_A1 = "FREQ_A1"

REQUIRED_COLUMNS = frozenset({SNP, CHR, BP, P, A1, A2, EFFECT_A1, SE})

CANONICAL_COLUMNS = (SNP, CHR, BP, P, A1, A2, FREQ_A1, EFFECT_A1, SE)


class SchemaError(Exception):
    """Required columns are missing after column mapping."""

    def __init__(self, message: str, missing: Sequence[str] = (), source: Path | str | None = None):
        super().__init__(message)
        self.missing = tuple(missing)
        self.source = source


class ColumnLayout:
    """Positions of canonical columns in a mapped header row."""

    def __init__(self, columns: Sequence[str]):
        self.columns = list(columns)
        self.column_indices = {name: idx for idx, name in enumerate(self.columns)}

    @property
    def has_freq(self) -> bool:
        return FREQ_A1 in self.column_indices

    def value(self, row: Sequence[str], column: str) -> str | None:
        """Return the stripped cell for a column, or None when blank or absent."""
        idx = self.column_indices.get(column)
        if idx is None or idx >= len(row):
            return None
        val = row[idx].strip()
        return val if val else None


def map_columns(
    header: Sequence[str],
    col_map: Mapping[str, str] | None,
    source: Path | str | None = None,
) -> list[str]:
    """Rename source columns to canonical names.

    Only columns present in both the header and the mapping are renamed;
    every other column passes through unchanged.

    Args:
        header: Raw header cells from the source file.
        col_map: Mapping of source column name to canonical column name.
        source: Source path, used in error messages.

    Returns:
        The mapped column names, in header order.

    Raises:
        SchemaError: If required canonical columns are missing, or two
            columns map to the same name.
    """
    col_map = col_map or {}
    columns = []
    for col in header:
        name = col.strip()
        columns.append(col_map.get(name, name))

    duplicates = sorted({c for c in columns if columns.count(c) > 1 and c in CANONICAL_COLUMNS})
    if duplicates:
        raise SchemaError(
            f"Duplicate columns after mapping in {source}: {', '.join(duplicates)}",
            source=source,
        )

    missing = sorted(REQUIRED_COLUMNS - set(columns))
    if missing:
        raise SchemaError(
            f"Missing required columns in {source}: {', '.join(missing)}",
            missing=missing,
            source=source,
        )

    if FREQ_A1 not in columns:
        logger.info("No %s column in %s; allele frequencies will be empty", FREQ_A1, source)

    return columns


def build_layout(
    header: Sequence[str],
    col_map: Mapping[str, str] | None,
    source: Path | str | None = None,
) -> ColumnLayout:
    """Map a header and return the resulting column layout."""
    return ColumnLayout(map_columns(header, col_map, source))
