"""Row-level validation and cleaning of summary statistics."""

import logging
import math
import sys
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .chromosomes import normalize_chromosome
from .columns import A1, A2, BP, CHR, EFFECT_A1, FREQ_A1, P, SE, SNP, ColumnLayout
from .models import RowSkip, VariantRecord

logger = logging.getLogger(__name__)

P_VALUE_EPSILON = sys.float_info.min


class EmptyResultError(Exception):
    """No usable rows remain after cleaning or coordinate building."""

    def __init__(self, message: str, skipped: Sequence[RowSkip] = ()):
        super().__init__(message)
        self.skipped = tuple(skipped)


@dataclass
class CleanResult:
    """Records that passed validation plus the reasons others were dropped."""

    records: list[VariantRecord] = field(default_factory=list)
    skipped: list[RowSkip] = field(default_factory=list)


def neg_log10(p_value: float) -> float:
    """Return -log10(p) with p offset by the smallest positive float."""
    return -math.log10(p_value + P_VALUE_EPSILON)


def _parse_float(val: str | None) -> float | None:
    if val is None:
        return None
    try:
        number = float(val)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def clean_row(
    layout: ColumnLayout, row: Sequence[str], line_number: int
) -> VariantRecord | RowSkip:
    """Validate a single source row.

    Returns:
        A VariantRecord (cumulative_position not yet set), or a RowSkip
        describing the first field that failed validation.
    """

    def skip(column: str, reason: str) -> RowSkip:
        return RowSkip(line_number, column, reason, layout.value(row, column))

    chr_original = layout.value(row, CHR)
    chr_numeric = normalize_chromosome(chr_original)
    if chr_numeric is None:
        return skip(CHR, "unrecognized chromosome")

    position = _parse_float(layout.value(row, BP))
    if position is None:
        return skip(BP, "missing or non-numeric position")
    if position < 0:
        return skip(BP, "negative position")

    p_value = _parse_float(layout.value(row, P))
    if p_value is None:
        return skip(P, "missing or non-numeric p-value")
    if not 0 <= p_value <= 1:
        return skip(P, "p-value outside [0, 1]")

    effect_size = _parse_float(layout.value(row, EFFECT_A1))
    if effect_size is None:
        return skip(EFFECT_A1, "missing or non-numeric effect size")

    standard_error = _parse_float(layout.value(row, SE))
    if standard_error is None:
        return skip(SE, "missing or non-numeric standard error")

    return VariantRecord(
        snp_id=layout.value(row, SNP) or "",
        chr_numeric=chr_numeric,
        chr_original=chr_original,
        position=position,
        p_value=p_value,
        neg_log10_p=neg_log10(p_value),
        allele_1=layout.value(row, A1) or "",
        allele_2=layout.value(row, A2) or "",
        effect_size=effect_size,
        standard_error=standard_error,
        effect_allele_freq=_parse_float(layout.value(row, FREQ_A1)),
    )


def clean_rows(
    layout: ColumnLayout,
    rows: Iterable[tuple[int, Sequence[str]]],
) -> CleanResult:
    """Validate every row, keeping input order.

    Args:
        layout: Mapped column layout for the rows.
        rows: (line_number, cells) pairs for the data rows, header excluded.

    Raises:
        EmptyResultError: If no row survives validation.
    """
    result = CleanResult()

    for line_number, row in rows:
        cleaned = clean_row(layout, row, line_number)
        if isinstance(cleaned, RowSkip):
            logger.debug(
                "Skipping line %d: %s (%s=%r)",
                cleaned.line_number,
                cleaned.reason,
                cleaned.field,
                cleaned.value,
            )
            result.skipped.append(cleaned)
        else:
            result.records.append(cleaned)

    if result.skipped:
        reasons = Counter(s.reason for s in result.skipped)
        summary = ", ".join(f"{reason}: {count}" for reason, count in reasons.most_common())
        logger.info(f"Dropped {len(result.skipped)} rows ({summary})")

    if not result.records:
        raise EmptyResultError(
            f"No usable rows remain after validation ({len(result.skipped)} dropped)",
            skipped=result.skipped,
        )

    return result
