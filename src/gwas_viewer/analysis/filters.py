"""Composable record filters for the variant table.

Each active predicate is applied independently and the results are combined
with logical AND. A predicate left as None imposes no constraint; an empty
chromosome selection is a constraint that excludes every record.
"""

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from ..gwas.chromosomes import normalize_chromosome
from ..gwas.models import GwasDataset, VariantRecord
from ..utils.validators import ValidationError, validate_bounds, validate_threshold

logger = logging.getLogger(__name__)

DEFAULT_SIGNIFICANCE_THRESHOLD = 7.3

TEXT_FIELDS = ("snp_id", "allele_1", "allele_2")
RANGE_FIELDS = ("effect_allele_freq", "position", "effect_size", "standard_error")


@dataclass(frozen=True)
class TextPattern:
    """Case-insensitive regex search; invalid patterns match literally."""

    pattern: str
    _regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            regex = re.compile(self.pattern, re.IGNORECASE)
        except re.error:
            logger.debug("Invalid regex %r, matching as literal text", self.pattern)
            regex = re.compile(re.escape(self.pattern), re.IGNORECASE)
        object.__setattr__(self, "_regex", regex)

    def matches(self, value: str | None) -> bool:
        if value is None:
            return False
        return self._regex.search(value) is not None


@dataclass(frozen=True)
class NumericRange:
    """Inclusive numeric range; a None bound leaves that side open."""

    low: float | None = None
    high: float | None = None

    def __post_init__(self) -> None:
        validate_bounds(self.low, self.high)

    def contains(self, value: float | None) -> bool:
        if value is None:
            return False
        if self.low is not None and value < self.low:
            return False
        if self.high is not None and value > self.high:
            return False
        return True


@dataclass(frozen=True)
class FilterSpec:
    """One optional predicate per filterable field plus a display threshold."""

    snp_id: TextPattern | None = None
    allele_1: TextPattern | None = None
    allele_2: TextPattern | None = None
    effect_allele_freq: NumericRange | None = None
    position: NumericRange | None = None
    effect_size: NumericRange | None = None
    standard_error: NumericRange | None = None
    chromosomes: frozenset[int] | None = None
    significance_threshold: float = DEFAULT_SIGNIFICANCE_THRESHOLD

    @classmethod
    def build(
        cls,
        snp_id: str | None = None,
        allele_1: str | None = None,
        allele_2: str | None = None,
        effect_allele_freq: Sequence[float | None] | None = None,
        position: Sequence[float | None] | None = None,
        effect_size: Sequence[float | None] | None = None,
        standard_error: Sequence[float | None] | None = None,
        chromosomes: Iterable[str | int] | None = None,
        significance_threshold: float | str | None = None,
    ) -> "FilterSpec":
        """Build a FilterSpec from raw input values.

        Blank text means no constraint. Ranges are (low, high) pairs.
        Chromosome values may be codes or labels ("7", "X", "chr23"); values
        that do not name a chromosome match nothing.

        Raises:
            ValidationError: If a range or the threshold is invalid.
        """
        return cls(
            snp_id=_text(snp_id),
            allele_1=_text(allele_1),
            allele_2=_text(allele_2),
            effect_allele_freq=_range(effect_allele_freq, "effect_allele_freq"),
            position=_range(position, "position"),
            effect_size=_range(effect_size, "effect_size"),
            standard_error=_range(standard_error, "standard_error"),
            chromosomes=_chromosomes(chromosomes),
            significance_threshold=validate_threshold(
                significance_threshold, default=DEFAULT_SIGNIFICANCE_THRESHOLD
            ),
        )

    def predicates(self) -> list[Callable[[VariantRecord], bool]]:
        """Return a predicate for every active constraint."""
        checks: list[Callable[[VariantRecord], bool]] = []

        for name in TEXT_FIELDS:
            pattern = getattr(self, name)
            if pattern is not None:
                checks.append(lambda r, p=pattern, n=name: p.matches(getattr(r, n)))

        for name in RANGE_FIELDS:
            bounds = getattr(self, name)
            if bounds is not None:
                checks.append(lambda r, b=bounds, n=name: b.contains(getattr(r, n)))

        if self.chromosomes is not None:
            codes = self.chromosomes
            checks.append(lambda r: r.chr_numeric in codes)

        return checks


def _text(value: str | None) -> TextPattern | None:
    if value is None or not value.strip():
        return None
    return TextPattern(value.strip())


def _range(value: Sequence[float | None] | None, name: str) -> NumericRange | None:
    if value is None:
        return None
    if len(value) != 2:
        raise ValidationError(f"{name} range must be a (low, high) pair, got {value!r}")
    try:
        low, high = (None if v is None else float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} bounds must be numbers, got {value!r}") from e
    validate_bounds(low, high, name)
    return NumericRange(low, high)


def _chromosomes(values: Iterable[str | int] | None) -> frozenset[int] | None:
    if values is None:
        return None
    codes = set()
    for value in values:
        code = normalize_chromosome(value)
        if code is None:
            logger.debug("Ignoring unrecognized chromosome selection %r", value)
            continue
        codes.add(code)
    return frozenset(codes)


def apply_filters(
    source: GwasDataset | Sequence[VariantRecord],
    spec: FilterSpec,
) -> tuple[VariantRecord, ...]:
    """Return the records satisfying every active predicate, in input order."""
    records = source.records if isinstance(source, GwasDataset) else source
    checks = spec.predicates()
    if not checks:
        return tuple(records)
    return tuple(r for r in records if all(check(r) for check in checks))
