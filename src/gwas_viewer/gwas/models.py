"""Data models for GWAS summary statistics."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

GWAS_CATALOG_STUDY_URL = "https://www.ebi.ac.uk/gwas/studies/{accession}"


@dataclass(frozen=True)
class VariantRecord:
    """Represents a single cleaned GWAS summary statistic record."""

    snp_id: str
    chr_numeric: int
    chr_original: str
    position: float
    p_value: float
    neg_log10_p: float
    allele_1: str
    allele_2: str
    effect_size: float
    standard_error: float
    effect_allele_freq: float | None = None
    cumulative_position: float = 0.0


@dataclass(frozen=True)
class AxisEntry:
    """Tick placement for one chromosome on the Manhattan x-axis."""

    chr_numeric: int
    chr_original: str
    center: float


@dataclass(frozen=True)
class RowSkip:
    """Reason a source row was dropped during cleaning."""

    line_number: int
    field: str
    reason: str
    value: str | None = None


@dataclass(frozen=True)
class GwasDataset:
    """Immutable, globally ordered dataset built from one summary statistics file.

    Records are sorted by (chr_numeric, position). Filtering produces new
    tuples that reference the same record objects; the dataset itself is
    never modified.
    """

    records: tuple[VariantRecord, ...]
    axis: tuple[AxisEntry, ...]
    trait_label: str
    representative_snp_id: str
    study_metadata: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    source_path: Path | None = None
    skipped: tuple[RowSkip, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.study_metadata, MappingProxyType):
            object.__setattr__(
                self, "study_metadata", MappingProxyType(dict(self.study_metadata))
            )

    def __len__(self) -> int:
        return len(self.records)


_METADATA_LABELS = (
    ("reported_trait", "Reported trait"),
    ("trait_synonyms", "Trait synonyms"),
    ("first_author", "First author"),
    ("journal", "Journal"),
    ("publication_date", "Publication date"),
    ("study_accession", "Study accession"),
    ("discovery_sample", "Discovery sample"),
    ("replication_sample", "Replication sample"),
    ("genotyping_technology", "Genotyping technology"),
    ("platform", "Platform"),
)


@dataclass
class StudyMetadata:
    """Represents descriptive study metadata shown alongside the plots."""

    reported_trait: str | None = None
    trait_synonyms: str | None = None
    first_author: str | None = None
    journal: str | None = None
    publication_date: str | None = None
    study_accession: str | None = None
    discovery_sample: str | None = None
    replication_sample: str | None = None
    genotyping_technology: str | None = None
    platform: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "StudyMetadata":
        values = {}
        for key, _ in _METADATA_LABELS:
            value = data.get(key)
            if value is None:
                continue
            text = str(value).strip()
            values[key] = text or None
        return cls(**values)

    @property
    def reference_url(self) -> str | None:
        """GWAS Catalog study page for the accession, if one is set."""
        if not self.study_accession:
            return None
        return GWAS_CATALOG_STUDY_URL.format(accession=self.study_accession.upper())

    def display_fields(self) -> list[tuple[str, str]]:
        """Return (label, value) pairs for every non-blank field."""
        fields = []
        for key, label in _METADATA_LABELS:
            value = getattr(self, key)
            if value is None or not value.strip():
                continue
            fields.append((label, value))
        return fields
