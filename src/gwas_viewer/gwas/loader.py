"""GWAS summary statistics loader.

Builds an immutable GwasDataset from a delimited text file:
column mapping, chromosome normalization and row validation, global
ordering by (chromosome, position), then cumulative coordinates.
"""

import csv
import gzip
import logging
import zlib
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import IO

from .cleaning import EmptyResultError, clean_rows
from .columns import ColumnLayout, SchemaError, build_layout
from .coordinates import build_coordinates
from .models import GwasDataset, RowSkip

logger = logging.getLogger(__name__)


@dataclass
class LoadConfig:
    """Configuration for loading one summary statistics file."""

    filepath: Path
    col_map: dict[str, str] = field(default_factory=dict)
    delimiter: str = "\t"
    trait_name: str = ""
    study_metadata: dict[str, str] = field(default_factory=dict)
    significance_threshold: float = 7.3
    top_k: int = 10
    log_level: str = "INFO"


class LoadStatus(Enum):
    OK = "ok"
    SCHEMA_ERROR = "schema_error"
    NO_DATA = "no_data"
    READ_ERROR = "read_error"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a load: a dataset, or the reason there is none."""

    status: LoadStatus
    dataset: GwasDataset | None = None
    message: str | None = None
    skipped: tuple[RowSkip, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.OK and self.dataset is not None


class DatasetLoader:
    """Load a summary statistics file into a GwasDataset."""

    def __init__(self, config: LoadConfig):
        self.config = config
        self.path = Path(config.filepath)

    def _open(self) -> IO[str]:
        if self.path.suffix == ".gz":
            return gzip.open(self.path, "rt", newline="")
        return open(self.path, newline="")

    def _reader(self, f: Iterable[str]):
        delimiter = self.config.delimiter
        if not isinstance(delimiter, str) or len(delimiter) != 1:
            raise csv.Error(f"delimiter must be a single character, got {delimiter!r}")
        return csv.reader(f, delimiter=delimiter)

    def read_header(self) -> ColumnLayout:
        """Read and map the header row.

        Raises:
            SchemaError: If required columns are missing after mapping.
            EmptyResultError: If the file has no header row.
        """
        with self._open() as f:
            reader = self._reader(f)
            header = next(reader, None)

        if not header:
            raise EmptyResultError(f"No header row in {self.path}")

        return build_layout(header, self.config.col_map, self.path)

    def iter_rows(self) -> Iterator[tuple[int, list[str]]]:
        """Iterate over (line_number, cells) for non-blank data rows."""
        with self._open() as f:
            reader = self._reader(f)
            next(reader, None)

            for row in reader:
                if not row or not any(cell.strip() for cell in row):
                    continue
                yield reader.line_num, row

    def build(self) -> GwasDataset:
        """Run the pipeline, raising on schema, read or empty-data failures."""
        layout = self.read_header()
        cleaned = clean_rows(layout, self.iter_rows())

        representative = min(cleaned.records, key=lambda r: r.p_value)

        ordered = sorted(cleaned.records, key=lambda r: (r.chr_numeric, r.position))
        records, axis = build_coordinates(ordered)

        return GwasDataset(
            records=tuple(records),
            axis=tuple(axis),
            trait_label=self.config.trait_name,
            representative_snp_id=representative.snp_id,
            study_metadata=self.config.study_metadata,
            source_path=self.path,
            skipped=tuple(cleaned.skipped),
        )

    def load(self) -> LoadResult:
        """Load the dataset, converting every failure into a LoadResult."""
        try:
            dataset = self.build()
        except SchemaError as e:
            logger.error(str(e))
            return LoadResult(status=LoadStatus.SCHEMA_ERROR, message=str(e))
        except EmptyResultError as e:
            logger.warning(f"No usable data in {self.path}: {e}")
            return LoadResult(
                status=LoadStatus.NO_DATA,
                message=f"No usable data in {self.path}: {e}",
                skipped=e.skipped,
            )
        except (OSError, EOFError, zlib.error, csv.Error, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {self.path}: {e}")
            return LoadResult(
                status=LoadStatus.READ_ERROR,
                message=f"Failed to read {self.path}: {e}",
            )

        logger.info(
            f"Loaded {len(dataset.records)} variants across {len(dataset.axis)} chromosomes "
            f"from {self.path} (skipped: {len(dataset.skipped)})"
        )
        return LoadResult(status=LoadStatus.OK, dataset=dataset, skipped=dataset.skipped)


def load_dataset(config: LoadConfig) -> LoadResult:
    """Load a summary statistics file described by a LoadConfig."""
    return DatasetLoader(config).load()
