"""Pytest configuration and fixtures for gwas-viewer tests."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from fixtures.sumstats_generator import (  # noqa: E402
    SumstatsGenerator,
    make_basic_stats,
    make_example_pair,
)

from gwas_viewer.gwas.loader import LoadConfig, load_dataset  # noqa: E402
from gwas_viewer.gwas.models import GwasDataset  # noqa: E402


@pytest.fixture
def basic_sumstats_file(tmp_path: Path) -> Path:
    """Tab-delimited file with six rows over chromosomes 1, 2 and X."""
    return SumstatsGenerator.generate_file(make_basic_stats(), directory=tmp_path)


@pytest.fixture
def example_pair_file(tmp_path: Path) -> Path:
    return SumstatsGenerator.generate_file(make_example_pair(), directory=tmp_path)


@pytest.fixture
def basic_dataset(basic_sumstats_file: Path) -> GwasDataset:
    result = load_dataset(
        LoadConfig(
            filepath=basic_sumstats_file,
            trait_name="Height",
            study_metadata={"first_author": "Doe J", "study_accession": "GCST000001"},
        )
    )
    assert result.ok, result.message
    return result.dataset
