"""Tests for row-level validation of summary statistics."""

import math
import sys

import pytest

from gwas_viewer.gwas.cleaning import (
    P_VALUE_EPSILON,
    EmptyResultError,
    clean_row,
    clean_rows,
    neg_log10,
)
from gwas_viewer.gwas.columns import ColumnLayout
from gwas_viewer.gwas.models import RowSkip, VariantRecord

COLUMNS = ["SNP", "CHR", "BP", "P", "A1", "A2", "FREQ_A1", "EFFECT_A1", "SE"]
LAYOUT = ColumnLayout(COLUMNS)


def make_row(**overrides) -> list[str]:
    values = {
        "SNP": "rs1",
        "CHR": "1",
        "BP": "1000",
        "P": "0.01",
        "A1": "A",
        "A2": "G",
        "FREQ_A1": "0.3",
        "EFFECT_A1": "0.05",
        "SE": "0.01",
    }
    values.update(overrides)
    return [values[c] for c in COLUMNS]


class TestNegLog10:
    def test_regular_value(self):
        assert neg_log10(1e-8) == pytest.approx(8.0)

    def test_zero_p_value_is_finite(self):
        result = neg_log10(0.0)
        assert math.isfinite(result)
        assert result == pytest.approx(-math.log10(sys.float_info.min))

    def test_epsilon_is_smallest_normal_float(self):
        assert P_VALUE_EPSILON == sys.float_info.min


class TestCleanRow:
    def test_valid_row(self):
        record = clean_row(LAYOUT, make_row(), 2)

        assert isinstance(record, VariantRecord)
        assert record.snp_id == "rs1"
        assert record.chr_numeric == 1
        assert record.chr_original == "1"
        assert record.position == 1000.0
        assert record.p_value == 0.01
        assert record.neg_log10_p == pytest.approx(2.0)
        assert record.effect_allele_freq == pytest.approx(0.3)
        assert record.effect_size == pytest.approx(0.05)
        assert record.standard_error == pytest.approx(0.01)
        assert record.cumulative_position == 0.0

    def test_original_chromosome_label_preserved(self):
        record = clean_row(LAYOUT, make_row(CHR="chrX"), 2)

        assert record.chr_numeric == 23
        assert record.chr_original == "chrX"

    def test_scientific_notation(self):
        record = clean_row(LAYOUT, make_row(P="3.2E-12", BP="1.5e6"), 2)

        assert record.p_value == pytest.approx(3.2e-12)
        assert record.position == 1_500_000.0

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"CHR": "ZZ"}, "CHR"),
            ({"CHR": ""}, "CHR"),
            ({"BP": "abc"}, "BP"),
            ({"BP": ""}, "BP"),
            ({"BP": "-10"}, "BP"),
            ({"BP": "nan"}, "BP"),
            ({"P": "NA"}, "P"),
            ({"P": ""}, "P"),
            ({"P": "1.5"}, "P"),
            ({"P": "-0.1"}, "P"),
            ({"EFFECT_A1": "x"}, "EFFECT_A1"),
            ({"SE": ""}, "SE"),
            ({"SE": "inf"}, "SE"),
        ],
    )
    def test_invalid_rows_are_skipped(self, overrides, field):
        result = clean_row(LAYOUT, make_row(**overrides), 7)

        assert isinstance(result, RowSkip)
        assert result.field == field
        assert result.line_number == 7

    def test_skip_records_offending_value(self):
        result = clean_row(LAYOUT, make_row(BP="abc"), 3)
        assert result.value == "abc"

    def test_chromosome_checked_before_position(self):
        result = clean_row(LAYOUT, make_row(CHR="ZZ", BP="abc"), 3)
        assert result.field == "CHR"

    @pytest.mark.parametrize("freq", ["", "NA", "abc"])
    def test_unusable_frequency_becomes_null(self, freq):
        record = clean_row(LAYOUT, make_row(FREQ_A1=freq), 2)

        assert isinstance(record, VariantRecord)
        assert record.effect_allele_freq is None

    def test_missing_frequency_column(self):
        layout = ColumnLayout([c for c in COLUMNS if c != "FREQ_A1"])
        row = [v for c, v in zip(COLUMNS, make_row()) if c != "FREQ_A1"]

        record = clean_row(layout, row, 2)
        assert record.effect_allele_freq is None

    def test_p_value_boundaries_accepted(self):
        assert isinstance(clean_row(LAYOUT, make_row(P="0"), 2), VariantRecord)
        assert isinstance(clean_row(LAYOUT, make_row(P="1"), 2), VariantRecord)


class TestCleanRows:
    def test_keeps_input_order_and_collects_skips(self):
        rows = [
            (2, make_row(SNP="rs1", CHR="2")),
            (3, make_row(SNP="rs2", BP="bad")),
            (4, make_row(SNP="rs3", CHR="1")),
        ]

        result = clean_rows(LAYOUT, rows)

        assert [r.snp_id for r in result.records] == ["rs1", "rs3"]
        assert len(result.skipped) == 1
        assert result.skipped[0].line_number == 3

    def test_all_rows_invalid_raises_empty_result(self):
        rows = [(2, make_row(BP="x")), (3, make_row(BP="y"))]

        with pytest.raises(EmptyResultError) as exc_info:
            clean_rows(LAYOUT, rows)

        assert len(exc_info.value.skipped) == 2

    def test_no_rows_raises_empty_result(self):
        with pytest.raises(EmptyResultError):
            clean_rows(LAYOUT, [])
