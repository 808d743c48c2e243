"""Tests for genome-wide cumulative coordinates."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from gwas_viewer.gwas.cleaning import EmptyResultError, neg_log10
from gwas_viewer.gwas.coordinates import build_coordinates, chromosome_offsets
from gwas_viewer.gwas.models import VariantRecord


def make_record(chr_numeric: int, position: float, label: str | None = None) -> VariantRecord:
    return VariantRecord(
        snp_id=f"rs{chr_numeric}_{int(position)}",
        chr_numeric=chr_numeric,
        chr_original=label or str(chr_numeric),
        position=position,
        p_value=0.5,
        neg_log10_p=neg_log10(0.5),
        allele_1="A",
        allele_2="G",
        effect_size=0.0,
        standard_error=0.1,
    )


class TestChromosomeOffsets:
    def test_first_chromosome_starts_at_zero(self):
        offsets = chromosome_offsets([make_record(3, 100), make_record(5, 50)])
        assert offsets[3] == 0.0

    def test_offsets_are_running_sum_of_previous_maxima(self):
        records = [
            make_record(2, 300),
            make_record(1, 1000),
            make_record(1, 400),
            make_record(2, 700),
            make_record(23, 10),
        ]

        offsets = chromosome_offsets(records)

        assert offsets == {1: 0.0, 2: 1000.0, 23: 1700.0}

    def test_empty_input(self):
        assert chromosome_offsets([]) == {}


class TestBuildCoordinates:
    def test_cumulative_positions(self):
        records = [make_record(1, 100), make_record(1, 200), make_record(2, 50)]

        placed, _ = build_coordinates(records)

        assert [r.cumulative_position for r in placed] == [100.0, 200.0, 250.0]

    def test_preserves_given_order(self):
        records = [make_record(2, 50), make_record(1, 100)]

        placed, _ = build_coordinates(records)

        assert [r.chr_numeric for r in placed] == [2, 1]
        assert placed[0].cumulative_position == 150.0

    def test_does_not_modify_inputs(self):
        records = [make_record(1, 100), make_record(2, 50)]

        build_coordinates(records)

        assert all(r.cumulative_position == 0.0 for r in records)

    def test_axis_centers_and_labels(self):
        records = [
            make_record(1, 100, "chr1"),
            make_record(1, 300, "1"),
            make_record(23, 50, "X"),
        ]

        _, axis = build_coordinates(records)

        assert [a.chr_numeric for a in axis] == [1, 23]
        assert axis[0].center == pytest.approx(200.0)
        assert axis[0].chr_original == "chr1"
        assert axis[1].center == pytest.approx(350.0)
        assert axis[1].chr_original == "X"

    def test_empty_input_raises(self):
        with pytest.raises(EmptyResultError):
            build_coordinates([])

    @given(
        st.lists(
            st.tuples(
                st.integers(min_value=1, max_value=25),
                st.integers(min_value=1, max_value=250_000_000),
            ),
            min_size=1,
            max_size=60,
        )
    )
    @settings(max_examples=100)
    def test_chromosomes_do_not_overlap(self, rows):
        records = sorted(
            (make_record(c, float(p)) for c, p in rows),
            key=lambda r: (r.chr_numeric, r.position),
        )

        placed, axis = build_coordinates(records)

        for prev, cur in zip(placed, placed[1:]):
            if prev.chr_numeric == cur.chr_numeric:
                assert cur.cumulative_position >= prev.cumulative_position
            else:
                assert cur.cumulative_position > prev.cumulative_position
        assert [a.chr_numeric for a in axis] == sorted({c for c, _ in rows})
