"""Tests for table rendering and CSV export."""

import pytest

from tuner_lab.comparator import compare_intervals
from tuner_lab.engine import TuningEngine
from tuner_lab.export import (
    ABSENT,
    COMPARISON_HEADER,
    HARMONIC_HEADER,
    comparison_table,
    format_text_table,
    harmonic_table,
    write_csv,
)
from tuner_lab.harmonic_series import generate_harmonic_series

C4 = 261.625565


@pytest.fixture
def engine():
    return TuningEngine()


@pytest.fixture
def harmonics(engine):
    return generate_harmonic_series(C4, 5, engine=engine)


@pytest.fixture
def comparison(engine):
    return compare_intervals("C4", ["E4", "D4"], engine=engine)


class TestHarmonicTable:

    def test_header_first(self, harmonics):
        """Header row followed by one row per partial."""
        table = harmonic_table(harmonics)
        assert table[0] == HARMONIC_HEADER
        assert len(table) == 6

    def test_header_is_a_copy(self, harmonics):
        """Editing a table never changes the module header."""
        table = harmonic_table(harmonics)
        table[0].append("extra")
        assert "extra" not in HARMONIC_HEADER

    def test_fifth_row(self, harmonics):
        """n=3 → G, 3/2, 702.0 cents."""
        row = harmonic_table(harmonics)[3]
        assert row[0] == "3"
        assert row[1] == "G"
        assert row[2] == "3/2"
        assert row[3] == "702.0"
        assert row[8] == "3/2"

    def test_real_octave_frequency(self, harmonics):
        """Real octave: Just Hz of n=3 is 3·f₀."""
        row = harmonic_table(harmonics, real_octave=True)[3]
        assert float(row[4]) == pytest.approx(C4 * 3, abs=1e-6)

    def test_base_octave_frequency(self, harmonics):
        """Base octave: Just Hz of n=3 is 1.5·f₀."""
        row = harmonic_table(harmonics, real_octave=False)[3]
        assert float(row[4]) == pytest.approx(C4 * 1.5, abs=1e-6)

    def test_cells_are_strings(self, harmonics):
        for row in harmonic_table(harmonics):
            assert all(isinstance(cell, str) for cell in row)
            assert len(row) == len(HARMONIC_HEADER)


class TestComparisonTable:

    def test_header_first(self, comparison):
        """Header row followed by one row per target."""
        table = comparison_table(comparison)
        assert table[0] == COMPARISON_HEADER
        assert len(table) == 3

    def test_first_row_distance_absent(self, comparison):
        """The first row shows — for both distance cells."""
        row = comparison_table(comparison)[1]
        assert row[-2] == ABSENT
        assert row[-1] == ABSENT

    def test_second_row_distance(self, comparison):
        """10/9 is 182.4 cents."""
        row = comparison_table(comparison)[2]
        assert row[-2] == "10/9"
        assert row[-1] == "182.4"

    def test_projection_cells(self, comparison):
        """E4 row: degree, ratio and 13.7 cents deviation."""
        row = comparison_table(comparison)[1]
        assert row[0] == "E4"
        assert row[3].startswith("5/4")
        assert row[4] == "5/4"
        assert row[7] == "13.7"

    def test_empty(self):
        """No rows, header only."""
        assert comparison_table([]) == [COMPARISON_HEADER]


class TestTextTable:

    def test_separator_after_header(self):
        """A dashed line follows the header."""
        lines = format_text_table([["a", "bb"], ["ccc", "d"]])
        assert lines[0] == "a    bb"
        assert lines[1] == "---  --"
        assert lines[2] == "ccc  d"

    def test_empty(self):
        """An empty table prints nothing."""
        assert format_text_table([]) == []

    def test_columns_aligned(self, harmonics):
        """Header, separator and 5 partials."""
        lines = format_text_table(harmonic_table(harmonics))
        assert len(lines) == 7
        # every data cell of the first column starts at offset 0
        assert all(not line.startswith(" ") for line in lines)


class TestWriteCsv:

    def test_all_cells_quoted(self, tmp_path):
        """Every cell is quoted; lines end in \\n."""
        path = tmp_path / "out.csv"
        write_csv(str(path), [["n", "Ratio"], ["3", "3/2"]])
        assert path.read_text(encoding="utf-8") == '"n","Ratio"\n"3","3/2"\n'

    def test_embedded_quotes_doubled(self, tmp_path):
        """Quotes inside a cell are doubled."""
        path = tmp_path / "out.csv"
        write_csv(str(path), [['say "hi"']])
        assert path.read_text(encoding="utf-8") == '"say ""hi"""\n'

    def test_comparison_export(self, tmp_path, comparison):
        """Comparator tables export with — for absent distance."""
        path = tmp_path / "cmp.csv"
        write_csv(str(path), comparison_table(comparison))
        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 3
        assert lines[0].startswith('"Target","Hz (target)"')
        assert '"—"' in lines[1]
