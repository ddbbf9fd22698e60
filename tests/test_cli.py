"""Tests for the command line interface."""

import io

import pytest

from rowframe.cli import EXIT_ERROR, EXIT_OK, build_parser, main

CITY_COLUMN = "#column[2, integer, pop]\n#index[2, city]\nRome Milan\n10 20\n"


def run(capsys, argv, text=""):
    """Run the CLI on ``text`` and return (exit code, stdout, stderr)."""
    code = main(argv, stdin=io.StringIO(text))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


class TestIndexCommands:
    """Test index subcommands."""

    def test_fuse(self, capsys):
        """Test fusing a pair of indices."""
        code, out, _ = run(capsys, ["index-fuse"], "#index[2, a]\n1 2\n#index[2, b]\n2 3\n")
        assert code == EXIT_OK
        assert out == "a\n-\n1\n2\n3\n\n"

    def test_equal(self, capsys):
        """Test comparing pairs of indices."""
        text = "#index[3]\n0 1 2\n#index[3]\n0 1 3\n#index[1]\nx\n#index[1]\nx\n"
        code, out, _ = run(capsys, ["index-equal"], text)
        assert code == EXIT_OK
        assert out.splitlines() == ["false", "true"]

    def test_numeric(self, capsys):
        """Test printing numeric indices for start/end pairs."""
        code, out, _ = run(capsys, ["index-numeric", "2"], "0 5\n")
        assert code == EXIT_OK
        assert out == "-\n0\n2\n4\n\n"

    def test_last(self, capsys):
        """Test the trailing labels of a numeric index."""
        code, out, _ = run(capsys, ["index-last", "0", "10", "1"], "3 0\n")
        assert code == EXIT_OK
        assert out == "7, 8, 9\n\n"

    def test_fuse_last(self, capsys):
        """Test trailing labels of a fusion."""
        code, out, _ = run(
            capsys, ["index-fuse-last", "0", "5", "1", "--count", "4"], "#index[3]\n3 7 8\n"
        )
        assert code == EXIT_OK
        assert out == "3, 4, 7, 8\n"

    def test_fuse_stride(self, capsys):
        """Test sampling a fused index."""
        code, out, _ = run(capsys, ["index-fuse-stride", "0", "4", "1", "2"], "#index[2]\n9 10\n")
        assert code == EXIT_OK
        assert out == "0, 2, 9\n"

    def test_fuse_stride_must_be_positive(self, capsys):
        """Test that a zero stride is an error."""
        code, _, err = run(capsys, ["index-fuse-stride", "0", "4", "1", "0"], "#index[1]\n9\n")
        assert code == EXIT_ERROR
        assert "Stride must be positive" in err

    @pytest.mark.parametrize("label,expected", [("y", "1"), ("w", "-1")])
    def test_position(self, capsys, label, expected):
        """Test label positions, with -1 for a missing label."""
        code, out, _ = run(capsys, ["index-position", label], "#index[3, n]\nx y z\n")
        assert code == EXIT_OK
        assert out == f"{expected}\n"

    def test_bad_descriptor(self, capsys):
        """Test that malformed input is reported on stderr."""
        code, out, err = run(capsys, ["index-position", "x"], "#index[0]\n\n")
        assert code == EXIT_ERROR
        assert out == ""
        assert err.startswith("rowframe: error: ")


class TestColumnCommands:
    """Test column subcommands."""

    @pytest.mark.parametrize("label,expected", [("Milan", "20"), ("Paris", "null")])
    def test_value(self, capsys, label, expected):
        """Test looking up a value by label."""
        code, out, _ = run(capsys, ["column-value", label], CITY_COLUMN)
        assert code == EXIT_OK
        assert out == f"{expected}\n"

    def test_multiply(self, capsys):
        """Test multiplying integer values."""
        code, out, _ = run(capsys, ["column-multiply", "3"], CITY_COLUMN)
        assert code == EXIT_OK
        lines = out.splitlines()
        assert lines[0] == " city | pop"
        assert lines[2:] == [" Rome | 30 ", "Milan | 60 "]

    def test_multiply_text(self, capsys):
        """Test that text values cannot be multiplied."""
        code, _, err = run(capsys, ["column-multiply", "2"], "#column[1]\nabc\n")
        assert code == EXIT_ERROR
        assert "Not an integer" in err

    def test_time(self, capsys):
        """Test extracting the time of day."""
        code, out, _ = run(capsys, ["column-time"], "#column[1, datetime, t]\n2024-01-05T10:30\n")
        assert code == EXIT_OK
        assert out.splitlines()[-1] == "0 | 10:30"

    def test_stack(self, capsys):
        """Test stacking two columns."""
        text = "#column[1, integer, v]\n#index[1]\na\n1\n#column[1]\n#index[1]\nb\n2\n"
        code, out, _ = run(capsys, ["column-stack"], text)
        assert code == EXIT_OK
        assert out.splitlines()[2:] == ["a | 1", "b | 2"]

    def test_index(self, capsys):
        """Test replacing the index of a column."""
        code, out, _ = run(capsys, ["column-index"], CITY_COLUMN + "#index[2]\na b\n")
        assert code == EXIT_OK
        assert out.splitlines()[2:] == ["a | 10 ", "b | 20 "]

    def test_realign(self, capsys):
        """Test realigning a column onto an index."""
        code, out, _ = run(capsys, ["column-realign"], CITY_COLUMN + "#index[2]\nMilan Oslo\n")
        assert code == EXIT_OK
        assert out.splitlines()[2:] == ["Milan | 20 ", " Oslo |    "]


class TestTableCommands:
    """Test table subcommands."""

    def test_sum(self, capsys, table_text):
        """Test column totals."""
        code, out, _ = run(capsys, ["table-sum"], table_text)
        assert code == EXIT_OK
        assert out == "  | a | b\n--+---+--\n0 | 3 | 3\n"

    def test_value(self, capsys, table_text):
        """Test a single cell."""
        code, out, _ = run(capsys, ["table-value", "y", "b"], table_text)
        assert code == EXIT_OK
        assert out == "oops\n"

    def test_unknown_column(self, capsys, table_text):
        """Test that an unknown column is reported."""
        code, _, err = run(capsys, ["table-value", "y", "c"], table_text)
        assert code == EXIT_ERROR
        assert "Column not found: c" in err

    def test_headers(self, capsys, table_text):
        """Test renaming the columns of a table."""
        code, out, _ = run(capsys, ["table-headers", "p", "q"], table_text)
        assert code == EXIT_OK
        assert out.splitlines()[0] == "row | p | q   "

    def test_row_index_wrong_length(self, capsys, table_text):
        """Test that a short row index is rejected."""
        code, _, err = run(capsys, ["table-row-index", "only"], table_text)
        assert code == EXIT_ERROR
        assert "labels" in err

    def test_multiply(self, capsys):
        """Test multiplying every cell."""
        code, out, _ = run(capsys, ["table-multiply", "2"], "#table[2, 1]\n#column[2, integer, a]\n1 2\n")
        assert code == EXIT_OK
        assert out.splitlines() == ["  | a", "--+--", "0 | 2", "1 | 4"]

    def test_stack(self, capsys):
        """Test stacking two tables."""
        text = (
            "#table[1, 1]\n#column[1, integer, x]\n#index[1]\na\n1\n"
            "#table[1, 1]\n#column[1, integer, x]\n#index[1]\nb\n2\n"
        )
        code, out, _ = run(capsys, ["table-stack"], text)
        assert code == EXIT_OK
        assert out.splitlines()[2:] == ["a | 1", "b | 2"]

    def test_juxtapose(self, capsys):
        """Test joining two tables."""
        text = (
            "#table[1, 1]\n#column[1, integer, x]\n#index[1]\na\n1\n"
            "#table[1, 1]\n#column[1, integer, y]\n#index[1]\nb\n2\n"
        )
        code, out, _ = run(capsys, ["table-juxtapose"], text)
        assert code == EXIT_OK
        assert out.splitlines() == ["  | x | y", "--+---+--", "a | 1 |  ", "b |   | 2"]


class TestParser:
    """Test argument parsing."""

    def test_command_required(self):
        """Test that a subcommand must be given."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_log_level(self, capsys):
        """Test that the log level option is accepted."""
        code, out, _ = run(capsys, ["--log-level", "DEBUG", "index-position", "x"], "#index[1]\nx\n")
        assert code == EXIT_OK
        assert out == "0\n"
