"""Tests for CSV and TSV serialization."""

from beanfolio.export import to_csv, to_delimited_text, to_tsv
from beanfolio.export.delimited import encode_delimited_cell
from beanfolio.snapshot import trim_trailing_empty_rows

from conftest import cell

BOM = "\ufeff"


class TestEncodeDelimitedCell:
    """Test field encoding rules."""

    def test_blank_is_empty_field(self):
        assert encode_delimited_cell(None, ",") == ""

    def test_numbers_and_booleans_are_literal(self):
        assert encode_delimited_cell(1234567.5, ",") == "1234567.5"
        assert encode_delimited_cell(42, ",") == "42"
        assert encode_delimited_cell(3.0, ",") == "3"
        assert encode_delimited_cell(True, ",") == "true"
        assert encode_delimited_cell(False, ",") == "false"

    def test_plain_string_is_unquoted(self):
        assert encode_delimited_cell("Cash", ",") == "Cash"

    def test_quote_is_doubled(self):
        assert encode_delimited_cell('say "hi"', ",") == '"say ""hi"""'

    def test_delimiter_newline_and_padding_force_quotes(self):
        assert encode_delimited_cell("a,b", ",") == '"a,b"'
        assert encode_delimited_cell("line1\nline2", ",") == '"line1\nline2"'
        assert encode_delimited_cell("cr\r", ",") == '"cr\r"'
        assert encode_delimited_cell(" Cash ", ",") == '" Cash "'

    def test_comma_is_plain_in_tsv(self):
        assert encode_delimited_cell("a,b", "\t") == "a,b"
        assert encode_delimited_cell("a\tb", "\t") == '"a\tb"'


class TestToDelimitedText:
    """Test whole-grid serialization."""

    def test_csv_layout(self, sample_grid):
        text = to_csv(sample_grid)

        assert text == BOM + '" Cash ",=A1*2,\r\ntrue,false,42'

    def test_tsv_layout(self, sample_grid):
        text = to_tsv(sample_grid)

        assert text == BOM + '" Cash "\t=A1*2\t\r\ntrue\tfalse\t42'

    def test_formula_text_wins_over_display_value(self):
        text = to_delimited_text([[cell(100, "=A1*2")]], ",")

        assert text == BOM + "=A1*2"

    def test_non_finite_numbers_are_blank(self):
        text = to_csv([[cell(float("nan")), cell(float("inf")), cell(1)]])

        assert text == BOM + ",,1"

    def test_empty_grid_is_just_the_bom(self):
        assert to_csv([]) == BOM

    def test_trailing_blank_rows_do_not_change_output(self):
        grid = [[cell("a"), cell(1)], [cell(), cell(2)]]
        padded = grid + [[cell(), cell()] for _ in range(3)]

        assert to_csv(trim_trailing_empty_rows(padded)) == to_csv(grid)

    def test_numbers_round_trip(self):
        values = [0.1, -3, 1e-7, 123456789.125, True, False]
        text = to_csv([[cell(v) for v in values]])

        fields = text[len(BOM):].split(",")
        assert [float(f) for f in fields[:4]] == values[:4]
        assert fields[4:] == ["true", "false"]
