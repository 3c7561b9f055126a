"""Unit tests for the CSV line splitter and sheet reader."""
from dispatch_ingestion.parsers.csv_reader import (
    decode_text,
    read_csv_sheet,
    split_csv_line,
)


class TestSplitCsvLine:
    """Test quote-aware field splitting."""

    def test_quoted_commas_and_doubled_quotes(self):
        assert split_csv_line('a,"b,c","d""e"') == ["a", "b,c", 'd"e']

    def test_fields_are_trimmed(self):
        assert split_csv_line(" x , y ") == ["x", "y"]

    def test_trailing_comma_yields_empty_field(self):
        assert split_csv_line("a,") == ["a", ""]

    def test_empty_line_is_one_empty_field(self):
        assert split_csv_line("") == [""]


class TestDecodeText:
    """Test byte decoding of uploaded text."""

    def test_strips_utf8_bom(self):
        assert decode_text(b"\xef\xbb\xbfCompany Name") == "Company Name"

    def test_falls_back_to_latin1(self):
        assert decode_text(b"Caf\xe9") == "Café"


class TestReadCsvSheet:
    """Test CSV bytes to RawSheet conversion."""

    def test_blank_lines_and_rows_are_dropped(self):
        content = b"H1,H2\r\nv1,v2\n\n , \nv3,v4\n"

        sheet = read_csv_sheet(content, "dispatches")

        assert sheet.name == "dispatches"
        assert sheet.rows == [["H1", "H2"], ["v1", "v2"], ["v3", "v4"]]
        assert sheet.header == ["H1", "H2"]
        assert sheet.data_rows == [["v1", "v2"], ["v3", "v4"]]

    def test_total_rows_counts_source_lines(self):
        sheet = read_csv_sheet(b"H1\nv1\n\nv2", "s")

        assert sheet.total_rows == 4
        assert len(sheet.rows) == 3

    def test_header_only_sheet_has_no_data(self):
        sheet = read_csv_sheet(b"H1,H2\n", "s")

        assert sheet.has_data is False
