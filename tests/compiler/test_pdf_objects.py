"""Tests for PDF string escaping, number formatting and dictionaries."""

import pytest

from markpdf.engine.pdfcompiler.objects import PdfObject, PdfRef, PdfStream, dict_to_pdf
from markpdf.engine.pdfcompiler.utils import escape_pdf_string, format_pdf_number, format_pdf_value


@pytest.mark.unit
class TestEscaping:
    """Test suite for escape_pdf_string."""

    def test_structural_characters(self):
        """Backslash and parentheses are backslash-escaped."""
        assert escape_pdf_string("a (b) \\c") == "a \\(b\\) \\\\c"

    def test_line_breaks_dropped(self):
        """CR and LF never reach a text show."""
        assert escape_pdf_string("one\r\ntwo\n") == "onetwo"

    def test_tab_expanded(self):
        """Tabs become four spaces."""
        assert escape_pdf_string("\tx") == "    x"

    def test_non_ascii_replaced(self):
        """Each character outside printable ASCII becomes one space."""
        assert escape_pdf_string("zażółć") == "za    "
        assert escape_pdf_string("\x07bell") == " bell"

    def test_none(self):
        """None escapes to an empty string."""
        assert escape_pdf_string(None) == ""


@pytest.mark.unit
class TestFormatting:
    """Test suite for numbers and dictionaries."""

    @pytest.mark.parametrize(
        "value, expected",
        [(0, "0.00"), (595.28, "595.28"), (1.005, "1.00"), (-3.14159, "-3.14"), (1e3, "1000.00")],
    )
    def test_number(self, value, expected):
        """Content-stream numbers always carry two decimals."""
        assert format_pdf_number(value) == expected

    def test_value(self):
        """Dictionary operands keep ints as ints."""
        assert format_pdf_value(4) == "4"
        assert format_pdf_value(841.89) == "841.89"
        assert format_pdf_value(True) == "true"

    def test_nested_dictionary(self):
        """Names, references, arrays and nested dictionaries."""
        value = {"Type": "/Page", "Kids": [PdfRef(3), PdfRef(4)], "Res": {"F1": PdfRef(5)}, "Title": "a(b)"}

        assert dict_to_pdf(value) == "<< /Type /Page /Kids [3 0 R 4 0 R] /Res << /F1 5 0 R >> /Title (a\\(b\\)) >>"

    def test_object_references(self):
        """PdfObject collects every reference it holds."""
        obj = PdfObject(7, {"Parent": PdfRef(2), "Resources": {"Font": {"F1": PdfRef(3)}}})

        assert obj.references == {2, 3}

    def test_stream_content_lines(self):
        """One operator per line, newline terminated."""
        stream = PdfStream()
        stream.write("q")
        stream.write(None)
        stream.add_line(0, 0, 10, 0)

        assert stream.get_bytes() == b"q\n0.00 0.00 m\n10.00 0.00 l\nS\n"
