"""Tests for the document object builder."""

import zlib

import pytest

from markpdf.engine.geometry import Size
from markpdf.engine.pdfcompiler import PDFCompiler, PdfRef
from markpdf.engine.unified_layout import LayoutPage, ShowText, StrokeLine, StrokeRect


def make_page(number=1, ops=()):
    return LayoutPage(number=number, size=Size(595.28, 841.89), ops=list(ops))


@pytest.fixture
def compiler():
    return PDFCompiler()


@pytest.mark.unit
class TestPDFCompiler:
    """Test suite for PDFCompiler.build."""

    def test_declaration_order(self, compiler):
        """Catalog, page tree, 4 fonts, page dicts, then content streams."""
        graph = compiler.build([make_page(1), make_page(2)])

        assert graph.object_numbers() == list(range(1, 11))
        assert graph.root_obj_num == 1
        assert graph.get(1).value == {"Type": "/Catalog", "Pages": PdfRef(2)}
        assert graph.get(2).value == {"Type": "/Pages", "Kids": [PdfRef(7), PdfRef(8)], "Count": 2}
        assert graph.get(7).value["Contents"] == PdfRef(9)
        assert graph.get(8).value["Contents"] == PdfRef(10)

    def test_font_objects(self, compiler):
        """The four standard fonts are declared in fixed order."""
        graph = compiler.build([make_page()])

        assert [graph.payload(num) for num in range(3, 7)] == [
            b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>\n",
            b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica-Bold >>\n",
            b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica-Oblique >>\n",
            b"<< /Type /Font /Subtype /Type1 /BaseFont /Courier >>\n",
        ]

    def test_page_dictionary(self, compiler):
        """Every page references its parent, its stream and all four fonts."""
        graph = compiler.build([make_page()])

        assert graph.payload(7) == (
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 595.28 841.89] /Contents 8 0 R "
            b"/Resources << /Font << /F1 3 0 R /F2 4 0 R /F3 5 0 R /F4 6 0 R >> >> >>\n"
        )

    def test_stream_length_matches_compressed_bytes(self, compiler):
        """Declared Length equals the deflated payload length."""
        page = make_page(ops=[ShowText(50.0, 791.89, "F1", 10.0, "Hello")])
        stream = compiler.build([page]).get(8)

        assert stream.value == {"Length": len(stream.stream_data), "Filter": "/FlateDecode"}
        assert zlib.decompress(stream.stream_data) == (
            b"BT\n/F1 10.00 Tf\n50.00 791.89 Td\n(Hello) Tj\nET\n"
        )

    def test_empty_page_stream(self, compiler):
        """An empty page still gets a (compressed, empty) content stream."""
        stream = compiler.build([make_page()]).get(8)

        assert zlib.decompress(stream.stream_data) == b""
        assert stream.get_payload().startswith(b"<< /Length ")


@pytest.mark.unit
class TestContentStream:
    """Test suite for DrawOp rendering."""

    def test_line_operators(self, compiler):
        """Lines are moveto / lineto / stroke."""
        stream = compiler.render_page(make_page(ops=[StrokeLine(1, 2.5, 3, 4)]))

        assert stream.get_content() == "1.00 2.50 m\n3.00 4.00 l\nS\n"

    def test_rect_operators(self, compiler):
        """Rectangles set a scoped line width: 1.5 thick, 0.5 thin."""
        stream = compiler.render_page(
            make_page(ops=[StrokeRect(1, 2, 3, 4, thick=True), StrokeRect(1, 2, 3, 4)])
        )

        assert stream.get_content() == (
            "q\n1.50 w\n1.00 2.00 3.00 4.00 re\nS\nQ\n"
            "q\n0.50 w\n1.00 2.00 3.00 4.00 re\nS\nQ\n"
        )

    def test_text_is_escaped(self, compiler):
        """Text shows are escaped before going into the stream."""
        stream = compiler.render_page(make_page(ops=[ShowText(0, 0, "F4", 9, "a (b) \\c")]))

        assert "(a \\(b\\) \\\\c) Tj" in stream.get_content()
        assert "/F4 9.00 Tf" in stream.get_content()

    def test_unknown_op(self, compiler):
        """Only the three DrawOp kinds are rendered."""
        with pytest.raises(TypeError):
            compiler.render_page(make_page(ops=["not an op"]))
