"""Tests for the binary serializer."""

import re

import pytest

from markpdf.engine.geometry import Size
from markpdf.engine.pdfcompiler import ObjectGraph, PDFCompiler, PdfRef, PdfWriter
from markpdf.engine.unified_layout import LayoutPage, ShowText
from markpdf.exceptions import SerializationError


@pytest.fixture
def graph():
    page = LayoutPage(number=1, size=Size(595.28, 841.89), ops=[ShowText(50.0, 791.89, "F1", 10.0, "Hi")])
    return PDFCompiler().build([page])


def startxref(data: bytes) -> int:
    return int(re.search(rb"startxref\n(\d+)\n%%EOF\n$", data).group(1))


@pytest.mark.unit
class TestPdfWriter:
    """Test suite for PdfWriter."""

    def test_header_and_marker(self, graph):
        """Files start with the 1.4 signature and a binary marker comment."""
        data = PdfWriter().serialize(graph)

        assert data.startswith(b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n")
        assert data.endswith(b"%%EOF\n")

    def test_offsets_point_at_objects(self, graph):
        """Each xref offset is the start of that object's declaration."""
        writer = PdfWriter()
        data = writer.serialize(graph)

        assert writer.xref.offset_of(1) == 15
        for obj_num in graph.object_numbers():
            offset = writer.xref.offset_of(obj_num)
            assert data[offset:].startswith(f"{obj_num} 0 obj\n".encode())

    def test_xref_section(self, graph):
        """The xref lists the free head then one 20-byte line per object."""
        writer = PdfWriter()
        data = writer.serialize(graph)
        xref_start = startxref(data)

        assert xref_start == writer.xref_offset
        section = data[xref_start:]
        assert section.startswith(b"xref\n0 9\n0000000000 65535 f \n")
        entries = section.split(b"\n")[3:11]
        assert [int(entry[:10]) for entry in entries] == [writer.xref.offset_of(n) for n in range(1, 9)]
        assert all(entry.endswith(b" 00000 n ") for entry in entries)

    def test_trailer(self, graph):
        """The trailer carries Size (objects + 1) and the catalog reference."""
        data = PdfWriter().serialize(graph)

        assert b"trailer\n<< /Size 9 /Root 1 0 R >>\nstartxref\n" in data

    def test_objects_are_bracketed(self, graph):
        """Every object ends with endobj; stream data is wrapped in stream/endstream."""
        data = PdfWriter().serialize(graph)

        assert data.count(b"endobj\n") == 8
        assert b">>\nstream\n" in data
        assert b"\nendstream\nendobj\n" in data

    def test_serialize_is_deterministic(self, graph):
        """The same graph always serializes to the same bytes."""
        assert PdfWriter().serialize(graph) == PdfWriter().serialize(graph)

    def test_write_file(self, graph, tmp_path):
        """write() persists exactly the serialized bytes."""
        output_path = tmp_path / "out.pdf"
        result = PdfWriter().write(graph, output_path)

        assert result == output_path
        assert output_path.read_bytes() == PdfWriter().serialize(graph)


@pytest.mark.unit
class TestGraphValidation:
    """Test suite for inconsistent object graphs."""

    def test_dangling_reference(self):
        """A reference to a missing object is rejected."""
        graph = ObjectGraph()
        graph.root_obj_num = graph.add({"Type": "/Catalog", "Pages": PdfRef(5)})

        with pytest.raises(SerializationError, match="Dangling"):
            PdfWriter().serialize(graph)

    def test_reserved_but_unfilled(self):
        """Reserving an id without filling it is rejected."""
        graph = ObjectGraph()
        graph.root_obj_num = graph.add({"Type": "/Catalog"})
        graph.reserve()

        with pytest.raises(SerializationError):
            PdfWriter().serialize(graph)

    def test_missing_catalog(self):
        """A graph without a root cannot be written."""
        graph = ObjectGraph()
        graph.add({"Type": "/Catalog"})

        with pytest.raises(SerializationError, match="catalog"):
            PdfWriter().serialize(graph)

    def test_set_unreserved_id(self):
        """Ids are only assigned by reserve()."""
        with pytest.raises(SerializationError):
            ObjectGraph().set(3, {})

    def test_set_twice(self):
        """Ids are never reused."""
        graph = ObjectGraph()
        obj_num = graph.add({"Type": "/Catalog"})

        with pytest.raises(SerializationError):
            graph.set(obj_num, {})
