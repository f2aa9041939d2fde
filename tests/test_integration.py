"""End-to-end tests: content model to PDF bytes."""

import re
import zlib

import pytest

from markpdf import (
    Document,
    Heading,
    InlineRun,
    InlineStyle,
    LayoutOptions,
    Paragraph,
    Table,
    convert_blocks,
    convert_file,
    convert_string,
    render_to_pdf,
)


def xref_offsets(data: bytes):
    """Parse the cross-reference table of a serialized file."""
    start = int(re.search(rb"startxref\n(\d+)\n%%EOF\n$", data).group(1))
    lines = data[start:].split(b"\n")
    assert lines[0] == b"xref"
    first, count = (int(part) for part in lines[1].split())
    assert first == 0
    assert lines[2] == b"0000000000 65535 f "
    return [int(line[:10]) for line in lines[3:2 + count]]


def content_streams(data: bytes):
    """Decompress every content stream in the file, in object order."""
    streams = []
    for match in re.finditer(rb"<< /Length (\d+) /Filter /FlateDecode >>\nstream\n", data):
        length = int(match.group(1))
        raw = data[match.end():match.end() + length]
        assert data[match.end() + length:].startswith(b"\nendstream\nendobj\n")
        streams.append(zlib.decompress(raw))
    return streams


@pytest.fixture
def sample_blocks():
    """One h1, one paragraph with bold and plain runs, one 2x2 table."""
    return [
        Heading(1, [InlineRun.plain("Report")]),
        Paragraph([InlineRun(InlineStyle.BOLD, "Bold"), InlineRun.plain(" text")]),
        Table([["Key", "Value"], ["a", "1"]]),
    ]


@pytest.mark.integration
class TestRoundTrip:
    """Test suite for the full pipeline."""

    def test_object_inventory(self, sample_blocks):
        """Catalog, page tree, 4 fonts, 1 page, 1 stream: 8 objects plus the free head."""
        data = convert_blocks(sample_blocks)
        offsets = xref_offsets(data)

        assert len(offsets) == 8
        assert data.count(b"/Type /Catalog") == 1
        assert data.count(b"/Type /Pages") == 1
        assert data.count(b"/Type /Font") == 4
        assert data.count(b"/Type /Page ") == 1
        assert len(content_streams(data)) == 1
        assert b"<< /Size 9 /Root 1 0 R >>" in data

    def test_offsets_match_declarations(self, sample_blocks):
        """Every xref offset lands on 'i 0 obj'."""
        data = convert_blocks(sample_blocks)

        for obj_num, offset in enumerate(xref_offsets(data), start=1):
            assert data[offset:].startswith(f"{obj_num} 0 obj\n".encode())

    def test_deterministic(self, sample_blocks):
        """The same blocks always give byte-identical output."""
        assert convert_blocks(sample_blocks) == convert_blocks(list(sample_blocks))

    def test_content_stream_text(self, sample_blocks):
        """Headings, mixed-style lines and table cells reach the stream."""
        (stream,) = content_streams(convert_blocks(sample_blocks))

        assert b"/F2 24.00 Tf\n50.00 779.89 Td\n(Report) Tj" in stream
        assert b"(Bold ) Tj" in stream
        assert b"/F1 10.00 Tf\n75.00 " in stream
        assert b"(text) Tj" in stream
        assert stream.count(b" re\n") == 4
        assert stream.count(b"1.50 w\n") == 2

    def test_escaping_in_stream(self):
        """Structural characters are escaped inside the decompressed stream."""
        data = convert_blocks([Paragraph([InlineRun.plain("a (b) \\c")])])
        (stream,) = content_streams(data)

        assert b"(a \\(b\\) \\\\c) Tj" in stream

    def test_multiple_pages(self, paragraphs):
        """Long documents produce one page and one stream per page."""
        data = convert_blocks(paragraphs(150))
        count = int(re.search(rb"/Count (\d+)", data).group(1))

        assert count > 1
        assert len(content_streams(data)) == count
        assert len(xref_offsets(data)) == 6 + 2 * count

    def test_empty_document(self):
        """No blocks still yields a valid one-page file."""
        data = convert_blocks([])

        assert b"/Count 1" in data
        assert len(xref_offsets(data)) == 8
        assert content_streams(data) == [b""]

    def test_wide_table_truncates(self):
        """Overflowing cells are cut with an ellipsis."""
        data = convert_blocks([Table([["x" * 120, "y" * 120], ["a", "b"]])])
        (stream,) = content_streams(data)

        assert b"...) Tj" in stream


@pytest.mark.integration
class TestApi:
    """Test suite for the high-level API."""

    def test_convert_string(self):
        """Markdown text converts straight to bytes."""
        data = convert_string("# Title\n\nSome **bold** text.\n\n| a | b |\n|---|---|\n| 1 | 2 |\n")

        assert data.startswith(b"%PDF-1.4\n")
        (stream,) = content_streams(data)
        assert b"(Title) Tj" in stream
        assert b"(bold ) Tj" in stream

    def test_convert_file(self, tmp_path):
        """Files are read as UTF-8 and written in one go."""
        source = tmp_path / "notes.md"
        source.write_text("# Notes\n\n- one\n- two\n", encoding="utf-8")
        output = tmp_path / "notes.pdf"

        result = convert_file(source, output)

        assert result == output
        assert output.read_bytes() == convert_string(source.read_text(encoding="utf-8"))

    def test_convert_missing_file(self, tmp_path):
        """Read errors propagate unchanged."""
        with pytest.raises(OSError):
            convert_file(tmp_path / "missing.md", tmp_path / "out.pdf")

    def test_render_to_pdf(self, tmp_path, sample_blocks):
        """Blocks can be rendered directly to a file."""
        output = render_to_pdf(sample_blocks, tmp_path / "blocks.pdf")

        assert output.read_bytes() == convert_blocks(sample_blocks)

    def test_document_layout(self):
        """Document exposes the intermediate pages."""
        doc = Document.from_markdown("para", LayoutOptions(margin=72.0))
        (page,) = doc.layout()

        assert page.ops[0].x == 72.0

    def test_glyph_metrics_mode(self, sample_blocks):
        """Glyph metrics change the layout but keep the file valid."""
        average = convert_blocks(sample_blocks)
        glyph = convert_blocks(sample_blocks, LayoutOptions(metrics="glyph"))

        assert glyph != average
        assert len(xref_offsets(glyph)) == 8
