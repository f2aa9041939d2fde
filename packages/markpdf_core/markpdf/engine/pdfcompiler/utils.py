"""Utility functions for PDF generation."""


def escape_pdf_string(text: str) -> str:
    """Escape text for a PDF literal string.

    Backslash and parentheses are backslash-escaped, CR/LF are dropped,
    a tab becomes four spaces and every other character outside printable
    ASCII becomes a single space.

    Args:
        text: Input string (will be converted to str if not already)

    Returns:
        Escaped string containing printable ASCII only
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)

    parts = []
    for char in text:
        if char in "()\\":
            parts.append("\\" + char)
        elif char in "\r\n":
            continue
        elif char == "\t":
            parts.append("    ")
        elif " " <= char <= "~":
            parts.append(char)
        else:
            parts.append(" ")
    return "".join(parts)


def format_pdf_number(value: float) -> str:
    """Format number for PDF content (two decimal places).

    Args:
        value: Numeric value

    Returns:
        Formatted string
    """
    return f"{value:.2f}"


def format_pdf_value(value) -> str:
    """Format a dictionary/array operand: ints verbatim, floats with two decimals."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return format_pdf_number(value)
