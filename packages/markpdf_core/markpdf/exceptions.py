"""Custom exceptions for markpdf."""

from typing import Optional


class MarkPdfError(Exception):
    """Base exception for markpdf errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class LayoutError(MarkPdfError):
    """Exception raised when page geometry cannot hold any content."""

    pass


class SerializationError(MarkPdfError):
    """Exception raised when the object graph cannot be written consistently."""

    pass
