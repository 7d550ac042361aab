"""
Exception hierarchy for the shape model.

- ShapeError: base class for everything raised by the model layer
- InvalidGeometryError: a geometry was constructed with impossible parameters
- ShapeParseError: a single serialized record could not be decoded
- DocumentError: a whole document is unreadable (not JSON, not an array)
- DocumentIOError: the document file could not be read or written
"""

from typing import Optional


class ShapeError(Exception):
    """Base class for shape model errors."""


class InvalidGeometryError(ShapeError, ValueError):
    """Raised when a geometry would have a negative size or bad coordinates."""


class ShapeParseError(ShapeError, ValueError):
    """
    Raised when a serialized shape record is malformed.

    Attributes:
        index: Position of the record in its document, if known
    """

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index

    def __str__(self) -> str:
        message = super().__str__()
        if self.index is not None:
            return f"record {self.index}: {message}"
        return message


class DocumentError(ShapeError):
    """Raised when a document cannot be decoded at all."""


class DocumentIOError(ShapeError, OSError):
    """Raised when a document file cannot be read or written."""


__all__ = [
    "ShapeError",
    "InvalidGeometryError",
    "ShapeParseError",
    "DocumentError",
    "DocumentIOError",
]
