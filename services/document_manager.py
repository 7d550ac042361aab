"""
Document manager for saving and loading shape documents.

Tracks the file the canvas was last opened from or saved to, and adds
the `.json` suffix on save the way the file dialogs expect.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from models.shape_collection import LoadReport, ShapeCollection

logger = logging.getLogger(__name__)


DOCUMENT_SUFFIX = ".json"
FILE_FILTER = "JSON Files (*.json);;All Files (*)"


def ensure_json_suffix(filepath: Union[str, Path]) -> Path:
    """Append `.json` unless the name already ends with it (case-insensitive)."""
    path = Path(filepath)
    if path.name.lower().endswith(DOCUMENT_SUFFIX):
        return path
    return path.with_name(path.name + DOCUMENT_SUFFIX)


class DocumentManager:
    """
    Handles saving and loading the shape collection.

    Errors from the collection (DocumentIOError, DocumentError) propagate
    to the caller unchanged; the current file only changes on success.
    """

    def __init__(self, collection: ShapeCollection):
        self.collection = collection
        self._current_file: Optional[Path] = None

    @property
    def current_file(self) -> Optional[Path]:
        """Get the current document file path."""
        return self._current_file

    @property
    def has_file(self) -> bool:
        """Check if a file is currently open."""
        return self._current_file is not None

    def new_document(self):
        """Discard all shapes and forget the current file."""
        self.collection.clear()
        self._current_file = None
        logger.info("New document")

    def save(self, filepath: Union[str, Path]) -> Path:
        """
        Save the collection, forcing a `.json` suffix.

        Returns:
            The path actually written
        """
        path = ensure_json_suffix(filepath)
        self.collection.save_to(path)
        self._current_file = path
        return path

    def open(self, filepath: Union[str, Path]) -> LoadReport:
        """Replace the collection with the document at `filepath`."""
        path = Path(filepath)
        report = self.collection.load_from(path)
        self._current_file = path
        if report.skipped:
            logger.warning(f"{path.name}: skipped {len(report.skipped)} malformed shape(s)")
        return report


__all__ = [
    "DOCUMENT_SUFFIX",
    "FILE_FILTER",
    "ensure_json_suffix",
    "DocumentManager",
]
