from __future__ import annotations


class CatalogImportError(Exception):
    """A CSV file could not be read for import (missing, unreadable, a directory...)."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
