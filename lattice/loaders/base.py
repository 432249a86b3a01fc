"""
Base loader class, registry and error taxonomy for document loaders.

A loader turns a file on disk (or an uploaded byte blob) into a parsed
element tree. Loaders register themselves with the LoaderRegistry so the
pipeline can pick one by file extension.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar

from lxml import etree


class LoaderError(Exception):
    """Base exception for loader errors."""

    def __init__(self, message: str, source_path: Path | None = None, details: str | None = None):
        self.source_path = source_path
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "type": type(self).__name__,
            "source_path": str(self.source_path) if self.source_path else None,
            "details": self.details,
        }


class ReadError(LoaderError):
    """The file could not be read."""


class MarkupParseError(LoaderError):
    """The file content is not well-formed markup."""


class StructureError(LoaderError):
    """The markup parsed but has no word-processing body."""


class BaseLoader(ABC):
    """
    Abstract base class for document loaders.

    Each loader is responsible for:
    1. Detecting if it can handle a file type
    2. Reading the raw bytes of the file
    3. Parsing those bytes into an lxml element tree
    """

    # Subclasses should define these
    SUPPORTED_EXTENSIONS: ClassVar[list[str]] = []
    LOADER_NAME: ClassVar[str] = "base"

    @classmethod
    def can_load(cls, path: Path) -> bool:
        """Check if this loader can handle the given file."""
        return path.suffix.lower() in cls.SUPPORTED_EXTENSIONS

    def read(self, path: Path) -> bytes:
        """
        Read the whole file in one shot.

        Raises:
            ReadError: If the file is missing or unreadable
        """
        try:
            return path.read_bytes()
        except OSError as e:
            raise ReadError(
                f"Error reading file: {path.name}",
                source_path=path,
                details=str(e),
            ) from e

    @abstractmethod
    def parse(self, data: bytes, source_path: Path | None = None) -> etree._Element:
        """
        Parse raw bytes into an element tree.

        Args:
            data: The file content
            source_path: Original path, used only for error reporting

        Returns:
            Root element of the parsed tree

        Raises:
            MarkupParseError: If the content cannot be parsed
        """
        pass

    def load(self, path: Path) -> etree._Element:
        """Read and parse a file from disk."""
        if not self.can_load(path):
            raise LoaderError(
                f"Unsupported file type: {path.suffix}",
                source_path=path,
                details=f"Supported types: {', '.join(self.SUPPORTED_EXTENSIONS)}",
            )
        return self.parse(self.read(path), source_path=path)

    def load_bytes(self, data: bytes, source_path: Path | None = None) -> etree._Element:
        """Parse content that has already been read, e.g. an upload."""
        return self.parse(data, source_path=source_path)


class LoaderRegistry:
    """
    Extension-keyed table of document loaders.

    Loader classes add themselves with the ``register`` decorator. Each of
    their extensions maps to the class; a later registration for the same
    extension replaces the earlier one.
    """

    _by_extension: ClassVar[dict[str, type[BaseLoader]]] = {}

    @classmethod
    def register(cls, loader_class: type[BaseLoader]) -> type[BaseLoader]:
        for extension in loader_class.SUPPORTED_EXTENSIONS:
            cls._by_extension[extension.lower()] = loader_class
        return loader_class

    @classmethod
    def get_loader(cls, path: Path) -> BaseLoader | None:
        """Instantiate the loader registered for the path's extension."""
        loader_class = cls._by_extension.get(path.suffix.lower())
        return loader_class() if loader_class is not None else None

    @classmethod
    def supported_extensions(cls) -> list[str]:
        return sorted(cls._by_extension)

    @classmethod
    def loader_names(cls) -> dict[str, str]:
        """Map each supported extension to the name of its loader."""
        return {ext: cls._by_extension[ext].LOADER_NAME for ext in cls.supported_extensions()}

    @classmethod
    def require_loader(cls, path: Path) -> BaseLoader:
        """
        Get a loader for the path or fail.

        Raises:
            LoaderError: If no loader handles the file extension
        """
        loader = cls.get_loader(path)
        if loader is None:
            supported = ", ".join(cls.supported_extensions())
            raise LoaderError(
                f"No loader available for file type: {path.suffix or '(none)'}",
                source_path=path,
                details=f"Supported types: {supported}",
            )
        return loader
