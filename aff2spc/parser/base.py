"""
Abstract base classes for parsers.
"""
from abc import ABC, abstractmethod
from io import StringIO
from pathlib import Path
from typing import Any, TextIO

__all__ = [
    "Parser",
]


class Parser(ABC):
    """
    An abstract base class for parsers that read a specific format.
    """

    _file_path: Path | None = None

    @abstractmethod
    def parse(self, f: TextIO) -> Any:
        """Parse a file, producing the in-memory representation of its content."""
        pass

    def parse_text(self, text: str) -> Any:
        """Parse a string, treating it as the content of a file."""
        return self.parse(StringIO(text))

    def _remember_path(self, f: TextIO) -> None:
        name = getattr(f, "name", None)
        self._file_path = Path(name).resolve() if isinstance(name, str) else None

    @property
    def file_path(self) -> Path | None:
        """Path to the file that was parsed, if it came from the filesystem."""
        return self._file_path
