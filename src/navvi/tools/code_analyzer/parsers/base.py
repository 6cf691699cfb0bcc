"""
Base Parser Interface
Defines the contract for dialect-specific parsers.
"""
from abc import ABC, abstractmethod
from pathlib import Path

from navvi.core.exceptions import FileReadError
from ..models import FileAnalysis


class BaseParser(ABC):
    """
    Abstract Base Class for Code Parsers.
    Implementations turn one source file into a FileAnalysis.
    """

    @abstractmethod
    def parse(self, source_code: str, file_path: Path, repo_root: Path) -> FileAnalysis:
        """
        Parse source code and return a FileAnalysis model.

        Args:
            source_code: Content of the file
            file_path: Absolute path to the file
            repo_root: Absolute path to the repository root

        Raises:
            ParseError: if the source is not valid for this dialect
        """

    def parse_file(self, file_path: Path, repo_root: Path) -> FileAnalysis:
        """
        Read and parse a single file.

        Raises:
            FileReadError: if the file cannot be read or decoded
            ParseError: if the source is not valid for this dialect
        """
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(file_path, str(e)) from e
        return self.parse(content, file_path, repo_root)
