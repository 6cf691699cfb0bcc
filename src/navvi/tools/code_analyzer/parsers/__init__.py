from .base import BaseParser
from .dialects import Dialect, EXTENSION_DIALECTS, SUPPORTED_EXTENSIONS
from .tree_sitter_parser import TreeSitterParser, get_parser

__all__ = [
    "BaseParser",
    "Dialect",
    "EXTENSION_DIALECTS",
    "SUPPORTED_EXTENSIONS",
    "TreeSitterParser",
    "get_parser",
]
