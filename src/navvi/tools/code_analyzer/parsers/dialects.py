"""
Source Dialects
Closed set of supported dialects and the tree-sitter grammar behind each.
"""
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional, Union

import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript
from tree_sitter import Language


class Dialect(str, Enum):
    JAVASCRIPT = "javascript"  # .js .jsx .mjs .cjs (JSX included in grammar)
    TYPESCRIPT = "typescript"  # .ts
    TSX = "tsx"                # .tsx

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> Optional["Dialect"]:
        return EXTENSION_DIALECTS.get(Path(path).suffix.lower())

    def load_language(self) -> Language:
        return Language(_GRAMMARS[self]())


EXTENSION_DIALECTS: Dict[str, Dialect] = {
    ".js": Dialect.JAVASCRIPT,
    ".jsx": Dialect.JAVASCRIPT,
    ".mjs": Dialect.JAVASCRIPT,
    ".cjs": Dialect.JAVASCRIPT,
    ".ts": Dialect.TYPESCRIPT,
    ".tsx": Dialect.TSX,
}

SUPPORTED_EXTENSIONS = tuple(EXTENSION_DIALECTS)

_GRAMMARS: Dict[Dialect, Callable[[], object]] = {
    Dialect.JAVASCRIPT: tsjavascript.language,
    Dialect.TYPESCRIPT: tstypescript.language_typescript,
    Dialect.TSX: tstypescript.language_tsx,
}
