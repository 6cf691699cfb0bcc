"""
Import Resolver
Resolves import specifiers and superclass names to files within the repository.
"""
import posixpath
from typing import Dict, Iterable, List, Optional

from .parsers.dialects import SUPPORTED_EXTENSIONS

RELATIVE_PREFIXES = (".",)
ABSOLUTE_PREFIXES = ("/",)


def _strip_extension(path: str) -> str:
    root, ext = posixpath.splitext(path)
    return root if ext.lower() in SUPPORTED_EXTENSIONS else path


class ImportResolver:
    """
    Matches module specifiers against the analyzed file set.

    Resolution is textual: there is no module-resolution algorithm, only
    the heuristics below, tried in order and deterministic for a given
    file set.
    """

    def __init__(self, file_paths: Iterable[str]):
        self.paths: List[str] = sorted(set(file_paths))
        self._path_set = set(self.paths)
        # Map extension-less paths (and index-file directories) to files
        self.module_map: Dict[str, str] = {}
        self._build_module_map()

    def _build_module_map(self):
        for path in self.paths:
            stem = _strip_extension(path)
            self.module_map.setdefault(stem, path)
            if posixpath.basename(stem) == "index":
                self.module_map.setdefault(posixpath.dirname(stem), path)

    def is_internal(self, specifier: str) -> bool:
        """True for relative/absolute specifiers or ones that textually match a file."""
        if not specifier:
            return False
        if specifier.startswith(RELATIVE_PREFIXES) or specifier.startswith(ABSOLUTE_PREFIXES):
            return True
        return self._match_textual(specifier) is not None

    def resolve(self, specifier: str, importer: Optional[str] = None) -> Optional[str]:
        """
        Resolve ``specifier`` to a repo-relative file path.

        Returns None for external packages and unmatched specifiers.
        """
        if not self.is_internal(specifier):
            return None

        if specifier.startswith(RELATIVE_PREFIXES) and importer is not None:
            target = posixpath.normpath(posixpath.join(posixpath.dirname(importer), specifier))
            resolved = self._lookup(target)
            if resolved:
                return resolved
        elif specifier.startswith(ABSOLUTE_PREFIXES):
            resolved = self._lookup(posixpath.normpath(specifier.lstrip("/")))
            if resolved:
                return resolved

        return self._match_textual(specifier)

    def _lookup(self, target: str) -> Optional[str]:
        if target.startswith("..") or target == ".":
            return None
        if target in self._path_set:
            return target
        return self.module_map.get(_strip_extension(target))

    def _match_textual(self, specifier: str) -> Optional[str]:
        """Equality, then suffix, then substring, then same basename."""
        needle = self._normalize(specifier)
        if not needle:
            return None
        needle_stem = _strip_extension(needle)
        base = posixpath.basename(needle)
        base_stem = _strip_extension(base)

        for path in self.paths:
            if path == needle or _strip_extension(path) == needle_stem:
                return path
        for path in self.paths:
            stem = _strip_extension(path)
            if path.endswith("/" + needle) or stem.endswith("/" + needle_stem):
                return path
        for path in self.paths:
            if needle in path:
                return path
        for path in self.paths:
            file_base = posixpath.basename(path)
            if file_base == base or _strip_extension(file_base) == base_stem:
                return path
        return None

    @staticmethod
    def _normalize(specifier: str) -> str:
        parts = [p for p in specifier.split("/") if p not in ("", ".", "..")]
        return "/".join(parts)
