"""
Pattern Detectors
Pluggable heuristics that tag components and report repository-level patterns.
"""
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .models import FileAnalysis, Pattern

HOOK_NAME = re.compile(r"^use[A-Z0-9]")


class PatternDetector(ABC):
    """
    A detector inspects a set of files.

    ``component_tags`` labels a single component; ``detect`` reports a
    repository-wide pattern or None.
    """

    name: str = ""

    @abstractmethod
    def component_tags(self, files: Sequence[FileAnalysis]) -> List[str]:
        """Tags for the component made of ``files``"""

    @abstractmethod
    def detect(self, files: Sequence[FileAnalysis]) -> Optional[Pattern]:
        """Repository-level pattern over all ``files``"""


class HookNamingDetector(PatternDetector):
    """Functions named ``useSomething`` follow the React hooks convention."""

    name = "React Hooks Pattern"
    confidence = 0.9

    def _matching_files(self, files: Sequence[FileAnalysis]) -> List[str]:
        return [f.path for f in files if any(HOOK_NAME.match(fn.name) for fn in f.functions)]

    def component_tags(self, files):
        return ["React Hooks"] if self._matching_files(files) else []

    def detect(self, files):
        matched = self._matching_files(files)
        if not matched:
            return None
        return Pattern(
            name=self.name,
            confidence=self.confidence,
            files=matched,
            description="Uses React hooks for state management and side effects",
        )


class ContextProviderDetector(PatternDetector):
    """Context and Provider declarations (classes or functions) paired in one scope."""

    name = "Context Provider Pattern"
    confidence = 0.8

    @staticmethod
    def _declared_names(file: FileAnalysis) -> List[str]:
        return [c.name for c in file.classes] + [fn.name for fn in file.functions]

    def _files_with(self, files: Sequence[FileAnalysis], marker: str) -> List[str]:
        return [f.path for f in files if any(marker in name for name in self._declared_names(f))]

    def component_tags(self, files):
        tags = []
        if self._files_with(files, "Context"):
            tags.append("Context Pattern")
        if self._files_with(files, "Provider"):
            tags.append("Provider Pattern")
        return tags

    def detect(self, files):
        contexts = self._files_with(files, "Context")
        providers = self._files_with(files, "Provider")
        if not (contexts and providers):
            return None
        return Pattern(
            name=self.name,
            confidence=self.confidence,
            files=sorted(set(contexts) | set(providers)),
            description="Uses React Context API for state management",
        )


def default_detectors() -> List[PatternDetector]:
    return [HookNamingDetector(), ContextProviderDetector()]
