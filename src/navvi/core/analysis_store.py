"""
Analysis Store
Holds finished RepositoryAnalysis results keyed by repository identifier.
"""
import logging
import threading
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from navvi.tools.code_analyzer.models import RepositoryAnalysis

logger = logging.getLogger(__name__)


class AnalysisStore(ABC):
    """Put/get collaborator for analysis results"""

    @abstractmethod
    def put(self, key: str, analysis: RepositoryAnalysis):
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[RepositoryAnalysis]:
        pass


class InMemoryAnalysisStore(AnalysisStore):
    """
    Bounded, optionally expiring in-memory store.

    The least recently used entry is evicted once ``max_entries`` is
    exceeded; entries older than ``ttl_seconds`` are treated as missing.
    Safe to share between threads.
    """

    def __init__(
        self,
        max_entries: int = 128,
        ttl_seconds: Optional[float] = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, RepositoryAnalysis]]" = OrderedDict()
        self._lock = threading.Lock()

    def put(self, key: str, analysis: RepositoryAnalysis):
        with self._lock:
            self._entries[key] = (self._clock(), analysis)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted cached analysis for {evicted}")

    def get(self, key: str) -> Optional[RepositoryAnalysis]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, analysis = entry
            if self.ttl_seconds is not None and self._clock() - stored_at > self.ttl_seconds:
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return analysis

    def invalidate(self, key: str):
        with self._lock:
            self._entries.pop(key, None)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
