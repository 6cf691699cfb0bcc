"""
Navvi Exceptions
Error taxonomy for the analysis pipeline.

Per-file errors (FileReadError, ParseError) are recoverable and never leave
the file-analysis boundary. Run-level errors abort the run and reach the
caller wrapped in AnalysisError with the underlying cause chained.
"""
from pathlib import Path
from typing import Optional, Union


class NavviError(Exception):
    """Base exception for all Navvi errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class FetchError(NavviError):
    """Repository could not be fetched (network, auth, not found)."""

    def __init__(self, identifier: str, reason: str):
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Failed to fetch repository '{identifier}': {reason}")


class FileReadError(NavviError):
    """A single source file could not be read."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        super().__init__(f"Failed to read {self.path}: {reason}")


class ParseError(NavviError):
    """A single source file has malformed or unsupported syntax."""

    def __init__(self, path: Union[str, Path], reason: str, line: Optional[int] = None):
        self.path = str(path)
        self.line = line
        location = f"{self.path}:{line}" if line else self.path
        super().__init__(f"Failed to parse {location}: {reason}")


class InternalAggregationError(NavviError):
    """Metrics or insight synthesis failed after file analysis."""


class InvalidStageTransitionError(NavviError):
    """The engine attempted to move backwards or skip a stage."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Invalid stage transition: {current} -> {requested}")


class AnalysisCancelledError(NavviError):
    """The run was cancelled between stages."""


class AnalysisError(NavviError):
    """Run-level failure surfaced to callers; the cause is chained."""

    def __init__(self, repository: str, stage: str, cause: Exception):
        self.repository = repository
        self.stage = stage
        self.cause = cause
        super().__init__(f"Analysis of '{repository}' failed during {stage}: {cause}")
