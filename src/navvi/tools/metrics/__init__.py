"""
Repository Metrics
Aggregates per-file analyses into repository-wide metrics.
"""

import logging
from collections import Counter
from typing import Sequence

from navvi.tools.code_analyzer.complexity import maintainability_index, technical_debt
from navvi.tools.code_analyzer.models import FileAnalysis, RepositoryMetrics

logger = logging.getLogger(__name__)


class MetricsAnalyzer:
    """Computes RepositoryMetrics over a set of file analyses"""

    def __init__(self, complexity_threshold: int = 10):
        """
        Initialize metrics analyzer

        Args:
            complexity_threshold: Cyclomatic complexity above which a file accrues technical debt
        """
        self.complexity_threshold = complexity_threshold

    def calculate(self, files: Sequence[FileAnalysis]) -> RepositoryMetrics:
        """
        Aggregate totals, language histogram, complexity and debt.

        An empty file set yields zeros and a maintainability index of 100.
        """
        complexities = [f.complexity.cyclomatic for f in files]
        total_lines = sum(f.lines for f in files)
        total_complexity = sum(complexities)

        metrics = RepositoryMetrics(
            total_files=len(files),
            total_lines=total_lines,
            languages=dict(Counter(f.language for f in files)),
            average_complexity=total_complexity / len(complexities) if complexities else 0.0,
            max_complexity=max(complexities, default=0),
            maintainability_index=maintainability_index(total_complexity, total_lines),
            technical_debt=technical_debt(files, self.complexity_threshold),
        )
        logger.debug(
            f"Metrics: {metrics.total_files} files, avg complexity {metrics.average_complexity:.2f}, "
            f"MI {metrics.maintainability_index:.1f}"
        )
        return metrics


def calculate_metrics(files: Sequence[FileAnalysis], complexity_threshold: int = 10) -> RepositoryMetrics:
    """Convenience wrapper around MetricsAnalyzer"""
    return MetricsAnalyzer(complexity_threshold).calculate(files)
