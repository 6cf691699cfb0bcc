"""
Insights Generator
Classifies the repository and derives issues, recommendations, top-N lists
and a learning path from files, architecture and metrics.
"""
import posixpath
from typing import Any, Dict, List, Sequence

from navvi.tools.graph import ArchitectureGraph
from .models import (
    ArchitectureAnalysis,
    CriticalPath,
    FileAnalysis,
    Insights,
    LearningModule,
    LearningPath,
    RepositoryMetrics,
)

TOP_N = 5
ENTRY_POINT_EXPORTS = 3
HOTSPOT_MIN_COMMITS = 2
CORE_FILE_COMPLEXITY = 5

UNKNOWN = "Unknown"
NO_FILES_DISTRIBUTION = "No supported files found"
NO_FILES_ISSUE = "Repository contains no supported file types"
NO_FILES_RECOMMENDATION = "Add JavaScript, TypeScript, JSX, or TSX files"

PREREQUISITES = ["Basic JavaScript/TypeScript knowledge", "Understanding of React concepts"]

# (total complexity above, total lines above, difficulty, hours), checked in order
DIFFICULTY_BANDS = (
    (100, 5000, "advanced", 8),
    (50, 2000, "intermediate", 4),
)


def architectural_style(architecture: ArchitectureAnalysis) -> str:
    types = {c.type for c in architecture.components}
    has_pages = "page" in types
    has_apis = "api" in types

    if has_pages and has_apis and "service" in types:
        return "Full-Stack Application"
    if has_pages and not has_apis:
        return "Frontend Application"
    if has_apis and not has_pages:
        return "Backend API"
    return "Component Library"


def code_quality(maintainability: float) -> str:
    if maintainability > 80:
        return "Excellent"
    if maintainability > 60:
        return "Good"
    if maintainability > 40:
        return "Fair"
    return "Needs Improvement"


def complexity_distribution(average_complexity: float) -> str:
    if average_complexity < 5:
        return "Low complexity, easy to maintain"
    if average_complexity < 10:
        return "Moderate complexity, manageable"
    return "High complexity, consider refactoring"


def empty_insights() -> Insights:
    """Deterministic insights for a repository with no supported files"""
    return Insights(
        architectural_style=UNKNOWN,
        code_quality=UNKNOWN,
        complexity_distribution=NO_FILES_DISTRIBUTION,
        potential_issues=[NO_FILES_ISSUE],
        recommendations=[NO_FILES_RECOMMENDATION],
        learning_path=LearningPath(difficulty="beginner", estimated_hours=0, prerequisites=list(PREREQUISITES)),
    )


class InsightsGenerator:
    """
    Synthesizes Insights for one analysis run.

    Args:
        complexity_threshold: File cyclomatic complexity above which a file is
            reported as high complexity
    """

    def __init__(self, complexity_threshold: int = 10):
        self.complexity_threshold = complexity_threshold

    def generate(
        self,
        files: Sequence[FileAnalysis],
        architecture: ArchitectureAnalysis,
        metrics: RepositoryMetrics,
    ) -> Insights:
        if not files:
            return empty_insights()

        return Insights(
            architectural_style=architectural_style(architecture),
            code_quality=code_quality(metrics.maintainability_index),
            complexity_distribution=complexity_distribution(metrics.average_complexity),
            potential_issues=self.potential_issues(architecture, metrics),
            recommendations=self.recommendations(metrics),
            hotspots=self.hotspots(files),
            high_complexity_files=self.high_complexity_files(files),
            entry_points=self.entry_points(files),
            critical_paths=self.critical_paths(files),
            learning_path=self.learning_path(files, architecture),
        )

    def potential_issues(self, architecture: ArchitectureAnalysis, metrics: RepositoryMetrics) -> List[str]:
        issues = []
        if metrics.average_complexity > 10:
            issues.append("High average complexity - consider breaking down complex functions")
        if metrics.max_complexity > 20:
            issues.append("Very high complexity in some files - immediate refactoring needed")
        if metrics.maintainability_index < 50:
            issues.append("Low maintainability index - code quality improvements recommended")

        graph = ArchitectureGraph.build(architecture.components, architecture.relationships)
        for cycle in graph.find_cycles():
            loop = " -> ".join(cycle + cycle[:1])
            issues.append(f"Circular dependency between components: {loop}")
        return issues

    def recommendations(self, metrics: RepositoryMetrics) -> List[str]:
        recommendations = []
        if metrics.average_complexity > 10:
            recommendations.append("Break down complex functions into smaller, more manageable pieces")
        if metrics.maintainability_index < 60:
            recommendations.append("Add more comprehensive documentation and comments")
            recommendations.append("Consider implementing unit tests for critical functions")
        return recommendations

    @staticmethod
    def hotspots(files: Sequence[FileAnalysis]) -> List[Dict[str, Any]]:
        """Files changed in at least two commits, most changed first"""
        changed = [f for f in files if f.commit_count is not None and f.commit_count >= HOTSPOT_MIN_COMMITS]
        changed.sort(key=lambda f: (-f.commit_count, f.path))
        return [{"path": f.path, "commit_count": f.commit_count} for f in changed[:TOP_N]]

    def high_complexity_files(self, files: Sequence[FileAnalysis]) -> List[Dict[str, Any]]:
        complex_files = [f for f in files if f.complexity.cyclomatic > self.complexity_threshold]
        complex_files.sort(key=lambda f: (-f.complexity.cyclomatic, f.path))
        return [{"path": f.path, "complexity": f.complexity.cyclomatic} for f in complex_files[:TOP_N]]

    @staticmethod
    def entry_points(files: Sequence[FileAnalysis]) -> List[Dict[str, Any]]:
        entries = []
        for f in files:
            if not f.exports:
                continue
            names = [e.name for e in f.exports]
            entries.append({
                "path": f.path,
                "exports": names[:ENTRY_POINT_EXPORTS],
                "truncated": len(names) > ENTRY_POINT_EXPORTS,
            })
        return entries

    @staticmethod
    def critical_paths(files: Sequence[FileAnalysis]) -> List[CriticalPath]:
        ranked = sorted(files, key=lambda f: (-f.complexity.cyclomatic, f.path))
        paths = []
        for f in ranked[:TOP_N]:
            cyclomatic = f.complexity.cyclomatic
            paths.append(CriticalPath(
                name=f"High Complexity: {posixpath.basename(f.path)}",
                files=[f.path],
                importance=min(100, cyclomatic * 10),
                complexity=cyclomatic,
                description=f"File with high cyclomatic complexity ({cyclomatic})",
            ))
        return paths

    def learning_path(self, files: Sequence[FileAnalysis], architecture: ArchitectureAnalysis) -> LearningPath:
        total_complexity = sum(f.complexity.cyclomatic for f in files)
        total_lines = sum(f.lines for f in files)

        difficulty, hours = "beginner", 2
        for complexity_limit, lines_limit, band, band_hours in DIFFICULTY_BANDS:
            if total_complexity > complexity_limit or total_lines > lines_limit:
                difficulty, hours = band, band_hours
                break

        return LearningPath(
            difficulty=difficulty,
            estimated_hours=hours,
            modules=self.learning_modules(files, architecture),
            prerequisites=list(PREREQUISITES),
        )

    @staticmethod
    def learning_modules(files: Sequence[FileAnalysis], architecture: ArchitectureAnalysis) -> List[LearningModule]:
        modules = [LearningModule(
            title="Architecture Overview",
            description="Understand the overall structure and organization of the codebase",
            files=[c.files[0] for c in architecture.components if c.files],
            concepts=["Component organization", "Dependency management", "File structure"],
            estimated_minutes=30,
        )]

        core_files = [f.path for f in files if f.complexity.cyclomatic > CORE_FILE_COMPLEXITY]
        if core_files:
            modules.append(LearningModule(
                title="Core Functionality",
                description="Learn about the main business logic and key functions",
                files=core_files[:TOP_N],
                concepts=["Business logic", "Function complexity", "Code patterns"],
                estimated_minutes=45,
            ))
        return modules
