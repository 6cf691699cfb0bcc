"""
Data Models for Code Analysis
Defines the structures used to represent files, components and repository results.
"""
import json
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any, Set

ANONYMOUS = "anonymous"

COMPONENT_TYPES = ("component", "service", "utility", "page", "api")
RELATIONSHIP_STRENGTH = {"imports": 0.8, "extends": 0.9}


@dataclass
class FunctionInfo:
    """Represents a named function (declaration or bound expression)"""
    name: str
    line: int
    end_line: int
    parameters: List[str] = field(default_factory=list)
    complexity: int = 1
    # Call graph is an extension point; static extraction never fills it.
    calls: Set[str] = field(default_factory=set)
    called_by: Set[str] = field(default_factory=set)
    call_graph_resolved: bool = False


@dataclass
class MethodInfo(FunctionInfo):
    """Represents a class method"""
    visibility: str = "public"
    is_static: bool = False
    kind: str = "method"  # method, get, set, constructor


@dataclass
class PropertyInfo:
    """Represents a class field"""
    name: str
    line: int
    visibility: str = "public"
    is_static: bool = False


@dataclass
class ClassInfo:
    """Represents a class declaration"""
    name: str
    line: int
    end_line: int
    methods: List[MethodInfo] = field(default_factory=list)
    properties: List[PropertyInfo] = field(default_factory=list)
    extends: Optional[str] = None
    implements: List[str] = field(default_factory=list)
    complexity: int = 0


@dataclass
class ImportInfo:
    """Represents an import statement"""
    module: str
    names: List[str]  # local bindings, e.g. ["React", "useState"]
    line: int
    is_default: bool = False


@dataclass
class ExportInfo:
    """Represents an exported symbol"""
    name: str
    line: int
    kind: str  # function, class, variable, default


@dataclass
class ComplexityMetrics:
    cyclomatic: int = 1
    cognitive: int = 1
    maintainability: float = 100.0


@dataclass
class FileAnalysis:
    """Complete analysis result for a single file"""
    path: str  # Relative to repo root, forward slashes
    language: str
    size: int = 0
    lines: int = 0
    functions: List[FunctionInfo] = field(default_factory=list)
    classes: List[ClassInfo] = field(default_factory=list)
    imports: List[ImportInfo] = field(default_factory=list)
    exports: List[ExportInfo] = field(default_factory=list)
    complexity: ComplexityMetrics = field(default_factory=ComplexityMetrics)
    dependencies: List[str] = field(default_factory=list)
    commit_count: Optional[int] = None


@dataclass
class ComponentAnalysis:
    """A group of files treated as one architectural unit"""
    name: str
    type: str
    files: List[str]
    dependencies: List[str] = field(default_factory=list)
    dependents: List[str] = field(default_factory=list)
    complexity: int = 0
    description: str = ""
    patterns: List[str] = field(default_factory=list)


@dataclass
class Relationship:
    """Directed edge between two components"""
    source: str
    target: str
    kind: str  # imports, extends
    strength: float
    weight: int = 1


@dataclass
class Layer:
    name: str
    components: List[str]
    responsibility: str


@dataclass
class Pattern:
    name: str
    confidence: float
    files: List[str]
    description: str


@dataclass
class ArchitectureAnalysis:
    components: List[ComponentAnalysis] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)
    layers: List[Layer] = field(default_factory=list)
    patterns: List[Pattern] = field(default_factory=list)


@dataclass
class RepositoryMetrics:
    total_files: int = 0
    total_lines: int = 0
    languages: Dict[str, int] = field(default_factory=dict)
    average_complexity: float = 0.0
    max_complexity: int = 0
    maintainability_index: float = 100.0
    technical_debt: float = 0.0


@dataclass
class CriticalPath:
    name: str
    files: List[str]
    importance: int
    complexity: int
    description: str


@dataclass
class LearningModule:
    title: str
    description: str
    files: List[str]
    concepts: List[str]
    estimated_minutes: int


@dataclass
class LearningPath:
    difficulty: str  # beginner, intermediate, advanced
    estimated_hours: int
    modules: List[LearningModule] = field(default_factory=list)
    prerequisites: List[str] = field(default_factory=list)


@dataclass
class Insights:
    architectural_style: str
    code_quality: str
    complexity_distribution: str
    potential_issues: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    hotspots: List[Dict[str, Any]] = field(default_factory=list)
    high_complexity_files: List[Dict[str, Any]] = field(default_factory=list)
    entry_points: List[Dict[str, Any]] = field(default_factory=list)
    critical_paths: List[CriticalPath] = field(default_factory=list)
    learning_path: LearningPath = field(
        default_factory=lambda: LearningPath(difficulty="beginner", estimated_hours=0)
    )


@dataclass
class AnalysisProgress:
    """Progress event emitted by the engine"""
    stage: str
    percent: float
    message: str
    current_file: Optional[str] = None


@dataclass
class RepositoryAnalysis:
    """Terminal result of one analysis run"""
    repository: str
    files: List[FileAnalysis]
    architecture: ArchitectureAnalysis
    metrics: RepositoryMetrics
    insights: Insights
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible representation (sets become sorted lists)"""
        return _jsonable(asdict(self))

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted(_jsonable(item) for item in value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value
