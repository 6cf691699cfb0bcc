"""
Component Grouper
Groups files into components, infers component types and builds the
inter-component relationship graph.
"""
import logging
import posixpath
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from navvi.tools.graph import ArchitectureGraph
from .import_resolver import ImportResolver
from .models import (
    ArchitectureAnalysis,
    ComponentAnalysis,
    FileAnalysis,
    Layer,
    Pattern,
    RELATIONSHIP_STRENGTH,
    Relationship,
)
from .patterns import PatternDetector, default_detectors

logger = logging.getLogger(__name__)

ROOT_COMPONENT = "root"

# First matching rule wins
TYPE_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("api", "route"), "api"),
    (("page", "component"), "page"),
    (("service", "util"), "service"),
)
DEFAULT_TYPE = "component"

LAYER_RULES: Tuple[Tuple[str, Tuple[str, ...], str], ...] = (
    ("Presentation", ("page", "component"), "User interface and presentation logic"),
    ("Business Logic", ("service",), "Core business logic and data processing"),
    ("Data Access", ("api",), "API endpoints and data access"),
)


def component_name(path: str) -> str:
    """Immediate parent directory of a repo-relative path, or ``root``."""
    return posixpath.dirname(path) or ROOT_COMPONENT


def infer_component_type(paths: Iterable[str]) -> str:
    lowered = [p.lower() for p in paths]
    for markers, component_type in TYPE_RULES:
        if any(marker in path for path in lowered for marker in markers):
            return component_type
    return DEFAULT_TYPE


def describe_component(name: str, files: Sequence[FileAnalysis]) -> str:
    lines = sum(f.lines for f in files)
    functions = sum(len(f.functions) for f in files)
    classes = sum(len(f.classes) for f in files)
    return f"{name} component with {len(files)} files, {lines} lines, {functions} functions, and {classes} classes"


class ComponentGrouper:
    """
    Turns per-file analyses into an ArchitectureAnalysis.

    Args:
        detectors: Pattern detectors to run; None selects the defaults and
            an empty sequence disables pattern detection.
    """

    def __init__(self, detectors: Optional[Sequence[PatternDetector]] = None):
        self.detectors: List[PatternDetector] = (
            default_detectors() if detectors is None else list(detectors)
        )

    def group(self, files: Iterable[FileAnalysis]) -> ArchitectureAnalysis:
        ordered = sorted(files, key=lambda f: f.path)
        members = self._members(ordered)
        components = self.identify_components(members)

        resolver = ImportResolver(f.path for f in ordered)
        relationships = self.build_relationships(ordered, resolver)

        graph = ArchitectureGraph.build(components, relationships)
        for component in components:
            component.dependents = graph.dependents(component.name)

        patterns: List[Pattern] = []
        for detector in self.detectors:
            pattern = detector.detect(ordered)
            if pattern is not None:
                patterns.append(pattern)

        logger.debug(
            f"Grouped {len(ordered)} files into {len(components)} components "
            f"with {len(relationships)} relationships"
        )
        return ArchitectureAnalysis(
            components=components,
            relationships=relationships,
            layers=build_layers(components),
            patterns=patterns,
        )

    @staticmethod
    def _members(files: Sequence[FileAnalysis]) -> Dict[str, List[FileAnalysis]]:
        members: Dict[str, List[FileAnalysis]] = {}
        for file in files:
            members.setdefault(component_name(file.path), []).append(file)
        return members

    def identify_components(self, members: Dict[str, List[FileAnalysis]]) -> List[ComponentAnalysis]:
        components = []
        for name, files in members.items():
            paths = [f.path for f in files]
            dependencies: List[str] = []
            for file in files:
                dependencies.extend(file.dependencies)

            tags: List[str] = []
            for detector in self.detectors:
                tags.extend(detector.component_tags(files))

            components.append(ComponentAnalysis(
                name=name,
                type=infer_component_type(paths),
                files=paths,
                dependencies=list(dict.fromkeys(dependencies)),
                complexity=sum(f.complexity.cyclomatic for f in files),
                description=describe_component(name, files),
                patterns=tags,
            ))
        return components

    def build_relationships(self, files: Sequence[FileAnalysis], resolver: ImportResolver) -> List[Relationship]:
        """
        One edge per (source, target, kind); repeated occurrences raise its weight.
        """
        edges: Dict[Tuple[str, str, str], Relationship] = {}

        def add(source: str, target_path: str, kind: str):
            target = component_name(target_path)
            if target == source:
                return
            key = (source, target, kind)
            if key in edges:
                edges[key].weight += 1
            else:
                edges[key] = Relationship(
                    source=source, target=target, kind=kind, strength=RELATIONSHIP_STRENGTH[kind]
                )

        for file in files:
            source = component_name(file.path)
            for imp in file.imports:
                target_path = resolver.resolve(imp.module, importer=file.path)
                if target_path:
                    add(source, target_path, "imports")

            local_classes = {cls.name for cls in file.classes}
            for cls in file.classes:
                if not cls.extends or cls.extends in local_classes:
                    continue
                target_path = self._resolve_superclass(cls.extends, file, resolver)
                if target_path:
                    add(source, target_path, "extends")

        return list(edges.values())

    @staticmethod
    def _resolve_superclass(name: str, file: FileAnalysis, resolver: ImportResolver) -> Optional[str]:
        # An import binding for the name decides; only unbound names fall back to textual matching
        for imp in file.imports:
            if name in imp.names:
                return resolver.resolve(imp.module, importer=file.path)
        return resolver.resolve(name, importer=file.path)


def build_layers(components: Sequence[ComponentAnalysis]) -> List[Layer]:
    layers = []
    for layer_name, types, responsibility in LAYER_RULES:
        names = [c.name for c in components if c.type in types]
        if names:
            layers.append(Layer(name=layer_name, components=names, responsibility=responsibility))
    return layers
