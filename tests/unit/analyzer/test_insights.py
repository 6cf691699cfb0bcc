import pytest

from navvi.tools.code_analyzer.insights import (
    InsightsGenerator,
    architectural_style,
    code_quality,
    complexity_distribution,
    empty_insights,
)
from navvi.tools.code_analyzer.models import (
    ArchitectureAnalysis,
    ComponentAnalysis,
    Relationship,
    RepositoryMetrics,
)


def architecture(*types, relationships=()):
    components = [
        ComponentAnalysis(name=f"c{i}", type=t, files=[f"c{i}/index.js"]) for i, t in enumerate(types)
    ]
    return ArchitectureAnalysis(components=components, relationships=list(relationships))


class TestClassification:

    @pytest.mark.parametrize(
        "types, expected",
        [
            (("page", "api", "service"), "Full-Stack Application"),
            (("page",), "Frontend Application"),
            (("page", "service", "component"), "Frontend Application"),
            (("api",), "Backend API"),
            (("api", "service"), "Backend API"),
            (("page", "api"), "Component Library"),
            (("component", "service"), "Component Library"),
            ((), "Component Library"),
        ],
    )
    def test_architectural_style(self, types, expected):
        assert architectural_style(architecture(*types)) == expected

    @pytest.mark.parametrize(
        "mi, expected",
        [
            (100.0, "Excellent"),
            (80.5, "Excellent"),
            (80.0, "Good"),
            (60.0, "Fair"),
            (40.0, "Needs Improvement"),
            (0.0, "Needs Improvement"),
        ],
    )
    def test_code_quality_ties_fall_to_lower_band(self, mi, expected):
        assert code_quality(mi) == expected

    @pytest.mark.parametrize(
        "average, expected",
        [
            (1.0, "Low complexity, easy to maintain"),
            (5.0, "Moderate complexity, manageable"),
            (9.9, "Moderate complexity, manageable"),
            (10.0, "High complexity, consider refactoring"),
        ],
    )
    def test_complexity_distribution(self, average, expected):
        assert complexity_distribution(average) == expected


class TestInsightsGenerator:

    @pytest.fixture
    def generator(self):
        return InsightsGenerator(complexity_threshold=10)

    def test_empty_insights(self, generator):
        insights = generator.generate([], ArchitectureAnalysis(), RepositoryMetrics())
        assert insights == empty_insights()
        assert insights.architectural_style == "Unknown"
        assert insights.code_quality == "Unknown"
        assert insights.complexity_distribution == "No supported files found"
        assert insights.potential_issues == ["Repository contains no supported file types"]
        assert insights.learning_path.modules == []

    def test_high_complexity_files_top_five(self, generator, make_file):
        files = [make_file(f"src/f{i}.js", cyclomatic=c) for i, c in enumerate([3, 11, 25, 14, 10, 30, 12, 40])]
        result = generator.high_complexity_files(files)
        assert [entry["complexity"] for entry in result] == [40, 30, 25, 14, 12]
        assert all(entry["complexity"] > 10 for entry in result)

    def test_hotspots(self, generator, make_file):
        files = [
            make_file("a.js", commit_count=1),
            make_file("b.js", commit_count=2),
            make_file("c.js", commit_count=9),
            make_file("d.js"),
            make_file("e.js", commit_count=5),
        ]
        assert generator.hotspots(files) == [
            {"path": "c.js", "commit_count": 9},
            {"path": "e.js", "commit_count": 5},
            {"path": "b.js", "commit_count": 2},
        ]

    def test_hotspots_without_history(self, generator, make_file):
        assert generator.hotspots([make_file("a.js"), make_file("b.js")]) == []

    def test_entry_points(self, generator, make_file):
        files = [
            make_file("a.js", exports=["one"]),
            make_file("b.js"),
            make_file("c.js", exports=["w", "x", "y", "z"]),
        ]
        assert generator.entry_points(files) == [
            {"path": "a.js", "exports": ["one"], "truncated": False},
            {"path": "c.js", "exports": ["w", "x", "y"], "truncated": True},
        ]

    def test_critical_paths(self, generator, make_file):
        files = [make_file("src/low.js", cyclomatic=2), make_file("src/high.js", cyclomatic=12)]
        paths = generator.critical_paths(files)
        assert [p.files for p in paths] == [["src/high.js"], ["src/low.js"]]
        assert paths[0].name == "High Complexity: high.js"
        assert paths[0].importance == 100
        assert paths[1].importance == 20

    def test_issues_and_recommendations(self, generator):
        metrics = RepositoryMetrics(total_files=2, average_complexity=12.0, max_complexity=25, maintainability_index=45.0)
        issues = generator.potential_issues(ArchitectureAnalysis(), metrics)
        assert issues == [
            "High average complexity - consider breaking down complex functions",
            "Very high complexity in some files - immediate refactoring needed",
            "Low maintainability index - code quality improvements recommended",
        ]
        assert generator.recommendations(metrics) == [
            "Break down complex functions into smaller, more manageable pieces",
            "Add more comprehensive documentation and comments",
            "Consider implementing unit tests for critical functions",
        ]

    def test_healthy_repository_has_no_issues(self, generator):
        metrics = RepositoryMetrics(total_files=2, average_complexity=3.0, max_complexity=4, maintainability_index=85.0)
        assert generator.potential_issues(ArchitectureAnalysis(), metrics) == []
        assert generator.recommendations(metrics) == []

    def test_dependency_cycle_is_reported(self, generator):
        arch = architecture("page", "service", relationships=[
            Relationship(source="c0", target="c1", kind="imports", strength=0.8),
            Relationship(source="c1", target="c0", kind="imports", strength=0.8),
        ])
        metrics = RepositoryMetrics(total_files=2, average_complexity=1.0, max_complexity=1, maintainability_index=90.0)
        assert generator.potential_issues(arch, metrics) == [
            "Circular dependency between components: c0 -> c1 -> c0"
        ]

    @pytest.mark.parametrize(
        "cyclomatic, lines, difficulty, hours",
        [
            (10, 100, "beginner", 2),
            (51, 100, "intermediate", 4),
            (10, 2001, "intermediate", 4),
            (101, 100, "advanced", 8),
            (10, 5001, "advanced", 8),
        ],
    )
    def test_learning_path_bands(self, generator, make_file, cyclomatic, lines, difficulty, hours):
        path = generator.learning_path([make_file("a.js", cyclomatic=cyclomatic, lines=lines)], ArchitectureAnalysis())
        assert (path.difficulty, path.estimated_hours) == (difficulty, hours)
        assert path.prerequisites == ["Basic JavaScript/TypeScript knowledge", "Understanding of React concepts"]

    def test_learning_modules(self, generator, make_file):
        files = [make_file(f"src/f{i}.js", cyclomatic=6 + i) for i in range(7)] + [make_file("lib/a.js")]
        arch = ArchitectureAnalysis(components=[
            ComponentAnalysis(name="lib", type="component", files=["lib/a.js"]),
            ComponentAnalysis(name="src", type="component", files=[f.path for f in files[:7]]),
        ])
        overview, core = generator.learning_path(files, arch).modules

        assert overview.title == "Architecture Overview"
        assert overview.files == ["lib/a.js", "src/f0.js"]
        assert overview.estimated_minutes == 30
        assert core.title == "Core Functionality"
        assert len(core.files) == 5
        assert core.estimated_minutes == 45

    def test_no_core_module_for_simple_code(self, generator, make_file):
        modules = generator.learning_path([make_file("a.js", cyclomatic=5)], ArchitectureAnalysis()).modules
        assert [m.title for m in modules] == ["Architecture Overview"]

    def test_generate(self, generator, make_file):
        files = [make_file("src/api/a.ts", cyclomatic=3, exports=["handler"])]
        arch = architecture("api")
        metrics = RepositoryMetrics(total_files=1, total_lines=10, average_complexity=3.0,
                                    max_complexity=3, maintainability_index=90.0)
        insights = generator.generate(files, arch, metrics)
        assert insights.architectural_style == "Backend API"
        assert insights.code_quality == "Excellent"
        assert insights.complexity_distribution == "Low complexity, easy to maintain"
        assert insights.entry_points == [{"path": "src/api/a.ts", "exports": ["handler"], "truncated": False}]
