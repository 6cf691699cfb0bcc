import time

from navvi.tools.code_analyzer.models import ComponentAnalysis, Relationship
from navvi.tools.graph import ArchitectureGraph
from navvi.tools.graph.networkx_adapter import MAX_CYCLE_LENGTH


def build(edges):
    names = sorted({n for edge in edges for n in edge[:2]})
    components = [ComponentAnalysis(name=n, type="component", files=[]) for n in names]
    relationships = [Relationship(source=s, target=t, kind=k, strength=0.8) for s, t, k in edges]
    return ArchitectureGraph.build(components, relationships)


class TestArchitectureGraph:

    def test_neighbors(self):
        graph = build([("a", "b", "imports"), ("c", "b", "imports"), ("b", "d", "extends")])
        assert graph.get_neighbors("b", direction="in") == ["a", "c"]
        assert graph.get_neighbors("b", direction="out") == ["d"]
        assert graph.get_neighbors("b", direction="both") == ["a", "c", "d"]
        assert graph.dependents("a") == []
        assert graph.get_neighbors("missing") == []

    def test_parallel_kinds_share_an_edge(self):
        graph = build([("a", "b", "imports"), ("a", "b", "extends")])
        assert graph.get_stats()["total_edges"] == 1
        edge = graph.graph.edges["a", "b"]
        assert edge["types"] == ["imports", "extends"]
        assert edge["weight"] == 2

    def test_cycles(self):
        graph = build([("b", "a", "imports"), ("a", "b", "imports"), ("c", "d", "imports")])
        assert graph.find_cycles() == [["a", "b"]]

    def test_acyclic(self):
        graph = build([("a", "b", "imports"), ("b", "c", "imports")])
        assert graph.find_cycles() == []
        assert graph.get_stats() == {"total_nodes": 3, "total_edges": 2}

    def test_cycles_on_densely_connected_components(self):
        names = [f"c{i:02d}" for i in range(14)]
        graph = build([(s, t, "imports") for s in names for t in names if s != t])

        started = time.perf_counter()
        cycles = graph.find_cycles()
        elapsed = time.perf_counter() - started

        assert elapsed < 5
        assert len(cycles) == 10
        assert all(2 <= len(c) <= MAX_CYCLE_LENGTH for c in cycles)
        assert all(c[0] == min(c) for c in cycles)
        assert cycles == sorted(cycles, key=lambda c: (len(c), c))
