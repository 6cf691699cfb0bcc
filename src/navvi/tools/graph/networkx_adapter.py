"""
NetworkX Component Graph
In-memory directed graph of components and their relationships.
"""

import logging
from itertools import islice
from typing import Dict, Iterable, List

import networkx as nx

logger = logging.getLogger(__name__)

# Simple cycles grow exponentially with graph density; enumeration is bounded
MAX_CYCLE_LENGTH = 6
MAX_CYCLES_SCANNED = 500


class ArchitectureGraph:
    """
    NetworkX-based component graph.
    Nodes are component names; edges carry relationship kind, strength and weight.
    """

    def __init__(self):
        self.graph = nx.DiGraph()

    @classmethod
    def build(
        cls,
        components: Iterable,
        relationships: Iterable,
    ) -> "ArchitectureGraph":
        instance = cls()
        for component in components:
            instance.add_node(component.name, type=component.type)
        for rel in relationships:
            instance.add_relationship(rel.source, rel.target, rel.kind, strength=rel.strength, weight=rel.weight)
        logger.debug(f"Component graph built: {instance.get_stats()}")
        return instance

    def add_node(self, node_id: str, **properties):
        self.graph.add_node(node_id, **properties)

    def add_relationship(self, from_node: str, to_node: str, rel_type: str, **properties):
        """
        Add a relationship between components.

        A DiGraph holds a single edge per pair; kinds sharing a pair are
        kept in the edge's ``types`` list.
        """
        if self.graph.has_edge(from_node, to_node):
            data = self.graph.edges[from_node, to_node]
            if rel_type not in data["types"]:
                data["types"].append(rel_type)
            data["weight"] = data.get("weight", 0) + properties.get("weight", 1)
            return
        self.graph.add_edge(
            from_node,
            to_node,
            types=[rel_type],
            weight=properties.pop("weight", 1),
            **properties,
        )

    def get_neighbors(self, node_id: str, direction: str = "out") -> List[str]:
        """
        Get neighboring nodes in sorted order

        Args:
            node_id: Node to get neighbors for
            direction: 'out' (dependencies), 'in' (dependents), 'both'
        """
        if node_id not in self.graph:
            return []

        if direction == "out":
            neighbors = set(self.graph.successors(node_id))
        elif direction == "in":
            neighbors = set(self.graph.predecessors(node_id))
        else:
            neighbors = set(self.graph.successors(node_id)) | set(self.graph.predecessors(node_id))
        return sorted(neighbors)

    def dependents(self, node_id: str) -> List[str]:
        return self.get_neighbors(node_id, direction="in")

    def find_cycles(self, limit: int = 10) -> List[List[str]]:
        """
        Dependency cycles between components, shortest first.

        Each cycle is rotated to start at its smallest name so output is
        stable across runs. Only cycles of up to MAX_CYCLE_LENGTH components
        are considered, and at most MAX_CYCLES_SCANNED of them are ranked.
        """
        cycles = []
        found = nx.simple_cycles(self.graph, length_bound=MAX_CYCLE_LENGTH)
        for cycle in islice(found, MAX_CYCLES_SCANNED):
            start = cycle.index(min(cycle))
            cycles.append(cycle[start:] + cycle[:start])
        cycles.sort(key=lambda c: (len(c), c))
        return cycles[:limit]

    def get_stats(self) -> Dict[str, int]:
        return {
            "total_nodes": self.graph.number_of_nodes(),
            "total_edges": self.graph.number_of_edges(),
        }
