"""Circular dependency detector module.

This module chains the topological reducer and the cycle extractor into a
single detection run over a directed dependency graph.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from chunk_cycle_detector.domain.services.cycle_extractor import CycleExtractor
from chunk_cycle_detector.domain.services.topological_reducer import (
    Edge,
    NodeId,
    TopologicalReducer,
)


@dataclass(frozen=True)
class CycleDetectionResult:
    """Outcome of one detection run.

    Attributes:
        cyclic_nodes: Nodes that sit on at least one cycle, in input order
        cycles: Closed cycle paths in discovery order
    """

    cyclic_nodes: list[NodeId] = field(default_factory=list)
    cycles: list[list[NodeId]] = field(default_factory=list)

    @property
    def has_cycles(self) -> bool:
        """Whether any cycle was found."""
        return bool(self.cycles)


class CircularDependencyDetector:
    """Detects and enumerates simple cycles in a directed graph.

    Kahn's algorithm first discards every node that cannot sit on a cycle;
    when nothing survives, the DFS extraction is skipped entirely.

    The detector holds no per-run state, so one instance can be shared.
    """

    def __init__(
        self,
        reducer: TopologicalReducer | None = None,
        extractor: CycleExtractor | None = None,
    ):
        """Initialize the detector.

        Args:
            reducer: Topological reducer (defaults to a new instance)
            extractor: Cycle extractor (defaults to a new instance)
        """
        self.reducer = reducer or TopologicalReducer()
        self.extractor = extractor or CycleExtractor()

    def detect(
        self, nodes: Iterable[NodeId], edges: Iterable[Edge]
    ) -> CycleDetectionResult:
        """Reduce the graph and extract its cycles.

        Args:
            nodes: Declared node identifiers
            edges: Directed (from, to) pairs

        Returns:
            CycleDetectionResult with the cyclic nodes and the cycle paths
        """
        reduction = self.reducer.reduce(nodes, edges)
        if not reduction.has_cycles:
            return CycleDetectionResult()

        cycles = self.extractor.extract(reduction.cyclic_nodes, reduction.adjacency)
        return CycleDetectionResult(
            cyclic_nodes=reduction.cyclic_nodes, cycles=cycles
        )

    def detect_cycles(
        self, nodes: Iterable[NodeId], edges: Iterable[Edge]
    ) -> list[list[NodeId]]:
        """Detect all cycles in the graph.

        Args:
            nodes: Declared node identifiers
            edges: Directed (from, to) pairs

        Returns:
            List of closed cycle paths (first node repeated at the end),
            empty when the graph is acyclic
        """
        return self.detect(nodes, edges).cycles


def detect_cycles(
    nodes: Iterable[NodeId], edges: Iterable[Edge]
) -> list[list[NodeId]]:
    """Detect cycles with a default detector.

    Args:
        nodes: Declared node identifiers
        edges: Directed (from, to) pairs

    Returns:
        List of closed cycle paths
    """
    return CircularDependencyDetector().detect_cycles(nodes, edges)
